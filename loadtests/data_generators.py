"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(positive quantities, non-blank delivery fields, listed sizes) and match the
field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SIZES = ["S", "M", "L", "XL"]
COLORS = ["Black", "White", "Indigo", "Olive"]


def customer_id() -> str:
    """Generate caller ids like 'cust-lt-a1b2c3d4' for the X-User-Id header."""
    return f"cust-lt-{uuid.uuid4().hex[:8]}"


# ---------- Catalogue ----------


def product_data() -> dict:
    """Generate a SaveProductRequest payload for a stock-tracked product."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {random.choice(['Shirt', 'Longyi', 'Jacket', 'Scarf'])}",
        "description": fake.sentence(nb_words=10),
        "price": float(random.choice([8500, 12000, 15500, 24000, 32000])),
        "stock": random.randint(500, 5000),
        "is_preorder": False,
        "sizes": random.sample(SIZES, k=2),
        "colors": random.sample(COLORS, k=2),
    }


# ---------- Cart & Checkout ----------


def cart_item_data(product_id: str, sizes: list[str], colors: list[str]) -> dict:
    """Generate an AddToCartRequest payload for one of the product's variants."""
    return {
        "product_id": product_id,
        "quantity": random.randint(1, 3),
        "size": random.choice(sizes),
        "color": random.choice(colors),
    }


def delivery_address() -> dict:
    return {
        "full_name": fake.name()[:255],
        "phone": f"09-{random.randint(100000000, 999999999)}",
        "address": fake.address().replace("\n", ", ")[:1000],
    }


def checkout_data(payment_method: str = "wallet-pay") -> dict:
    """Generate a CheckoutRequest payload."""
    return {"payment_method": payment_method, **delivery_address()}


def payment_slip_data(order_id: str) -> dict:
    return {"image_url": f"slips/{order_id}/{uuid.uuid4().hex[:8]}.jpg"}

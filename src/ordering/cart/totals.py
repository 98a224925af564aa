"""Read-side helpers over the cart: live pricing against the current catalogue."""

from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access.role import require_identity
from ordering.cart.management import cart_for
from ordering.catalogue.product import Product
from ordering.shared.money import as_amount, line_total, sum_lines


def priced_lines(cart):
    """Pair each cart line with its product, skipping lines whose product no longer exists."""
    repo = current_domain.repository_for(Product)
    lines = []
    for item in cart.items:
        try:
            lines.append((item, repo.get(str(item.product_id))))
        except ObjectNotFoundError:
            continue
    return lines


def cart_total(customer_id) -> Decimal:
    """Sum of quantity times current price over lines whose product is active.

    Zero for an empty or absent cart.
    """
    customer_id = require_identity(customer_id)
    cart = cart_for(customer_id)
    if cart is None:
        return Decimal("0.00")

    return sum_lines((product.price, item.quantity) for item, product in priced_lines(cart) if product.is_active)


def cart_contents(customer_id) -> dict:
    """The caller's cart with each line priced at today's catalogue price."""
    customer_id = require_identity(customer_id)
    cart = cart_for(customer_id)
    if cart is None:
        return {"cart_id": None, "items": [], "total": 0.0}

    items = [
        {
            "item_id": str(item.id),
            "product_id": str(item.product_id),
            "name": product.name,
            "size": item.size,
            "color": item.color,
            "quantity": item.quantity,
            "unit_price": product.price,
            "line_total": as_amount(line_total(product.price, item.quantity)),
            "is_active": product.is_active,
        }
        for item, product in priced_lines(cart)
    ]
    return {
        "cart_id": str(cart.id),
        "items": items,
        "total": as_amount(cart_total(customer_id)),
    }

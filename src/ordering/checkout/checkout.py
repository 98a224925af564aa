"""Checkout: converts the caller's cart into an order in one unit of work.

The handler reads the cart and the current catalogue prices, creates the
order with its items and delivery address, decrements stock for products
that track it, and drains the cart. Every write goes through the handler's
unit of work: any failure along the way leaves cart, stock and orders as
they were. ``OrderCreated`` reaches its handlers only after the commit.

Two concurrent checkouts of the same cart both try to save the drained cart.
The aggregate version check lets only one of them commit; the other gets
``Conflict`` and nothing it wrote survives.
"""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access.role import require_identity
from ordering.cart.cart import Cart
from ordering.cart.management import cart_for
from ordering.cart.totals import priced_lines
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import Conflict, EmptyCart
from ordering.order.order import INITIAL_STATUS, DeliveryAddress, Order
from ordering.shared.money import sum_lines

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class Checkout:
    customer_id = Identifier()
    payment_method = String(required=True, max_length=50)
    full_name = String(max_length=255)
    phone = String(max_length=50)
    address = String(max_length=1000)


@ordering.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        customer_id = require_identity(command.customer_id)

        cart = cart_for(customer_id)
        if cart is None:
            raise EmptyCart("There is no cart to check out", customer_id=customer_id)

        lines = priced_lines(cart)
        total = sum_lines((product.price, item.quantity) for item, product in lines)
        if not lines or total <= 0:
            raise EmptyCart("The cart has nothing to check out", customer_id=customer_id)

        if command.payment_method not in INITIAL_STATUS:
            raise ValidationError({"payment_method": [f"Unsupported payment method '{command.payment_method}'"]})
        delivery_address = DeliveryAddress.build(command.full_name, command.phone, command.address)

        order = Order.create(
            customer_id=customer_id,
            payment_method=command.payment_method,
            lines=[
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "price": product.price,
                    "size": item.size,
                    "color": item.color,
                }
                for item, product in lines
            ],
            delivery_address=delivery_address,
        )

        # Several lines may share a product (different sizes or colors)
        products = {}
        for item, product in lines:
            product = products.setdefault(str(product.id), product)
            product.decrement_stock(item.quantity)

        cart.drain()

        try:
            product_repo = current_domain.repository_for(Product)
            for product in products.values():
                if product.tracks_stock:
                    product_repo.add(product)
            current_domain.repository_for(Order).add(order)
            current_domain.repository_for(Cart).add(cart)
        except ExpectedVersionError as exc:
            logger.warning("Checkout lost a concurrent write", customer_id=customer_id, error=str(exc))
            raise Conflict("The cart was changed by another checkout; please retry", customer_id=customer_id) from exc

        logger.info(
            "Checkout completed",
            order_id=str(order.id),
            customer_id=customer_id,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
        )
        return str(order.id)

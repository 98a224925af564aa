"""Cart management: command and handler for fetching a customer's cart."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.access.role import require_identity
from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class GetOrCreateCart:
    """Return the caller's cart id, creating the cart on first use."""

    customer_id = Identifier()


def cart_for(customer_id, create=False) -> Cart | None:
    repo = current_domain.repository_for(Cart)
    cart = repo.for_customer(customer_id)
    if cart is None and create:
        cart = Cart.create(customer_id)
    return cart


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(GetOrCreateCart)
    def get_or_create_cart(self, command):
        customer_id = require_identity(command.customer_id)
        cart = cart_for(customer_id)
        if cart is None:
            cart = Cart.create(customer_id)
            current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

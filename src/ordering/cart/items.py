"""Cart line management: commands and handler.

The caller is always identified by ``customer_id``; a line can only be
changed through its owner's cart.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.access.role import require_identity
from ordering.cart.cart import Cart
from ordering.cart.management import cart_for
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import NotFound
from ordering.shared.lookup import load


@ordering.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier()
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    size = String(max_length=50)
    color = String(max_length=50)


@ordering.command(part_of="Cart")
class UpdateCartQuantity:
    customer_id = Identifier()
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # Zero or less removes the line


@ordering.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier()
    item_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        customer_id = require_identity(command.customer_id)
        if command.quantity is None or command.quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

        product = load(Product, command.product_id, "Product")
        if not product.is_active:
            raise ValidationError({"product_id": [f"{product.name} is not available"]})
        product.assert_offers(size=command.size, color=command.color)

        cart = cart_for(customer_id, create=True)
        item = cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            size=command.size,
            color=command.color,
        )
        current_domain.repository_for(Cart).add(cart)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        customer_id = require_identity(command.customer_id)
        cart = cart_for(customer_id)
        if cart is None:
            raise NotFound(f"Cart item {command.item_id} not found")

        cart.set_quantity(command.item_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        customer_id = require_identity(command.customer_id)
        cart = cart_for(customer_id)
        if cart is None:
            return

        if cart.remove_item(command.item_id):
            current_domain.repository_for(Cart).add(cart)

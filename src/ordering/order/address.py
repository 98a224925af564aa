"""Delivery address corrections: commands and handler.

The owning customer or an admin may replace the address; only an admin may
remove it.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access.role import is_admin, require_admin, require_identity
from ordering.domain import ordering
from ordering.errors import PermissionDenied
from ordering.order.order import DeliveryAddress, Order
from ordering.shared.lookup import load


@ordering.command(part_of="Order")
class CorrectDeliveryAddress:
    actor_id = Identifier()
    order_id = Identifier(required=True)
    full_name = String(max_length=255)
    phone = String(max_length=50)
    address = String(max_length=1000)


@ordering.command(part_of="Order")
class RemoveDeliveryAddress:
    actor_id = Identifier()
    order_id = Identifier(required=True)


def require_owner_or_admin(actor_id, order) -> str:
    actor_id = require_identity(actor_id)
    if str(order.customer_id) != actor_id and not is_admin(actor_id):
        raise PermissionDenied("Only the customer who placed the order can do this", order_id=str(order.id))
    return actor_id


@ordering.command_handler(part_of=Order)
class DeliveryAddressHandler:
    @handle(CorrectDeliveryAddress)
    def correct_delivery_address(self, command):
        require_identity(command.actor_id)
        order = load(Order, command.order_id, "Order")
        require_owner_or_admin(command.actor_id, order)

        order.replace_delivery_address(DeliveryAddress.build(command.full_name, command.phone, command.address))
        current_domain.repository_for(Order).add(order)

    @handle(RemoveDeliveryAddress)
    def remove_delivery_address(self, command):
        require_admin(command.actor_id)
        order = load(Order, command.order_id, "Order")
        order.remove_delivery_address()
        current_domain.repository_for(Order).add(order)

"""Order status updates: admin command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    actor_id = Identifier()
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)  # Validated after the admin check


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        require_admin(command.actor_id)
        order = load(Order, command.order_id, "Order")

        previous_status = order.status
        if order.change_status(command.status):
            current_domain.repository_for(Order).add(order)
            logger.info(
                "Order status updated",
                order_id=str(order.id),
                previous_status=previous_status,
                new_status=order.status,
            )

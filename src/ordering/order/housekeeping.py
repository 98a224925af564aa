"""Order housekeeping: admin deletion and retention cleanup.

Deleting an order also deletes its payment slips and notifications.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.domain import ordering
from ordering.notification.notification import Notification
from ordering.order.order import Order
from ordering.payment.slip import PaymentSlip
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)

DEFAULT_RETENTION = timedelta(days=183)  # about six months


@ordering.command(part_of="Order")
class DeleteOrder:
    actor_id = Identifier()
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class CleanupOldOrders:
    actor_id = Identifier()
    older_than = DateTime()  # Defaults to six months ago


def _purge(order) -> dict:
    """Delete one order with everything hanging off it. Returns what was removed."""
    slip_repo = current_domain.repository_for(PaymentSlip)
    slips = slip_repo._dao.query.filter(order_id=str(order.id)).all().items
    for slip in slips:
        slip_repo._dao.delete(slip)

    notification_repo = current_domain.repository_for(Notification)
    notifications = notification_repo._dao.query.filter(order_id=str(order.id)).all().items
    for notification in notifications:
        notification_repo._dao.delete(notification)

    counts = {
        "orders": 1,
        "order_items": len(order.items),
        "delivery_addresses": 1 if order.delivery_address else 0,
        "payment_slips": len(slips),
        "notifications": len(notifications),
    }
    current_domain.repository_for(Order)._dao.delete(order)
    return counts


@ordering.command_handler(part_of=Order)
class OrderHousekeepingHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        require_admin(command.actor_id)
        order = load(Order, command.order_id, "Order")
        counts = _purge(order)
        logger.info("Order deleted", order_id=str(command.order_id), **counts)
        return counts

    @handle(CleanupOldOrders)
    def cleanup_old_orders(self, command):
        require_admin(command.actor_id)
        cutoff = command.older_than or datetime.now(UTC) - DEFAULT_RETENTION

        totals = {
            "orders": 0,
            "order_items": 0,
            "delivery_addresses": 0,
            "payment_slips": 0,
            "notifications": 0,
        }
        old_orders = current_domain.repository_for(Order)._dao.query.filter(created_at__lt=cutoff).all().items
        for order in old_orders:
            for key, value in _purge(order).items():
                totals[key] += value

        logger.info("Old orders cleaned up", cutoff=cutoff.isoformat(), **totals)
        return totals

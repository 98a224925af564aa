"""Order event handler: turns order events into admin and customer notifications.

Runs after the order's unit of work has committed. A failure here is logged
and never reaches the caller of checkout or the status update.
"""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.notification.helpers import create_admin_notification, create_customer_notification
from ordering.notification.notification import Notification, NotificationType
from ordering.notification.templates import has_status_template
from ordering.order.events import OrderCreated, OrderStatusChanged
from ordering.order.order import Order
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Notification, stream_category="ordering::order")
class OrderEventsHandler:
    """Reacts to Order events to notify the store admin and the customer."""

    @handle(OrderCreated)
    def on_order_created(self, event: OrderCreated) -> None:
        context = {
            "order_id": str(event.order_id),
            "customer_id": str(event.customer_id),
            "total_amount": f"{event.total_amount:.2f}",
            "payment_method": event.payment_method,
        }
        try:
            create_admin_notification(NotificationType.NEW_ORDER.value, context)
            create_customer_notification(
                customer_id=str(event.customer_id),
                notification_type=NotificationType.ORDER_RECEIVED.value,
                context=context,
            )
        except Exception as exc:
            logger.error(
                "Failed to create order notifications",
                order_id=str(event.order_id),
                error=str(exc),
            )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        if not has_status_template(event.new_status):
            logger.info(
                "No customer template for status, skipping",
                order_id=str(event.order_id),
                status=event.new_status,
            )
            return

        try:
            order = load(Order, event.order_id, "Order")
            create_customer_notification(
                customer_id=str(event.customer_id),
                notification_type=NotificationType.ORDER_STATUS_UPDATE.value,
                context={
                    "order_id": str(event.order_id),
                    "status": event.new_status,
                    "total_amount": f"{order.total_amount:.2f}",
                },
            )
        except Exception as exc:
            logger.error(
                "Failed to create status notification",
                order_id=str(event.order_id),
                status=event.new_status,
                error=str(exc),
            )

"""Payment slip event handler: alerts the store admin to slips awaiting review."""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.notification.helpers import create_admin_notification
from ordering.notification.notification import Notification, NotificationType
from ordering.payment.events import PaymentSlipUploaded

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Notification, stream_category="ordering::payment_slip")
class PaymentSlipEventsHandler:
    @handle(PaymentSlipUploaded)
    def on_payment_slip_uploaded(self, event: PaymentSlipUploaded) -> None:
        try:
            create_admin_notification(
                NotificationType.PAYMENT_SLIP_RECEIVED.value,
                {
                    "order_id": str(event.order_id),
                    "slip_id": str(event.slip_id),
                    "image_url": event.image_url,
                },
            )
        except Exception as exc:
            logger.error(
                "Failed to create payment slip notification",
                order_id=str(event.order_id),
                slip_id=str(event.slip_id),
                error=str(exc),
            )

"""Notification aggregate: delivery log for customer and admin messages.

Notifications are created reactively from order and payment slip events and
dispatched through the email channel.

State Machine:
    PENDING → SENT
    PENDING → FAILED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from ordering.domain import ordering
from ordering.notification.events import NotificationCreated, NotificationFailed, NotificationSent


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    NEW_ORDER = "NewOrder"
    ORDER_RECEIVED = "OrderReceived"
    ORDER_STATUS_UPDATE = "OrderStatusUpdate"
    PAYMENT_SLIP_RECEIVED = "PaymentSlipReceived"


class NotificationChannel(Enum):
    EMAIL = "Email"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


class RecipientType(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Notification:
    """A single message to one recipient, with its delivery outcome."""

    recipient_id: String(required=True, max_length=255)
    # Email the channel delivers to; empty when it could not be resolved
    recipient_address: String(max_length=255)
    recipient_type: String(choices=RecipientType, default=RecipientType.CUSTOMER.value)
    notification_type: String(choices=NotificationType, required=True)
    channel: String(choices=NotificationChannel, default=NotificationChannel.EMAIL.value)
    order_id: Identifier()

    subject: String(max_length=500)
    body: Text(required=True)

    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    failure_reason: String(max_length=500)
    sent_at: DateTime()

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        recipient_id,
        notification_type,
        body,
        subject=None,
        recipient_type=RecipientType.CUSTOMER.value,
        order_id=None,
        channel=NotificationChannel.EMAIL.value,
        recipient_address=None,
    ):
        now = datetime.now(UTC)
        notification = cls(
            recipient_id=str(recipient_id),
            recipient_address=recipient_address,
            recipient_type=recipient_type,
            notification_type=notification_type,
            channel=channel,
            order_id=str(order_id) if order_id else None,
            subject=subject,
            body=body,
            status=NotificationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                recipient_type=recipient_type,
                notification_type=notification_type,
                channel=channel,
                order_id=notification.order_id,
                created_at=now,
            )
        )
        return notification

    def _ensure_pending(self):
        if NotificationStatus(self.status) != NotificationStatus.PENDING:
            raise ValidationError({"status": [f"Notification is already {self.status}"]})

    def mark_sent(self):
        self._ensure_pending()
        now = datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.sent_at = now
        self.updated_at = now
        self.raise_(NotificationSent(notification_id=str(self.id), channel=self.channel, sent_at=now))

    def mark_failed(self, reason):
        self._ensure_pending()
        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = (reason or "Unknown dispatch error")[:500]
        self.updated_at = now
        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                channel=self.channel,
                reason=self.failure_reason,
                failed_at=now,
            )
        )

"""Internal dispatch handler: sends notifications through the email channel.

Reacts to NotificationCreated events and updates the notification status to
SENT or FAILED based on the channel's answer. Nothing raised here propagates.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.notification.channel import get_channel
from ordering.notification.channel.email_port import OutgoingEmail
from ordering.notification.events import NotificationCreated
from ordering.notification.notification import Notification, NotificationStatus

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Notification)
class NotificationDispatcher:
    """Dispatches notifications via the channel adapter when they are created."""

    @handle(NotificationCreated)
    def on_notification_created(self, event: NotificationCreated) -> None:
        repo = current_domain.repository_for(Notification)

        try:
            notification = repo.get(event.notification_id)
        except ObjectNotFoundError:
            logger.error(
                "Failed to load notification for dispatch",
                notification_id=str(event.notification_id),
            )
            return

        # Only dispatch PENDING notifications
        if NotificationStatus(notification.status) != NotificationStatus.PENDING:
            logger.info(
                "Notification not in PENDING status, skipping dispatch",
                notification_id=str(event.notification_id),
                status=notification.status,
            )
            return

        try:
            adapter = get_channel(notification.channel)
            receipt = adapter.deliver(
                OutgoingEmail(
                    recipient=notification.recipient_address,
                    subject=notification.subject or "",
                    body=notification.body,
                    reference=str(notification.id),
                )
            )

            if receipt.delivered:
                notification.mark_sent()
            else:
                notification.mark_failed(receipt.error or "Unknown dispatch error")
                logger.warning(
                    "Notification rejected by channel",
                    notification_id=str(notification.id),
                    error=notification.failure_reason,
                )
        except Exception as e:
            notification.mark_failed(str(e))
            logger.error(
                "Notification dispatch failed",
                notification_id=str(notification.id),
                error=str(e),
            )

        repo.add(notification)

"""Shared helpers for notification event handlers.

Render the template, record a ``Pending`` notification; the dispatcher picks
it up from ``NotificationCreated``. A customer notification whose email
cannot be resolved is recorded ``Failed`` straight away.
"""

import os

import structlog
from protean.utils.globals import current_domain

from ordering.notification.channel import get_contact_directory
from ordering.notification.channel.contact_port import ContactLookupError
from ordering.notification.notification import Notification, RecipientType
from ordering.notification.templates import get_template

logger = structlog.get_logger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@kamisori.local"


def admin_recipient() -> str:
    return os.getenv("ADMIN_NOTIFICATION_EMAIL", DEFAULT_ADMIN_EMAIL)


def create_notification(
    recipient_id: str,
    notification_type: str,
    context: dict,
    recipient_type: str = RecipientType.CUSTOMER.value,
    recipient_address: str | None = None,
    undeliverable_reason: str | None = None,
) -> str:
    """Render and persist one notification. Returns its id."""
    rendered = get_template(notification_type).render(context)

    notification = Notification.create(
        recipient_id=recipient_id,
        recipient_address=recipient_address,
        recipient_type=recipient_type,
        notification_type=notification_type,
        subject=rendered.get("subject"),
        body=rendered["body"],
        order_id=context.get("order_id"),
    )
    if not recipient_address:
        notification.mark_failed(undeliverable_reason or f"No email address on file for {recipient_id}")
        logger.warning(
            "Notification has no recipient address",
            notification_id=str(notification.id),
            recipient_id=str(recipient_id),
            reason=notification.failure_reason,
        )
    current_domain.repository_for(Notification).add(notification)

    logger.info(
        "Notification created",
        notification_id=str(notification.id),
        recipient_type=recipient_type,
        notification_type=notification_type,
        order_id=context.get("order_id"),
        status=notification.status,
    )
    return str(notification.id)


def create_customer_notification(customer_id: str, notification_type: str, context: dict) -> str:
    """Resolve the customer's email through the contact directory, then record the notification."""
    reason = None
    try:
        email = get_contact_directory().email_for(str(customer_id))
    except ContactLookupError as exc:
        email, reason = None, str(exc)

    return create_notification(
        recipient_id=str(customer_id),
        notification_type=notification_type,
        context=context,
        recipient_address=email,
        undeliverable_reason=reason,
    )


def create_admin_notification(notification_type: str, context: dict) -> str:
    recipient = admin_recipient()
    return create_notification(
        recipient_id=recipient,
        notification_type=notification_type,
        context=context,
        recipient_type=RecipientType.ADMIN.value,
        recipient_address=recipient,
    )

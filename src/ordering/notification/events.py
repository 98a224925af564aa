"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Notification")
class NotificationCreated:
    """A notification was recorded and queued for dispatch."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: String(required=True)
    recipient_type: String(required=True)
    notification_type: String(required=True)
    channel: String(required=True)
    order_id: Identifier()
    created_at: DateTime(required=True)


@ordering.event(part_of="Notification")
class NotificationSent:
    """The channel accepted the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    channel: String(required=True)
    sent_at: DateTime(required=True)


@ordering.event(part_of="Notification")
class NotificationFailed:
    """The channel rejected the notification or could not be reached."""

    __version__ = 1

    notification_id: Identifier(required=True)
    channel: String(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)

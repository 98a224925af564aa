"""Channel adapter registry: the email channel and the customer contact directory.

Uses the fake adapters by default.

- ``EMAIL_CHANNEL=smtp`` switches to the SMTP adapter configured from
  ``SMTP_HOST``, ``SMTP_PORT``, ``SMTP_USER`` and ``SMTP_PASSWORD``.
- ``CONTACT_DIRECTORY=http`` resolves customer emails through
  ``CONTACT_DIRECTORY_URL`` (a template with ``{customer_id}``) using
  ``CONTACT_DIRECTORY_TOKEN``.
"""

import os

from ordering.notification.notification import NotificationChannel

_channel_instances: dict[str, object] = {}
_CONTACTS = "Contacts"


def _email_adapter():
    if os.getenv("EMAIL_CHANNEL", "fake").lower() == "smtp":
        from ordering.notification.channel.smtp_email import SMTPEmailAdapter

        return SMTPEmailAdapter(
            host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            port=int(os.getenv("SMTP_PORT", "465")),
            username=os.getenv("SMTP_USER"),
            password=os.getenv("SMTP_PASSWORD"),
        )

    from ordering.notification.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


def _contact_directory():
    if os.getenv("CONTACT_DIRECTORY", "fake").lower() == "http":
        from ordering.notification.channel.http_contacts import HttpContactDirectory

        url_template = os.getenv("CONTACT_DIRECTORY_URL")
        if not url_template:
            raise ValueError("CONTACT_DIRECTORY=http needs CONTACT_DIRECTORY_URL")
        return HttpContactDirectory(url_template, token=os.getenv("CONTACT_DIRECTORY_TOKEN"))

    from ordering.notification.channel.fake_contacts import FakeContactDirectory

    return FakeContactDirectory()


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of NotificationChannel enum values ("Email")
    """
    if channel_type not in _channel_instances:
        if channel_type == NotificationChannel.EMAIL.value:
            _channel_instances[channel_type] = _email_adapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def get_contact_directory():
    if _CONTACTS not in _channel_instances:
        _channel_instances[_CONTACTS] = _contact_directory()
    return _channel_instances[_CONTACTS]


def reset_channels():
    """Reset all adapter singletons (useful for testing)."""
    _channel_instances.clear()

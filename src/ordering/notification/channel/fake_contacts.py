"""In-memory contact directory used by tests and local development."""

from ordering.notification.channel.contact_port import ContactDirectory

FALLBACK_DOMAIN = "customers.kamisori.test"


class FakeContactDirectory(ContactDirectory):
    """Registered addresses first; unregistered customers get ``<id>@<fallback_domain>``."""

    def __init__(self, fallback_domain: str | None = FALLBACK_DOMAIN):
        self.addresses: dict[str, str] = {}
        self.fallback_domain = fallback_domain

    def register(self, customer_id: str, email: str) -> None:
        self.addresses[str(customer_id)] = email

    def require_registration(self) -> None:
        """Stop inventing addresses for customers nobody registered."""
        self.fallback_domain = None

    def email_for(self, customer_id: str) -> str | None:
        customer_id = str(customer_id)
        if customer_id in self.addresses:
            return self.addresses[customer_id]
        if self.fallback_domain:
            return f"{customer_id}@{self.fallback_domain}"
        return None

"""HTTP contact directory backed by the identity provider's admin users endpoint.

``url_template`` names the user resource, e.g.
``https://<project>.supabase.co/auth/v1/admin/users/{customer_id}``; the
response body must carry an ``email`` key. The service token is sent both as
a bearer token and as ``apikey``.
"""

import requests
import structlog

from ordering.notification.channel.contact_port import ContactDirectory, ContactLookupError

logger = structlog.get_logger(__name__)


class HttpContactDirectory(ContactDirectory):
    def __init__(self, url_template: str, token: str | None = None, timeout: float = 10.0) -> None:
        self.url_template = url_template
        self.token = token
        self.timeout = timeout

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}", "apikey": self.token}

    def email_for(self, customer_id: str) -> str | None:
        url = self.url_template.format(customer_id=customer_id)
        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise ContactLookupError(f"Contact directory unreachable: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise ContactLookupError(f"Contact directory answered {response.status_code}")

        body = response.json()
        # Supabase wraps the record as {"user": {...}} on some endpoints
        record = body.get("user", body) if isinstance(body, dict) else {}
        email = record.get("email") if isinstance(record, dict) else None
        if not email:
            logger.info("No email on file", customer_id=customer_id)
        return email or None

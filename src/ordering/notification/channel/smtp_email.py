"""SMTP email adapter. Delivers with aiosmtplib over implicit TLS (port 465 by default)."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

import aiosmtplib
import structlog

from ordering.notification.channel.email_port import DeliveryReceipt, EmailPort, OutgoingEmail

logger = structlog.get_logger(__name__)


def _run(coro):
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # Inside the engine's event loop: deliver on a worker thread with its own loop
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


class SMTPEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int = 465,
        username: str | None = None,
        password: str | None = None,
        sender_name: str = "Kamisori",
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender_name = sender_name
        self.timeout = timeout

    def _compose(self, email: OutgoingEmail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.sender_name, self.username))
        message["To"] = email.recipient
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid(domain=self.host)
        if email.reference:
            message["X-Kamisori-Notification"] = email.reference
        message.set_content(email.body)
        return message

    async def _send(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            use_tls=self.port == 465,
            start_tls=self.port == 587,
            timeout=self.timeout,
        )

    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt:
        if not self.username or not self.password:
            return DeliveryReceipt.refused("SMTP_USER or SMTP_PASSWORD is not set")

        message = self._compose(email)
        try:
            _run(self._send(message))
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery failed", recipient=email.recipient, error=str(exc))
            return DeliveryReceipt.refused(str(exc))

        return DeliveryReceipt.sent(message["Message-ID"])

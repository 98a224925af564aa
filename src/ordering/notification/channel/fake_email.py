"""In-memory email adapter used by tests and local development."""

from uuid import uuid4

from ordering.notification.channel.email_port import DeliveryReceipt, EmailPort, OutgoingEmail


class FakeEmailAdapter(EmailPort):
    """Keeps every delivered message in ``outbox``; can be told to refuse delivery."""

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self.refusal: str | None = None

    def refuse(self, reason: str = "Email delivery failed") -> None:
        self.refusal = reason

    def accept(self) -> None:
        self.refusal = None

    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt:
        if self.refusal is not None:
            return DeliveryReceipt.refused(self.refusal)

        self.outbox.append(email)
        return DeliveryReceipt.sent(f"fake-{uuid4().hex[:12]}")

    def addressed_to(self, recipient: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.recipient == recipient]

    def clear(self) -> None:
        self.outbox.clear()
        self.refusal = None

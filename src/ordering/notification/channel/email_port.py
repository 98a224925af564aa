"""Email channel contract shared by the fake and SMTP adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutgoingEmail:
    recipient: str
    subject: str
    body: str
    # Notification id, stamped into the message headers for tracing
    reference: str | None = None


@dataclass(frozen=True)
class DeliveryReceipt:
    delivered: bool
    message_id: str | None = None
    error: str | None = None

    @classmethod
    def sent(cls, message_id: str) -> "DeliveryReceipt":
        return cls(delivered=True, message_id=message_id)

    @classmethod
    def refused(cls, error: str) -> "DeliveryReceipt":
        return cls(delivered=False, error=error)


class EmailPort(ABC):
    """Adapters hand one message to a mail transport and report the outcome.

    Transport problems are reported through the receipt, not raised.
    """

    @abstractmethod
    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt: ...

"""Domain events for the PaymentSlip aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="PaymentSlip")
class PaymentSlipUploaded:
    """A customer attached a payment slip to an order."""

    __version__ = 1

    slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    image_url = String(required=True)
    uploaded_by = Identifier()
    uploaded_at = DateTime(required=True)


@ordering.event(part_of="PaymentSlip")
class PaymentSlipReviewed:
    """An admin verified or rejected a payment slip."""

    __version__ = 1

    slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    verified = Boolean(required=True)
    reviewed_at = DateTime(required=True)

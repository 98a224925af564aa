"""PaymentSlip aggregate: proof of a wallet transfer awaiting admin review.

Only the image reference is stored; the upload itself happens elsewhere.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from ordering.domain import ordering
from ordering.payment.events import PaymentSlipReviewed, PaymentSlipUploaded


@ordering.aggregate
class PaymentSlip:
    order_id = Identifier(required=True)
    image_url = String(required=True, max_length=1000)
    verified = Boolean(default=False)
    uploaded_at = DateTime()
    verified_at = DateTime()

    @classmethod
    def upload(cls, order_id, image_url, uploaded_by=None):
        now = datetime.now(UTC)
        slip = cls(order_id=str(order_id), image_url=image_url, verified=False, uploaded_at=now)
        slip.raise_(
            PaymentSlipUploaded(
                slip_id=str(slip.id),
                order_id=str(order_id),
                image_url=image_url,
                uploaded_by=str(uploaded_by) if uploaded_by else None,
                uploaded_at=now,
            )
        )
        return slip

    def review(self, verified: bool):
        """Record the admin decision. Rejection clears ``verified_at``."""
        self.verified = bool(verified)
        self.verified_at = datetime.now(UTC) if verified else None
        self.raise_(
            PaymentSlipReviewed(
                slip_id=str(self.id),
                order_id=str(self.order_id),
                verified=self.verified,
                reviewed_at=datetime.now(UTC),
            )
        )

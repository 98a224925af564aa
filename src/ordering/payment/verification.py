"""Payment slip verification: admin command and handler.

A verified slip moves its order to ``paid`` within the same unit of work, so
the slip and the order status are committed together or not at all. A
rejected slip leaves the order untouched.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from ordering.payment.slip import PaymentSlip
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)


@ordering.command(part_of="PaymentSlip")
class VerifyPaymentSlip:
    actor_id = Identifier()
    slip_id = Identifier(required=True)
    verified = Boolean(required=True)


@ordering.command_handler(part_of=PaymentSlip)
class VerifyPaymentSlipHandler:
    @handle(VerifyPaymentSlip)
    def verify_payment_slip(self, command):
        require_admin(command.actor_id)
        slip = load(PaymentSlip, command.slip_id, "Payment slip")

        slip.review(command.verified)
        current_domain.repository_for(PaymentSlip).add(slip)

        if slip.verified:
            order = load(Order, slip.order_id, "Order")
            if order.change_status(OrderStatus.PAID.value):
                current_domain.repository_for(Order).add(order)

        logger.info(
            "Payment slip reviewed",
            slip_id=str(slip.id),
            order_id=str(slip.order_id),
            verified=slip.verified,
        )

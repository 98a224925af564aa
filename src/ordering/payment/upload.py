"""Payment slip upload: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access.role import require_identity
from ordering.domain import ordering
from ordering.order.address import require_owner_or_admin
from ordering.order.order import Order
from ordering.payment.slip import PaymentSlip
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)


@ordering.command(part_of="PaymentSlip")
class UploadPaymentSlip:
    actor_id = Identifier()
    order_id = Identifier(required=True)
    image_url = String(required=True, max_length=1000)


@ordering.command_handler(part_of=PaymentSlip)
class UploadPaymentSlipHandler:
    @handle(UploadPaymentSlip)
    def upload_payment_slip(self, command):
        require_identity(command.actor_id)
        order = load(Order, command.order_id, "Order")
        actor_id = require_owner_or_admin(command.actor_id, order)

        slip = PaymentSlip.upload(order_id=order.id, image_url=command.image_url, uploaded_by=actor_id)
        current_domain.repository_for(PaymentSlip).add(slip)
        logger.info("Payment slip uploaded", order_id=str(order.id), slip_id=str(slip.id))
        return str(slip.id)

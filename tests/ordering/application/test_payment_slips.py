"""Application tests for payment slip upload and admin verification."""

import pytest
from protean import current_domain

from ordering.errors import NotFound, PermissionDenied
from ordering.notification.notification import Notification, NotificationType
from ordering.order.order import Order
from ordering.payment.slip import PaymentSlip
from ordering.payment.upload import UploadPaymentSlip
from ordering.payment.verification import VerifyPaymentSlip


def _upload(actor_id, order_id, image_url="slips/transfer.jpg"):
    return current_domain.process(
        UploadPaymentSlip(actor_id=actor_id, order_id=order_id, image_url=image_url),
        asynchronous=False,
    )


def _verify(actor_id, slip_id, verified=True):
    current_domain.process(
        VerifyPaymentSlip(actor_id=actor_id, slip_id=slip_id, verified=verified),
        asynchronous=False,
    )


def _notifications(order_id, notification_type):
    notifications = current_domain.repository_for(Notification)._dao.query.filter(order_id=order_id).all().items
    return [n for n in notifications if n.notification_type == notification_type]


class TestUploadPaymentSlip:
    def test_owner_uploads_slip(self, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        slip_id = _upload(customer_id, order_id)

        slip = current_domain.repository_for(PaymentSlip).get(slip_id)
        assert str(slip.order_id) == order_id
        assert slip.verified is False

    def test_admin_is_alerted(self, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        _upload(customer_id, order_id)

        [alert] = _notifications(order_id, NotificationType.PAYMENT_SLIP_RECEIVED.value)
        assert alert.recipient_type == "Admin"
        assert "slips/transfer.jpg" in alert.body

    def test_other_customer_cannot_upload(self, place_order):
        order_id = place_order()
        with pytest.raises(PermissionDenied):
            _upload("cust-999", order_id)

    def test_unknown_order(self, customer_id):
        with pytest.raises(NotFound):
            _upload(customer_id, "no-such-order")


class TestVerifyPaymentSlip:
    def test_verification_marks_order_paid(self, admin_id, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        slip_id = _upload(customer_id, order_id)

        _verify(admin_id, slip_id)

        slip = current_domain.repository_for(PaymentSlip).get(slip_id)
        assert slip.verified is True
        assert slip.verified_at is not None
        assert current_domain.repository_for(Order).get(order_id).status == "paid"

    def test_customer_hears_payment_received(self, admin_id, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        _verify(admin_id, _upload(customer_id, order_id))

        [update] = _notifications(order_id, NotificationType.ORDER_STATUS_UPDATE.value)
        assert update.subject.startswith("Payment Received")

    def test_rejection_leaves_order_alone(self, admin_id, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        slip_id = _upload(customer_id, order_id)

        _verify(admin_id, slip_id, verified=False)

        slip = current_domain.repository_for(PaymentSlip).get(slip_id)
        assert slip.verified is False
        assert slip.verified_at is None
        assert current_domain.repository_for(Order).get(order_id).status == "pending_payment"

    def test_customer_cannot_verify(self, customer_id, place_order):
        order_id = place_order(customer_id, "wallet-pay")
        slip_id = _upload(customer_id, order_id)
        with pytest.raises(PermissionDenied):
            _verify(customer_id, slip_id)

    def test_unknown_slip(self, admin_id):
        with pytest.raises(NotFound):
            _verify(admin_id, "no-such-slip")

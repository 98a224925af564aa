"""Message templates, one per notification type (and per status for status updates).

Each template renders ``{"subject": ..., "body": ...}`` from a context dict.
"""

from ordering.notification.notification import NotificationType
from ordering.shared.money import store_currency

STORE_NAME = "Kamisori"


def _short(order_id) -> str:
    return str(order_id or "")[:8]


class NewOrderTemplate:
    """Admin alert for a freshly placed order."""

    notification_type = NotificationType.NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "subject": f"New Order #{_short(order_id)} - {STORE_NAME}",
            "body": (
                f"A new order #{order_id} has been placed.\n\n"
                f"Customer: {context.get('customer_id', 'N/A')}\n"
                f"Payment method: {context.get('payment_method', 'N/A')}\n"
                f"Order Total: {store_currency()} {context.get('total_amount', '0.00')}\n"
            ),
        }


class PaymentSlipReceivedTemplate:
    """Admin alert for a payment slip awaiting verification."""

    notification_type = NotificationType.PAYMENT_SLIP_RECEIVED.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "subject": f"Payment Slip Uploaded #{_short(order_id)} - {STORE_NAME}",
            "body": (
                f"A payment slip was uploaded for order #{order_id}.\n\n"
                f"Slip: {context.get('image_url', 'N/A')}\n\n"
                "Please review and verify the payment."
            ),
        }


# Customer messages keyed by order status ("received" is sent at checkout)
_CUSTOMER_MESSAGES = {
    "received": (
        "Order Received",
        "Thank you for your order! We have received it and our team is reviewing it. "
        "You will hear from us again once it has been processed.",
    ),
    "paid": (
        "Payment Received",
        "We have verified your payment. Your order is now being processed and will be shipped shortly.",
    ),
    "confirmed": (
        "Order Confirmation",
        "Your order has been confirmed. Our team is now preparing it for shipment.",
    ),
    "shipped": (
        "Your Order is on its way",
        "Great news! Your order has shipped and is currently in transit.",
    ),
    "delivered": (
        "Order Delivered",
        "Your order has been delivered. We hope you enjoy your purchase!",
    ),
    "cancelled": (
        "Order Cancelled",
        "Your order has been cancelled. If you have questions, please reply to this email.",
    ),
}


class CustomerOrderTemplate:
    """Customer update for a given order status."""

    notification_type = NotificationType.ORDER_STATUS_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        status = context.get("status", "received")
        title, message = _CUSTOMER_MESSAGES[status]
        order_id = context.get("order_id", "N/A")
        return {
            "subject": f"{title} - {STORE_NAME} #{_short(order_id)}",
            "body": (
                f"{message}\n\n"
                f"Order: #{order_id}\n"
                f"Order Total: {store_currency()} {context.get('total_amount', '0.00')}\n\n"
                f"Thank you for shopping with {STORE_NAME}!"
            ),
        }


class OrderReceivedTemplate(CustomerOrderTemplate):
    notification_type = NotificationType.ORDER_RECEIVED.value

    @staticmethod
    def render(context: dict) -> dict:
        return CustomerOrderTemplate.render({**context, "status": "received"})


TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_ORDER.value: NewOrderTemplate,
    NotificationType.ORDER_RECEIVED.value: OrderReceivedTemplate,
    NotificationType.ORDER_STATUS_UPDATE.value: CustomerOrderTemplate,
    NotificationType.PAYMENT_SLIP_RECEIVED.value: PaymentSlipReceivedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls


def has_status_template(status: str) -> bool:
    return status in _CUSTOMER_MESSAGES

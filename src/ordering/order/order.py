"""Order aggregate: the immutable, priced snapshot of a cart at checkout.

Items and the total are written once, when the order is created, and never
recomputed from the catalogue. Afterwards only ``status`` changes (through
``change_status``) plus the delivery address correction path.

Status values (permissive: an admin may set any of them at any time):
    pending_payment, pending_confirmation, paid, confirmed, shipped,
    delivered, cancelled
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderCreated, OrderStatusChanged
from ordering.shared.money import as_amount, sum_lines


class OrderStatus(Enum):
    PENDING_PAYMENT = "pending_payment"
    PENDING_CONFIRMATION = "pending_confirmation"
    PAID = "paid"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    WALLET_PAY = "wallet-pay"
    CASH_ON_DELIVERY = "cash-on-delivery"


INITIAL_STATUS = {
    PaymentMethod.WALLET_PAY.value: OrderStatus.PENDING_PAYMENT.value,
    PaymentMethod.CASH_ON_DELIVERY.value: OrderStatus.PENDING_CONFIRMATION.value,
}

# Entry states are assigned at checkout and never announced
NOTIFYING_STATUSES = {
    OrderStatus.PAID.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.SHIPPED.value,
    OrderStatus.DELIVERED.value,
    OrderStatus.CANCELLED.value,
}

STATUS_VALUES = [s.value for s in OrderStatus]


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class DeliveryAddress:
    """Where and to whom the order is delivered. Replaced wholesale, never edited in place."""

    full_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=50)
    address = String(required=True, max_length=1000)

    @classmethod
    def build(cls, full_name, phone, address):
        """Strip the three contact fields and reject any that end up blank."""
        values = {
            "full_name": (full_name or "").strip(),
            "phone": (phone or "").strip(),
            "address": (address or "").strip(),
        }
        errors = {field: ["Must not be blank"] for field, value in values.items() if not value}
        if errors:
            raise ValidationError(errors)
        return cls(**values)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """One purchased line. ``price`` is the unit price locked at checkout."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    size = String(max_length=50)
    color = String(max_length=50)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    total_amount = Float(required=True, min_value=0.0)
    payment_method = String(required=True, choices=PaymentMethod)
    status = String(required=True, choices=OrderStatus)
    items = HasMany(OrderItem)
    delivery_address = ValueObject(DeliveryAddress)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_items(self):
        if not self.items:
            return
        expected = as_amount(sum_lines((i.price, i.quantity) for i in self.items))
        if expected != as_amount(self.total_amount):
            raise ValidationError({"total_amount": ["Total must equal the sum of item prices times quantities"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id, payment_method, lines, delivery_address):
        """Create an order from ``lines``: dicts of product_id, quantity, price, size, color."""
        if payment_method not in INITIAL_STATUS:
            raise ValidationError({"payment_method": [f"Unsupported payment method '{payment_method}'"]})

        items = [
            OrderItem(
                product_id=str(line["product_id"]),
                quantity=line["quantity"],
                price=as_amount(line["price"]),
                size=line.get("size"),
                color=line.get("color"),
            )
            for line in lines
        ]
        total = as_amount(sum_lines((item.price, item.quantity) for item in items))

        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            total_amount=total,
            payment_method=payment_method,
            status=INITIAL_STATUS[payment_method],
            items=items,
            delivery_address=delivery_address,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                customer_id=str(customer_id),
                total_amount=total,
                payment_method=payment_method,
                status=order.status,
                item_count=sum(item.quantity for item in items),
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status) -> bool:
        """Set the status. Returns whether it actually changed.

        ``OrderStatusChanged`` is raised only for a real change into one of
        the notifying states.
        """
        if new_status not in STATUS_VALUES:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]})

        previous_status = self.status
        if previous_status == new_status:
            return False

        now = datetime.now(UTC)
        self.status = new_status
        self.updated_at = now

        if new_status in NOTIFYING_STATUSES:
            self.raise_(
                OrderStatusChanged(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    previous_status=previous_status,
                    new_status=new_status,
                    changed_at=now,
                )
            )
        return True

    # -------------------------------------------------------------------
    # Delivery address
    # -------------------------------------------------------------------
    def replace_delivery_address(self, delivery_address):
        self.delivery_address = delivery_address
        self.updated_at = datetime.now(UTC)

    def remove_delivery_address(self):
        self.delivery_address = None
        self.updated_at = datetime.now(UTC)

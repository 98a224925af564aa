"""Domain events for the Order aggregate.

Events are raised inside the unit of work and dispatched to handlers only
after it commits.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """A cart was converted into an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    status = String(required=True)
    item_count = Integer(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An order moved into paid, confirmed, shipped, delivered or cancelled."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)

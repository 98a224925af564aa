"""Cart aggregate: one server-side cart per customer.

The cart is created on first use, drained (never deleted) at checkout, and
holds one line per distinct ``(product, size, color)`` combination. Adding a
combination that is already present merges into the existing line.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import CartDrained, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from ordering.errors import NotFound


def line_key_for(cart_id, product_id, size=None, color=None) -> str:
    return f"{cart_id}:{product_id}:{size or ''}:{color or ''}"


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(max_length=50)
    color = String(max_length=50)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    line_key = String(max_length=255, unique=True)


@ordering.aggregate
class Cart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=str(customer_id), created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------
    def line(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def add_item(self, product_id, quantity, size=None, color=None):
        """Add ``quantity`` units, merging into the line for the same variant if present."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

        size = size or None
        color = color or None
        key = line_key_for(self.id, product_id, size, color)
        existing = next((i for i in self.items if i.line_key == key), None)

        now = datetime.now(UTC)
        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=str(product_id),
                size=size,
                color=color,
                quantity=quantity,
                added_at=now,
                line_key=key,
            )
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def set_quantity(self, item_id, new_quantity):
        """Set a line's quantity. Zero or less removes the line."""
        item = self.line(item_id)
        if item is None:
            raise NotFound(f"Cart item {item_id} not found", cart_id=str(self.id))

        if new_quantity is None or new_quantity <= 0:
            self.remove_item(item_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id) -> bool:
        """Remove a line. Removing a line that is not there is a no-op."""
        item = self.line(item_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))
        return True

    def drain(self):
        """Delete every line. The cart itself stays for the customer's next visit."""
        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartDrained(cart_id=str(self.id), lines_removed=count))
        return count

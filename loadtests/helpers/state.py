"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    """A product created for the journey, with the variants it offers."""

    product_id: str | None = None
    sizes: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    """Tracks a single simulated customer from cart to paid order."""

    customer_id: str | None = None
    product: ProductState = field(default_factory=ProductState)
    item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    slip_id: str | None = None

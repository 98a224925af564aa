"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductPriceChanged:
    """The catalogue price changed. Existing orders keep the price they locked."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    changed_at: DateTime(required=True)


@ordering.event(part_of="Product")
class ProductAvailabilityChanged:
    """A product was activated or deactivated."""

    __version__ = 1

    product_id: Identifier(required=True)
    is_active: Boolean(required=True)
    changed_at: DateTime(required=True)

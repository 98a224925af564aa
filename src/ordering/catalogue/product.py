"""Product aggregate root with its ProductImage entities.

Price and stock are read at checkout. Once copied into an order line the
price is frozen there; later edits here never reach existing orders.
"""

import json
from datetime import UTC, datetime

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from ordering.catalogue.events import ProductAvailabilityChanged, ProductPriceChanged
from ordering.domain import ordering
from ordering.errors import NotFound
from ordering.shared.money import as_amount

logger = structlog.get_logger(__name__)


def _encode_options(values):
    """Persist an option set (sizes, colors) as a sorted JSON array, or None."""
    if values is None:
        return None
    cleaned = sorted({str(v).strip() for v in values if str(v).strip()})
    return json.dumps(cleaned) if cleaned else None


@ordering.entity(part_of="Product")
class ProductImage:
    image_url: String(required=True, max_length=500)
    alt_text: String(max_length=255)
    is_primary: Boolean(default=False)
    sort_order: Integer(default=0)
    created_at: DateTime()


@ordering.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock: Integer()  # None when not tracked (preorder items)
    is_preorder: Boolean(default=False)
    is_active: Boolean(default=True)
    category_id: Identifier()
    sizes: Text()  # JSON array of size labels
    colors: Text()  # JSON array of color names
    images: HasMany(ProductImage)
    created_at: DateTime()

    @invariant.post
    def at_most_one_primary_image(self):
        if len([i for i in self.images if i.is_primary]) > 1:
            raise ValidationError({"images": ["Only one image can be primary"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        stock=0,
        is_preorder=False,
        is_active=True,
        category_id=None,
        sizes=None,
        colors=None,
    ):
        return cls(
            name=name,
            description=description,
            price=as_amount(price),
            stock=stock,
            is_preorder=is_preorder,
            is_active=is_active,
            category_id=category_id,
            sizes=_encode_options(sizes),
            colors=_encode_options(colors),
            created_at=datetime.now(UTC),
        )

    # -------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------
    @property
    def available_sizes(self) -> list[str]:
        return json.loads(self.sizes) if self.sizes else []

    @property
    def available_colors(self) -> list[str]:
        return json.loads(self.colors) if self.colors else []

    def assert_offers(self, size=None, color=None):
        """Reject a variant the product does not list. Products without options accept anything."""
        if size and self.available_sizes and size not in self.available_sizes:
            raise ValidationError({"size": [f"Size '{size}' is not offered for {self.name}"]})
        if color and self.available_colors and color not in self.available_colors:
            raise ValidationError({"color": [f"Color '{color}' is not offered for {self.name}"]})

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        stock=None,
        is_preorder=None,
        is_active=None,
        category_id=None,
        sizes=None,
        colors=None,
    ):
        """Partial update: arguments left as None keep their current value."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if stock is not None:
            self.stock = stock
        if is_preorder is not None:
            self.is_preorder = is_preorder
        if category_id is not None:
            self.category_id = category_id
        if sizes is not None:
            self.sizes = _encode_options(sizes)
        if colors is not None:
            self.colors = _encode_options(colors)
        if price is not None:
            self.change_price(price)
        if is_active is not None:
            self.set_active(is_active)

    def change_price(self, new_price):
        new_price = as_amount(new_price)
        if new_price == self.price:
            return

        previous_price = self.price
        self.price = new_price
        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
                changed_at=datetime.now(UTC),
            )
        )

    def set_active(self, is_active: bool):
        if bool(self.is_active) == bool(is_active):
            return

        self.is_active = is_active
        self.raise_(
            ProductAvailabilityChanged(
                product_id=str(self.id),
                is_active=is_active,
                changed_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    @property
    def tracks_stock(self) -> bool:
        return not self.is_preorder

    def decrement_stock(self, quantity: int):
        """Take ``quantity`` units out of stock. Preorder products are never decremented."""
        if not self.tracks_stock:
            return

        self.stock = (self.stock or 0) - quantity
        if self.stock < 0:
            logger.warning(
                "Stock went negative at checkout",
                product_id=str(self.id),
                stock=self.stock,
            )

    # -------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------
    def _image(self, image_id):
        image = next((i for i in self.images if str(i.id) == str(image_id)), None)
        if image is None:
            raise NotFound(f"Image {image_id} not found", product_id=str(self.id))
        return image

    def add_image(self, image_url, alt_text=None, is_primary=False, sort_order=0):
        with atomic_change(self):
            if is_primary:
                for img in self.images:
                    if img.is_primary:
                        img.is_primary = False

            image = ProductImage(
                image_url=image_url,
                alt_text=alt_text,
                is_primary=is_primary,
                sort_order=sort_order,
                created_at=datetime.now(UTC),
            )
            self.add_images(image)
        return image

    def update_image(self, image_id, alt_text=None, is_primary=None, sort_order=None):
        image = self._image(image_id)

        with atomic_change(self):
            if alt_text is not None:
                image.alt_text = alt_text
            if sort_order is not None:
                image.sort_order = sort_order
            # Only promotion is supported; demoting happens when another image is promoted
            if is_primary:
                for img in self.images:
                    if img.is_primary and str(img.id) != str(image.id):
                        img.is_primary = False
                image.is_primary = True
        return image

    def remove_image(self, image_id):
        self.remove_images(self._image(image_id))

    def sorted_images(self) -> list:
        return sorted(self.images, key=lambda i: (i.sort_order or 0, i.created_at or datetime.min.replace(tzinfo=UTC)))

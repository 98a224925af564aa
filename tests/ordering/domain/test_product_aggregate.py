"""Tests for the Product aggregate: stock, options, price changes and images."""

import pytest
from protean.exceptions import ValidationError

from ordering.catalogue.category import Category
from ordering.catalogue.events import ProductAvailabilityChanged, ProductPriceChanged
from ordering.catalogue.product import Product
from ordering.errors import NotFound


def _product(**kwargs):
    defaults = {"name": "Linen Shirt", "price": 1000, "stock": 10}
    defaults.update(kwargs)
    return Product.create(**defaults)


class TestStock:
    def test_decrement_reduces_stock(self):
        product = _product()
        product.decrement_stock(2)
        assert product.stock == 8

    def test_preorder_stock_is_untouched(self):
        product = _product(stock=None, is_preorder=True)
        product.decrement_stock(5)
        assert product.stock is None

    def test_stock_may_go_negative(self):
        product = _product(stock=1)
        product.decrement_stock(3)
        assert product.stock == -2


class TestOptions:
    def test_sizes_and_colors_are_sorted_unique(self):
        product = _product(sizes=["M", "S", "M"], colors=["Red"])
        assert product.available_sizes == ["M", "S"]
        assert product.available_colors == ["Red"]

    def test_offered_variant_accepted(self):
        _product(sizes=["M"], colors=["Red"]).assert_offers(size="M", color="Red")

    def test_unknown_size_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(sizes=["M"]).assert_offers(size="XL")
        assert "size" in exc.value.messages

    def test_unknown_color_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(colors=["Red"]).assert_offers(color="Blue")
        assert "color" in exc.value.messages

    def test_product_without_options_accepts_anything(self):
        _product().assert_offers(size="XL", color="Blue")


class TestUpdateDetails:
    def test_none_keeps_current_values(self):
        product = _product(sizes=["M"])
        product.update_details(name="Cotton Shirt")
        assert product.name == "Cotton Shirt"
        assert product.price == 1000
        assert product.available_sizes == ["M"]

    def test_empty_list_clears_options(self):
        product = _product(sizes=["M"])
        product.update_details(sizes=[])
        assert product.available_sizes == []

    def test_price_change_raises_event(self):
        product = _product()
        product.update_details(price=1200)
        events = [e for e in product._events if isinstance(e, ProductPriceChanged)]
        assert len(events) == 1
        assert events[0].previous_price == 1000
        assert events[0].new_price == 1200

    def test_same_price_raises_nothing(self):
        product = _product()
        product.change_price(1000)
        assert not any(isinstance(e, ProductPriceChanged) for e in product._events)

    def test_deactivation_raises_event(self):
        product = _product()
        product.set_active(False)
        assert product.is_active is False
        assert any(isinstance(e, ProductAvailabilityChanged) for e in product._events)


class TestImages:
    def test_new_primary_demotes_previous(self):
        product = _product()
        first = product.add_image("https://cdn.example/1.jpg", is_primary=True)
        second = product.add_image("https://cdn.example/2.jpg", is_primary=True)
        primaries = [i for i in product.images if i.is_primary]
        assert [str(i.id) for i in primaries] == [str(second.id)]
        assert str(first.id) != str(second.id)

    def test_promote_existing_image(self):
        product = _product()
        first = product.add_image("https://cdn.example/1.jpg", is_primary=True)
        second = product.add_image("https://cdn.example/2.jpg")
        product.update_image(second.id, is_primary=True, alt_text="Back view")
        by_id = {str(i.id): i for i in product.images}
        assert by_id[str(second.id)].is_primary is True
        assert by_id[str(second.id)].alt_text == "Back view"
        assert by_id[str(first.id)].is_primary is False

    def test_remove_image(self):
        product = _product()
        image = product.add_image("https://cdn.example/1.jpg")
        product.remove_image(image.id)
        assert len(product.images) == 0

    def test_unknown_image_is_not_found(self):
        product = _product()
        product.add_image("https://cdn.example/1.jpg")
        with pytest.raises(NotFound):
            product.update_image("missing", alt_text="Side")
        with pytest.raises(NotFound):
            product.remove_image("missing")
        assert len(product.images) == 1

    def test_sorted_images_by_sort_order(self):
        product = _product()
        product.add_image("https://cdn.example/b.jpg", sort_order=2)
        product.add_image("https://cdn.example/a.jpg", sort_order=1)
        assert [i.image_url for i in product.sorted_images()] == [
            "https://cdn.example/a.jpg",
            "https://cdn.example/b.jpg",
        ]


class TestCategory:
    def test_label(self):
        assert Category.create(season="summer", year=2025).label == "Summer 2025"

    def test_year_before_2024_rejected(self):
        with pytest.raises(ValidationError):
            Category.create(season="summer", year=2023)

    def test_unknown_season_rejected(self):
        with pytest.raises(ValidationError):
            Category.create(season="monsoon", year=2025)

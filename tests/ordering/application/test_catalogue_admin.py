"""Application tests for catalogue administration: categories, products, images and roles."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from ordering.access.management import GrantRole
from ordering.access.role import is_admin
from ordering.catalogue.category import Category
from ordering.catalogue.images import AddProductImage, RemoveProductImage, UpdateProductImage
from ordering.catalogue.management import (
    DeleteCategory,
    DeleteProduct,
    SaveCategory,
    SaveProduct,
    SetActiveStatus,
)
from ordering.catalogue.product import Product
from ordering.errors import NotFound, PermissionDenied


def _run(command):
    return current_domain.process(command, asynchronous=False)


def _save_category(actor_id, season="summer", year=2025, category_id=None):
    return _run(SaveCategory(actor_id=actor_id, category_id=category_id, season=season, year=year))


def _save_product(actor_id, **fields):
    values = {"name": "Linen Shirt", "price": 1000.0, "stock": 10}
    values.update(fields)
    return _run(SaveProduct(actor_id=actor_id, **values))


class TestCategories:
    def test_create_category(self, admin_id):
        category_id = _save_category(admin_id)
        category = current_domain.repository_for(Category).get(category_id)
        assert category.label == "Summer 2025"
        assert category.is_active is True

    def test_duplicate_season_and_year_rejected(self, admin_id):
        _save_category(admin_id)
        with pytest.raises(ValidationError):
            _save_category(admin_id)

    def test_update_category(self, admin_id):
        category_id = _save_category(admin_id)
        _save_category(admin_id, season="winter", year=2026, category_id=category_id)
        assert current_domain.repository_for(Category).get(category_id).label == "Winter 2026"

    def test_deactivate_category(self, admin_id):
        category_id = _save_category(admin_id)
        _run(SetActiveStatus(actor_id=admin_id, kind="category", record_id=category_id, is_active=False))
        assert current_domain.repository_for(Category).get(category_id).is_active is False

    def test_delete_category_removes_its_products(self, admin_id):
        category_id = _save_category(admin_id)
        product_id = _save_product(admin_id, category_id=category_id)
        other_id = _save_product(admin_id, name="Scarf")

        _run(DeleteCategory(actor_id=admin_id, category_id=category_id))

        products = current_domain.repository_for(Product)._dao.query.all().items
        assert [str(p.id) for p in products] == [other_id]
        assert product_id not in [str(p.id) for p in products]

    def test_customer_cannot_create(self, customer_id):
        with pytest.raises(PermissionDenied):
            _save_category(customer_id)


class TestProducts:
    def test_create_product_with_options(self, admin_id):
        product_id = _save_product(admin_id, sizes=json.dumps(["M", "S"]), colors=json.dumps(["Black"]))
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Linen Shirt"
        assert product.available_sizes == ["M", "S"]
        assert product.available_colors == ["Black"]

    def test_create_requires_name_and_price(self, admin_id):
        with pytest.raises(ValidationError):
            _run(SaveProduct(actor_id=admin_id, name="Nameless"))

    def test_unknown_category_rejected(self, admin_id):
        with pytest.raises(NotFound):
            _save_product(admin_id, category_id="no-such-category")

    def test_malformed_options_rejected(self, admin_id):
        with pytest.raises(ValidationError) as exc:
            _save_product(admin_id, sizes="M,L")
        assert "sizes" in exc.value.messages

    def test_partial_update_keeps_other_fields(self, admin_id):
        product_id = _save_product(admin_id, sizes=json.dumps(["M"]))
        _run(SaveProduct(actor_id=admin_id, product_id=product_id, price=1200.0))

        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 1200.0
        assert product.name == "Linen Shirt"
        assert product.stock == 10
        assert product.available_sizes == ["M"]

    def test_deactivate_product(self, admin_id):
        product_id = _save_product(admin_id)
        _run(SetActiveStatus(actor_id=admin_id, kind="product", record_id=product_id, is_active=False))
        assert current_domain.repository_for(Product).get(product_id).is_active is False

    def test_delete_product(self, admin_id):
        product_id = _save_product(admin_id)
        _run(DeleteProduct(actor_id=admin_id, product_id=product_id))
        assert current_domain.repository_for(Product)._dao.query.all().total == 0

    def test_delete_unknown_product(self, admin_id):
        with pytest.raises(NotFound):
            _run(DeleteProduct(actor_id=admin_id, product_id="no-such-product"))


class TestProductImages:
    def _add(self, actor_id, product_id, url, is_primary=False):
        return _run(AddProductImage(actor_id=actor_id, product_id=product_id, image_url=url, is_primary=is_primary))

    def test_single_primary_image(self, admin_id):
        product_id = _save_product(admin_id)
        first = self._add(admin_id, product_id, "https://cdn.example/1.jpg", is_primary=True)
        second = self._add(admin_id, product_id, "https://cdn.example/2.jpg", is_primary=True)

        product = current_domain.repository_for(Product).get(product_id)
        primary = {str(i.id): i.is_primary for i in product.images}
        assert primary == {first: False, second: True}

    def test_update_image(self, admin_id):
        product_id = _save_product(admin_id)
        image_id = self._add(admin_id, product_id, "https://cdn.example/1.jpg")
        _run(UpdateProductImage(actor_id=admin_id, product_id=product_id, image_id=image_id, alt_text="Front"))

        product = current_domain.repository_for(Product).get(product_id)
        assert product.images[0].alt_text == "Front"

    def test_remove_image(self, admin_id):
        product_id = _save_product(admin_id)
        image_id = self._add(admin_id, product_id, "https://cdn.example/1.jpg")
        _run(RemoveProductImage(actor_id=admin_id, product_id=product_id, image_id=image_id))
        assert len(current_domain.repository_for(Product).get(product_id).images) == 0

    def test_update_unknown_image(self, admin_id):
        product_id = _save_product(admin_id)
        with pytest.raises(NotFound):
            _run(UpdateProductImage(actor_id=admin_id, product_id=product_id, image_id="missing", alt_text="Side"))

    def test_remove_unknown_image(self, admin_id):
        product_id = _save_product(admin_id)
        with pytest.raises(NotFound):
            _run(RemoveProductImage(actor_id=admin_id, product_id=product_id, image_id="missing"))


class TestRoles:
    def test_admin_grants_admin(self, admin_id):
        _run(GrantRole(actor_id=admin_id, user_id="staff-001", role="admin"))
        assert is_admin("staff-001")

    def test_customer_cannot_grant(self, customer_id):
        with pytest.raises(PermissionDenied):
            _run(GrantRole(actor_id=customer_id, user_id=customer_id, role="admin"))
        assert not is_admin(customer_id)

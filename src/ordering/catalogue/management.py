"""Catalogue administration: commands and handlers.

Every handler starts with ``require_admin``. Sizes and colors travel as JSON
arrays: ``None`` keeps the stored set, ``"[]"`` clears it.
"""

import json
from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.catalogue.category import Category, Season
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.shared.lookup import load

logger = structlog.get_logger(__name__)


class RecordKind(Enum):
    PRODUCT = "product"
    CATEGORY = "category"


def _decode_options(raw, field_name):
    if raw is None:
        return None
    try:
        values = json.loads(raw)
    except ValueError as exc:
        raise ValidationError({field_name: ["Must be a JSON array of strings"]}) from exc
    if not isinstance(values, list):
        raise ValidationError({field_name: ["Must be a JSON array of strings"]})
    return values


@ordering.command(part_of="Category")
class SaveCategory:
    actor_id: Identifier()
    category_id: Identifier()  # Absent to create
    season: String(choices=Season)
    year: Integer(min_value=2024)


@ordering.command(part_of="Category")
class DeleteCategory:
    actor_id: Identifier()
    category_id: Identifier(required=True)


@ordering.command(part_of="Product")
class SaveProduct:
    actor_id: Identifier()
    product_id: Identifier()  # Absent to create
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    stock: Integer()
    is_preorder: Boolean()
    is_active: Boolean()
    category_id: Identifier()
    sizes: Text()
    colors: Text()


@ordering.command(part_of="Product")
class SetActiveStatus:
    actor_id: Identifier()
    kind: String(required=True, choices=RecordKind)
    record_id: Identifier(required=True)
    is_active: Boolean(required=True)


@ordering.command(part_of="Product")
class DeleteProduct:
    actor_id: Identifier()
    product_id: Identifier(required=True)


@ordering.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(SaveCategory)
    def save_category(self, command):
        require_admin(command.actor_id)
        repo = current_domain.repository_for(Category)

        if command.category_id:
            category = load(Category, command.category_id, "Category")
            category.revise(season=command.season, year=command.year)
        else:
            if not command.season or not command.year:
                raise ValidationError({"category": ["Season and year are required"]})
            category = Category.create(season=command.season, year=command.year)

        clash = [
            c
            for c in repo._dao.query.filter(season=category.season, year=category.year).all().items
            if str(c.id) != str(category.id)
        ]
        if clash:
            raise ValidationError({"category": [f"{category.label} already exists"]})

        repo.add(category)
        logger.info("Category saved", category_id=str(category.id), label=category.label)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        require_admin(command.actor_id)
        category = load(Category, command.category_id, "Category")

        product_repo = current_domain.repository_for(Product)
        products = product_repo._dao.query.filter(category_id=str(category.id)).all().items
        for product in products:
            product_repo._dao.delete(product)

        current_domain.repository_for(Category)._dao.delete(category)
        logger.info(
            "Category deleted",
            category_id=str(category.id),
            products_deleted=len(products),
        )


@ordering.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(SaveProduct)
    def save_product(self, command):
        require_admin(command.actor_id)
        sizes = _decode_options(command.sizes, "sizes")
        colors = _decode_options(command.colors, "colors")

        if command.category_id:
            load(Category, command.category_id, "Category")

        if command.product_id:
            product = load(Product, command.product_id, "Product")
            product.update_details(
                name=command.name,
                description=command.description,
                price=command.price,
                stock=command.stock,
                is_preorder=command.is_preorder,
                is_active=command.is_active,
                category_id=command.category_id,
                sizes=sizes,
                colors=colors,
            )
        else:
            if not command.name or command.price is None:
                raise ValidationError({"product": ["Name and price are required"]})
            product = Product.create(
                name=command.name,
                price=command.price,
                description=command.description,
                stock=command.stock if command.stock is not None else 0,
                is_preorder=bool(command.is_preorder),
                is_active=command.is_active if command.is_active is not None else True,
                category_id=command.category_id,
                sizes=sizes,
                colors=colors,
            )

        current_domain.repository_for(Product).add(product)
        logger.info("Product saved", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(SetActiveStatus)
    def set_active_status(self, command):
        require_admin(command.actor_id)
        if command.kind == RecordKind.CATEGORY.value:
            category = load(Category, command.record_id, "Category")
            category.set_active(command.is_active)
            current_domain.repository_for(Category).add(category)
        else:
            product = load(Product, command.record_id, "Product")
            product.set_active(command.is_active)
            current_domain.repository_for(Product).add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        require_admin(command.actor_id)
        product = load(Product, command.product_id, "Product")
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))

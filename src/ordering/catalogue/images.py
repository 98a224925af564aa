"""Product image management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.shared.lookup import load


@ordering.command(part_of="Product")
class AddProductImage:
    actor_id: Identifier()
    product_id: Identifier(required=True)
    image_url: String(required=True, max_length=500)
    alt_text: String(max_length=255)
    is_primary: Boolean(default=False)
    sort_order: Integer(default=0)


@ordering.command(part_of="Product")
class UpdateProductImage:
    actor_id: Identifier()
    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    alt_text: String(max_length=255)
    is_primary: Boolean()
    sort_order: Integer()


@ordering.command(part_of="Product")
class RemoveProductImage:
    actor_id: Identifier()
    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@ordering.command_handler(part_of=Product)
class ManageImagesHandler:
    @handle(AddProductImage)
    def add_image(self, command):
        require_admin(command.actor_id)
        product = load(Product, command.product_id, "Product")
        image = product.add_image(
            image_url=command.image_url,
            alt_text=command.alt_text,
            is_primary=command.is_primary,
            sort_order=command.sort_order,
        )
        current_domain.repository_for(Product).add(product)
        return str(image.id)

    @handle(UpdateProductImage)
    def update_image(self, command):
        require_admin(command.actor_id)
        product = load(Product, command.product_id, "Product")
        product.update_image(
            command.image_id,
            alt_text=command.alt_text,
            is_primary=command.is_primary,
            sort_order=command.sort_order,
        )
        current_domain.repository_for(Product).add(product)

    @handle(RemoveProductImage)
    def remove_image(self, command):
        require_admin(command.actor_id)
        product = load(Product, command.product_id, "Product")
        product.remove_image(command.image_id)
        current_domain.repository_for(Product).add(product)

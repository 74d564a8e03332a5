"""Admin catalogue management: create, update and remove products."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.admin.activity import record_activity
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFoundError


def _list_or_none(raw):
    return json.loads(raw) if raw else None


@storefront.command(part_of="Product")
class CreateProduct:
    admin_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    original_price: Float()
    stock: Integer(default=0, min_value=0)
    category: String(max_length=100)
    gender: String(max_length=50)
    sizes: Text()
    colors: Text()
    tags: Text()
    images: Text()


@storefront.command(part_of="Product")
class UpdateProduct:
    admin_id: Identifier(required=True)
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    original_price: Float()
    stock: Integer(min_value=0)
    category: String(max_length=100)
    gender: String(max_length=50)
    sizes: Text()
    colors: Text()
    tags: Text()
    images: Text()


@storefront.command(part_of="Product")
class RemoveProduct:
    admin_id: Identifier(required=True)
    product_id: Identifier(required=True)


def _load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFoundError("Product", str(product_id)) from None


@storefront.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            stock=command.stock or 0,
            category=command.category,
            gender=command.gender,
            sizes=_list_or_none(command.sizes),
            colors=_list_or_none(command.colors),
            tags=_list_or_none(command.tags),
            images=_list_or_none(command.images),
        )
        current_domain.repository_for(Product).add(product)
        record_activity(command.admin_id, "CREATE_PRODUCT", f"Created product: {product.name}")
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = _load_product(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            stock=command.stock,
            category=command.category,
            gender=command.gender,
            sizes=_list_or_none(command.sizes),
            colors=_list_or_none(command.colors),
            tags=_list_or_none(command.tags),
            images=_list_or_none(command.images),
        )
        current_domain.repository_for(Product).add(product)
        record_activity(command.admin_id, "UPDATE_PRODUCT", f"Updated product: {product.name}")
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        product = _load_product(command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
        record_activity(command.admin_id, "DELETE_PRODUCT", f"Deleted product ID: {product.id}")
        return str(product.id)

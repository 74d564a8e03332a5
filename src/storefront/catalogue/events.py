"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    category: String()
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """An admin edited a product's details, price or stock."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units of a product were committed to an order."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    shortfall: Integer(default=0)
    remaining: Integer(required=True)
    order_id: Identifier()

"""Product aggregate root.

List-valued attributes (sizes, colors, tags, images) are stored as JSON
arrays in text fields and exposed as Python lists through properties.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductAdded, ProductUpdated, StockDecremented
from storefront.domain import storefront
from storefront.errors import InsufficientStockError

LOW_STOCK_THRESHOLD = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _dump_list(values) -> str:
    if values is None:
        return "[]"
    if isinstance(values, str):
        return values
    return json.dumps([str(v) for v in values])


def _load_list(raw) -> list[str]:
    if not raw:
        return []
    try:
        values = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    return values if isinstance(values, list) else []


@storefront.aggregate
class Product:
    """A purchasable catalogue item with its on-hand stock."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    original_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category: String(max_length=100)
    gender: String(max_length=50)
    sizes: Text(default="[]")
    colors: Text(default="[]")
    tags: Text(default="[]")
    images: Text(default="[]")
    created_at: DateTime(default=_utcnow)
    updated_at: DateTime(default=_utcnow)

    @property
    def size_list(self) -> list[str]:
        return _load_list(self.sizes)

    @property
    def color_list(self) -> list[str]:
        return _load_list(self.colors)

    @property
    def tag_list(self) -> list[str]:
        return _load_list(self.tags)

    @property
    def image_list(self) -> list[str]:
        return _load_list(self.images)

    @property
    def is_low_on_stock(self) -> bool:
        return self.stock <= LOW_STOCK_THRESHOLD

    @classmethod
    def create(
        cls,
        name,
        price,
        stock=0,
        description=None,
        original_price=None,
        category=None,
        gender=None,
        sizes=None,
        colors=None,
        tags=None,
        images=None,
    ):

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            original_price=original_price,
            stock=stock,
            category=category,
            gender=gender,
            sizes=_dump_list(sizes),
            colors=_dump_list(colors),
            tags=_dump_list(tags),
            images=_dump_list(images),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                price=price,
                stock=stock,
                category=category,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply admin edits. ``None`` values leave the attribute untouched."""
        for attribute in ("name", "description", "price", "original_price", "stock", "category", "gender"):
            if changes.get(attribute) is not None:
                setattr(self, attribute, changes[attribute])
        for attribute in ("sizes", "colors", "tags", "images"):
            if changes.get(attribute) is not None:
                setattr(self, attribute, _dump_list(changes[attribute]))

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                stock=self.stock,
            )
        )

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity: int, order_id=None, allow_shortfall: bool = False) -> int:
        """Take ``quantity`` units off the shelf and return how many were taken.

        With ``allow_shortfall`` the stock bottoms out at zero instead of
        failing; used once a payment has already been captured.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock(quantity) and not allow_shortfall:
            raise InsufficientStockError(self.name, quantity, self.stock)

        taken = min(quantity, self.stock)
        self.stock -= taken
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=taken,
                shortfall=quantity - taken,
                remaining=self.stock,
                order_id=order_id,
            )
        )
        return taken

"""Shopping cart aggregate: one per user, created on first add.

Lines for the same product, size and color merge into one line. Checkout
reads the cart and clears it once an order sourced from it is committed.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.errors import NotFoundError

UNSPECIFIED = "N/A"


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(max_length=50, default=UNSPECIFIED)
    color = String(max_length=50, default=UNSPECIFIED)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def _find_line(self, product_id, size, color):
        return next(
            (
                i
                for i in self.items
                if str(i.product_id) == str(product_id) and i.size == size and i.color == color
            ),
            None,
        )

    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise NotFoundError("Cart item", str(item_id))
        return item

    def add_item(self, product_id, quantity, size=None, color=None):
        """Add a line, or grow the existing line for the same product, size and color."""
        size = size or UNSPECIFIED
        color = color or UNSPECIFIED
        now = datetime.now(UTC)

        existing = self._find_line(product_id, size, color)
        if existing:
            existing.quantity += quantity
            item_id = str(existing.id)
        else:
            item = CartItem(product_id=product_id, size=size, color=color, quantity=quantity, added_at=now)
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=item_id,
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return item_id

    def update_item_quantity(self, item_id, new_quantity):
        item = self._find_item(item_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear_items(self, order_id=None):
        """Empty the cart after an order sourced from it was placed."""
        if self.is_empty:
            return
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id), order_id=order_id))

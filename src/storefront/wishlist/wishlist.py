"""Wishlist aggregate: products a user saved for later, one list per user."""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier

from storefront.domain import storefront
from storefront.wishlist.events import WishlistItemAdded, WishlistItemRemoved


@storefront.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    added_at = DateTime()


@storefront.aggregate
class Wishlist:
    user_id = Identifier(required=True)
    items = HasMany(WishlistItem)
    created_at = DateTime()

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, created_at=datetime.now(UTC))

    def contains(self, product_id) -> bool:
        return any(str(i.product_id) == str(product_id) for i in self.items)

    def add_product(self, product_id) -> bool:
        """Save a product. Saving one that is already listed changes nothing."""
        if self.contains(product_id):
            return False
        self.add_items(WishlistItem(product_id=product_id, added_at=datetime.now(UTC)))
        self.raise_(WishlistItemAdded(wishlist_id=str(self.id), user_id=str(self.user_id), product_id=str(product_id)))
        return True

    def remove_product(self, product_id) -> bool:
        item = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        if item is None:
            return False
        self.remove_items(item)
        self.raise_(
            WishlistItemRemoved(wishlist_id=str(self.id), user_id=str(self.user_id), product_id=str(product_id))
        )
        return True

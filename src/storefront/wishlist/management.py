"""Wishlist commands, handler and read helpers."""

from dataclasses import dataclass

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFoundError
from storefront.utils.query import first_or_none
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@dataclass
class WishlistEntry:
    product_id: str
    name: str
    price: float
    image: str | None


def find_wishlist(user_id) -> Wishlist | None:
    query = current_domain.repository_for(Wishlist)._dao.query.filter(user_id=str(user_id))
    return first_or_none(query)


def wishlist_status(user_id, product_id) -> bool:
    wishlist = find_wishlist(user_id)
    return wishlist is not None and wishlist.contains(product_id)


def view_wishlist(user_id) -> list[WishlistEntry]:
    wishlist = find_wishlist(user_id)
    if wishlist is None:
        return []

    product_repo = current_domain.repository_for(Product)
    entries = []
    for item in wishlist.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            continue
        images = product.image_list
        entries.append(
            WishlistEntry(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                image=images[0] if images else None,
            )
        )
    return entries


@storefront.command_handler(part_of=Wishlist)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        try:
            current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise NotFoundError("Product", str(command.product_id)) from None

        wishlist = find_wishlist(command.user_id) or Wishlist.create(user_id=str(command.user_id))
        wishlist.add_product(command.product_id)
        current_domain.repository_for(Wishlist).add(wishlist)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        wishlist = find_wishlist(command.user_id)
        if wishlist is None or not wishlist.remove_product(command.product_id):
            return
        current_domain.repository_for(Wishlist).add(wishlist)

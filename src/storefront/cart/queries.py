"""Cart lookups and the enriched cart view served to shoppers."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.utils.query import first_or_none


@dataclass
class CartLineView:
    item_id: str
    product_id: str
    name: str
    price: float
    images: list[str]
    size: str
    color: str
    quantity: int


def find_cart_for_user(user_id) -> ShoppingCart | None:
    query = current_domain.repository_for(ShoppingCart)._dao.query.filter(user_id=str(user_id))
    return first_or_none(query)


def cart_for_user(user_id) -> ShoppingCart:
    """Return the user's cart, creating an empty one on first use."""
    return find_cart_for_user(user_id) or ShoppingCart.create(user_id=str(user_id))


def view_cart(user_id) -> list[CartLineView]:
    """Cart lines joined with current product details; lines for deleted products are left out."""
    cart = find_cart_for_user(user_id)
    if cart is None:
        return []

    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in cart.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            continue
        lines.append(
            CartLineView(
                item_id=str(item.id),
                product_id=str(item.product_id),
                name=product.name,
                price=product.price,
                images=product.image_list,
                size=item.size,
                color=item.color,
                quantity=item.quantity,
            )
        )
    return lines

"""Item resolution: turn a checkout request into priced order lines.

A direct "buy now" list wins over the cart. Either way, prices come from
the current product records, never from the client, and lines whose
product no longer exists are dropped.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import UNSPECIFIED
from storefront.cart.queries import find_cart_for_user
from storefront.catalogue.product import Product
from storefront.domain import logger
from storefront.errors import EmptyCartError, InvalidAmountError
from storefront.order.order import OrderSource


@dataclass(frozen=True)
class DirectItem:
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class LineItem:
    product_id: str
    name: str
    unit_price: float
    quantity: int
    size: str
    color: str


@dataclass(frozen=True)
class ResolvedItems:
    source: OrderSource
    lines: tuple[LineItem, ...]


def _price_line(product_repo, product_id, quantity, size, color) -> LineItem | None:
    try:
        product = product_repo.get(product_id)
    except ObjectNotFoundError:
        logger.info("checkout_item_skipped", product_id=str(product_id), reason="product not found")
        return None
    return LineItem(
        product_id=str(product.id),
        name=product.name,
        unit_price=product.price,
        quantity=quantity,
        size=size or UNSPECIFIED,
        color=color or UNSPECIFIED,
    )


def _direct_lines(product_repo, items: Sequence[DirectItem]) -> list[LineItem]:
    return [
        line
        for item in items
        if (line := _price_line(product_repo, item.product_id, item.quantity, item.size, item.color))
    ]


def _cart_lines(product_repo, user_id) -> list[LineItem]:
    cart = find_cart_for_user(user_id)
    if cart is None or cart.is_empty:
        raise EmptyCartError()
    return [
        line
        for item in cart.items
        if (line := _price_line(product_repo, item.product_id, item.quantity, item.size, item.color))
    ]


def resolve_items(user_id, direct_items: Sequence[DirectItem] | None = None) -> ResolvedItems:
    product_repo = current_domain.repository_for(Product)
    if direct_items:
        source, lines = OrderSource.DIRECT, _direct_lines(product_repo, direct_items)
    else:
        source, lines = OrderSource.CART, _cart_lines(product_repo, user_id)

    if not lines:
        raise InvalidAmountError("No valid items found")
    return ResolvedItems(source=source, lines=tuple(lines))

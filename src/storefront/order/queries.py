"""Order ledger lookups for shoppers, checkout and the admin console."""

import math
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import ForbiddenError, NotFoundError
from storefront.order.order import Order
from storefront.utils.query import first_or_none, iterate_all

ADMIN_PAGE_SIZE = 20


@dataclass
class OrderPage:
    total: int
    page: int
    total_pages: int
    orders: list[Order] = field(default_factory=list)


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def all_orders(**criteria) -> list[Order]:
    query = current_domain.repository_for(Order)._dao.query
    if criteria:
        query = query.filter(**criteria)
    return list(iterate_all(query))


def get_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError("Order", str(order_id)) from None


def order_for_user(order_id, user_id) -> Order:
    order = get_order(order_id)
    if str(order.user_id) != str(user_id):
        raise ForbiddenError("Not authorized to view this order")
    return order


def orders_for_user(user_id) -> list[Order]:
    return _newest_first(all_orders(user_id=str(user_id)))


def find_by_transaction_id(transaction_id) -> Order | None:
    query = current_domain.repository_for(Order)._dao.query.filter(transaction_id=transaction_id)
    return first_or_none(query)


def recent_orders(limit: int = 5) -> list[Order]:
    return _newest_first(all_orders())[:limit]


def list_orders(status: str | None = None, page: int = 1, page_size: int = ADMIN_PAGE_SIZE) -> OrderPage:
    """Admin listing, newest first, optionally narrowed to one order status."""
    page = max(page, 1)
    criteria = {"order_status": status} if status else {}
    orders = _newest_first(all_orders(**criteria))
    start = (page - 1) * page_size
    return OrderPage(
        total=len(orders),
        page=page,
        total_pages=math.ceil(len(orders) / page_size),
        orders=orders[start : start + page_size],
    )

"""Catalogue browsing: filtered, sorted and paginated product listings."""

import math
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import LOW_STOCK_THRESHOLD, Product
from storefront.errors import NotFoundError
from storefront.utils.query import iterate_all

DEFAULT_PAGE_SIZE = 12
SHOWCASE_SIZE = 4
TRENDING_TAG = "New"
BESTSELLER_TAG = "Bestseller"


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class ProductFilter:
    """Listing criteria as they arrive from the storefront query string.

    Comma-separated ``category`` and ``gender`` match any listed value;
    ``tags``, ``sizes`` and ``colors`` match products carrying at least
    one of the listed values.
    """

    category: str | None = None
    gender: str | None = None
    tags: str | None = None
    sizes: str | None = None
    colors: str | None = None
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None

    def store_criteria(self) -> dict:
        criteria = {}
        if categories := _split(self.category):
            criteria["category__in"] = categories
        if genders := _split(self.gender):
            criteria["gender__in"] = genders
        if self.search:
            criteria["name__icontains"] = self.search
        if self.min_price is not None:
            criteria["price__gte"] = self.min_price
        if self.max_price is not None:
            criteria["price__lte"] = self.max_price
        return criteria

    def matches_lists(self, product: Product) -> bool:
        for wanted, present in (
            (_split(self.tags), product.tag_list),
            (_split(self.sizes), product.size_list),
            (_split(self.colors), product.color_list),
        ):
            if wanted and not set(wanted) & set(present):
                return False
        return True


@dataclass
class ProductPage:
    total: int
    page: int
    total_pages: int
    products: list[Product] = field(default_factory=list)


def _newest_first(products):
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def _sort(products: list[Product], sort: str | None) -> list[Product]:
    if sort == "price-low":
        return sorted(products, key=lambda p: p.price)
    if sort == "price-high":
        return sorted(products, key=lambda p: p.price, reverse=True)
    return _newest_first(products)


def search_products(
    criteria: ProductFilter | None = None,
    sort: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ProductPage:
    criteria = criteria or ProductFilter()
    page = max(page, 1)
    limit = max(limit, 1)

    query = current_domain.repository_for(Product)._dao.query
    store_criteria = criteria.store_criteria()
    if store_criteria:
        query = query.filter(**store_criteria)

    matched = [p for p in iterate_all(query) if criteria.matches_lists(p)]
    ordered = _sort(matched, sort)
    start = (page - 1) * limit

    return ProductPage(
        total=len(ordered),
        page=page,
        total_pages=math.ceil(len(ordered) / limit),
        products=ordered[start : start + limit],
    )


def _showcase(tag: str) -> list[Product]:
    query = current_domain.repository_for(Product)._dao.query
    tagged = [p for p in iterate_all(query) if tag in p.tag_list]
    return _newest_first(tagged)[:SHOWCASE_SIZE]


def trending_products() -> list[Product]:
    return _showcase(TRENDING_TAG)


def bestseller_products() -> list[Product]:
    return _showcase(BESTSELLER_TAG)


def get_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFoundError("Product", str(product_id)) from None


def low_stock_products(limit: int = 5) -> list[Product]:
    query = current_domain.repository_for(Product)._dao.query.filter(stock__lte=LOW_STOCK_THRESHOLD)
    return list(iterate_all(query))[:limit]

"""Public catalogue endpoints."""

from fastapi import APIRouter, Query

from storefront.api.schemas import ProductPageResponse, ProductResponse
from storefront.catalogue.query import (
    DEFAULT_PAGE_SIZE,
    ProductFilter,
    bestseller_products,
    get_product,
    search_products,
    trending_products,
)

product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    category: str | None = None,
    gender: str | None = None,
    tags: str | None = None,
    sizes: str | None = None,
    colors: str | None = None,
    search: str | None = None,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> ProductPageResponse:
    criteria = ProductFilter(
        category=category,
        gender=gender,
        tags=tags,
        sizes=sizes,
        colors=colors,
        search=search,
        min_price=min_price,
        max_price=max_price,
    )
    result = search_products(criteria, sort=sort, page=page, limit=limit)
    return ProductPageResponse(
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
        products=[ProductResponse.from_product(p) for p in result.products],
    )


@product_router.get("/trending", response_model=list[ProductResponse])
async def list_trending() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in trending_products()]


@product_router.get("/bestsellers", response_model=list[ProductResponse])
async def list_bestsellers() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in bestseller_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))

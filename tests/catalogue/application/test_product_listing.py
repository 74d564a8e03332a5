from datetime import UTC, datetime, timedelta

import pytest
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.query import (
    ProductFilter,
    bestseller_products,
    get_product,
    low_stock_products,
    search_products,
    trending_products,
)
from storefront.errors import NotFoundError


def _aged(product, days_ago):
    product.created_at = datetime.now(UTC) - timedelta(days=days_ago)
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def catalogue(make_product):
    return {
        "tee": _aged(make_product(name="Classic Tee", price=45.0, category="Tops", gender="Men", tags=["Bestseller"]), 3),
        "lift": _aged(
            make_product(
                name="Lift Tee", price=35.0, category="Tops", gender="Women", sizes=["XS"], colors=["Pink"], tags=["New"]
            ),
            1,
        ),
        "joggers": _aged(make_product(name="Training Joggers", price=60.0, category="Bottoms", tags=["Bestseller"]), 2),
        "cap": _aged(make_product(name="Everyday Cap", price=20.0, category="Accessories", stock=2, tags=["New"]), 0),
    }


class TestSearchProducts:
    def test_defaults_to_newest_first(self, catalogue):
        page = search_products()
        assert [p.name for p in page.products] == ["Everyday Cap", "Lift Tee", "Training Joggers", "Classic Tee"]
        assert page.total == 4

    def test_sort_by_price(self, catalogue):
        low = search_products(sort="price-low").products
        high = search_products(sort="price-high").products
        assert [p.price for p in low] == [20.0, 35.0, 45.0, 60.0]
        assert [p.price for p in high] == [60.0, 45.0, 35.0, 20.0]

    def test_comma_separated_categories_match_any(self, catalogue):
        page = search_products(ProductFilter(category="Tops,Accessories"))
        assert {p.name for p in page.products} == {"Classic Tee", "Lift Tee", "Everyday Cap"}

    def test_gender_filter(self, catalogue):
        page = search_products(ProductFilter(gender="Women"))
        assert [p.name for p in page.products] == ["Lift Tee"]

    def test_search_is_case_insensitive(self, catalogue):
        page = search_products(ProductFilter(search="tee"))
        assert {p.name for p in page.products} == {"Classic Tee", "Lift Tee"}

    def test_price_range(self, catalogue):
        page = search_products(ProductFilter(min_price=30, max_price=50))
        assert {p.name for p in page.products} == {"Classic Tee", "Lift Tee"}

    def test_list_filters_match_any_value(self, catalogue):
        assert [p.name for p in search_products(ProductFilter(sizes="XS,XXL")).products] == ["Lift Tee"]
        assert [p.name for p in search_products(ProductFilter(colors="Pink")).products] == ["Lift Tee"]
        assert len(search_products(ProductFilter(tags="Bestseller")).products) == 2

    def test_pagination(self, catalogue):
        page = search_products(page=2, limit=3)
        assert page.total == 4
        assert page.total_pages == 2
        assert [p.name for p in page.products] == ["Classic Tee"]

    def test_page_past_the_end_is_empty(self, catalogue):
        page = search_products(page=5, limit=3)
        assert page.products == []
        assert page.total == 4


class TestShowcases:
    def test_trending_are_new_products(self, catalogue):
        assert [p.name for p in trending_products()] == ["Everyday Cap", "Lift Tee"]

    def test_bestsellers(self, catalogue):
        assert [p.name for p in bestseller_products()] == ["Training Joggers", "Classic Tee"]

    def test_showcase_caps_at_four(self, make_product):
        for n in range(6):
            make_product(name=f"New {n}", tags=["New"])
        assert len(trending_products()) == 4


class TestProductLookup:
    def test_get_product(self, catalogue):
        assert get_product(catalogue["cap"].id).name == "Everyday Cap"

    def test_missing_product(self):
        with pytest.raises(NotFoundError) as exc:
            get_product("missing")
        assert str(exc.value) == "Product not found"

    def test_low_stock(self, catalogue):
        assert [p.name for p in low_stock_products()] == ["Everyday Cap"]

import json

import pytest
from protean.utils.globals import current_domain

from storefront.admin.activity import recent_activity
from storefront.catalogue.management import CreateProduct, RemoveProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.query import get_product
from storefront.errors import NotFoundError


def _create(**overrides):
    fields = {
        "admin_id": "admin-1",
        "name": "Classic Tee",
        "price": 45.0,
        "stock": 20,
        "sizes": json.dumps(["S", "M"]),
        "tags": json.dumps(["Bestseller"]),
    }
    fields.update(overrides)
    return current_domain.process(CreateProduct(**fields), asynchronous=False)


class TestCreateProduct:
    def test_creates_product(self):
        product_id = _create()
        product = get_product(product_id)
        assert product.name == "Classic Tee"
        assert product.size_list == ["S", "M"]
        assert product.tag_list == ["Bestseller"]

    def test_records_admin_activity(self):
        _create()
        entry = recent_activity()[0]
        assert entry.action == "CREATE_PRODUCT"
        assert entry.user_id == "admin-1"
        assert "Classic Tee" in entry.details


class TestUpdateProduct:
    def test_updates_only_given_fields(self):
        product_id = _create()
        current_domain.process(
            UpdateProduct(admin_id="admin-1", product_id=product_id, stock=3, colors=json.dumps(["Olive"])),
            asynchronous=False,
        )
        product = get_product(product_id)
        assert product.stock == 3
        assert product.color_list == ["Olive"]
        assert product.price == 45.0

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            current_domain.process(UpdateProduct(admin_id="admin-1", product_id="missing", stock=1), asynchronous=False)


class TestRemoveProduct:
    def test_removes_product(self):
        product_id = _create()
        current_domain.process(RemoveProduct(admin_id="admin-1", product_id=product_id), asynchronous=False)

        with pytest.raises(NotFoundError):
            get_product(product_id)
        assert "DELETE_PRODUCT" in [e.action for e in recent_activity()]

    def test_repository_is_empty_after_removal(self):
        product_id = _create()
        current_domain.process(RemoveProduct(admin_id="admin-1", product_id=product_id), asynchronous=False)
        assert current_domain.repository_for(Product)._dao.query.all().total == 0

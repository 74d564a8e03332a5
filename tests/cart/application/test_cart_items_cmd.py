import pytest
from protean.utils.globals import current_domain

from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from storefront.cart.queries import find_cart_for_user, view_cart
from storefront.catalogue.product import Product
from storefront.errors import NotFoundError


def _add(product_id, quantity=1, **extra):
    return current_domain.process(
        AddToCart(user_id="user-1", product_id=product_id, quantity=quantity, **extra), asynchronous=False
    )


class TestAddToCart:
    def test_first_add_creates_cart(self, make_product):
        product = make_product()
        assert find_cart_for_user("user-1") is None

        item_id = _add(product.id, 2, size="M")

        cart = find_cart_for_user("user-1")
        assert str(cart.items[0].id) == item_id
        assert cart.items[0].quantity == 2

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            _add("missing")

    def test_carts_are_per_user(self, make_product):
        product = make_product()
        _add(product.id)
        current_domain.process(AddToCart(user_id="user-2", product_id=product.id, quantity=1), asynchronous=False)
        assert len(find_cart_for_user("user-1").items) == 1
        assert len(find_cart_for_user("user-2").items) == 1


class TestUpdateAndRemove:
    def test_update_quantity(self, make_product):
        item_id = _add(make_product().id)
        current_domain.process(UpdateCartItem(user_id="user-1", item_id=item_id, quantity=5), asynchronous=False)
        assert find_cart_for_user("user-1").items[0].quantity == 5

    def test_remove(self, make_product):
        item_id = _add(make_product().id)
        current_domain.process(RemoveFromCart(user_id="user-1", item_id=item_id), asynchronous=False)
        assert find_cart_for_user("user-1").is_empty

    def test_update_without_cart(self):
        with pytest.raises(NotFoundError):
            current_domain.process(UpdateCartItem(user_id="user-9", item_id="x", quantity=1), asynchronous=False)


class TestViewCart:
    def test_joins_current_product_details(self, make_product):
        product = make_product(name="Lift Tee", price=35.0)
        _add(product.id, 2, size="S", color="Pink")

        [line] = view_cart("user-1")
        assert line.name == "Lift Tee"
        assert line.price == 35.0
        assert line.quantity == 2
        assert line.size == "S"
        assert line.images == ["https://images.test/tee.jpg"]

    def test_skips_deleted_products(self, make_product):
        kept = make_product(name="Kept")
        gone = make_product(name="Gone")
        _add(kept.id)
        _add(gone.id)
        current_domain.repository_for(Product)._dao.delete(gone)

        assert [line.name for line in view_cart("user-1")] == ["Kept"]

    def test_no_cart(self):
        assert view_cart("nobody") == []

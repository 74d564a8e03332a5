import pytest

from storefront.cart.cart import UNSPECIFIED, ShoppingCart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.errors import NotFoundError


@pytest.fixture()
def cart():
    return ShoppingCart.create(user_id="user-1")


class TestAddItem:
    def test_new_cart_is_empty(self, cart):
        assert cart.is_empty

    def test_adds_line_with_unspecified_variant(self, cart):
        cart.add_item("prod-1", 2)
        item = cart.items[0]
        assert item.quantity == 2
        assert item.size == UNSPECIFIED
        assert item.color == UNSPECIFIED

    def test_same_product_and_variant_merges(self, cart):
        first = cart.add_item("prod-1", 1, size="M", color="Black")
        second = cart.add_item("prod-1", 2, size="M", color="Black")
        assert first == second
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_different_variant_is_a_new_line(self, cart):
        cart.add_item("prod-1", 1, size="M")
        cart.add_item("prod-1", 1, size="L")
        assert len(cart.items) == 2

    def test_raises_item_added(self, cart):
        item_id = cart.add_item("prod-1", 2)
        event = cart._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.item_id == item_id
        assert event.quantity == 2


class TestChangeItems:
    def test_update_quantity(self, cart):
        item_id = cart.add_item("prod-1", 1)
        cart.update_item_quantity(item_id, 4)
        assert cart.items[0].quantity == 4
        event = cart._events[-1]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1

    def test_remove_item(self, cart):
        item_id = cart.add_item("prod-1", 1)
        cart.remove_item(item_id)
        assert cart.is_empty
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_unknown_item(self, cart):
        with pytest.raises(NotFoundError):
            cart.remove_item("nope")


class TestClearItems:
    def test_clear_empties_cart(self, cart):
        cart.add_item("prod-1", 1)
        cart.add_item("prod-2", 1)
        cart.clear_items(order_id="order-1")
        assert cart.is_empty
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.order_id == "order-1"

    def test_clearing_empty_cart_raises_nothing(self, cart):
        cart.clear_items()
        assert cart._events == []

import pytest

from storefront.checkout.resolution import LineItem
from storefront.errors import InvalidStatusTransitionError
from storefront.order.events import OrderPlaced, OrderStatusChanged, PaymentConfirmed, PaymentFailed
from storefront.order.order import (
    Order,
    OrderPricing,
    OrderSource,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)

LINES = (
    LineItem(product_id="prod-1", name="Classic Tee", unit_price=50.0, quantity=2, size="M", color="Black"),
)
PRICING = OrderPricing(subtotal=100.0, shipping=0.0, tax=18.0, total=118.0)


def _place(method=PaymentMethod.COD, **extra):
    return Order.place(
        user_id="user-1",
        lines=LINES,
        pricing=PRICING,
        payment_method=method,
        shipping_address=ShippingAddress(name="Asha", street="12 Park St", city="Pune", postal_code="411001"),
        **extra,
    )


class TestPlaceOrder:
    def test_cash_order_starts_processing(self):
        order = _place()
        assert order.order_status == OrderStatus.PROCESSING.value
        assert order.payment_status == PaymentStatus.PENDING.value

    def test_online_order_starts_pending(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        assert order.order_status == OrderStatus.PENDING.value
        assert order.transaction_id == "TXN1"

    def test_items_snapshot_prices(self):
        order = _place()
        [item] = order.items
        assert item.price == 50.0
        assert item.product_name == "Classic Tee"
        assert item.line_total == 100.0
        assert order.total == 118.0

    def test_source_defaults_to_cart(self):
        assert _place().is_from_cart
        assert not _place(source=OrderSource.DIRECT).is_from_cart

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.total == 118.0
        assert event.item_count == 1


class TestPaymentSettlement:
    def test_confirm_payment(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        assert order.confirm_payment("mihpay-1") is True
        assert order.payment_status == PaymentStatus.PAID.value
        assert order.order_status == OrderStatus.PROCESSING.value
        assert order.gateway_payment_id == "mihpay-1"
        assert isinstance(order._events[-1], PaymentConfirmed)

    def test_confirm_twice_is_a_no_op(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.confirm_payment("mihpay-1")
        events = len(order._events)
        assert order.confirm_payment("mihpay-2") is False
        assert order.gateway_payment_id == "mihpay-1"
        assert len(order._events) == events

    def test_fail_payment_cancels(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        assert order.fail_payment("declined") is True
        assert order.payment_status == PaymentStatus.FAILED.value
        assert order.order_status == OrderStatus.CANCELLED.value
        assert isinstance(order._events[-1], PaymentFailed)

    def test_failed_payment_cannot_be_confirmed(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.fail_payment()
        assert order.confirm_payment("mihpay-1") is False
        assert order.payment_status == PaymentStatus.FAILED.value


class TestChangeStatus:
    def test_ship_then_deliver(self):
        order = _place()
        assert order.change_status("SHIPPED") is True
        assert order.change_status("DELIVERED") is True
        assert order.order_status == "DELIVERED"
        assert isinstance(order._events[-1], OrderStatusChanged)

    def test_delivering_cash_order_marks_it_paid(self):
        order = _place()
        order.change_status("SHIPPED")
        order.change_status("DELIVERED")
        assert order.payment_status == PaymentStatus.PAID.value

    def test_same_status_is_a_no_op(self):
        order = _place()
        assert order.change_status("PROCESSING") is False

    @pytest.mark.parametrize("target", ["PENDING", "DELIVERED"])
    def test_invalid_transition_from_processing(self, target):
        order = _place()
        with pytest.raises(InvalidStatusTransitionError):
            order.change_status(target)

    def test_cancelled_is_terminal(self):
        order = _place()
        order.change_status("CANCELLED")
        with pytest.raises(InvalidStatusTransitionError):
            order.change_status("SHIPPED")

    def test_unknown_status(self):
        with pytest.raises(ValueError):
            _place().change_status("LOST")


class TestAdminChangesWhilePaymentIsOpen:
    def test_cancelling_unpaid_online_order_fails_its_payment(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        assert order.change_status("CANCELLED") is True
        assert order.payment_status == PaymentStatus.FAILED.value
        assert order._events[-1].payment_status == PaymentStatus.FAILED.value

    def test_cancelled_online_order_cannot_be_confirmed(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.change_status("CANCELLED")
        assert order.confirm_payment("mihpay-1") is False
        assert order.order_status == OrderStatus.CANCELLED.value
        assert order.gateway_payment_id is None

    def test_unpaid_online_order_cannot_ship(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        with pytest.raises(InvalidStatusTransitionError) as exc:
            order.change_status("SHIPPED")
        assert str(exc.value) == "Cannot move order from PENDING to SHIPPED: payment not received"
        assert order.order_status == OrderStatus.PENDING.value

    def test_paid_online_order_ships(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.confirm_payment("mihpay-1")
        assert order.change_status("SHIPPED") is True

    def test_processing_unpaid_online_order_still_accepts_payment(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.change_status("PROCESSING")
        assert order.confirm_payment("mihpay-1") is True
        assert order.payment_status == PaymentStatus.PAID.value

    def test_shipped_order_is_not_reopened_by_payment(self):
        order = _place(PaymentMethod.ONLINE, transaction_id="TXN1")
        order.payment_status = PaymentStatus.PENDING.value
        order.order_status = OrderStatus.SHIPPED.value
        assert order.accepts_payment is False
        assert order.confirm_payment("mihpay-1") is False
        assert order.order_status == OrderStatus.SHIPPED.value

    def test_cancelling_cash_order_leaves_payment_pending(self):
        order = _place()
        order.change_status("CANCELLED")
        assert order.payment_status == PaymentStatus.PENDING.value

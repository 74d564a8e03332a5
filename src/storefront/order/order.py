"""Order aggregate: the durable ledger record of one checkout.

Amounts are fixed when the order is placed and never recomputed from
live product prices. Orders are never deleted, only cancelled.

Payment status:  PENDING -> PAID | FAILED (both terminal)
Order status:    PENDING / PROCESSING -> SHIPPED -> DELIVERED
                 any non-terminal state -> CANCELLED
An online order ships only once paid; cancelling it while payment is
still pending fails the payment.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.errors import InvalidStatusTransitionError
from storefront.order.events import OrderPlaced, OrderStatusChanged, PaymentConfirmed, PaymentFailed


class PaymentMethod(Enum):
    COD = "COD"
    ONLINE = "ONLINE"


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class OrderSource(Enum):
    """Where checkout took the order lines from."""

    CART = "cart"
    DIRECT = "direct"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

# Online payments can settle only while the order has not shipped or been cancelled
_PAYABLE_ORDER_STATUSES = {OrderStatus.PENDING, OrderStatus.PROCESSING}


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Copy of the delivery address taken at checkout.

    Later edits to the user's address book do not reach placed orders.
    """

    name = String(required=True, max_length=255)
    phone = String(max_length=20)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    tag = String(max_length=20)


@storefront.value_object(part_of="Order")
class OrderPricing:
    subtotal = Float(default=0.0)
    shipping = Float(default=0.0)
    tax = Float(default=0.0)
    total = Float(default=0.0)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    size = String(max_length=50)
    color = String(max_length=50)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=255)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing, required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=64)
    gateway_payment_id = String(max_length=64)
    shipping_address = ValueObject(ShippingAddress)
    source = String(choices=OrderSource, default=OrderSource.CART.value)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def total(self) -> float:
        return self.pricing.total

    @property
    def is_from_cart(self) -> bool:
        return self.source == OrderSource.CART.value

    @property
    def is_awaiting_payment(self) -> bool:
        return self.payment_status == PaymentStatus.PENDING.value

    @property
    def is_online(self) -> bool:
        return self.payment_method == PaymentMethod.ONLINE.value

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    @property
    def accepts_payment(self) -> bool:
        """Payment is still open and the admin has not moved the order past it."""
        return self.is_awaiting_payment and OrderStatus(self.order_status) in _PAYABLE_ORDER_STATUSES

    @classmethod
    def place(
        cls,
        user_id,
        lines,
        pricing,
        payment_method,
        shipping_address=None,
        source=OrderSource.CART,
        transaction_id=None,
        customer_email=None,
        customer_name=None,
    ):
        """Record a new order.

        Cash-on-delivery orders start as PROCESSING since stock is taken at
        once; online orders stay PENDING until the gateway reports back.
        """
        method = PaymentMethod(payment_method)
        order_status = OrderStatus.PROCESSING if method == PaymentMethod.COD else OrderStatus.PENDING
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            customer_email=customer_email,
            customer_name=customer_name,
            pricing=pricing,
            payment_method=method.value,
            order_status=order_status.value,
            payment_status=PaymentStatus.PENDING.value,
            transaction_id=transaction_id,
            shipping_address=shipping_address,
            source=OrderSource(source).value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.name,
                    quantity=line.quantity,
                    price=line.unit_price,
                    size=line.size,
                    color=line.color,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                payment_method=method.value,
                order_status=order_status.value,
                source=order.source,
                item_count=len(order.items),
                total=pricing.total,
                transaction_id=transaction_id,
                placed_at=now,
            )
        )
        return order

    def item(self, order_item_id):
        return next((i for i in self.items if str(i.id) == str(order_item_id)), None)

    def confirm_payment(self, gateway_payment_id=None) -> bool:
        """Mark the order paid.

        Returns False when payment was already settled or the order has
        shipped or been cancelled in the meantime.
        """
        if not self.accepts_payment:
            return False

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.order_status = OrderStatus.PROCESSING.value
        self.gateway_payment_id = gateway_payment_id
        self.updated_at = now

        self.raise_(
            PaymentConfirmed(
                order_id=str(self.id),
                transaction_id=self.transaction_id,
                gateway_payment_id=gateway_payment_id,
                amount=self.total,
                paid_at=now,
            )
        )
        return True

    def fail_payment(self, reason=None) -> bool:
        """Mark the payment failed and cancel the order. Returns False when already settled."""
        if not self.is_awaiting_payment:
            return False

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.FAILED.value
        self.order_status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            PaymentFailed(
                order_id=str(self.id),
                transaction_id=self.transaction_id,
                reason=reason,
                failed_at=now,
            )
        )
        return True

    def change_status(self, new_status) -> bool:
        """Admin override of the fulfilment status.

        Delivering a cash-on-delivery order also records the cash as paid.
        Cancelling an online order that is still awaiting payment fails the
        payment, so a late gateway callback cannot revive it.
        Returns False when the order is already in the requested status.
        """
        current = OrderStatus(self.order_status)
        target = OrderStatus(new_status)
        if target == current:
            return False
        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(current.value, target.value)
        if target == OrderStatus.SHIPPED and self.is_online and not self.is_paid:
            raise InvalidStatusTransitionError(current.value, target.value, "payment not received")

        self.order_status = target.value
        if target == OrderStatus.CANCELLED and self.is_online and self.is_awaiting_payment:
            self.payment_status = PaymentStatus.FAILED.value
        if (
            target == OrderStatus.DELIVERED
            and self.payment_method == PaymentMethod.COD.value
            and self.is_awaiting_payment
        ):
            self.payment_status = PaymentStatus.PAID.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                payment_status=self.payment_status,
            )
        )
        return True

"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """Checkout recorded a new order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True)
    order_status = String(required=True)
    source = String(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    transaction_id = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentConfirmed:
    """The payment gateway reported a successful payment."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    transaction_id = String()
    gateway_payment_id = String()
    amount = Float(required=True)
    paid_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentFailed:
    """The payment gateway reported a failed payment; the order is cancelled."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    transaction_id = String()
    reason = String()
    failed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order along its fulfilment lifecycle."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    payment_status = String(required=True)

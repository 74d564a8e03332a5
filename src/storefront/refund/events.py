from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Refund")
class RefundIssued:
    """An admin refunded some or all of an order's items."""

    __version__ = "v1"

    refund_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    gateway_refund_id = String()
    item_count = Integer(required=True)
    issued_at = DateTime(required=True)

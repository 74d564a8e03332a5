"""Refund aggregate: an admin-issued refund against one order.

A refund is written once, with all of its lines, and never changed.
It does not touch stock or the order's status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.refund.events import RefundIssued


class RefundStatus(Enum):
    COMPLETED = "COMPLETED"


@storefront.entity(part_of="Refund")
class RefundItem:
    order_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Refund:
    order_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    reason = Text()
    status = String(choices=RefundStatus, default=RefundStatus.COMPLETED.value)
    gateway_refund_id = String(max_length=64)
    items = HasMany(RefundItem)
    issued_by = Identifier()
    created_at = DateTime()

    @classmethod
    def issue(cls, order_id, lines, reason, gateway_refund_id, issued_by=None):
        """Record a completed refund. ``lines`` are (order item, quantity) pairs."""
        amount = round(sum(item.price * quantity for item, quantity in lines), 2)
        now = datetime.now(UTC)
        refund = cls(
            order_id=order_id,
            amount=amount,
            reason=reason,
            status=RefundStatus.COMPLETED.value,
            gateway_refund_id=gateway_refund_id,
            issued_by=issued_by,
            created_at=now,
        )
        for item, quantity in lines:
            refund.add_items(RefundItem(order_item_id=item.id, quantity=quantity, unit_price=item.price))
        refund.raise_(
            RefundIssued(
                refund_id=str(refund.id),
                order_id=str(order_id),
                amount=amount,
                gateway_refund_id=gateway_refund_id,
                item_count=len(lines),
                issued_at=now,
            )
        )
        return refund

"""Issuing refunds.

Requested quantities are totalled per order item and checked against the
original order before anything is written, so an invalid line rejects
the whole request.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import uuid4

from protean.core.unit_of_work import UnitOfWork
from protean.utils.globals import current_domain

from storefront.admin.activity import record_activity
from storefront.domain import logger
from storefront.errors import GatewayError, InvalidAmountError, ItemNotFoundError, OverRefundError
from storefront.order.queries import get_order
from storefront.payments.gateway.port import PaymentGateway
from storefront.refund.refund import Refund


@dataclass(frozen=True)
class RefundLine:
    order_item_id: str
    quantity: int


def _validated_lines(order, lines: Sequence[RefundLine]):
    if not lines:
        raise InvalidAmountError("Refund needs at least one item")

    requested = Counter()
    for line in lines:
        requested[str(line.order_item_id)] += line.quantity

    validated = []
    for order_item_id, quantity in requested.items():
        item = order.item(order_item_id)
        if item is None:
            raise ItemNotFoundError(order_item_id)
        if quantity > item.quantity:
            raise OverRefundError(order_item_id, quantity, item.quantity)
        validated.append((item, quantity))
    return validated


def refunds_for_order(order_id) -> list[Refund]:
    repo = current_domain.repository_for(Refund)
    return repo._dao.query.filter(order_id=str(order_id)).all().items


class RefundService:
    def __init__(self, gateway: PaymentGateway):
        self.gateway = gateway

    def issue_refund(self, order_id, lines: Sequence[RefundLine], reason: str | None, admin_id=None) -> Refund:
        order = get_order(order_id)
        validated = _validated_lines(order, lines)
        amount = round(sum(item.price * quantity for item, quantity in validated), 2)

        if order.gateway_payment_id:
            result = self.gateway.create_refund(order.gateway_payment_id, amount, reason)
            if not result.success:
                logger.warning("refund_rejected_by_gateway", order_id=str(order.id), reason=result.failure_reason)
                raise GatewayError(result.failure_reason or "Refund was rejected by the payment gateway")
            gateway_refund_id = result.gateway_refund_id
        else:
            # Cash orders are paid back by hand; keep a local reference
            gateway_refund_id = f"re_{uuid4().hex[:16]}"

        with UnitOfWork():
            refund = Refund.issue(
                order_id=str(order.id),
                lines=validated,
                reason=reason,
                gateway_refund_id=gateway_refund_id,
                issued_by=str(admin_id) if admin_id else None,
            )
            current_domain.repository_for(Refund).add(refund)
            if admin_id:
                record_activity(admin_id, "REFUND_ORDER", f"Refunded {amount:.2f} on order {order.id}")

        logger.info("refund_issued", order_id=str(order.id), refund_id=str(refund.id), amount=amount)
        return refund

"""Order totals.

subtotal = sum(unit price x quantity)
shipping = 0 when subtotal > 75, otherwise 10
tax      = subtotal x 18%, rounded half up to a whole unit
total    = subtotal + shipping + tax
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from storefront.errors import InvalidAmountError
from storefront.order.order import OrderPricing

FREE_SHIPPING_THRESHOLD = Decimal("75")
FLAT_SHIPPING = Decimal("10")
TAX_RATE = Decimal("0.18")
MINIMUM_ORDER_AMOUNT = Decimal("1")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.shipping + self.tax

    def as_pricing(self) -> OrderPricing:
        return OrderPricing(
            subtotal=float(self.subtotal),
            shipping=float(self.shipping),
            tax=float(self.tax),
            total=float(self.total),
        )


def compute_totals(lines: Iterable) -> OrderTotals:
    subtotal = sum((Decimal(str(line.unit_price)) * line.quantity for line in lines), Decimal("0"))
    shipping = Decimal("0") if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING
    tax = (subtotal * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return OrderTotals(subtotal=subtotal, shipping=shipping, tax=tax)


def ensure_payable(totals: OrderTotals) -> None:
    if totals.subtotal < MINIMUM_ORDER_AMOUNT:
        raise InvalidAmountError(f"Order amount must be at least {MINIMUM_ORDER_AMOUNT}")

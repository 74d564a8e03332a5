"""Admin dashboard figures computed from the order ledger and catalogue."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from storefront.catalogue.product import Product
from storefront.catalogue.query import low_stock_products
from storefront.order.order import Order, PaymentStatus
from storefront.order.queries import all_orders, recent_orders

RECENT_ORDER_COUNT = 5
METRICS_WINDOW_DAYS = 30


@dataclass
class DashboardStats:
    revenue: float
    total_orders: int
    low_stock: list[Product] = field(default_factory=list)
    recent_orders: list[Order] = field(default_factory=list)

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock)


@dataclass
class SalesMetrics:
    days: int
    order_count: int
    revenue: float
    daily_revenue: dict[date, float] = field(default_factory=dict)


def _paid_orders() -> list[Order]:
    return all_orders(payment_status=PaymentStatus.PAID.value)


def dashboard_stats() -> DashboardStats:
    """Revenue counts paid orders only; unpaid cash orders are not revenue yet."""
    return DashboardStats(
        revenue=round(sum(o.total for o in _paid_orders()), 2),
        total_orders=len(all_orders()),
        low_stock=low_stock_products(),
        recent_orders=recent_orders(RECENT_ORDER_COUNT),
    )


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def sales_metrics(days: int = METRICS_WINDOW_DAYS, now: datetime | None = None) -> SalesMetrics:
    since = _as_utc(now or datetime.now(UTC)) - timedelta(days=days)
    window = [o for o in _paid_orders() if o.created_at and _as_utc(o.created_at) >= since]

    daily = defaultdict(float)
    for order in window:
        daily[_as_utc(order.created_at).date()] += order.total

    return SalesMetrics(
        days=days,
        order_count=len(window),
        revenue=round(sum(o.total for o in window), 2),
        daily_revenue={day: round(amount, 2) for day, amount in sorted(daily.items())},
    )

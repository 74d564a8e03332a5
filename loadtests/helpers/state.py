"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
across users. State tracks ids returned by the API so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper's session."""

    user_id: str
    email: str
    name: str
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    address_id: str | None = None
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"X-User-Id": self.user_id, "X-User-Email": self.email, "X-User-Name": self.name}


@dataclass
class AdminState:
    """Tracks products created by a simulated admin."""

    admin_id: str
    product_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"X-User-Id": self.admin_id, "X-User-Role": "ADMIN"}

"""Storefront domain.

Catalogue browsing, carts and wishlists, address books, the order ledger,
checkout with cash-on-delivery and PayU payments, refunds and the admin
console all live in this single Protean domain so that checkout can write
orders, stock and carts in one unit of work.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)

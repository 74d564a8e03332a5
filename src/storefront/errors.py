"""Storefront exceptions.

Each error maps onto one HTTP status in ``storefront.api.errors``.
"""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    pass


class UnauthorizedError(StorefrontError):
    """Raised when the request carries no usable identity."""

    def __init__(self, message: str = "Not authorized, no identity supplied"):
        super().__init__(message)


class ForbiddenError(StorefrontError):
    """Raised when a resource exists but is not owned by the caller."""

    def __init__(self, message: str = "Not authorized to access this resource"):
        super().__init__(message)


class NotFoundError(StorefrontError):
    """Raised when an order, product or other record does not exist."""

    def __init__(self, kind: str, identifier: str | None = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found")


class ItemNotFoundError(NotFoundError):
    """Raised when a refund line points at an item the order does not have."""

    def __init__(self, order_item_id: str):
        self.order_item_id = order_item_id
        super().__init__("Order item", order_item_id)
        self.args = (f"Order item {order_item_id} not found",)


class EmptyCartError(StorefrontError):
    """Raised when checkout is attempted on an empty cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class InvalidAmountError(StorefrontError):
    """Raised when checkout resolves no items or an amount below the minimum."""

    def __init__(self, message: str = "Invalid order amount"):
        super().__init__(message)


class InsufficientStockError(StorefrontError):
    """Raised when a product cannot cover the requested quantity."""

    def __init__(self, product_name: str, requested: int, available: int):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name}: requested {requested}, available {available}"
        )


class OverRefundError(StorefrontError):
    """Raised when a refund asks for more units than were purchased."""

    def __init__(self, order_item_id: str, requested: int, purchased: int):
        self.order_item_id = order_item_id
        self.requested = requested
        self.purchased = purchased
        super().__init__("Cannot refund more items than purchased")


class InvalidStatusTransitionError(StorefrontError):
    """Raised when an admin status change is not allowed from the current state."""

    def __init__(self, current: str, requested: str, reason: str | None = None):
        self.current = current
        self.requested = requested
        message = f"Cannot move order from {current} to {requested}"
        super().__init__(f"{message}: {reason}" if reason else message)


class SignatureMismatchError(StorefrontError):
    """Raised when a gateway callback fails signature verification.

    Never rendered to clients: callback handling turns it into a
    failure redirect.
    """

    def __init__(self, transaction_id: str | None = None):
        self.transaction_id = transaction_id
        super().__init__("Payment callback signature mismatch")


class GatewayError(StorefrontError):
    """Raised when the payment gateway rejects or fails a request."""

    pass

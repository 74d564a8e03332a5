"""Payment gateway port.

Checkout and refunds talk to the payment processor only through this
interface, so PayU can be swapped for the fake adapter in development
and tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass


def format_amount(amount: float) -> str:
    """Amounts travel to the gateway as strings with two decimals."""
    return f"{amount:.2f}"


@dataclass(frozen=True)
class PaymentRequest:
    """Signed parameters the client posts to the gateway to pay."""

    key: str
    txnid: str
    amount: str
    productinfo: str
    firstname: str
    email: str
    phone: str
    success_url: str
    failure_url: str
    hash: str
    action_url: str

    def as_params(self) -> dict:
        return {
            "key": self.key,
            "txnid": self.txnid,
            "amount": self.amount,
            "productinfo": self.productinfo,
            "firstname": self.firstname,
            "email": self.email,
            "phone": self.phone,
            "successUrl": self.success_url,
            "failureUrl": self.failure_url,
            "hash": self.hash,
        }


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    gateway_refund_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def build_payment_request(
        self,
        txnid: str,
        amount: float,
        productinfo: str,
        firstname: str,
        email: str,
        phone: str,
    ) -> PaymentRequest:
        """Sign the parameters for a redirect-based payment."""
        ...

    @abstractmethod
    def verify_callback(self, payload: Mapping) -> bool:
        """Check that a transaction callback was signed by the gateway."""
        ...

    @abstractmethod
    def create_refund(self, gateway_payment_id: str, amount: float, reason: str | None) -> RefundResult:
        """Refund part or all of a captured payment."""
        ...

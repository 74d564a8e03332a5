"""Payment gateway adapters.

``build_gateway`` picks the adapter named by the settings; the result is
handed to checkout and refund code explicitly.
"""

from storefront.config import Settings
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.payu_adapter import PayuGateway
from storefront.payments.gateway.port import PaymentGateway


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.payment_backend == "fake":
        return FakeGateway(callback_url=settings.payment_callback_url)
    return PayuGateway(
        merchant_key=settings.payu_merchant_key,
        merchant_salt=settings.payu_merchant_salt,
        payment_url=settings.payu_payment_url,
        refund_url=settings.payu_refund_url,
        callback_url=settings.payment_callback_url,
        timeout=settings.gateway_timeout_seconds,
    )


__all__ = ["FakeGateway", "PaymentGateway", "PayuGateway", "build_gateway"]

"""Order confirmation emails.

Delivery is best effort: failures are logged and never reach the caller,
so a broken mail server cannot fail or roll back an order.
"""

import structlog

from storefront.config import Settings
from storefront.notifications.email_port import EmailPort
from storefront.notifications.fake_email import FakeEmailAdapter
from storefront.notifications.smtp_email import SmtpEmailAdapter

logger = structlog.get_logger(__name__)


def order_reference(order_id) -> str:
    return str(order_id)[:8]


class OrderMailer:
    def __init__(self, email: EmailPort, shop_name: str = "Storefront"):
        self.email = email
        self.shop_name = shop_name

    def send_order_confirmation(self, email: str | None, order_id, total: float) -> None:
        if not email:
            logger.warning("order_confirmation_skipped", order_id=str(order_id), reason="no email on order")
            return

        reference = order_reference(order_id)
        subject = f"Order Confirmed #{reference}"
        body = (
            f"Thank you for shopping with {self.shop_name}.\n\n"
            f"Order ID: {order_id}\n"
            f"Total: {total:.2f}\n\n"
            "We will let you know when your order ships."
        )
        try:
            result = self.email.send(to=email, subject=subject, body=body)
        except Exception:
            logger.exception("order_confirmation_failed", order_id=str(order_id))
            return

        if result.get("status") != "sent":
            logger.warning("order_confirmation_not_sent", order_id=str(order_id), error=result.get("error"))
            return
        logger.info("order_confirmation_sent", order_id=str(order_id), message_id=result.get("message_id"))


def build_email_adapter(settings: Settings) -> EmailPort:
    if settings.email_backend == "fake":
        return FakeEmailAdapter()
    return SmtpEmailAdapter(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.email_sender,
        username=settings.smtp_user or None,
        password=settings.smtp_password or None,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout_seconds,
    )

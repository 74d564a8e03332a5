"""PayU payment gateway adapter."""

from collections.abc import Mapping
from uuid import uuid4

import requests
import structlog

from storefront.payments.gateway.port import PaymentGateway, PaymentRequest, RefundResult, format_amount
from storefront.payments.gateway.signature import command_hash, request_hash, verify_response_hash

logger = structlog.get_logger(__name__)

REFUND_COMMAND = "cancel_refund_transaction"


class PayuGateway(PaymentGateway):
    def __init__(
        self,
        merchant_key: str,
        merchant_salt: str,
        payment_url: str,
        refund_url: str,
        callback_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.merchant_key = merchant_key
        self.merchant_salt = merchant_salt
        self.payment_url = payment_url
        self.refund_url = refund_url
        self.callback_url = callback_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_payment_request(self, txnid, amount, productinfo, firstname, email, phone) -> PaymentRequest:
        params = {
            "key": self.merchant_key,
            "txnid": txnid,
            "amount": format_amount(amount),
            "productinfo": productinfo,
            "firstname": firstname,
            "email": email,
        }
        return PaymentRequest(
            **params,
            phone=phone or "",
            success_url=self.callback_url,
            failure_url=self.callback_url,
            hash=request_hash(params, self.merchant_salt),
            action_url=self.payment_url,
        )

    def verify_callback(self, payload: Mapping) -> bool:
        if payload.get("key") != self.merchant_key:
            return False
        return verify_response_hash(payload, self.merchant_salt)

    def create_refund(self, gateway_payment_id, amount, reason) -> RefundResult:
        token = f"re_{uuid4().hex[:16]}"
        form = {
            "key": self.merchant_key,
            "command": REFUND_COMMAND,
            "var1": gateway_payment_id,
            "var2": token,
            "var3": format_amount(amount),
            "hash": command_hash(self.merchant_key, REFUND_COMMAND, gateway_payment_id, self.merchant_salt),
        }

        try:
            response = self.session.post(self.refund_url, data=form, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("payu_refund_request_failed", gateway_payment_id=gateway_payment_id, error=str(exc))
            return RefundResult(success=False, gateway_status="error", failure_reason="Gateway unavailable")

        if str(body.get("status")) != "1":
            logger.warning("payu_refund_rejected", gateway_payment_id=gateway_payment_id, message=body.get("msg"))
            return RefundResult(success=False, gateway_status="rejected", failure_reason=body.get("msg"))

        return RefundResult(
            success=True,
            gateway_refund_id=str(body.get("request_id") or token),
            gateway_status="queued",
        )

"""Configurable fake payment gateway for development and testing.

Signs and verifies with the real PayU hash functions using a test key
and salt, so tests can produce genuine callbacks with ``sign_callback``.
Refunds never leave the process.
"""

from collections.abc import Mapping
from uuid import uuid4

from storefront.payments.gateway.port import PaymentGateway, PaymentRequest, RefundResult, format_amount
from storefront.payments.gateway.signature import request_hash, response_hash, verify_response_hash


class FakeGateway(PaymentGateway):
    def __init__(
        self,
        merchant_key: str = "test-key",
        merchant_salt: str = "test-salt",
        callback_url: str = "http://testserver/api/payment/payu/callback",
    ) -> None:
        self.merchant_key = merchant_key
        self.merchant_salt = merchant_salt
        self.callback_url = callback_url
        self.should_succeed: bool = True
        self.failure_reason: str = "Refund declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Refund declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def build_payment_request(self, txnid, amount, productinfo, firstname, email, phone) -> PaymentRequest:
        self.calls.append({"method": "build_payment_request", "txnid": txnid, "amount": amount})
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
            action_url="https://fake-gateway.test/_payment",
        )

    def verify_callback(self, payload: Mapping) -> bool:
        return payload.get("key") == self.merchant_key and verify_response_hash(payload, self.merchant_salt)

    def sign_callback(self, payload: Mapping) -> dict:
        """Return ``payload`` with the key and the hash the gateway would attach."""
        signed = {**payload, "key": self.merchant_key}
        signed["hash"] = response_hash(signed, self.merchant_salt)
        return signed

    def create_refund(self, gateway_payment_id, amount, reason) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "gateway_payment_id": gateway_payment_id,
                "amount": amount,
                "reason": reason,
            }
        )
        if self.should_succeed:
            return RefundResult(success=True, gateway_refund_id=f"re_{uuid4().hex[:16]}", gateway_status="succeeded")
        return RefundResult(success=False, gateway_status="failed", failure_reason=self.failure_reason)

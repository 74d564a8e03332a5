"""PayU request and response hashes.

PayU signs with SHA-512 over ``|``-joined fields in a fixed order. The
order is part of the gateway's wire contract, so both sequences are kept
here as data and every caller goes through these functions.

Request:  key|txnid|amount|productinfo|firstname|email|udf1..udf10|salt
Response: salt|status|udf10..udf1|email|firstname|productinfo|amount|txnid|key
"""

import hashlib
import hmac
from collections.abc import Mapping, Sequence

DELIMITER = "|"

RESERVED_FIELDS = tuple(f"udf{n}" for n in range(1, 11))

REQUEST_HASH_FIELDS = ("key", "txnid", "amount", "productinfo", "firstname", "email", *RESERVED_FIELDS)

RESPONSE_HASH_FIELDS = (
    "status",
    *reversed(RESERVED_FIELDS),
    "email",
    "firstname",
    "productinfo",
    "amount",
    "txnid",
    "key",
)


def _field_values(params: Mapping, fields: Sequence[str]) -> list[str]:
    return [str(params.get(name) or "") for name in fields]


def _sha512(parts: Sequence[str]) -> str:
    return hashlib.sha512(DELIMITER.join(parts).encode("utf-8")).hexdigest()


def request_hash(params: Mapping, salt: str) -> str:
    """Signature for the payment form posted to PayU."""
    return _sha512([*_field_values(params, REQUEST_HASH_FIELDS), salt])


def response_hash(payload: Mapping, salt: str) -> str:
    """Signature PayU is expected to send back with a transaction callback."""
    return _sha512([salt, *_field_values(payload, RESPONSE_HASH_FIELDS)])


def verify_response_hash(payload: Mapping, salt: str) -> bool:
    supplied = payload.get("hash") or ""
    return hmac.compare_digest(response_hash(payload, salt).encode(), str(supplied).encode())


def command_hash(key: str, command: str, var1: str, salt: str) -> str:
    """Signature for PayU merchant web-service calls such as refunds."""
    return _sha512([key, command, var1, salt])

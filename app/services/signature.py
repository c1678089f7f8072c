"""
WooCommerce webhook signatures: base64(HMAC-SHA256(secret, raw body)).

Always computed over the raw request bytes – re-serialising the JSON changes
whitespace / key order and therefore the digest.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional

SIGNATURE_HEADER = "X-WC-Webhook-Signature"


def compute_signature(body: bytes, secret: str) -> str:
    digest = hmac.new(key=secret.encode(), msg=body, digestmod=hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_signature(body: bytes, secret: str, provided: Optional[str]) -> bool:
    """True iff `provided` is exactly the signature of `body` under `secret`."""
    if not provided:
        return False
    expected = compute_signature(body, secret)
    return hmac.compare_digest(expected.encode(), provided.encode())

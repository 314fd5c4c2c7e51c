"""HMAC-SHA256 signing of webhook bodies.

Generic destinations that registered a secret receive an
``X-Webhook-Signature: sha256=<hex>`` header computed over the exact bytes
of the request body. Receivers recompute the digest with the same secret
and compare.
"""

import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_PREFIX = "sha256="


def _to_bytes(value: Union[bytes, str]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def sign(body: Union[bytes, str], secret: str) -> str:
    """Return the lowercase hex HMAC-SHA256 digest of body keyed by secret.

    Args:
        body: Serialized request body
        secret: Shared secret of the destination

    Returns:
        64 character hex digest
    """
    return hmac.new(_to_bytes(secret), _to_bytes(body), hashlib.sha256).hexdigest()


def signature_header(body: Union[bytes, str], secret: Optional[str]) -> Optional[str]:
    """Value for the X-Webhook-Signature header.

    Returns None when the destination has no secret; the header must then
    be left out rather than sent empty.
    """
    if not secret:
        return None
    return f"{SIGNATURE_PREFIX}{sign(body, secret)}"


def verify_signature(
    body: Union[bytes, str], secret: str, header_value: Optional[str]
) -> bool:
    """Check a received X-Webhook-Signature header in constant time.

    Accepts the header with or without the ``sha256=`` prefix.
    """
    if not header_value or not secret:
        return False
    received = header_value
    if received.startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX) :]
    return hmac.compare_digest(received.lower(), sign(body, secret))

"""
ElevenLabs Signature Verification

SECURITY BOUNDARY - Verify ElevenLabs HMAC signature.
Pure functions. No storage access. No retries.
"""

import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_HEADER = "ElevenLabs-Signature"
SIGNATURE_PREFIX = "sha256="


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(secret: str, raw_body: Union[str, bytes]) -> str:
    """
    Compute the header value ElevenLabs would send for `raw_body`.

    Returns:
        "sha256=<hex digest>"
    """
    digest = hmac.new(
        key=_to_bytes(secret),
        msg=_to_bytes(raw_body),
        digestmod=hashlib.sha256,
    ).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(
    secret: Optional[str],
    raw_body: Union[str, bytes],
    signature_header: Optional[str],
) -> bool:
    """
    Verify the ElevenLabs-Signature header against the raw request body.

    Fails closed: a missing secret or header is a failed verification.
    Malformed headers (wrong prefix, non-hex, non-ASCII, wrong length)
    return False instead of raising.

    Args:
        secret: Shared webhook secret
        raw_body: Request body exactly as received
        signature_header: Value of the ElevenLabs-Signature header

    Returns:
        True if the signature matches
    """
    if not secret or not signature_header:
        return False

    expected = compute_signature(secret, raw_body).encode("ascii")

    try:
        provided = signature_header.encode("ascii")
    except (UnicodeEncodeError, AttributeError):
        return False

    # compare_digest is constant-time for equal lengths
    if len(provided) != len(expected):
        return False

    return hmac.compare_digest(expected, provided)

"""Onfido webhook signature verification.

Onfido signs every webhook with an HMAC-SHA256 hex digest of the raw request
body, sent in the ``X-SHA2-Signature`` header. The digest must be computed
over the bytes exactly as received: re-serializing parsed JSON is not
byte-identical and breaks the comparison.

If no webhook secret is configured, verification is skipped (dev mode).
"""

import hashlib
import hmac

from .exceptions import SignatureMismatchError, SignatureMissingError

SIGNATURE_HEADER = "X-SHA2-Signature"


def compute_signature(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature_header: str | None, secret: str) -> None:
    """Raise an AuthenticationFailure if ``body`` was not signed with ``secret``.

    Args:
        body: Raw request body bytes
        signature_header: Value of the X-SHA2-Signature header (or None)
        secret: Shared webhook secret; empty disables the check
    """
    if not secret:
        return
    if not signature_header:
        raise SignatureMissingError()

    expected = compute_signature(body, secret)
    # bytes comparison: compare_digest rejects non-ASCII str arguments
    if not hmac.compare_digest(expected.encode("ascii"), signature_header.encode("utf-8")):
        raise SignatureMismatchError()

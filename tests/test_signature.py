"""Tests for X-SHA2-Signature verification (HMAC-SHA256 hex over the raw body)."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from idv_gateway.services.exceptions import (
    AuthenticationFailure,
    SignatureMismatchError,
    SignatureMissingError,
)
from idv_gateway.services.signature import compute_signature, verify_signature

SECRET = "onfido-secret"


def _sign(body: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


class TestComputeSignature:

    def test_hex_hmac_sha256(self):
        body = b'{"payload": {}}'
        assert compute_signature(body, SECRET) == _sign(body)
        assert len(compute_signature(body, SECRET)) == 64


class TestVerifySignature:

    def test_valid_signature(self):
        body = b'{"payload": {"resource": {"id": "run_1"}}}'
        verify_signature(body, _sign(body), SECRET)

    def test_no_secret_skips_verification(self):
        verify_signature(b"anything", None, "")
        verify_signature(b"anything", "wrong", "")

    def test_missing_header(self):
        with pytest.raises(SignatureMissingError):
            verify_signature(b"body", None, SECRET)

    def test_empty_header_counts_as_missing(self):
        with pytest.raises(SignatureMissingError):
            verify_signature(b"body", "", SECRET)

    def test_wrong_secret(self):
        body = b"body"
        with pytest.raises(SignatureMismatchError):
            verify_signature(body, _sign(body, "other"), SECRET)

    def test_tampered_body(self):
        sig = _sign(b'{"id": 1}')
        with pytest.raises(SignatureMismatchError):
            verify_signature(b'{"id": 2}', sig, SECRET)

    def test_comparison_is_exact(self):
        """Upper-cased hex is a different string and is rejected."""
        body = b"body"
        with pytest.raises(SignatureMismatchError):
            verify_signature(body, _sign(body).upper(), SECRET)

    def test_non_ascii_header_rejected(self):
        with pytest.raises(SignatureMismatchError):
            verify_signature(b"body", "é" * 64, SECRET)

    def test_failures_are_authentication_failures(self):
        assert issubclass(SignatureMissingError, AuthenticationFailure)
        assert issubclass(SignatureMismatchError, AuthenticationFailure)
        assert SignatureMissingError().response_text == "missing signature"
        assert SignatureMismatchError().response_text == "invalid signature"

"""Webhook signature verification over the raw request body.

Senders sign the exact body bytes with a shared secret and send the digest
in one or both of two headers:

- ``X-Hub-Signature-256``: HMAC-SHA256, formatted ``sha256=<hex>``
- ``X-Hub-Signature``: HMAC-SHA1, formatted ``sha1=<hex>`` (legacy)

A delivery is authentic if either digest matches. Digests are always
compared with :func:`hmac.compare_digest`.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass

SIGNATURE_256_HEADER = "x-hub-signature-256"
SIGNATURE_1_HEADER = "x-hub-signature"


def compute_hmac_hex(secret: str, body: bytes, algorithm: str = "sha256") -> str:
    """Return the hex HMAC of ``body`` keyed by ``secret``."""
    digestmod = getattr(hashlib, algorithm)
    return hmac.new(secret.encode("utf-8"), body, digestmod).hexdigest()


def strip_algorithm_prefix(value: str | None, algorithm: str) -> str | None:
    """Drop a leading ``<algorithm>=`` from a signature header value."""
    if value is None:
        return None
    prefix = f"{algorithm}="
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


def timing_safe_equal(received: str, expected: str) -> bool:
    """Compare two digests in time independent of where they differ."""
    # compare_digest rejects non-ASCII str; header values can contain anything.
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


@dataclass(frozen=True)
class SignatureCheck:
    """Outcome of verifying one delivery, with safe-to-log diagnostics."""

    valid_sha256: bool
    valid_sha1: bool
    expected_sha256: str
    expected_sha1: str
    received_sha256: str | None
    received_sha1: str | None

    @property
    def valid(self) -> bool:
        return self.valid_sha256 or self.valid_sha1

    @property
    def has_sig256(self) -> bool:
        return self.received_sha256 is not None

    @property
    def has_sig1(self) -> bool:
        return self.received_sha1 is not None

    def diagnostics(self) -> dict:
        """Fields describing a mismatch. Digests are safe to log, secrets are not."""
        return {
            "has_sig256": self.has_sig256,
            "has_sig1": self.has_sig1,
            "expected256": self.expected_sha256,
            "expected1": self.expected_sha1,
            "header256": self.received_sha256,
            "header1": self.received_sha1,
        }


def verify_signature(
    body: bytes,
    secret: str,
    signature_256: str | None,
    signature_1: str | None,
) -> SignatureCheck:
    """Verify a delivery against both signature headers.

    Args:
        body: Raw request body bytes, exactly as received.
        secret: Shared webhook secret.
        signature_256: ``X-Hub-Signature-256`` header value, if any.
        signature_1: ``X-Hub-Signature`` header value, if any.
    """
    expected_256 = compute_hmac_hex(secret, body, "sha256")
    expected_1 = compute_hmac_hex(secret, body, "sha1")

    received_256 = strip_algorithm_prefix(signature_256, "sha256")
    received_1 = strip_algorithm_prefix(signature_1, "sha1")

    # An empty header value counts as absent.
    valid_256 = bool(received_256) and timing_safe_equal(received_256, expected_256)
    valid_1 = bool(received_1) and timing_safe_equal(received_1, expected_1)

    return SignatureCheck(
        valid_sha256=valid_256,
        valid_sha1=valid_1,
        expected_sha256=expected_256,
        expected_sha1=expected_1,
        received_sha256=received_256,
        received_sha1=received_1,
    )

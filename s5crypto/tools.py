"""Display encodings for keys and hashes."""

from __future__ import annotations

import base64

import base58


def encode_base58btc(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    return base58.b58encode(bytes(data)).decode("ascii")


def encode_base64url(data: bytes) -> str:
    """URL-safe base64 without ``=`` padding."""
    return base64.urlsafe_b64encode(bytes(data)).decode("ascii").rstrip("=")

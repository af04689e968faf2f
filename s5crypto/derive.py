"""Blake3 hash chaining used by every key derivation."""

from __future__ import annotations

from .constants import HASH_LENGTH, INT_TWEAK_WIDTH
from .endian import encode_endian
from .errors import InvalidBaseLength
from .provider import blake3_hash


def _check_base(base: bytes) -> None:
    if len(base) != HASH_LENGTH:
        raise InvalidBaseLength(
            f"Invalid base length: expected {HASH_LENGTH} bytes, got {len(base)}"
        )


def derive_hash_blake3(base: bytes, tweak: bytes, length: int = HASH_LENGTH) -> bytes:
    """Compute ``Blake3(base + Blake3(tweak))``.

    The tweak is hashed first so the chained input is always 64 bytes,
    whatever the tweak's length.

    Raises:
        InvalidBaseLength: If ``base`` is not 32 bytes.
    """
    _check_base(base)
    return blake3_hash(bytes(base) + blake3_hash(bytes(tweak)), length)


def derive_hash_blake3_int(base: bytes, tweak: int, length: int = HASH_LENGTH) -> bytes:
    """Compute ``Blake3(base + tweak as 32 big-endian bytes)``.

    Raises:
        InvalidBaseLength: If ``base`` is not 32 bytes.
    """
    _check_base(base)
    return blake3_hash(bytes(base) + encode_endian(tweak, INT_TWEAK_WIDTH), length)

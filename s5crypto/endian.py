"""Fixed-width big-endian integer encoding."""

from __future__ import annotations

from .errors import InvalidSize


def encode_endian(value: int, length: int) -> bytes:
    """Encode a non-negative integer as ``length`` big-endian bytes.

    Raises:
        InvalidSize: If the value is negative or does not fit.
    """
    if value < 0:
        raise InvalidSize(f"Cannot encode negative value {value}")
    try:
        return value.to_bytes(length, "big")
    except OverflowError as exc:
        raise InvalidSize(f"Value {value} does not fit in {length} bytes") from exc


def decode_endian(data: bytes) -> int:
    """Decode big-endian bytes as an unsigned integer."""
    return int.from_bytes(data, "big")

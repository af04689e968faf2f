"""Path-keyed derivation tree.

A key for ``a/b/c`` is folded from the hidden root key one segment at a
time, so holding the key for ``a/b`` lets a holder derive everything below
it but nothing beside or above it::

    k0 = root
    k1 = derive_hash_blake3(k0, tweak("a"))
    k2 = derive_hash_blake3(k1, tweak("b"))
    path_key = derive_hash_blake3_int(k2, 1)

Each segment's tweak is its UTF-8 bytes read as one big-endian unsigned
integer, then written back as a single byte (the value modulo 256). Segments
longer than 6 bytes do not fit that integer read and are rejected. Changing
either rule changes every derived path key.
"""

from __future__ import annotations

from typing import Sequence

from .constants import PATH_KEY_DERIVATION_TWEAK, PATH_SEGMENT_MAX_BYTES
from .derive import derive_hash_blake3, derive_hash_blake3_int
from .endian import decode_endian
from .errors import InvalidPathSegment


def segment_tweak(segment: str) -> bytes:
    """Tweak bytes for one path segment."""
    raw = segment.encode("utf-8")
    if not 1 <= len(raw) <= PATH_SEGMENT_MAX_BYTES:
        raise InvalidPathSegment(
            f"Path segment must be 1 to {PATH_SEGMENT_MAX_BYTES} bytes of UTF-8, "
            f"got {len(raw)}"
        )
    return bytes([decode_endian(raw) & 0xFF])


def split_path(path: str) -> list[str]:
    """Split on ``/``, trim each piece and drop the empty ones."""
    return [s for s in (p.strip() for p in path.split("/")) if s]


def derive_key_for_path_segments(root_key: bytes, segments: Sequence[str]) -> bytes:
    """Fold the segments into the root key.

    With no segments the root key itself is returned, not a copy.
    """
    key = root_key
    for segment in segments:
        key = derive_hash_blake3(key, segment_tweak(segment))
    return key


def derive_path_key_for_path(root_key: bytes, path: str) -> bytes:
    """Path key for a slash-delimited path.

    One extra round with the integer tweak 1 keeps path keys apart from the
    raw segment-chain keys.
    """
    key = derive_key_for_path_segments(root_key, split_path(path))
    return derive_hash_blake3_int(key, PATH_KEY_DERIVATION_TWEAK)

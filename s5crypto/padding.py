"""Size bucketing that hides exact plaintext lengths.

Bucket ``k`` (0..52) covers sizes up to ``2**k * 80 KiB`` and rounds up to a
multiple of ``2**k * 4 KiB``. A size uses the first bucket it fits in.
"""

from __future__ import annotations

from .constants import PADDING_BLOCK_BASE, PADDING_BUCKETS, PADDING_CEILING_BASE
from .errors import InvalidSize, PaddingOverflow


def _block_size(size: int) -> int:
    if size < 0:
        raise InvalidSize(f"Size must be non-negative, got {size}")
    for k in range(PADDING_BUCKETS):
        if size <= (1 << k) * PADDING_CEILING_BASE:
            return (1 << k) * PADDING_BLOCK_BASE
    raise PaddingOverflow(f"Could not pad size {size}, overflow detected")


def pad_file_size_default(size: int) -> int:
    """Smallest multiple of the bucket's block size that is at least ``size``.

    Raises:
        PaddingOverflow: If ``size`` exceeds the largest bucket.
    """
    block = _block_size(size)
    return -(-size // block) * block


def check_padded_block(size: int) -> bool:
    """True if ``size`` is a multiple of its bucket's block size.

    Raises:
        PaddingOverflow: If ``size`` exceeds the largest bucket.
    """
    return size % _block_size(size) == 0

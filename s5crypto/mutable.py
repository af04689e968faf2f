"""Padded, versioned XChaCha20-Poly1305 container for mutable data.

Layout::

    0x8D | version | nonce (24) | ciphertext

The ciphertext decrypts to ``length (4, big-endian) | payload | zeros`` and
the whole container is sized to a padding bucket, so its length reveals only
the bucket.
"""

from __future__ import annotations

from .constants import (
    CONTAINER_TYPE_MUTABLE,
    CONTAINER_VERSION,
    ENCRYPTION_KEY_LENGTH,
    ENCRYPTION_NONCE_LENGTH,
    ENCRYPTION_OVERHEAD_LENGTH,
    HEADER_SIZE,
    LENGTH_PREFIX_SIZE,
)
from .endian import decode_endian, encode_endian
from .errors import (
    NotPadded,
    PlaintextTooLarge,
    UnknownContainerType,
    UnsupportedVersion,
    WrongKeyLength,
)
from .log import get_logger
from .padding import check_padded_block, pad_file_size_default
from .provider import CryptoImplementation, RandomSource

logger = get_logger(__name__)

TOTAL_OVERHEAD = (
    ENCRYPTION_OVERHEAD_LENGTH + LENGTH_PREFIX_SIZE + ENCRYPTION_NONCE_LENGTH + HEADER_SIZE
)
_MAX_PLAINTEXT = 1 << (8 * LENGTH_PREFIX_SIZE)


def _check_key(key: bytes) -> None:
    if len(key) != ENCRYPTION_KEY_LENGTH:
        raise WrongKeyLength(
            f"wrong encryption key length ({len(key)} != {ENCRYPTION_KEY_LENGTH})"
        )


def encrypt_mutable_bytes(
    data: bytes, key: bytes, rng: RandomSource | None = None
) -> bytes:
    """Pad and encrypt ``data`` under a 32-byte key with a fresh random nonce.

    Args:
        data: Plaintext, shorter than 2**32 bytes.
        key: 32-byte XChaCha20-Poly1305 key.
        rng: Random source for the nonce (libsodium by default).

    Raises:
        WrongKeyLength: If the key is not 32 bytes.
        PlaintextTooLarge: If the length does not fit the 4-byte prefix.
    """
    _check_key(key)
    if len(data) >= _MAX_PLAINTEXT:
        raise PlaintextTooLarge(f"Plaintext of {len(data)} bytes exceeds 4-byte length prefix")

    crypto = CryptoImplementation(rng)
    final_size = pad_file_size_default(len(data) + TOTAL_OVERHEAD) - TOTAL_OVERHEAD
    padded = (
        encode_endian(len(data), LENGTH_PREFIX_SIZE)
        + bytes(data)
        + bytes(final_size - len(data))
    )
    nonce = crypto.generate_random_bytes(ENCRYPTION_NONCE_LENGTH)
    ciphertext = crypto.encrypt_xchacha20poly1305(key, nonce, padded)

    logger.debug(
        "Encrypted mutable container: payload=%d container=%d",
        len(data), HEADER_SIZE + len(nonce) + len(ciphertext),
    )
    return bytes([CONTAINER_TYPE_MUTABLE, CONTAINER_VERSION]) + nonce + ciphertext


def decrypt_mutable_bytes(data: bytes, key: bytes) -> bytes:
    """Authenticate and decrypt a container, returning the unpadded payload.

    Checks run cheapest first: key length, padded size, header bytes, then
    AEAD authentication.

    Raises:
        WrongKeyLength: If the key is not 32 bytes.
        NotPadded: If the container length is not a padded block size.
        UnknownContainerType: If byte 0 is not the mutable-container marker.
        UnsupportedVersion: If byte 1 is not version 1.
        AuthenticationFailed: If the ciphertext, nonce or key do not match.
    """
    _check_key(key)

    if not check_padded_block(len(data)):
        logger.debug("Rejected unpadded container of %d bytes", len(data))
        raise NotPadded(
            f"Expected padded encrypted data, length was {len(data)}, "
            f"nearest padded block is {pad_file_size_default(len(data))}"
        )

    if len(data) < HEADER_SIZE or data[0] != CONTAINER_TYPE_MUTABLE:
        raise UnknownContainerType("Not a mutable container")

    version = data[1]
    if version != CONTAINER_VERSION:
        raise UnsupportedVersion(f"Unsupported container version {version}")

    nonce = bytes(data[HEADER_SIZE:HEADER_SIZE + ENCRYPTION_NONCE_LENGTH])
    ciphertext = bytes(data[HEADER_SIZE + ENCRYPTION_NONCE_LENGTH:])

    decrypted = CryptoImplementation().decrypt_xchacha20poly1305(key, nonce, ciphertext)

    length = decode_endian(decrypted[:LENGTH_PREFIX_SIZE])
    return decrypted[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + length]

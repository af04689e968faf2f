"""Cryptographic capabilities used by the derivation and container code.

Backed by PyNaCl (libsodium) for randomness, XChaCha20-Poly1305 and Ed25519,
and by the ``blake3`` package for hashing. Everything that needs randomness
receives a ``RandomSource`` explicitly; ``DEFAULT_RANDOM`` is the libsodium one.
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Protocol

import blake3
from nacl import bindings
from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import SigningKey, VerifyKey
import nacl.utils

from .constants import (
    ED25519_SECRET_KEY_LENGTH,
    ED25519_SEED_LENGTH,
    HASH_LENGTH,
    MKEY_ED25519,
)
from .errors import AuthenticationFailed, CapabilityError, InvalidSeedLength
from .log import get_logger

logger = get_logger(__name__)

_STREAM_CHUNK = 64 * 1024


class RandomSource(Protocol):
    """Cryptographically secure random numbers."""

    def random_bytes(self, length: int) -> bytes: ...

    def uniform(self, upper_bound: int) -> int: ...


class SodiumRandomSource:
    """libsodium ``randombytes``. Safe to share between threads."""

    def random_bytes(self, length: int) -> bytes:
        data = nacl.utils.random(length)
        if len(data) != length:
            raise CapabilityError(
                f"Random source returned {len(data)} bytes, expected {length}"
            )
        return data

    def uniform(self, upper_bound: int) -> int:
        """Uniform integer in ``[0, upper_bound)``.

        Rejection sampling over 32-bit draws, the same way libsodium's
        ``randombytes_uniform`` avoids modulo bias.
        """
        if upper_bound < 2:
            return 0
        minimum = (1 << 32) % upper_bound
        while True:
            r = int.from_bytes(self.random_bytes(4), "big")
            if r >= minimum:
                return r % upper_bound


DEFAULT_RANDOM = SodiumRandomSource()


def blake3_hash(data: bytes, length: int = HASH_LENGTH) -> bytes:
    """One-shot Blake3 with ``length`` bytes of output."""
    return blake3.blake3(bytes(data)).digest(length=length)


def ed25519_seed_of(secret: bytes) -> bytes:
    """The 32-byte Ed25519 seed inside a seed or libsodium secret key."""
    if len(secret) == ED25519_SECRET_KEY_LENGTH:
        return bytes(secret[:ED25519_SEED_LENGTH])
    if len(secret) == ED25519_SEED_LENGTH:
        return bytes(secret)
    raise InvalidSeedLength(
        f"Ed25519 private key must be {ED25519_SEED_LENGTH} or "
        f"{ED25519_SECRET_KEY_LENGTH} bytes, got {len(secret)}"
    )


class CryptoImplementation:
    """Hash, AEAD, signature and random-byte operations in one object."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else DEFAULT_RANDOM

    def generate_random_bytes(self, length: int) -> bytes:
        data = self.rng.random_bytes(length)
        if len(data) != length:
            raise CapabilityError(
                f"Random source returned {len(data)} bytes, expected {length}"
            )
        return data

    def hash_blake3(self, data: bytes, length: int = HASH_LENGTH) -> bytes:
        return blake3_hash(data, length)

    def hash_blake3_stream(
        self, source: Iterable[bytes] | BinaryIO, length: int = HASH_LENGTH
    ) -> bytes:
        """Incremental Blake3 over an iterable of chunks or a binary file."""
        hasher = blake3.blake3()
        if hasattr(source, "read"):
            for chunk in iter(lambda: source.read(_STREAM_CHUNK), b""):
                hasher.update(chunk)
        else:
            for chunk in source:
                hasher.update(chunk)
        return hasher.digest(length=length)

    def encrypt_xchacha20poly1305(
        self, key: bytes, nonce: bytes, plaintext: bytes
    ) -> bytes:
        """XChaCha20-Poly1305-IETF with no associated data."""
        return bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
            bytes(plaintext), None, bytes(nonce), bytes(key)
        )

    def decrypt_xchacha20poly1305(
        self, key: bytes, nonce: bytes, ciphertext: bytes
    ) -> bytes:
        """Decrypt and authenticate; raises AuthenticationFailed on any tamper."""
        try:
            return bindings.crypto_aead_xchacha20poly1305_ietf_decrypt(
                bytes(ciphertext), None, bytes(nonce), bytes(key)
            )
        except CryptoError as exc:
            logger.warning("AEAD authentication failed (%d bytes)", len(ciphertext))
            raise AuthenticationFailed("Decryption failed: authentication tag mismatch") from exc

    def new_keypair_ed25519(self, seed: bytes) -> tuple[bytes, bytes]:
        """Ed25519 keypair from a 32-byte seed.

        Returns (secret_key, public_key_raw) where the secret key is libsodium's
        64-byte seed-plus-public-key form.
        """
        public_key, secret_key = bindings.crypto_sign_seed_keypair(ed25519_seed_of(seed))
        return secret_key, public_key

    def sign_ed25519(self, secret_key: bytes, message: bytes) -> bytes:
        """Detached Ed25519 signature."""
        sk = SigningKey(ed25519_seed_of(secret_key))
        return sk.sign(bytes(message)).signature

    def verify_ed25519(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Verify a detached signature.

        ``public_key`` carries the 1-byte Ed25519 multikey prefix.
        """
        if len(public_key) != ED25519_SEED_LENGTH + 1 or public_key[0] != MKEY_ED25519:
            return False
        try:
            VerifyKey(bytes(public_key[1:])).verify(bytes(message), bytes(signature))
            return True
        except (BadSignatureError, ValueError):
            return False

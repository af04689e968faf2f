"""Ed25519 keypairs and Blake3 seed derivation.

Public keys are shown with a 1-byte multikey prefix (``0xED``) and encoded
as unpadded base64url for interchange.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import blake3

from .constants import ED25519_SEED_LENGTH, HASH_LENGTH, MKEY_ED25519
from .errors import InvalidSeedLength
from .provider import CryptoImplementation, RandomSource, ed25519_seed_of, blake3_hash
from .seed import generate_seed_from_phrase
from .tools import encode_base64url


@dataclass(frozen=True)
class BytesInput:
    """Key material given as raw bytes."""

    value: bytes

    def to_bytes(self) -> bytes:
        return bytes(self.value)


@dataclass(frozen=True)
class TextInput:
    """Key material given as text, used as its UTF-8 bytes."""

    value: str

    def to_bytes(self) -> bytes:
        return self.value.encode("utf-8")


KeyInput = Union[BytesInput, TextInput]


def key_input(value: str | bytes | bytearray | memoryview | KeyInput) -> KeyInput:
    """Tag a ``str`` or ``bytes`` argument once, at the API boundary."""
    if isinstance(value, (BytesInput, TextInput)):
        return value
    if isinstance(value, str):
        return TextInput(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesInput(bytes(value))
    raise TypeError(f"Key material must be str or bytes, got {type(value).__name__}")


class KeyPairEd25519:
    """An Ed25519 keypair held as its 32-byte seed or 64-byte secret key."""

    def __init__(self, data: bytes) -> None:
        self._seed = ed25519_seed_of(data)
        self._bytes = bytes(data)

    @property
    def public_key(self) -> bytes:
        """Public key with the Ed25519 multikey prefix (33 bytes)."""
        return bytes([MKEY_ED25519]) + self.public_key_raw

    @property
    def public_key_raw(self) -> bytes:
        _, public_key = CryptoImplementation().new_keypair_ed25519(self._seed)
        return public_key

    def extract_bytes(self) -> bytes:
        return self._bytes

    def sign(self, message: bytes) -> bytes:
        return CryptoImplementation().sign_ed25519(self._bytes, message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return CryptoImplementation().verify_ed25519(self.public_key, message, signature)

    def __repr__(self) -> str:
        return f"KeyPairEd25519(public_key={encode_base64url(self.public_key)!r})"


@dataclass
class KeyPair:
    """Base64url-encoded keypair."""

    private_key: str
    public_key: str
    public_key_raw: str

    def to_dict(self) -> dict[str, str]:
        return {
            "private_key": self.private_key,
            "public_key": self.public_key,
            "public_key_raw": self.public_key_raw,
        }


@dataclass
class KeyPairAndSeed(KeyPair):
    """Base64url-encoded keypair plus the hex seed it came from."""

    seed: str = ""

    def to_dict(self) -> dict[str, str]:
        d = super().to_dict()
        d["seed"] = self.seed
        return d


def _new_keypair(seed: bytes, crypto: CryptoImplementation) -> KeyPairEd25519:
    secret_key, _ = crypto.new_keypair_ed25519(seed)
    return KeyPairEd25519(secret_key)


def _encode_keypair(kp: KeyPairEd25519) -> dict[str, str]:
    return {
        "private_key": encode_base64url(kp.extract_bytes()),
        "public_key": encode_base64url(kp.public_key),
        "public_key_raw": encode_base64url(kp.public_key_raw),
    }


def gen_keypair_and_seed(
    length: int = ED25519_SEED_LENGTH, rng: RandomSource | None = None
) -> KeyPairAndSeed:
    """Generate a random seed and the Ed25519 keypair derived from it.

    The first 32 bytes of the seed are used as the Ed25519 seed.
    """
    crypto = CryptoImplementation(rng)
    seed = crypto.generate_random_bytes(length)
    kp = _new_keypair(seed[:ED25519_SEED_LENGTH], crypto)
    return KeyPairAndSeed(**_encode_keypair(kp), seed=seed.hex())


def gen_keypair_from_phrase(phrase: str) -> KeyPair:
    """Keypair for a mnemonic phrase, via its 32-byte key-generation seed."""
    seed = generate_seed_from_phrase(phrase)
    kp = _new_keypair(seed, CryptoImplementation())
    return KeyPair(**_encode_keypair(kp))


def hash_all(*parts: bytes) -> bytes:
    """Incremental Blake3 over all parts, 32 bytes out."""
    hasher = blake3.blake3()
    for part in parts:
        hasher.update(bytes(part))
    return hasher.digest(length=HASH_LENGTH)


def derive_child_seed(master_seed: bytes, tweak: str) -> bytes:
    """``Blake3(master_seed + Blake3(tweak))``, for any master seed length."""
    return blake3_hash(bytes(master_seed) + blake3_hash(tweak.encode("utf-8")))


def _derive_keypair(
    master_key: str | bytes | KeyInput,
    data_seed: str | bytes | KeyInput,
    derive_length: int | None,
) -> KeyPairEd25519:
    if derive_length is not None and derive_length != ED25519_SEED_LENGTH:
        raise InvalidSeedLength(
            f"Ed25519 seed must be {ED25519_SEED_LENGTH} bytes, got {derive_length}"
        )
    material = key_input(master_key).to_bytes() + key_input(data_seed).to_bytes()
    seed = blake3_hash(material)
    return _new_keypair(seed, CryptoImplementation())


def derive_ed25519(
    master_key: str | bytes | KeyInput,
    data_seed: str | bytes | KeyInput,
    derive_length: int | None = None,
) -> dict[str, str]:
    """Deterministic Ed25519 keypair from a master key and a data seed.

    The seed is ``Blake3(master_key + data_seed)``. Ed25519 needs exactly 32
    bytes of it, so ``derive_length`` other than 32 is rejected.

    Returns:
        ``{"private_key": ..., "public_key": ...}`` as base64url strings.
    """
    kp = _derive_keypair(master_key, data_seed, derive_length)
    return {
        "private_key": encode_base64url(kp.extract_bytes()),
        "public_key": encode_base64url(kp.public_key),
    }


def get_data_key(
    master_key: str | bytes | KeyInput,
    data_seed: str | bytes | KeyInput,
    derive_length: int | None = None,
) -> str:
    """Base64url public key of the keypair ``derive_ed25519`` would return."""
    return encode_base64url(_derive_keypair(master_key, data_seed, derive_length).public_key)

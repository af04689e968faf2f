"""s5crypto: mnemonic seeds, path-keyed derivation and padded encrypted containers."""

from .derive import derive_hash_blake3, derive_hash_blake3_int
from .endian import decode_endian, encode_endian
from .errors import (
    AuthenticationFailed,
    CapabilityError,
    CryptographicError,
    InvalidBaseLength,
    InvalidChecksum,
    InvalidPathSegment,
    InvalidPhraseLength,
    InvalidSeedLength,
    InvalidSeedWordsLength,
    InvalidSize,
    NotPadded,
    PaddingOverflow,
    PlaintextTooLarge,
    S5CryptoError,
    UnknownContainerType,
    UnknownWordPrefix,
    UnsupportedVersion,
    ValidationError,
    WordTooShort,
    WrongKeyLength,
)
from .keys import (
    BytesInput,
    KeyPair,
    KeyPairAndSeed,
    KeyPairEd25519,
    TextInput,
    derive_child_seed,
    derive_ed25519,
    gen_keypair_and_seed,
    gen_keypair_from_phrase,
    get_data_key,
    hash_all,
    key_input,
)
from .log import configure_logging
from .mutable import decrypt_mutable_bytes, encrypt_mutable_bytes
from .padding import check_padded_block, pad_file_size_default
from .pathkey import derive_key_for_path_segments, derive_path_key_for_path
from .provider import CryptoImplementation, RandomSource, SodiumRandomSource
from .seed import (
    generate_checksum_words_from_seed_words,
    generate_phrase,
    generate_seed_from_phrase,
    hash_to_checksum_words,
    sanitize_phrase,
    seed_to_seed_words,
    seed_words_to_seed,
    validate_phrase,
)
from .tools import encode_base58btc, encode_base64url
from .wordlist import WORDLIST, find_by_prefix, unique_prefix_len, word_at

__version__ = "1.0.0"

__all__ = [
    # seed phrases
    "WORDLIST",
    "word_at",
    "find_by_prefix",
    "unique_prefix_len",
    "generate_phrase",
    "sanitize_phrase",
    "validate_phrase",
    "generate_seed_from_phrase",
    "generate_checksum_words_from_seed_words",
    "hash_to_checksum_words",
    "seed_words_to_seed",
    "seed_to_seed_words",
    # derivation
    "derive_hash_blake3",
    "derive_hash_blake3_int",
    "derive_key_for_path_segments",
    "derive_path_key_for_path",
    # containers
    "pad_file_size_default",
    "check_padded_block",
    "encrypt_mutable_bytes",
    "decrypt_mutable_bytes",
    # keys
    "KeyPairEd25519",
    "KeyPair",
    "KeyPairAndSeed",
    "BytesInput",
    "TextInput",
    "key_input",
    "gen_keypair_and_seed",
    "gen_keypair_from_phrase",
    "hash_all",
    "derive_child_seed",
    "derive_ed25519",
    "get_data_key",
    # capabilities and encodings
    "CryptoImplementation",
    "RandomSource",
    "SodiumRandomSource",
    "encode_endian",
    "decode_endian",
    "encode_base58btc",
    "encode_base64url",
    "configure_logging",
    # errors
    "S5CryptoError",
    "ValidationError",
    "CryptographicError",
    "CapabilityError",
    "InvalidSeedWordsLength",
    "InvalidSeedLength",
    "InvalidPhraseLength",
    "WordTooShort",
    "UnknownWordPrefix",
    "InvalidChecksum",
    "InvalidBaseLength",
    "InvalidPathSegment",
    "InvalidSize",
    "PaddingOverflow",
    "WrongKeyLength",
    "NotPadded",
    "UnknownContainerType",
    "UnsupportedVersion",
    "PlaintextTooLarge",
    "AuthenticationFailed",
]

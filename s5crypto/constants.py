"""Protocol constants shared across the s5crypto modules.

Changing any of these changes derived keys, phrases or the container wire
format.
"""

from __future__ import annotations

# Mnemonic seed
SEED_LENGTH = 16
SEED_WORDS_LENGTH = 13
CHECKSUM_WORDS_LENGTH = 2
PHRASE_LENGTH = SEED_WORDS_LENGTH + CHECKSUM_WORDS_LENGTH
WORDLIST_LENGTH = 1024
FIRST_WORD_BOUND = 256  # word 0 carries only 8 bits
WORD_BITS = 10
FIRST_WORD_BITS = 8
PREFIX_LENGTH = 3
KEY_SEED_LENGTH = 32

# Hashing
HASH_LENGTH = 32
INT_TWEAK_WIDTH = 32
PATH_KEY_DERIVATION_TWEAK = 1
PATH_SEGMENT_MAX_BYTES = 6

# Padding
KIB = 1024
PADDING_CEILING_BASE = 80 * KIB
PADDING_BLOCK_BASE = 4 * KIB
PADDING_BUCKETS = 53  # k = 0..52

# Mutable container
ENCRYPTION_KEY_LENGTH = 32
ENCRYPTION_NONCE_LENGTH = 24
ENCRYPTION_OVERHEAD_LENGTH = 16
LENGTH_PREFIX_SIZE = 4
HEADER_SIZE = 2
CONTAINER_TYPE_MUTABLE = 0x8D
CONTAINER_VERSION = 0x01

# Keys
MKEY_ED25519 = 0xED
ED25519_SEED_LENGTH = 32
ED25519_SECRET_KEY_LENGTH = 64

# Configuration
LOG_LEVEL_ENV = "S5CRYPTO_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

"""Mnemonic seed phrases.

A phrase is 15 words: 13 seed words carrying 128 bits of entropy, then 2
checksum words taken from a Blake3 hash of the seed.

    word 0       8 bits  (index < 256)
    words 1-12  10 bits each
    words 13-14 checksum, 10 bits each

Only the first 3 letters of each word are significant.

Usage::

    phrase = generate_phrase()
    seed = validate_phrase(phrase)             # 16 bytes
    key_seed = generate_seed_from_phrase(phrase)  # 32 bytes, for Ed25519
"""

from __future__ import annotations

from typing import Sequence

from .constants import (
    CHECKSUM_WORDS_LENGTH,
    FIRST_WORD_BOUND,
    FIRST_WORD_BITS,
    KEY_SEED_LENGTH,
    PHRASE_LENGTH,
    PREFIX_LENGTH,
    SEED_LENGTH,
    SEED_WORDS_LENGTH,
    WORD_BITS,
    WORDLIST_LENGTH,
)
from .errors import (
    InvalidChecksum,
    InvalidPhraseLength,
    InvalidSeedLength,
    InvalidSeedWordsLength,
    UnknownWordPrefix,
    WordTooShort,
)
from .log import get_logger
from .provider import DEFAULT_RANDOM, RandomSource, blake3_hash
from .wordlist import find_by_prefix, word_at

logger = get_logger(__name__)


def _word_bits(position: int) -> int:
    return FIRST_WORD_BITS if position == 0 else WORD_BITS


def _check_seed_words(seed_words: Sequence[int]) -> None:
    if len(seed_words) != SEED_WORDS_LENGTH:
        raise InvalidSeedWordsLength(
            f"Input seed was not of length {SEED_WORDS_LENGTH}"
        )


def seed_words_to_seed(seed_words: Sequence[int]) -> bytes:
    """Pack 13 word indices MSB-first into the 16-byte seed.

    Word 0 contributes its low 8 bits, the rest their low 10 bits.

    Raises:
        InvalidSeedWordsLength: If there are not exactly 13 indices.
    """
    _check_seed_words(seed_words)
    acc = 0
    for i, word in enumerate(seed_words):
        bits = _word_bits(i)
        acc = (acc << bits) | (word & ((1 << bits) - 1))
    return acc.to_bytes(SEED_LENGTH, "big")


def seed_to_seed_words(seed: bytes) -> list[int]:
    """Unpack a 16-byte seed into its 13 word indices."""
    if len(seed) != SEED_LENGTH:
        raise InvalidSeedLength(f"Seed must be {SEED_LENGTH} bytes, got {len(seed)}")
    acc = int.from_bytes(seed, "big")
    words = []
    for i in reversed(range(SEED_WORDS_LENGTH)):
        bits = _word_bits(i)
        words.append(acc & ((1 << bits) - 1))
        acc >>= bits
    words.reverse()
    return words


def hash_to_checksum_words(h: bytes) -> list[int]:
    """Two 10-bit checksum words from the first 20 bits of a digest."""
    word1 = ((h[0] << 8) | h[1]) >> 6
    word2 = (((h[1] << 10) & 0xFFFF) | (h[2] << 2)) >> 6
    return [word1, word2]


def generate_checksum_words_from_seed_words(seed_words: Sequence[int]) -> list[int]:
    """Checksum words for a seed-word vector.

    Raises:
        InvalidSeedWordsLength: If there are not exactly 13 indices.
    """
    _check_seed_words(seed_words)
    seed = seed_words_to_seed(seed_words)
    return hash_to_checksum_words(blake3_hash(seed, SEED_LENGTH))


def generate_phrase(rng: RandomSource | None = None) -> str:
    """Random 15-word phrase from a cryptographically secure source."""
    rng = rng if rng is not None else DEFAULT_RANDOM

    seed_words = [
        rng.uniform(WORDLIST_LENGTH) % (1 << _word_bits(i))
        for i in range(SEED_WORDS_LENGTH)
    ]
    checksum_words = generate_checksum_words_from_seed_words(seed_words)

    return " ".join(word_at(i) for i in seed_words + checksum_words)


def sanitize_phrase(phrase: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return phrase.strip().lower()


def validate_phrase(phrase: str) -> bytes:
    """Check a phrase and return the 16-byte seed it encodes.

    Raises:
        InvalidPhraseLength: If the phrase is not 15 words.
        WordTooShort: If a seed word has fewer than 3 letters.
        UnknownWordPrefix: If a seed word's prefix is not in the wordlist
            (word 1 must be among the first 256 words).
        InvalidChecksum: If the last two words do not match the seed.
    """
    words = sanitize_phrase(phrase).split()
    if len(words) != PHRASE_LENGTH:
        logger.debug("Rejected phrase with %d words", len(words))
        raise InvalidPhraseLength(f"Phrase must be {PHRASE_LENGTH} words long")

    seed_words = []
    for i, word in enumerate(words[:SEED_WORDS_LENGTH]):
        if len(word) < PREFIX_LENGTH:
            raise WordTooShort(i, word)
        prefix = word[:PREFIX_LENGTH]
        found = find_by_prefix(prefix, restrict_to_first_256=(i == 0))
        if found is None:
            bound = FIRST_WORD_BOUND if i == 0 else WORDLIST_LENGTH
            raise UnknownWordPrefix(i, prefix, bound)
        seed_words.append(found)

    checksum_words = generate_checksum_words_from_seed_words(seed_words)
    for i in range(CHECKSUM_WORDS_LENGTH):
        expected = word_at(checksum_words[i])[:PREFIX_LENGTH]
        given = words[SEED_WORDS_LENGTH + i]
        if given[:PREFIX_LENGTH] != expected:
            logger.warning("Phrase checksum mismatch at word %d", SEED_WORDS_LENGTH + i + 1)
            raise InvalidChecksum(f'Word "{given}" is not a valid checksum for the seed')

    return seed_words_to_seed(seed_words)


def generate_seed_from_phrase(phrase: str) -> bytes:
    """32-byte key-generation seed: Blake3 of the validated 16-byte seed.

    The raw mnemonic seed is never used as a signing-key seed directly.
    """
    seed = validate_phrase(phrase)
    return blake3_hash(seed, KEY_SEED_LENGTH)

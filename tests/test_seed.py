"""Tests for the wordlist and the mnemonic seed phrase codec."""

import logging

import blake3
import pytest

from s5crypto import (
    WORDLIST,
    InvalidChecksum,
    InvalidPhraseLength,
    InvalidSeedLength,
    InvalidSeedWordsLength,
    UnknownWordPrefix,
    ValidationError,
    WordTooShort,
    find_by_prefix,
    generate_checksum_words_from_seed_words,
    generate_phrase,
    generate_seed_from_phrase,
    hash_to_checksum_words,
    sanitize_phrase,
    seed_to_seed_words,
    seed_words_to_seed,
    unique_prefix_len,
    validate_phrase,
    word_at,
)


def phrase_for(seed_words):
    checksum = generate_checksum_words_from_seed_words(seed_words)
    return " ".join(WORDLIST[i] for i in list(seed_words) + checksum)


def fails_checksum(phrase):
    try:
        validate_phrase(phrase)
    except InvalidChecksum:
        return True
    return False


class TestWordlist:
    def test_size(self):
        assert len(WORDLIST) == 1024
        assert len(set(WORDLIST)) == 1024

    def test_prefixes_unique(self):
        assert len({w[:3] for w in WORDLIST}) == 1024

    def test_words_lowercase_and_long_enough(self):
        for word in WORDLIST:
            assert len(word) >= 3
            assert word == word.lower()
            assert word.isalpha()

    def test_word_at(self):
        assert word_at(0) == WORDLIST[0]
        assert word_at(1023) == WORDLIST[1023]

    def test_find_by_prefix(self):
        assert find_by_prefix(WORDLIST[0][:3]) == 0
        assert find_by_prefix(WORDLIST[700][:3]) == 700
        assert find_by_prefix("zzz") is None

    def test_find_by_prefix_restricted(self):
        assert find_by_prefix(WORDLIST[255][:3], restrict_to_first_256=True) == 255
        assert find_by_prefix(WORDLIST[256][:3], restrict_to_first_256=True) is None

    def test_unique_prefix_len(self):
        for i, word in enumerate(WORDLIST):
            assert unique_prefix_len(word, i) == 3


class TestSeedWordsToSeed:
    def test_all_zero(self):
        assert seed_words_to_seed([0] * 13) == bytes(16)

    def test_all_ones(self):
        assert seed_words_to_seed([255] + [1023] * 12) == b"\xff" * 16

    def test_first_word_is_first_byte(self):
        assert seed_words_to_seed([0xA5] + [0] * 12) == b"\xa5" + bytes(15)

    def test_second_word_straddles_bytes(self):
        seed = seed_words_to_seed([0, 1023] + [0] * 11)
        assert seed[:3] == b"\x00\xff\xc0"
        assert seed[3:] == bytes(13)

    def test_only_low_bits_used(self):
        assert seed_words_to_seed([0x1FF] + [0] * 12) == seed_words_to_seed([0xFF] + [0] * 12)

    def test_wrong_length(self):
        with pytest.raises(InvalidSeedWordsLength):
            seed_words_to_seed([0] * 12)
        with pytest.raises(InvalidSeedWordsLength):
            seed_words_to_seed([0] * 14)

    def test_round_trip(self, rng):
        for _ in range(100):
            words = [rng.uniform(256)] + [rng.uniform(1024) for _ in range(12)]
            assert seed_to_seed_words(seed_words_to_seed(words)) == words

    def test_unpack_wrong_length(self):
        with pytest.raises(InvalidSeedLength):
            seed_to_seed_words(bytes(15))


class TestChecksumWords:
    def test_zero_hash(self):
        assert hash_to_checksum_words(b"\x00\x00\x00") == [0, 0]

    def test_all_ones_hash(self):
        assert hash_to_checksum_words(b"\xff\xff\xff") == [1023, 1023]

    def test_overlapping_bits(self):
        assert hash_to_checksum_words(b"\x00\x3f\xff") == [0, 1023]
        assert hash_to_checksum_words(b"\x12\x34\x56") == [72, 837]

    def test_extra_bytes_ignored(self):
        assert hash_to_checksum_words(b"\x12\x34\x56\xff\xff") == [72, 837]

    def test_from_seed_words(self):
        words = [7] + [500] * 12
        digest = blake3.blake3(seed_words_to_seed(words)).digest(length=16)
        assert generate_checksum_words_from_seed_words(words) == hash_to_checksum_words(digest)

    def test_checksum_words_in_range(self, rng):
        for _ in range(50):
            words = [rng.uniform(256)] + [rng.uniform(1024) for _ in range(12)]
            for w in generate_checksum_words_from_seed_words(words):
                assert 0 <= w < 1024

    def test_wrong_length(self):
        with pytest.raises(InvalidSeedWordsLength):
            generate_checksum_words_from_seed_words([0] * 2)


class TestGeneratePhrase:
    def test_shape(self, rng):
        phrase = generate_phrase(rng)
        words = phrase.split(" ")
        assert len(words) == 15
        assert phrase == phrase.lower()
        assert all(w in WORDLIST for w in words)
        assert WORDLIST.index(words[0]) < 256

    def test_deterministic_with_same_source(self, make_rng):
        assert generate_phrase(make_rng()) == generate_phrase(make_rng())

    def test_generated_phrases_validate(self):
        for _ in range(50):
            seed = validate_phrase(generate_phrase())
            assert isinstance(seed, bytes)
            assert len(seed) == 16

    def test_default_source_is_random(self):
        assert generate_phrase() != generate_phrase()


class TestValidatePhrase:
    def test_known_seed(self):
        phrase = phrase_for([0] * 13)
        assert phrase.split()[:13] == [WORDLIST[0]] * 13
        assert validate_phrase(phrase) == bytes(16)

    def test_round_trip_seed(self, rng):
        words = [rng.uniform(256)] + [rng.uniform(1024) for _ in range(12)]
        assert validate_phrase(phrase_for(words)) == seed_words_to_seed(words)

    def test_sanitize(self):
        assert sanitize_phrase("  Abbey ABLAZE \n") == "abbey ablaze"

    def test_case_and_whitespace_insensitive(self, rng):
        phrase = generate_phrase(rng)
        messy = "\t  " + phrase.upper().replace(" ", "   ") + "  \n"
        assert validate_phrase(messy) == validate_phrase(phrase)

    def test_only_prefixes_matter(self, rng):
        phrase = generate_phrase(rng)
        shortened = " ".join(w[:3] for w in phrase.split())
        extended = " ".join(w[:3] + "zzz" for w in phrase.split())
        assert validate_phrase(shortened) == validate_phrase(phrase)
        assert validate_phrase(extended) == validate_phrase(phrase)

    def test_wrong_word_count(self, rng):
        words = generate_phrase(rng).split()
        with pytest.raises(InvalidPhraseLength):
            validate_phrase(" ".join(words[:14]))
        with pytest.raises(InvalidPhraseLength):
            validate_phrase(" ".join(words + ["abbey"]))
        with pytest.raises(InvalidPhraseLength):
            validate_phrase("")

    def test_word_too_short(self, rng):
        words = generate_phrase(rng).split()
        words[4] = "ab"
        with pytest.raises(WordTooShort) as exc_info:
            validate_phrase(" ".join(words))
        assert exc_info.value.position == 4

    def test_unknown_prefix(self, rng):
        words = generate_phrase(rng).split()
        words[6] = "zzzebra"
        with pytest.raises(UnknownWordPrefix) as exc_info:
            validate_phrase(" ".join(words))
        assert exc_info.value.prefix == "zzz"

    def test_first_word_restricted_to_256(self, rng):
        words = generate_phrase(rng).split()
        words[0] = WORDLIST[600]
        with pytest.raises(UnknownWordPrefix) as exc_info:
            validate_phrase(" ".join(words))
        assert exc_info.value.position == 0
        assert "256" in str(exc_info.value)

    def test_bad_checksum_word(self):
        words = phrase_for([0] * 13).split()
        good = WORDLIST.index(words[13])
        words[13] = WORDLIST[(good + 1) % 1024]
        with pytest.raises(InvalidChecksum):
            validate_phrase(" ".join(words))

    def test_checksum_detects_single_word_change(self):
        words = phrase_for([3] * 13).split()
        for position in range(13):
            mutated = []
            for replacement in (10, 20, 30):
                candidate = list(words)
                candidate[position] = WORDLIST[replacement]
                mutated.append(" ".join(candidate))
            assert any(fails_checksum(p) for p in mutated), position

    def test_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_phrase("abbey")
        assert issubclass(WordTooShort, ValidationError)
        assert not issubclass(InvalidChecksum, ValidationError)

    def test_checksum_mismatch_logged(self, caplog):
        words = phrase_for([0] * 13).split()
        words[14] = WORDLIST[(WORDLIST.index(words[14]) + 1) % 1024]
        with caplog.at_level(logging.WARNING, logger="s5crypto"):
            with pytest.raises(InvalidChecksum):
                validate_phrase(" ".join(words))
        assert "checksum mismatch" in caplog.text
        assert words[0] not in caplog.text


class TestGenerateSeedFromPhrase:
    def test_is_blake3_of_seed(self, rng):
        phrase = generate_phrase(rng)
        seed = validate_phrase(phrase)
        key_seed = generate_seed_from_phrase(phrase)
        assert len(key_seed) == 32
        assert key_seed == blake3.blake3(seed).digest()

    def test_not_the_raw_seed(self):
        key_seed = generate_seed_from_phrase(phrase_for([0] * 13))
        assert key_seed[:16] != bytes(16)

    def test_invalid_phrase_rejected(self):
        with pytest.raises(InvalidPhraseLength):
            generate_seed_from_phrase("abbey ablaze")

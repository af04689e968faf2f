"""Tests for size padding and the mutable encrypted container."""

import os

import pytest

from s5crypto import (
    AuthenticationFailed,
    CapabilityError,
    InvalidSize,
    NotPadded,
    PaddingOverflow,
    UnknownContainerType,
    UnsupportedVersion,
    WrongKeyLength,
    check_padded_block,
    decrypt_mutable_bytes,
    encrypt_mutable_bytes,
    pad_file_size_default,
)
from s5crypto.mutable import TOTAL_OVERHEAD

KIB = 1024
MAX_SIZE = (1 << 52) * 80 * KIB


class TestPadFileSize:
    def test_small_sizes(self):
        assert pad_file_size_default(0) == 0
        assert pad_file_size_default(1) == 4096
        assert pad_file_size_default(4096) == 4096
        assert pad_file_size_default(4097) == 8192

    def test_bucket_boundary(self):
        assert pad_file_size_default(80 * KIB) == 80 * KIB
        # next bucket uses 8 KiB blocks
        assert pad_file_size_default(80 * KIB + 1) == 88 * KIB

    def test_larger_bucket(self):
        assert pad_file_size_default(1_000_046) == 1 << 20

    def test_never_shrinks_and_is_padded(self):
        sizes = [0, 1, 100, 4095, 81919, 81920, 81921, 163841, 10**6, 10**9, 10**12, MAX_SIZE - 1, MAX_SIZE]
        for n in sizes:
            padded = pad_file_size_default(n)
            assert padded >= n
            assert check_padded_block(padded)

    def test_overflow(self):
        assert pad_file_size_default(MAX_SIZE) == MAX_SIZE
        with pytest.raises(PaddingOverflow):
            pad_file_size_default(MAX_SIZE + 1)

    def test_negative(self):
        with pytest.raises(InvalidSize):
            pad_file_size_default(-1)


class TestCheckPaddedBlock:
    def test_values(self):
        assert check_padded_block(0)
        assert check_padded_block(4096)
        assert not check_padded_block(4095)
        assert not check_padded_block(4097)

    def test_uses_bucket_block_size(self):
        # 84 KiB is a multiple of 4 KiB but sits in the 8 KiB-block bucket
        assert not check_padded_block(84 * KIB)
        assert check_padded_block(88 * KIB)

    def test_overflow(self):
        with pytest.raises(PaddingOverflow):
            check_padded_block(MAX_SIZE + 1)


class TestEncrypt:
    def test_layout(self, key, rng):
        container = encrypt_mutable_bytes(b"hello", key, rng=rng)
        assert container[0] == 0x8D
        assert container[1] == 0x01
        assert len(container) == 4096
        assert check_padded_block(len(container))

    def test_sizes(self, key):
        assert len(encrypt_mutable_bytes(b"", key)) == 4096
        assert len(encrypt_mutable_bytes(bytes(4096 - TOTAL_OVERHEAD), key)) == 4096
        assert len(encrypt_mutable_bytes(bytes(4096 - TOTAL_OVERHEAD + 1), key)) == 8192
        assert len(encrypt_mutable_bytes(bytes(4096), key)) == 8192

    def test_nonce_from_random_source(self, key, make_rng):
        c1 = encrypt_mutable_bytes(b"data", key, rng=make_rng())
        c2 = encrypt_mutable_bytes(b"data", key, rng=make_rng())
        assert c1 == c2
        assert c1[2:26] == make_rng().random_bytes(24)

    def test_fresh_nonce_by_default(self, key):
        c1 = encrypt_mutable_bytes(b"data", key)
        c2 = encrypt_mutable_bytes(b"data", key)
        assert c1[2:26] != c2[2:26]
        assert c1 != c2

    def test_wrong_key_length(self):
        with pytest.raises(WrongKeyLength):
            encrypt_mutable_bytes(b"data", bytes(16))

    def test_short_random_source(self, key, short_rng):
        with pytest.raises(CapabilityError):
            encrypt_mutable_bytes(b"data", key, rng=short_rng)


class TestDecrypt:
    @pytest.mark.parametrize("length", [0, 1, 4096, 1_000_000])
    def test_round_trip(self, length):
        key = os.urandom(32)
        plaintext = os.urandom(length)
        assert decrypt_mutable_bytes(encrypt_mutable_bytes(plaintext, key), key) == plaintext

    def test_payload_with_trailing_zeros(self, key):
        plaintext = b"abc" + bytes(100)
        assert decrypt_mutable_bytes(encrypt_mutable_bytes(plaintext, key), key) == plaintext

    def test_wrong_key(self, key):
        container = encrypt_mutable_bytes(b"secret", key)
        with pytest.raises(AuthenticationFailed):
            decrypt_mutable_bytes(container, bytes(32))

    def test_key_length_checked_first(self):
        with pytest.raises(WrongKeyLength):
            decrypt_mutable_bytes(b"not padded", bytes(16))

    def test_not_padded(self, key):
        container = encrypt_mutable_bytes(b"secret", key)
        with pytest.raises(NotPadded):
            decrypt_mutable_bytes(container[:-1], key)
        with pytest.raises(NotPadded):
            decrypt_mutable_bytes(container + b"\x00", key)

    def test_empty_container(self, key):
        with pytest.raises(UnknownContainerType):
            decrypt_mutable_bytes(b"", key)

    def test_unsupported_version(self, key):
        container = bytearray(encrypt_mutable_bytes(b"secret", key))
        container[1] = 0x02
        with pytest.raises(UnsupportedVersion):
            decrypt_mutable_bytes(bytes(container), key)

    def test_unknown_type(self, key):
        container = bytearray(encrypt_mutable_bytes(b"secret", key))
        container[0] = 0x8C
        with pytest.raises(UnknownContainerType):
            decrypt_mutable_bytes(bytes(container), key)

    def test_any_tampered_byte_fails(self, key):
        container = encrypt_mutable_bytes(b"tamper me", key)
        for i in range(2, len(container)):
            tampered = bytearray(container)
            tampered[i] ^= 0x01
            with pytest.raises(AuthenticationFailed):
                decrypt_mutable_bytes(bytes(tampered), key)

    def test_tampered_header_fails(self, key):
        container = encrypt_mutable_bytes(b"tamper me", key)
        for i, error in ((0, UnknownContainerType), (1, UnsupportedVersion)):
            tampered = bytearray(container)
            tampered[i] ^= 0x80
            with pytest.raises(error):
                decrypt_mutable_bytes(bytes(tampered), key)

    def test_accepts_bytearray(self, key):
        container = bytearray(encrypt_mutable_bytes(b"secret", key))
        assert decrypt_mutable_bytes(container, bytearray(key)) == b"secret"

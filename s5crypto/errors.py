"""Exception hierarchy for s5crypto.

Three categories, each a subclass of ``S5CryptoError``:

- ``ValidationError``: malformed input (lengths, prefixes, layout). Safe to
  reject and re-prompt; nothing was computed.
- ``CryptographicError``: checksum mismatch, failed authentication, padding
  overflow. Fatal for the operation; no partial output is ever returned.
- ``CapabilityError``: a hash/AEAD/random provider misbehaved.
"""

from __future__ import annotations


class S5CryptoError(Exception):
    """Base exception for all s5crypto errors"""

    pass


class ValidationError(S5CryptoError, ValueError):
    """Input has the wrong shape or length"""

    pass


class CryptographicError(S5CryptoError):
    """A cryptographic check failed"""

    pass


class CapabilityError(S5CryptoError, RuntimeError):
    """An underlying crypto provider returned unusable output"""

    pass


# Validation


class InvalidSeedWordsLength(ValidationError):
    """Seed words vector is not exactly 13 entries."""

    pass


class InvalidSeedLength(ValidationError):
    """Seed bytes have the wrong length."""

    pass


class InvalidPhraseLength(ValidationError):
    """Phrase does not have exactly 15 words."""

    pass


class WordTooShort(ValidationError):
    """A phrase word is shorter than 3 characters."""

    def __init__(self, position: int, word: str):
        self.position = position
        super().__init__(f"Word {position + 1} is not at least 3 letters long")


class UnknownWordPrefix(ValidationError):
    """A phrase word's 3-letter prefix is not in the (allowed part of the) wordlist."""

    def __init__(self, position: int, prefix: str, bound: int):
        self.position = position
        self.prefix = prefix
        if position == 0:
            message = (
                f"Prefix for word 1 must be found in the first {bound} words "
                "of the wordlist"
            )
        else:
            message = (
                f'Unrecognized prefix "{prefix}" at word {position + 1}, '
                "not found in wordlist"
            )
        super().__init__(message)


class InvalidBaseLength(ValidationError):
    """Hash chain base is not 32 bytes."""

    pass


class InvalidPathSegment(ValidationError):
    """Path segment cannot be read as a big-endian integer tweak."""

    pass


class WrongKeyLength(ValidationError):
    """Encryption key is not 32 bytes."""

    pass


class NotPadded(ValidationError):
    """Container length is not a padded block size."""

    pass


class UnknownContainerType(ValidationError):
    """Container does not start with the mutable-container marker byte."""

    pass


class UnsupportedVersion(ValidationError):
    """Container version byte is not supported."""

    pass


class InvalidSize(ValidationError):
    """A size or integer value is out of range."""

    pass


class PlaintextTooLarge(ValidationError):
    """Plaintext length does not fit the 4-byte length prefix."""

    pass


# Cryptographic


class InvalidChecksum(CryptographicError):
    """Phrase checksum words do not match the seed words."""

    pass


class AuthenticationFailed(CryptographicError):
    """AEAD decryption failed authentication."""

    pass


class PaddingOverflow(CryptographicError):
    """Size exceeds the largest padding bucket."""

    pass

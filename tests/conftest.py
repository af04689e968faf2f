import hashlib

import pytest


class CounterRandom:
    """Deterministic stand-in for a RandomSource: SHA-256 in counter mode."""

    def __init__(self, label: bytes = b"s5crypto-tests") -> None:
        self.label = label
        self.counter = 0

    def random_bytes(self, length: int) -> bytes:
        out = b""
        while len(out) < length:
            out += hashlib.sha256(self.label + self.counter.to_bytes(8, "big")).digest()
            self.counter += 1
        return out[:length]

    def uniform(self, upper_bound: int) -> int:
        return int.from_bytes(self.random_bytes(4), "big") % upper_bound


class ShortRandom:
    """Random source that always comes up one byte short."""

    def random_bytes(self, length: int) -> bytes:
        return bytes(max(length - 1, 0))

    def uniform(self, upper_bound: int) -> int:
        return 0


@pytest.fixture
def rng():
    return CounterRandom()


@pytest.fixture
def make_rng():
    return CounterRandom


@pytest.fixture
def short_rng():
    return ShortRandom()


@pytest.fixture
def root_key():
    return bytes(range(32))


@pytest.fixture
def key():
    return bytes(range(100, 132))

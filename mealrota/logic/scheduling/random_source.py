"""Seeded xorshift generator.

The stream depends only on the seed string and the call count, using 32-bit
unsigned arithmetic throughout, so a plan generated on one device is
reproduced bit-for-bit on another.
"""
from typing import Callable, Iterable

MASK32 = 0xFFFFFFFF
HASH_OFFSET = 0x811C9DC5
ZERO_STATE_FALLBACK = 0x9E3779B1
DEFAULT_SEED = "default"


def _utf16_units(text: str) -> Iterable[int]:
    raw = text.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        yield raw[i] | (raw[i + 1] << 8)


def seed_hash(seed: str) -> int:
    """Multiplicative string hash of the seed (empty seed hashes ``"default"``)."""
    h = HASH_OFFSET
    for unit in _utf16_units(str(seed or DEFAULT_SEED)):
        h = ((31 * h) & MASK32) ^ unit
    return h


def create_generator(seed: str) -> Callable[[], float]:
    """Return a function producing a reproducible stream of floats in [0, 1)."""
    x = seed_hash(seed) or ZERO_STATE_FALLBACK

    def rng() -> float:
        nonlocal x
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        return x / 4294967296

    return rng


__all__ = ['create_generator', 'seed_hash']

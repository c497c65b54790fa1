"""Seeded pseudo-random sources used by the sample sequences.

Every sequence owns its own source.  Any object with the three methods of
``RandomSource`` can be plugged in; output is only bit-identical to another
implementation when it runs the same algorithm with the same seeding.
"""

from typing import Protocol, runtime_checkable

from ._common import DEFAULT_SEED, check_seed

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# uniform_float keeps the top 23 bits, matching a float32 mantissa
_FLOAT_SHIFT = 9
_FLOAT_SCALE = 1.0 / (1 << 23)


@runtime_checkable
class RandomSource(Protocol):
    def uniform_float(self) -> float:
        """Uniform float in [0, 1)."""

    def uniform_int(self) -> int:
        """Uniform unsigned 32-bit integer."""

    def reseed(self, seed: int) -> None:
        """Restart the stream from the initial state for ``seed``."""


def _rotl32(x, k):
    return ((x << k) | (x >> (32 - k))) & MASK32


class SplitMix64:
    """SplitMix64 (Steele, Lea, Flood 2014), used to expand seeds."""

    def __init__(self, seed: int) -> None:
        self._state = seed & MASK64

    def next_u64(self) -> int:
        self._state = (self._state + 0x9E3779B97F4A7C15) & MASK64
        z = self._state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
        return z ^ (z >> 31)


class Xoshiro128StarStar:
    """xoshiro128** 1.1 (Blackman, Vigna) with 128 bits of 32-bit state.

    The four state words are the low halves of four SplitMix64 outputs
    seeded with the 32-bit seed.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._s = [0, 0, 0, 0]
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        seed = check_seed(seed)
        sm = SplitMix64(seed)
        self._s = [sm.next_u64() & MASK32 for _ in range(4)]
        if not any(self._s):
            # all-zero is the generator's only fixed point
            self._s[0] = 1
        self.seed = seed

    def next_u32(self) -> int:
        s = self._s
        result = (_rotl32((s[1] * 5) & MASK32, 7) * 9) & MASK32
        t = (s[1] << 9) & MASK32
        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = _rotl32(s[3], 11)
        return result

    def uniform_int(self) -> int:
        return self.next_u32()

    def uniform_float(self) -> float:
        return (self.next_u32() >> _FLOAT_SHIFT) * _FLOAT_SCALE

    def __repr__(self):
        return f"Xoshiro128StarStar(seed={self.seed})"

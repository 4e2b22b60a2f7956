"""
Seeded pseudo-random stream for reproducible datasets.

Uses the Mulberry32 mixing function so the same seed produces the same
sequence on every platform. Only 32-bit integer arithmetic is involved
(add/multiply mod 2^32, xor, logical right shift), never the platform
random source.
"""
from typing import Sequence, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
GOLDEN_GAMMA = 0x6D2B79F5
TWO_POW_32 = 4294967296.0


def to_int(value, default: int = 0) -> int:
    """Coerce a seed or count to int; unconvertible, NaN and infinite values give `default`."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _imul(a: int, b: int) -> int:
    """Multiply two 32-bit values, keeping the low 32 bits."""
    return (a * b) & MASK_32


class SeededStream:
    """
    Deterministic stream of floats in [0, 1).

    Each instance owns its state; create a fresh one per generation run.
    """

    def __init__(self, seed: int):
        self.state = to_int(seed) & MASK_32

    def next(self) -> float:
        self.state = (self.state + GOLDEN_GAMMA) & MASK_32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t = (t ^ ((t + _imul(t ^ (t >> 7), t | 61)) & MASK_32)) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / TWO_POW_32

    def pick(self, items: Sequence[T]) -> T:
        """Uniform choice; the index is always in range because next() < 1."""
        return items[int(self.next() * len(items))]

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        return low + int(self.next() * (high - low + 1))

    def chance(self, probability: float) -> bool:
        return self.next() < probability

"""
Clast Planets: planetgen/rng.py
Deterministic random source for planet generation.
================================================
Version:     0.1
Stack:       Python 3.12+
Status:      Stable. The LCG constants are part of the determinism contract.

A 64-bit linear congruential generator. Every generation call owns one
instance; instances are never shared between calls.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER: int = 6364136223846793005
LCG_INCREMENT: int = 1442695040888963407
MASK_64: int = (1 << 64) - 1
DOUBLE_SCALE: float = float(1 << 53)


class SeededRandom:
    """
    Reproducible uniform stream from a 64-bit seed.

    Negative seeds wrap to their two's complement unsigned value, so the
    full signed 64-bit range maps one-to-one onto generator states.
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._state = seed & MASK_64
        # Mix low-entropy seeds
        self.next_uint64()
        self.next_uint64()

    @property
    def seed(self) -> int:
        return self._seed

    def next_uint64(self) -> int:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & MASK_64
        return self._state

    def next_double(self, min_value: Optional[float] = None, max_value: Optional[float] = None) -> float:
        """
        Uniform double from the top 53 bits of the next state.

        Without bounds the result lies in [0, 1). With bounds it is
        min + u * (max - min).
        """
        unit = (self.next_uint64() >> 11) / DOUBLE_SCALE
        if min_value is None and max_value is None:
            return unit
        if min_value is None or max_value is None:
            raise TypeError("next_double() takes either no bounds or both bounds")
        return min_value + unit * (max_value - min_value)

    def next_double_between(self, min_value: float, max_value: float) -> float:
        return self.next_double(min_value, max_value)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Uniform integer in [min_value, max_value], both ends inclusive."""
        return math.floor(self.next_double(float(min_value), float(max_value + 1)))

    def choose(self, sequence: Sequence[T]) -> Optional[T]:
        """Uniform pick from a sequence. Returns None when it is empty."""
        if not sequence:
            return None
        return sequence[self.next_int(0, len(sequence) - 1)]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed})"

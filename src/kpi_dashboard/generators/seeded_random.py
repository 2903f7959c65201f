"""
Seeded linear-congruential random sequence.

The constants match the classic 9301/49297/233280 generator so that a given
seed always reproduces the same sequence, across runs and across processes.
"""

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRandom:
    """
    Deterministic pseudo-random number generator.

    Not suitable for anything but reproducible demo data: the period is at
    most 233280 and the output is only roughly uniform.

    Attributes:
        seed: Current internal state; advanced by every draw
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], inclusive."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return self.next() * (max_value - min_value) + min_value

    def pick(self, items: Sequence[T]) -> T:
        """Return a uniformly chosen element of ``items``."""
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

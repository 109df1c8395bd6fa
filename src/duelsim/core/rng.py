"""Per-match RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import List, Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random that provides deterministic helpers.

    Every match owns its own instance so that dodge rolls and AI jitter of one
    match never influence another.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a random floating point number N such that a <= N <= b."""
        return self._random.uniform(a, b)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def sample(self, seq: Sequence[T_co], k: int) -> List[T_co]:
        """Return k distinct elements chosen from the sequence."""
        if k > len(seq):
            raise ValueError("Sample larger than population.")
        return self._random.sample(list(seq), k)

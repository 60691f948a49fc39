"""
Seedable random source for cube shuffling and selection.

One CubeRandom is created per run and passed explicitly to the transforms,
so a fixed seed and a fixed input reproduce the same output.
"""

import random
from typing import List, Optional, Sequence, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')


class CubeRandom:
    """
    Random number source used by all randomized transforms.

    Args:
        seed: Integer seed for a reproducible run. None seeds from the
              operating system's entropy source.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random()
        self.seed(seed)

    def seed(self, value: Optional[int] = None) -> None:
        """Reseed the generator. None uses OS entropy."""
        self._seed = value
        self._random.seed(value)
        if value is None:
            logger.debug("Random source seeded from system entropy")
        else:
            logger.debug(f"Random source seeded with {value}")

    @property
    def seeded(self) -> bool:
        """True if the generator was given an explicit seed."""
        return self._seed is not None

    def shuffle(self, sequence: Sequence[T]) -> List[T]:
        """Return a uniformly shuffled copy of the sequence."""
        items = list(sequence)
        self._random.shuffle(items)
        return items

    def uniform_index(self, n: int) -> int:
        """Return a uniformly chosen index in [0, n)."""
        if n <= 0:
            raise ValueError(f"Cannot draw an index from an empty range (n={n})")
        return self._random.randrange(n)

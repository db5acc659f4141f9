# This project was developed with assistance from AI tools.
"""Random source abstraction for the mocked parts of the flow.

The credit score draw, the offer base rate and the salary-slip parse are
all mock randomness. Everything that needs it takes a ``RandomSource`` so
tests can pin the values.
"""

import logging
import random
from collections.abc import Iterable
from typing import Protocol

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def next_in_range(self, low: float, high: float) -> float:
        """Return a value in ``[low, high)``."""
        ...


class SeededRandomSource:
    """Uniform draws from ``random.Random``; seeded when a seed is given."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next_in_range(self, low: float, high: float) -> float:
        if high <= low:
            return low
        value = self._rng.uniform(low, high)
        # uniform() may return the upper bound through float rounding
        return value if value < high else low


class StubRandomSource:
    """Replays fractions in ``[0, 1)`` scaled onto each requested range.

    Cycles through ``fractions`` so a single value pins every draw.
    """

    def __init__(self, fractions: Iterable[float]) -> None:
        self._fractions = list(fractions)
        if not self._fractions:
            raise ValueError("StubRandomSource needs at least one fraction")
        for f in self._fractions:
            if not 0 <= f < 1:
                raise ValueError(f"fractions must be in [0, 1), got {f}")
        self._next = 0
        self.calls: list[tuple[float, float]] = []

    def next_in_range(self, low: float, high: float) -> float:
        fraction = self._fractions[self._next % len(self._fractions)]
        self._next += 1
        self.calls.append((low, high))
        return low + (high - low) * fraction


_source: RandomSource | None = None


def init_random_source(seed: int | None) -> RandomSource:
    """Initialise the process-wide source (called once from app lifespan)."""
    global _source  # noqa: PLW0603
    _source = SeededRandomSource(seed)
    logger.info("Random source initialised (seeded=%s)", seed is not None)
    return _source


def get_random_source() -> RandomSource:
    """Return the process-wide random source, creating an unseeded one if needed."""
    global _source  # noqa: PLW0603
    if _source is None:
        _source = SeededRandomSource()
    return _source

"""Random sources for dice draws.

A source is anything with ``roll(sides) -> int`` returning a uniform draw in
``[1, sides]``. None of them are safe to share between threads.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Protocol

from .config import settings

logger = logging.getLogger(__name__)


class DieSource(Protocol):
    def roll(self, sides: int) -> int: ...


class RandomSource:
    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self.seed = seed
        self._rng = random.Random(seed)

    def roll(self, sides: int) -> int:
        return self._rng.randint(1, sides)


class RecordingSource:
    """Wraps another source and keeps every draw, in order."""

    def __init__(self, inner: DieSource) -> None:
        self.inner = inner
        self.draws: list[int] = []

    def roll(self, sides: int) -> int:
        value = self.inner.roll(sides)
        self.draws.append(value)
        return value


_default: RandomSource | None = None


def default_source() -> RandomSource:
    global _default
    if _default is None:
        _default = RandomSource(settings.seed)
        logger.info("Seeded process random source with %d", _default.seed)
    return _default

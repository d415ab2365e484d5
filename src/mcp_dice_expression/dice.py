from __future__ import annotations

import heapq
import logging

from .errors import DiceError
from .rng import DieSource

logger = logging.getLogger(__name__)


def _check_sides(sides: int) -> None:
    if sides < 1:
        raise DiceError(
            f"[INVALID_SIDES] Dice must have at least 1 side, got {sides}. Example: '2d6'."
        )


def roll_sum(count: int, sides: int, source: DieSource) -> int:
    """Roll ``count`` dice of ``sides`` sides and add them all. A count below 1 rolls nothing."""
    _check_sides(sides)
    rolls: list[int] | None = [] if logger.isEnabledFor(logging.DEBUG) else None
    total = 0
    for _ in range(count):
        value = source.roll(sides)
        total += value
        if rolls is not None:
            rolls.append(value)
    if rolls is not None:
        logger.debug("%dd%d: rolls %s => %d", count, sides, rolls, total)
    return total


def roll_choose(count: int, sides: int, keep: int, source: DieSource) -> int:
    """Roll ``count`` dice and add the ``keep`` highest."""
    _check_sides(sides)
    if keep > count:
        raise DiceError(
            f"[CHOOSE_TOO_MANY] Cannot keep {keep} dice out of {count} rolled. Example: '4d6:3'."
        )
    rolls: list[int] | None = [] if logger.isEnabledFor(logging.DEBUG) else None
    # Min-heap of the highest ``keep`` draws so far.
    kept: list[int] = []
    for _ in range(count):
        value = source.roll(sides)
        if rolls is not None:
            rolls.append(value)
        if len(kept) < keep:
            heapq.heappush(kept, value)
        elif kept and value > kept[0]:
            heapq.heapreplace(kept, value)
    total = sum(kept)
    if rolls is not None:
        logger.debug(
            "%dd%d:%d: rolls %s -> keep %s => %d",
            count, sides, keep, rolls, sorted(kept, reverse=True), total,
        )
    return total

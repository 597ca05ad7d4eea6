"""Candidate off-intervals and their ranking.

A candidate turns the load off for ``[start, start + length)`` and back on at
``start + length``. Its saving is what the off slots cost compared to buying
the same energy at the turn-on slot's price.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import accumulate
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A proposed contiguous off-interval."""

    start: int
    length: int
    saving: float

    @property
    def end(self) -> int:
        """Index of the turn-on slot (exclusive end of the off run)."""
        return self.start + self.length

    def slots(self) -> range:
        return range(self.start, self.end)


def generate_candidates(
    prices: Sequence[float],
    min_minutes_off: int,
    max_minutes_off: int,
    min_saving: float,
) -> list[Candidate]:
    """Enumerate every off-interval worth considering, in start/length order.

    An interval never covers the final slot: it must be followed by a slot
    inside the horizon whose price it is compared against.
    """
    n = len(prices)
    if n == 0:
        return []
    last = n - 1
    effective_max_off = min(max_minutes_off, last)
    prefix = [0.0, *accumulate(prices)]

    candidates: list[Candidate] = []
    for start in range(last):
        for length in range(min_minutes_off, effective_max_off + 1):
            turn_on = start + length
            if turn_on > last:
                break
            turn_on_price = prices[turn_on]
            saving = (prefix[turn_on] - prefix[start]) - turn_on_price * length
            # The first slot alone must clear the bar too, so a run is never
            # carried only by its later slots.
            if saving > min_saving * length and prices[start] > turn_on_price + min_saving:
                candidates.append(Candidate(start=start, length=length, saving=saving))

    logger.debug("Generated %d candidates from %d slots", len(candidates), n)
    return candidates


def rank_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Largest saving first; shorter runs win ties. Stable for full ties."""
    return sorted(candidates, key=lambda c: (-c.saving, c.length))

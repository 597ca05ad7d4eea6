"""Greedy off-period planner.

Candidates are tried in order of saving. Each one is applied to a copy of the
committed schedule, the copy is checked end to end (including the previous
period's trailing state), and it replaces the committed schedule only if it
passes. A rejected candidate is never reconsidered.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Sequence

from best_save.config.schema import ConstraintsConfig
from best_save.optimisation.candidates import Candidate, generate_candidates, rank_candidates
from best_save.optimisation.sequence import SequenceRules, is_valid_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Schedule:
    """Immutable set of off slots over the horizon."""

    off: tuple[bool, ...]

    @classmethod
    def all_on(cls, n: int) -> Schedule:
        return cls(off=(False,) * n)

    def overlaps(self, candidate: Candidate) -> bool:
        return any(self.off[i] for i in candidate.slots())

    def with_off(self, candidate: Candidate) -> Schedule:
        off = list(self.off)
        for i in candidate.slots():
            off[i] = True
        return Schedule(off=tuple(off))

    def on_off(self) -> list[bool]:
        return [not o for o in self.off]


def _accepts(schedule: Schedule, trailing: Sequence[bool], rules: SequenceRules) -> bool:
    return is_valid_for([*trailing, *schedule.on_off()], rules)


def select(
    ranked: Sequence[Candidate],
    n: int,
    rules: SequenceRules,
    trailing: Sequence[bool] = (),
) -> tuple[Schedule, list[Candidate]]:
    """Commit feasible, non-overlapping candidates in the given order."""
    committed = Schedule.all_on(n)
    accepted: list[Candidate] = []
    rejected = 0
    for candidate in ranked:
        if committed.overlaps(candidate):
            continue
        trial = committed.with_off(candidate)
        if _accepts(trial, trailing, rules):
            committed = trial
            accepted.append(candidate)
        else:
            rejected += 1
    logger.debug("Committed %d candidates, rejected %d as infeasible", len(accepted), rejected)
    return committed, accepted


def optimise(
    prices: Sequence[float],
    constraints: ConstraintsConfig,
    trailing: Sequence[bool] = (),
) -> list[bool]:
    """Plan which slots to turn off. Returns one bool per price, True = on."""
    n = len(prices)
    if n == 0 or constraints.max_minutes_off == 0:
        return [True] * n

    t0 = time.monotonic()
    candidates = generate_candidates(
        prices,
        min_minutes_off=constraints.min_minutes_off,
        max_minutes_off=constraints.max_minutes_off,
        min_saving=constraints.min_saving,
    )
    schedule, accepted = select(
        rank_candidates(candidates), n, constraints.rules(), trailing
    )
    elapsed_ms = int((time.monotonic() - t0) * 1000)

    logger.info(
        "Planned %d off periods (%d slots off of %d) from %d candidates in %dms",
        len(accepted),
        sum(schedule.off),
        n,
        len(candidates),
        elapsed_ms,
    )
    return schedule.on_off()

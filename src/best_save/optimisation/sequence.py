"""Feasibility check for on/off sequences.

A sequence is scanned left to right as a small state machine. Each slot is
fed through :func:`step`, which returns the next :class:`ScanState` or
``None`` when the slot breaks one of the limits:

    slot  run_state        outcome
    ----  ---------------  -----------------------------------------------
    off   any              fail if off is disabled, the run already hit the
                           cap, or the previous run is not recovered yet
    off   NO_ACTIVE_RUN    run starts -> BELOW_MINIMUM
    off   BELOW_MINIMUM    -> MET_MINIMUM once min_minutes_off is reached
    off   (last slot)      -> MET_MINIMUM, recovery considered satisfied
    on    BELOW_MINIMUM    fail (off run ended too early)
    on    otherwise        -> NO_ACTIVE_RUN, recovery re-evaluated

The sequence is valid when the final state has recovered and is not in the
middle of a too-short off run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence


class RunState(Enum):
    """Progress of the current off run against min_minutes_off."""

    NO_ACTIVE_RUN = "no_active_run"
    BELOW_MINIMUM = "below_minimum"
    MET_MINIMUM = "met_minimum"


@dataclass(frozen=True)
class SequenceRules:
    """Limits an on/off sequence is checked against."""

    max_minutes_off: int
    min_minutes_off: int
    recovery_percentage: float
    recovery_max_minutes: int | None = None  # None = unbounded


@dataclass(frozen=True)
class ScanState:
    """Scanner state after consuming a prefix of the sequence."""

    off_run_length: int = 0
    on_run_length: int = 0
    off_cap_reached: bool = False
    recovery_satisfied: bool = True
    run_state: RunState = RunState.NO_ACTIVE_RUN
    required_recovery: int = 0

    @property
    def accepts_end(self) -> bool:
        return self.recovery_satisfied and self.run_state is not RunState.BELOW_MINIMUM


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def recovery_required(off_run_length: int, rules: SequenceRules) -> int:
    """On-slots needed after an off run of the given length."""
    required = max(_round_half_up(off_run_length * rules.recovery_percentage / 100), 1)
    if rules.recovery_max_minutes is None:
        return required
    return min(required, rules.recovery_max_minutes)


def step(state: ScanState, slot_on: bool, is_last: bool, rules: SequenceRules) -> ScanState | None:
    """Advance the scan by one slot. Returns None if the slot is not allowed."""
    if slot_on:
        if state.run_state is RunState.BELOW_MINIMUM:
            return None
        on_run_length = state.on_run_length + 1
        recovered = on_run_length >= state.required_recovery
        return replace(
            state,
            on_run_length=on_run_length,
            off_run_length=0,
            run_state=RunState.NO_ACTIVE_RUN,
            recovery_satisfied=recovered,
            # A full recovery re-arms the whole off window
            off_cap_reached=False if recovered else state.off_cap_reached,
        )

    if rules.max_minutes_off == 0 or state.off_cap_reached:
        return None
    if not state.recovery_satisfied:
        return None

    off_run_length = state.off_run_length + 1
    run_state = state.run_state
    if run_state is RunState.NO_ACTIVE_RUN:
        run_state = RunState.BELOW_MINIMUM
    if off_run_length >= rules.min_minutes_off:
        run_state = RunState.MET_MINIMUM

    recovery_satisfied = state.recovery_satisfied
    if is_last:
        # Nothing after the horizon can contradict a trailing off run
        recovery_satisfied = True
        run_state = RunState.MET_MINIMUM

    return ScanState(
        off_run_length=off_run_length,
        on_run_length=0,
        off_cap_reached=state.off_cap_reached or off_run_length >= rules.max_minutes_off,
        recovery_satisfied=recovery_satisfied,
        run_state=run_state,
        required_recovery=recovery_required(off_run_length, rules),
    )


def scan(sequence: Sequence[bool], rules: SequenceRules) -> ScanState | None:
    """Run the whole sequence through :func:`step`. None on the first violation."""
    state = ScanState()
    last = len(sequence) - 1
    for i, slot_on in enumerate(sequence):
        next_state = step(state, bool(slot_on), i == last, rules)
        if next_state is None:
            return None
        state = next_state
    return state


def is_valid_sequence(
    sequence: Sequence[bool],
    max_minutes_off: int,
    min_minutes_off: int,
    recovery_percentage: float,
    recovery_max_minutes: int | None = None,
) -> bool:
    """Check an on/off sequence (True = on) against the load's limits.

    Never raises for an infeasible sequence; every violation is reported as
    False. The empty sequence is valid.
    """
    rules = SequenceRules(
        max_minutes_off=max_minutes_off,
        min_minutes_off=min_minutes_off,
        recovery_percentage=recovery_percentage,
        recovery_max_minutes=recovery_max_minutes,
    )
    return is_valid_for(sequence, rules)


def is_valid_for(sequence: Sequence[bool], rules: SequenceRules) -> bool:
    state = scan(sequence, rules)
    return state is not None and state.accepts_end

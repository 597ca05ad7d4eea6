"""Tests for plan summaries and trailing context construction."""

from __future__ import annotations

import pytest

from best_save.config.schema import TrailingConfig
from best_save.optimisation.plan import OffPeriod, build_plan
from best_save.optimisation.trailing import build_trailing, fill, trailing_from_config

T, F = True, False


class TestBuildPlan:
    def test_savings_against_turn_on_price(self) -> None:
        plan = build_plan([10, 10, 1, 1, 10], [F, F, T, T, T])
        assert plan.slot_savings == [9, 9, None, None, None]
        assert plan.off_periods == [OffPeriod(start=0, length=2, saving=18.0)]
        assert plan.total_saving == 18
        assert plan.off_slots == 2
        assert plan.total_slots == 5

    def test_run_reaching_end_has_no_saving(self) -> None:
        plan = build_plan([5, 3, 8], [T, F, F])
        assert plan.slot_savings == [None, None, None]
        assert plan.off_periods == [OffPeriod(start=1, length=2, saving=None)]
        assert plan.total_saving == 0

    def test_multiple_runs(self) -> None:
        plan = build_plan([4, 2, 6, 6, 3, 3], [F, T, F, F, T, T])
        assert [(p.start, p.end) for p in plan.off_periods] == [(0, 1), (2, 4)]
        assert plan.total_saving == 2 + 3 + 3

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError):
            build_plan([1, 2, 3], [T, T])

    def test_to_dict(self) -> None:
        data = build_plan([10, 1], [F, T]).to_dict()
        assert data["schedule"] == [
            {"index": 0, "price": 10, "on": False, "saving": 9},
            {"index": 1, "price": 1, "on": True, "saving": None},
        ]
        assert data["off_periods"] == [{"start": 0, "length": 1, "saving": 9.0}]
        assert data["metrics"] == {"total_slots": 2, "off_slots": 1, "total_saving": 9}

    def test_empty(self) -> None:
        plan = build_plan([], [])
        assert plan.off_periods == []
        assert plan.total_saving == 0


class TestTrailing:
    def test_fill(self) -> None:
        assert fill("x", 3) == ["x", "x", "x"]
        assert fill("x", 0) == []
        assert fill("x", -2) == []
        assert fill(None, 5) == []

    def test_build_trailing_converts_to_bool(self) -> None:
        assert build_trailing(1, 2) == (True, True)
        assert build_trailing(0, 3) == (False, False, False)
        assert build_trailing(False, 0) == ()
        assert build_trailing(None, 4) == ()

    def test_from_config(self) -> None:
        assert trailing_from_config(TrailingConfig(last_value=False, last_count=2)) == (F, F)
        assert trailing_from_config(TrailingConfig()) == ()

"""Tests for candidate generation and ranking."""

from __future__ import annotations

from best_save.optimisation.candidates import Candidate, generate_candidates, rank_candidates


class TestGenerateCandidates:
    def test_dip_produces_runs_before_it(self) -> None:
        result = generate_candidates([10, 10, 1, 1, 10], min_minutes_off=2, max_minutes_off=2, min_saving=0)
        assert result == [
            Candidate(start=0, length=2, saving=18.0),
            Candidate(start=1, length=2, saving=9.0),
        ]

    def test_never_covers_final_slot(self) -> None:
        prices = [9, 8, 7, 6, 5, 4, 3, 2, 1]
        result = generate_candidates(prices, min_minutes_off=1, max_minutes_off=20, min_saving=0)
        assert result
        assert all(c.end <= len(prices) - 1 for c in result)
        assert max(c.length for c in result) == len(prices) - 1

    def test_min_saving_filters_average(self) -> None:
        prices = [5, 4, 1]
        assert generate_candidates(prices, 1, 2, 0) == [
            Candidate(start=0, length=1, saving=1.0),
            Candidate(start=0, length=2, saving=7.0),
            Candidate(start=1, length=1, saving=3.0),
        ]
        assert generate_candidates(prices, 1, 2, 2) == [
            Candidate(start=0, length=2, saving=7.0),
            Candidate(start=1, length=1, saving=3.0),
        ]

    def test_first_slot_must_clear_saving_bar(self) -> None:
        prices = [1, 10, 0]
        assert generate_candidates(prices, 2, 2, 0) == [Candidate(start=0, length=2, saving=11.0)]
        assert generate_candidates(prices, 2, 2, 1) == []

    def test_lengths_respect_minimum(self) -> None:
        result = generate_candidates([9, 9, 9, 9, 1], min_minutes_off=3, max_minutes_off=4, min_saving=0)
        assert {(c.start, c.length) for c in result} == {(0, 4), (1, 3)}

    def test_flat_prices_yield_nothing(self) -> None:
        assert generate_candidates([3.0] * 10, 1, 5, 0) == []

    def test_short_inputs(self) -> None:
        assert generate_candidates([], 1, 5, 0) == []
        assert generate_candidates([4.2], 1, 5, 0) == []

    def test_candidate_slots(self) -> None:
        c = Candidate(start=3, length=2, saving=1.0)
        assert c.end == 5
        assert list(c.slots()) == [3, 4]


class TestRankCandidates:
    def test_saving_descending_then_shorter(self) -> None:
        ranked = rank_candidates([
            Candidate(start=0, length=3, saving=5.0),
            Candidate(start=2, length=1, saving=5.0),
            Candidate(start=4, length=2, saving=9.0),
        ])
        assert [(c.start, c.length) for c in ranked] == [(4, 2), (2, 1), (0, 3)]

    def test_full_ties_keep_generation_order(self) -> None:
        candidates = [
            Candidate(start=0, length=2, saving=5.0),
            Candidate(start=3, length=2, saving=5.0),
        ]
        assert rank_candidates(candidates) == candidates

"""Tests for weighted selection over labelled outcomes."""

import random

import pytest

from equine.genetics.weighted import NO_SELECTION, select_weighted, valid_entries
from equine.util.rng import MissingRNGError


class TestSelectWeighted:
    def test_requires_rng(self):
        with pytest.raises(MissingRNGError):
            select_weighted({"a": 1.0})

    @pytest.mark.parametrize("weights", [{}, None, [("a", 1.0)], "a"])
    def test_empty_or_non_mapping_returns_sentinel(self, weights, seeded_rng):
        assert select_weighted(weights, rng=seeded_rng) is NO_SELECTION

    def test_all_invalid_weights_return_sentinel(self, seeded_rng):
        assert select_weighted({"a": -1, "b": "x", "c": None}, rng=seeded_rng) is NO_SELECTION

    def test_all_zero_returns_first_valid_without_draw(self, scripted_rng):
        rng = scripted_rng([])
        assert select_weighted({"bad": -1, "first": 0, "second": 0.0}, rng=rng) == "first"
        assert rng.float_calls == 0

    def test_walk_follows_iteration_order(self, scripted_rng):
        weights = {"a": 1.0, "b": 2.0, "c": 1.0}
        # total 4: a covers [0,1), b [1,3), c [3,4)
        assert select_weighted(weights, rng=scripted_rng([0.0])) == "a"
        assert select_weighted(weights, rng=scripted_rng([0.3])) == "b"
        assert select_weighted(weights, rng=scripted_rng([0.74])) == "b"
        assert select_weighted(weights, rng=scripted_rng([0.75])) == "c"

    def test_takes_exactly_one_draw(self, scripted_rng):
        rng = scripted_rng([0.5])
        select_weighted({"a": 1, "b": 1}, rng=rng)
        assert rng.exhausted

    def test_invalid_entries_never_chosen(self, seeded_rng):
        weights = {"neg": -5, "text": "heavy", "zero": 0, "ok": 0.2, "bool": True}
        for _ in range(200):
            assert select_weighted(weights, rng=seeded_rng) == "ok"

    def test_zero_weight_entries_never_chosen(self):
        rng = random.Random(7)
        weights = {"x": 0, "y": 3, "z": 0, "w": 1}
        picks = {select_weighted(weights, rng=rng) for _ in range(500)}
        assert picks == {"y", "w"}

    def test_float_drift_returns_last_positive_label(self, scripted_rng):
        # A draw of (almost) 1.0 scaled by the total can overshoot the walk
        weights = {"a": 0.1, "b": 0.2, "c": 0.0}
        assert select_weighted(weights, rng=scripted_rng([1.0])) == "b"

    def test_distribution_roughly_proportional(self):
        rng = random.Random(123)
        counts = {"a": 0, "b": 0}
        for _ in range(4000):
            counts[select_weighted({"a": 1, "b": 3}, rng=rng)] += 1
        assert counts["b"] / 4000 == pytest.approx(0.75, abs=0.03)


class TestValidEntries:
    def test_filters_and_keeps_order(self):
        entries = valid_entries({"a": 1, "b": float("nan"), "c": 2.5, "d": False, "e": float("inf")})
        assert entries == [("a", 1.0), ("c", 2.5)]

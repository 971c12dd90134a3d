from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from prizewheel.engine import WeightedEntry, draw_uniform, draw_weighted, pick_weighted

POOL_C = [
    WeightedEntry("250", 1),
    WeightedEntry("150", 1),
    WeightedEntry("100", 1),
    WeightedEntry("50", 1),
    WeightedEntry("25", 1),
    WeightedEntry("5", 1),
    WeightedEntry("FREE SPINS", 100),
]


class FixedSource:
    """Random source replaying preset draw values, then always the lowest."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return self.values.pop(0) if self.values else low


def test_pick_weighted_boundaries_of_pool_c():
    assert pick_weighted(POOL_C, 105) == "FREE SPINS"
    assert pick_weighted(POOL_C, 6) == "FREE SPINS"
    assert pick_weighted(POOL_C, 5) == "5"
    assert pick_weighted(POOL_C, 0) == "250"


def test_draw_weighted_uses_value_in_total_weight_range():
    source = FixedSource(105, 0)

    assert draw_weighted(POOL_C, source) == "FREE SPINS"
    assert draw_weighted(POOL_C, source) == "250"
    assert source.calls == [(0, 106), (0, 106)]


def test_pick_weighted_rejects_out_of_range_value():
    with pytest.raises(ValueError):
        pick_weighted(POOL_C, 106)
    with pytest.raises(ValueError):
        pick_weighted(POOL_C, -1)


def test_each_entry_covers_exactly_its_weight_regardless_of_order():
    pool = [WeightedEntry("a", 3), WeightedEntry("b", 0), WeightedEntry("c", 5), WeightedEntry("d", 2)]

    for ordering in (pool, list(reversed(pool))):
        counts = Counter(pick_weighted(ordering, value) for value in range(10))
        assert counts == Counter({"c": 5, "a": 3, "d": 2})


def test_weighted_frequencies_converge_to_weight_ratio():
    rng = np.random.default_rng(2024)
    draws = 100_000

    counts = Counter(draw_weighted(POOL_C, rng) for _ in range(draws))

    for entry in POOL_C:
        expected = entry.weight / 106
        assert abs(counts[entry.reward] / draws - expected) < 0.005


def test_draw_weighted_rejects_zero_weight_pool():
    with pytest.raises(ValueError, match="must be > 0"):
        draw_weighted([WeightedEntry("a", 0)], FixedSource(0))


def test_draw_uniform_picks_by_index():
    assert draw_uniform(("x", "y", "z"), FixedSource(2)) == "z"
    with pytest.raises(ValueError):
        draw_uniform((), FixedSource(0))

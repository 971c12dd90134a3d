"""Weighted and uniform picks over an injectable random source."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from .registry import WeightedEntry

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` used by the engine."""

    def integers(self, low: int, high: int) -> Any:
        """Return a uniform integer in ``[low, high)``."""

    def permutation(self, x: int) -> Any:
        """Return a random permutation of ``range(x)``; only needed for shuffled templates."""


def total_weight(pool: Sequence[WeightedEntry]) -> int:
    return sum(entry.weight for entry in pool)


def pick_weighted(pool: Sequence[WeightedEntry], value: int) -> str:
    """Map a draw value in ``[0, total_weight)`` onto a reward.

    Returns the first entry whose cumulative weight exceeds ``value``, so each
    entry covers exactly ``weight`` consecutive values.
    """
    total = total_weight(pool)
    if not 0 <= value < total:
        raise ValueError(f"value must be in [0, {total}), got {value}.")

    cumulative = 0
    for entry in pool:
        cumulative += entry.weight
        if cumulative > value:
            return entry.reward

    raise AssertionError("unreachable: cumulative weight must exceed value")


def draw_weighted(pool: Sequence[WeightedEntry], rng: RandomSource) -> str:
    """Draw a reward with probability ``weight / total_weight``."""
    total = total_weight(pool)
    if total <= 0:
        raise ValueError("Sum of weights must be > 0.")
    return pick_weighted(pool, int(rng.integers(0, total)))


def draw_uniform(items: Sequence[T], rng: RandomSource) -> T:
    """Draw one item uniformly at random."""
    if not items:
        raise ValueError("items cannot be empty.")
    return items[int(rng.integers(0, len(items)))]

from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from prizewheel.config import WheelConfig
from prizewheel.engine import ConfigError
from prizewheel.wheel import SectorLayout


class FixedSource:
    """Random source replaying preset draw values, then always the lowest."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return self.values.pop(0) if self.values else low


def test_sectors_are_evenly_spaced():
    layout = SectorLayout(["a", "b", "c", "d"])

    assert len(layout) == 4
    assert [sector.angle for sector in layout.sectors] == [0.0, 90.0, 180.0, 270.0]
    assert [sector.index for sector in layout.sectors] == [0, 1, 2, 3]


def test_indices_for_duplicated_reward():
    layout = SectorLayout(WheelConfig().sectors)

    assert layout.indices_for("1000") == (0, 10)
    assert layout.indices_for("500") == (1, 8, 11)
    assert layout.indices_for("FREE SPINS") == (9,)
    assert layout.indices_for("7") == ()


def test_resolve_picks_among_matching_sectors_only():
    layout = SectorLayout(["A", "B", "A", "C"])

    assert layout.resolve("A", FixedSource(1)).index == 2
    assert layout.resolve("C", FixedSource(0)).index == 3


def test_resolve_is_uniform_over_duplicates():
    layout = SectorLayout(["A", "B", "A", "A"])
    rng = np.random.default_rng(8)

    counts = Counter(layout.resolve("A", rng).index for _ in range(30_000))

    assert set(counts) == {0, 2, 3}
    for index in (0, 2, 3):
        assert abs(counts[index] / 30_000 - 1 / 3) < 0.02


def test_resolve_without_sector_is_config_error():
    layout = SectorLayout(["A"])

    with pytest.raises(ConfigError, match="no sector"):
        layout.resolve("B", FixedSource(0))


def test_ensure_covers_names_orphans():
    layout = SectorLayout(["A", "B"])

    layout.ensure_covers({"A", "B"})
    with pytest.raises(ConfigError, match=r"\['C', 'D'\]"):
        layout.ensure_covers({"A", "C", "D"})


def test_empty_layout_is_config_error():
    with pytest.raises(ConfigError):
        SectorLayout([])

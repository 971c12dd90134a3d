"""Wheel sectors and reward-to-sector resolution."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from prizewheel.engine.errors import ConfigError
from prizewheel.engine.sampler import RandomSource, draw_uniform

FULL_TURN_DEGREES = 360.0


@dataclass(frozen=True)
class Sector:
    """One wheel segment bound to a reward token."""

    index: int
    reward: str
    angle: float


class SectorLayout:
    """Ordered sectors of the wheel, evenly spaced around a full turn.

    Several sectors may carry the same reward. Which one is chosen only moves
    where the wheel stops; the reward probability comes from the pools.
    """

    def __init__(self, rewards: Sequence[str]) -> None:
        if not rewards:
            raise ConfigError("Wheel must have at least one sector.")

        step = FULL_TURN_DEGREES / len(rewards)
        self.sectors = tuple(
            Sector(index=index, reward=reward, angle=step * index)
            for index, reward in enumerate(rewards)
        )
        by_reward: dict[str, list[int]] = defaultdict(list)
        for sector in self.sectors:
            by_reward[sector.reward].append(sector.index)
        self._indices = {reward: tuple(indices) for reward, indices in by_reward.items()}

    def __len__(self) -> int:
        return len(self.sectors)

    @property
    def rewards(self) -> frozenset[str]:
        return frozenset(self._indices)

    def indices_for(self, reward: str) -> tuple[int, ...]:
        """Indices of all sectors carrying ``reward``; empty when none do."""
        return self._indices.get(reward, ())

    def resolve(self, reward: str, rng: RandomSource) -> Sector:
        """Pick uniformly one sector among those carrying ``reward``."""
        indices = self.indices_for(reward)
        if not indices:
            raise ConfigError(f"Reward '{reward}' has no sector on the wheel.")
        return self.sectors[draw_uniform(indices, rng)]

    def ensure_covers(self, rewards: Iterable[str]) -> None:
        """Raise ConfigError unless every reward has at least one sector."""
        orphans = sorted(set(rewards).difference(self._indices))
        if orphans:
            raise ConfigError(f"Rewards without a wheel sector: {orphans}")

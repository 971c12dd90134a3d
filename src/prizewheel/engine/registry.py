"""Static registry of weighted reward pools and per-stream bucket templates."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .errors import ConfigError

if TYPE_CHECKING:
    from prizewheel.config import WheelConfig


class StreamKind(str, Enum):
    """Independent draw sequences of the wheel."""

    MAIN = "main"
    BONUS = "bonus"


@dataclass(frozen=True)
class WeightedEntry:
    """Reward token with its relative draw weight inside a pool."""

    reward: str
    weight: int


class RewardPoolRegistry:
    """Immutable pool and template lookup, validated once on construction."""

    def __init__(
        self,
        pools: Mapping[str, Iterable[WeightedEntry]],
        templates: Mapping[StreamKind, Sequence[str]],
    ) -> None:
        self._pools = {name: tuple(entries) for name, entries in pools.items()}
        self._templates = {StreamKind(kind): tuple(names) for kind, names in templates.items()}

        for name, entries in self._pools.items():
            self._validate_pool(name, entries)
        for kind in StreamKind:
            self._validate_template(kind)

    @classmethod
    def from_config(cls, config: WheelConfig) -> RewardPoolRegistry:
        """Build a registry from a validated wheel config."""
        pools = {
            name: [WeightedEntry(reward=entry.reward, weight=entry.weight) for entry in entries]
            for name, entries in config.pools.items()
        }
        templates = {
            StreamKind.MAIN: config.main_template,
            StreamKind.BONUS: config.bonus_template,
        }
        return cls(pools, templates)

    @property
    def pool_names(self) -> tuple[str, ...]:
        return tuple(self._pools)

    def get_pool(self, name: str) -> tuple[WeightedEntry, ...]:
        """Return the entries of a registered pool."""
        try:
            return self._pools[name]
        except KeyError:
            raise ConfigError(f"Unknown pool '{name}'.") from None

    def get_template(self, stream: StreamKind) -> tuple[str, ...]:
        """Return the bucket template (sequence of pool names) of a stream."""
        return self._templates[StreamKind(stream)]

    def rewards(self, stream: StreamKind) -> frozenset[str]:
        """Every reward the stream can produce, i.e. positive-weight tokens of its pools."""
        return frozenset(
            entry.reward
            for name in set(self.get_template(stream))
            for entry in self._pools[name]
            if entry.weight > 0
        )

    @staticmethod
    def _validate_pool(name: str, entries: tuple[WeightedEntry, ...]) -> None:
        if not entries:
            raise ConfigError(f"Pool '{name}' has no entries.")
        negative = [entry.reward for entry in entries if entry.weight < 0]
        if negative:
            raise ConfigError(f"Pool '{name}' has negative weights for rewards: {negative}")
        if sum(entry.weight for entry in entries) <= 0:
            raise ConfigError(f"Pool '{name}' has zero total weight.")

    def _validate_template(self, stream: StreamKind) -> None:
        template = self._templates.get(stream)
        if not template:
            raise ConfigError(f"Bucket template for stream '{stream.value}' is empty or missing.")
        unknown = sorted(set(template).difference(self._pools))
        if unknown:
            raise ConfigError(
                f"Bucket template for stream '{stream.value}' references unknown pools: {unknown}"
            )

"""Spin sequencing: busy guard, Main spin and the chained Bonus sequence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from prizewheel.config import WheelConfig
from prizewheel.engine import (
    ConfigError,
    RandomSource,
    RewardDistributionEngine,
    RewardPoolRegistry,
    StreamKind,
    UsageError,
)

from .sectors import Sector, SectorLayout

logger = logging.getLogger(__name__)


class SpinPhase(str, Enum):
    """Sequencing state of a wheel session."""

    IDLE = "idle"
    MAIN = "main"
    BONUS = "bonus"


@dataclass(frozen=True)
class SpinStep:
    """One draw resolved to the sector the wheel must stop on."""

    stream: StreamKind
    reward: str
    sector: Sector

    def as_dict(self) -> dict[str, Any]:
        return {
            "stream": self.stream.value,
            "reward": self.reward,
            "sector": self.sector.index,
            "angle": self.sector.angle,
        }


@dataclass(frozen=True)
class SpinResult:
    """Main spin plus the bonus spins it triggered, if any."""

    main: SpinStep
    bonus: tuple[SpinStep, ...] = field(default_factory=tuple)
    bonus_total: int = 0
    triggered_bonus: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "main": self.main.as_dict(),
            "bonus": [step.as_dict() for step in self.bonus],
            "bonus_total": self.bonus_total,
            "triggered_bonus": self.triggered_bonus,
        }


class WheelSession:
    """Run spins one at a time against a distribution engine.

    ``spin`` computes the whole outcome up front and leaves the session busy
    while the presentation layer animates it; ``finish`` is the spin finished
    signal that returns the session to idle.
    """

    def __init__(
        self,
        engine: RewardDistributionEngine,
        layout: SectorLayout,
        *,
        free_spins: int = 3,
        bonus_trigger: str = "FREE SPINS",
        rng: RandomSource | None = None,
    ) -> None:
        if free_spins < 0:
            raise ConfigError("free_spins must be >= 0.")

        registry = engine.registry
        layout.ensure_covers(registry.rewards(StreamKind.MAIN))
        layout.ensure_covers(registry.rewards(StreamKind.BONUS))
        self._bonus_amounts = self._parse_bonus_amounts(registry)

        self.engine = engine
        self.layout = layout
        self.free_spins = free_spins
        self.bonus_trigger = bonus_trigger
        self.rng = rng if rng is not None else np.random.default_rng()

        self._phase = SpinPhase.IDLE
        self._spins = 0
        self._rejected = 0

    @classmethod
    def from_config(cls, config: WheelConfig, seed: int | None = None) -> WheelSession:
        """Wire registry, engine and sectors from config; ``seed`` overrides ``config.seed``."""
        root = np.random.SeedSequence(seed if seed is not None else config.seed)
        engine_seed, sector_seed = root.spawn(2)

        engine = RewardDistributionEngine(
            RewardPoolRegistry.from_config(config),
            seed=engine_seed,
            shuffle_templates=config.shuffle_templates,
        )
        return cls(
            engine,
            SectorLayout(config.sectors),
            free_spins=config.free_spins,
            bonus_trigger=config.bonus_trigger,
            rng=np.random.default_rng(sector_seed),
        )

    @property
    def phase(self) -> SpinPhase:
        return self._phase

    @property
    def busy(self) -> bool:
        return self._phase is not SpinPhase.IDLE

    @property
    def spins(self) -> int:
        """Number of spins that reached the finished signal."""
        return self._spins

    @property
    def rejected_spins(self) -> int:
        return self._rejected

    def begin(self) -> None:
        """Enter the Main phase, raising UsageError if a spin is in flight."""
        if self.busy:
            raise UsageError(f"Spin already in progress (phase={self._phase.value}).")
        self._phase = SpinPhase.MAIN

    def spin(self) -> SpinResult | None:
        """Run one Main spin and, when it hits the bonus trigger, the Bonus sequence.

        Returns None, without drawing, when a previous spin has not finished.
        """
        try:
            self.begin()
        except UsageError as exc:
            self._rejected += 1
            logger.warning("Ignoring spin request: %s", exc)
            return None

        main = self._step(StreamKind.MAIN)
        if main.reward != self.bonus_trigger:
            logger.info("Spin landed on %s (sector %d)", main.reward, main.sector.index)
            return SpinResult(main=main)

        self._phase = SpinPhase.BONUS
        bonus: list[SpinStep] = []
        total = 0
        for _ in range(self.free_spins):
            step = self._step(StreamKind.BONUS)
            total += self._bonus_amounts[step.reward]
            bonus.append(step)

        logger.info("Bonus triggered: %d free spins, total %d", len(bonus), total)
        return SpinResult(main=main, bonus=tuple(bonus), bonus_total=total, triggered_bonus=True)

    def finish(self) -> SpinPhase:
        """Signal that the in-flight spin finished animating."""
        if not self.busy:
            logger.debug("Finish signal received while idle; ignored.")
            return self._phase

        self._phase = SpinPhase.IDLE
        self._spins += 1
        return self._phase

    def _step(self, stream: StreamKind) -> SpinStep:
        reward = self.engine.draw(stream)
        return SpinStep(stream=stream, reward=reward, sector=self.layout.resolve(reward, self.rng))

    @staticmethod
    def _parse_bonus_amounts(registry: RewardPoolRegistry) -> dict[str, int]:
        amounts: dict[str, int] = {}
        for reward in registry.rewards(StreamKind.BONUS):
            try:
                amounts[reward] = int(reward)
            except ValueError:
                raise ConfigError(f"Bonus reward '{reward}' is not an integer amount.") from None
        return amounts

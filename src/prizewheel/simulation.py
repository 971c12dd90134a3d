"""Monte Carlo check of reward frequencies against the configured pools."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any

import pandas as pd

from prizewheel.config import WheelConfig
from prizewheel.engine import RewardPoolRegistry, StreamKind
from prizewheel.wheel import WheelSession


@dataclass(frozen=True)
class SimulationReport:
    """Observed versus expected reward frequencies for both streams."""

    spins: int
    main: pd.DataFrame
    bonus: pd.DataFrame
    trigger_rate: float
    mean_bonus_total: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "spins": self.spins,
            "trigger_rate": self.trigger_rate,
            "mean_bonus_total": self.mean_bonus_total,
            "main": self.main.to_dict(orient="index"),
            "bonus": self.bonus.to_dict(orient="index"),
        }

    def to_markdown(self) -> str:
        return "\n".join(
            [
                "## Wheel Simulation",
                "",
                f"- Spins: {self.spins}",
                f"- Bonus Trigger Rate: {self.trigger_rate:.4f}",
                f"- Mean Bonus Total per Trigger: {self.mean_bonus_total:.2f}",
                "",
                "## Main Stream",
                _format_frame(self.main),
                "",
                "## Bonus Stream",
                _format_frame(self.bonus),
            ]
        )


def expected_distribution(registry: RewardPoolRegistry, stream: StreamKind) -> pd.Series:
    """Probability of each reward per draw, averaged over one template cycle."""
    template = registry.get_template(stream)
    probabilities: Counter[str] = Counter()
    for pool_name in template:
        pool = registry.get_pool(pool_name)
        total = sum(entry.weight for entry in pool)
        for entry in pool:
            probabilities[entry.reward] += entry.weight / total / len(template)

    series = pd.Series(dict(probabilities), dtype="float64", name="expected")
    return series[series > 0].sort_index()


def simulate(config: WheelConfig, spins: int, seed: int | None = None) -> SimulationReport:
    """Run ``spins`` full spins through a fresh session and tabulate outcomes."""
    if spins <= 0:
        raise ValueError("spins must be > 0.")

    session = WheelSession.from_config(config, seed=seed)
    main_rewards: list[str] = []
    bonus_rewards: list[str] = []
    bonus_totals: list[int] = []

    for _ in range(spins):
        result = session.spin()
        if result is None:
            raise RuntimeError("Session rejected a spin during simulation.")
        main_rewards.append(result.main.reward)
        if result.triggered_bonus:
            bonus_rewards.extend(step.reward for step in result.bonus)
            bonus_totals.append(result.bonus_total)
        session.finish()

    registry = session.engine.registry
    return SimulationReport(
        spins=spins,
        main=_compare(expected_distribution(registry, StreamKind.MAIN), main_rewards),
        bonus=_compare(expected_distribution(registry, StreamKind.BONUS), bonus_rewards),
        trigger_rate=main_rewards.count(config.bonus_trigger) / spins,
        mean_bonus_total=float(pd.Series(bonus_totals, dtype="float64").mean()) if bonus_totals else 0.0,
    )


def _compare(expected: pd.Series, rewards: list[str]) -> pd.DataFrame:
    counts = pd.Series(rewards, dtype="object").value_counts()
    frame = pd.DataFrame({"expected": expected})
    frame["count"] = counts.reindex(frame.index, fill_value=0).astype(int)
    frame["observed"] = frame["count"] / len(rewards) if rewards else 0.0
    frame["diff"] = frame["observed"] - frame["expected"]
    return frame


def _format_frame(frame: pd.DataFrame) -> str:
    lines = [f"{'Reward':<12} {'Expected':>10} {'Observed':>10} {'Count':>8}"]
    for reward, row in frame.iterrows():
        lines.append(f"{reward:<12} {row['expected']:>10.4f} {row['observed']:>10.4f} {int(row['count']):>8}")
    return "\n".join(lines)

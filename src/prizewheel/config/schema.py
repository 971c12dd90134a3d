"""Pydantic schema for wheel configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SECTORS = [
    "1000", "500", "250", "150", "100", "50", "25", "5", "500",
    "FREE SPINS", "1000", "500", "250", "150", "100", "50", "25", "5",
]

SMALL_PRIZES = ["250", "150", "100", "50", "25", "5"]


class PoolEntry(BaseModel):
    """One weighted reward inside a pool."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    reward: str = Field(min_length=1)
    weight: int = Field(ge=0)


def _default_pools() -> dict[str, list[PoolEntry]]:
    small = [PoolEntry(reward=reward, weight=1) for reward in SMALL_PRIZES]
    return {
        "POOL_0": [PoolEntry(reward="1000", weight=1)],
        "POOL_1": [PoolEntry(reward="500", weight=1)],
        "POOL_C": [*small, PoolEntry(reward="FREE SPINS", weight=100)],
        "POOL_FS": list(small),
    }


class WheelConfig(BaseModel):
    """Validated wheel configuration with the stock wheel as defaults."""

    model_config = ConfigDict(extra="forbid")

    free_spins: int = Field(default=3, ge=0)
    sectors: list[str] = Field(default_factory=lambda: list(DEFAULT_SECTORS), min_length=1)
    pools: dict[str, list[PoolEntry]] = Field(default_factory=_default_pools, min_length=1)
    main_template: list[str] = Field(
        default_factory=lambda: ["POOL_0"] * 3 + ["POOL_1"] * 2 + ["POOL_C"] * 5,
        min_length=1,
    )
    bonus_template: list[str] = Field(default_factory=lambda: ["POOL_FS"] * 3, min_length=1)
    bonus_trigger: str = Field(default="FREE SPINS", min_length=1)

    spin_duration: float = Field(default=3.0, gt=0.0)
    shuffle_templates: bool = False
    seed: int | None = Field(default=None, ge=0)

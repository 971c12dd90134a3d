"""Reward pools, weighted sampling and the distribution engine."""

from .distribution import RewardDistributionEngine
from .errors import ConfigError, UsageError
from .registry import RewardPoolRegistry, StreamKind, WeightedEntry
from .sampler import RandomSource, draw_uniform, draw_weighted, pick_weighted

__all__ = [
    "ConfigError",
    "RandomSource",
    "RewardDistributionEngine",
    "RewardPoolRegistry",
    "StreamKind",
    "UsageError",
    "WeightedEntry",
    "draw_uniform",
    "draw_weighted",
    "pick_weighted",
]

"""Bucketed reward distribution engine with independent Main and Bonus cursors."""

from __future__ import annotations

import logging

import numpy as np

from .registry import RewardPoolRegistry, StreamKind
from .sampler import RandomSource, draw_weighted

logger = logging.getLogger(__name__)


class RewardDistributionEngine:
    """Walk each stream's bucket template and draw a weighted reward per step.

    Every stream owns a cursor and a random generator. Generators are spawned
    from one seed sequence, so draws on one stream never change the values
    another stream receives. Passing ``rng`` shares a single source between
    both streams; cursors stay independent either way.
    """

    def __init__(
        self,
        registry: RewardPoolRegistry,
        *,
        seed: int | np.random.SeedSequence | None = None,
        rng: RandomSource | None = None,
        shuffle_templates: bool = False,
    ) -> None:
        self.registry = registry
        self.shuffle_templates = shuffle_templates

        if rng is not None:
            self._rngs: dict[StreamKind, RandomSource] = {kind: rng for kind in StreamKind}
        else:
            root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
            children = root.spawn(len(StreamKind))
            self._rngs = {
                kind: np.random.default_rng(child) for kind, child in zip(StreamKind, children)
            }

        self._cursors = {kind: 0 for kind in StreamKind}
        self._schedules = {kind: registry.get_template(kind) for kind in StreamKind}
        self._cycles = {kind: 0 for kind in StreamKind}

    def draw(self, stream: StreamKind) -> str:
        """Draw the next reward of a stream and advance its cursor."""
        kind = StreamKind(stream)
        position = self._cursors[kind]
        if position == 0:
            self._schedules[kind] = self._fresh_schedule(kind)

        schedule = self._schedules[kind]
        pool_name = schedule[position]
        reward = draw_weighted(self.registry.get_pool(pool_name), self._rngs[kind])

        position += 1
        if position == len(schedule):
            position = 0
            self._cycles[kind] += 1
        self._cursors[kind] = position

        logger.debug("draw stream=%s pool=%s reward=%s next=%d", kind.value, pool_name, reward, position)
        return reward

    def position(self, stream: StreamKind) -> int:
        """Current cursor of a stream within its bucket template."""
        return self._cursors[StreamKind(stream)]

    def cycles(self, stream: StreamKind) -> int:
        """Number of completed template cycles on a stream."""
        return self._cycles[StreamKind(stream)]

    def _fresh_schedule(self, stream: StreamKind) -> tuple[str, ...]:
        template = self.registry.get_template(stream)
        if not self.shuffle_templates:
            return template
        order = self._rngs[stream].permutation(len(template))
        return tuple(template[int(index)] for index in order)

"""
Enemy Spawner
==============
Time-accumulator enemy spawning and the kill-driven difficulty curve.

The spawner only accumulates time and fires; the orchestrator decides
the interval each tick with spawn_interval().
"""

import logging
import random
from typing import Optional

from .ecs import World
from .config import GameConfig
from .enemies import create_enemy


logger = logging.getLogger(__name__)


def spawn_interval(kills: int, config: GameConfig) -> float:
    """
    Seconds between spawns for a kill count.

    Drops by a fixed step for every `kills_per_step` kills and never
    goes below `min_spawn_interval`.
    """
    steps = kills // config.kills_per_step
    interval = config.base_spawn_interval - config.spawn_interval_step * steps
    return max(config.min_spawn_interval, interval)


class EnemySpawner:
    """Spawns one enemy whenever the accumulated time reaches the interval."""

    def __init__(self, world: World, config: GameConfig, rng: random.Random):
        self.world = world
        self.config = config
        self.rng = rng
        # Start full so the first tick spawns immediately
        self.since_spawn = config.base_spawn_interval
        self.spawned = 0

    def reset(self) -> None:
        self.since_spawn = self.config.base_spawn_interval
        self.spawned = 0

    def update(self, dt: float, interval: float) -> Optional[int]:
        """Accumulate dt; spawn and return the new enemy id when due."""
        self.since_spawn += dt
        if self.since_spawn >= interval:
            self.since_spawn = 0.0
            return self.spawn_enemy()
        return None

    def spawn_enemy(self) -> int:
        eid = create_enemy(self.world, self.config, self.rng)
        self.spawned += 1
        logger.debug('Spawned enemy %d (total %d)', eid, self.spawned)
        return eid

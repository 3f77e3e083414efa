"""
Enemies
========
Enemy creation and motion.

Enemies enter above the visible field at a random column, drift
sideways at a constant rate and fall with a vertical speed that is
a quartic function of their age.
"""

import math
import random
from typing import List

from .ecs import World
from .components import (
    Position, Velocity, Size, Age, Health, Renderable,
    ParticleTrail, EnemyTag
)
from .config import GameConfig
from .particles import update_trail, tick_emitter
from . import assets


def fall_speed(age: float, config: GameConfig) -> float:
    """Vertical speed in px per tick: (k * (age - offset)) ** 4."""
    return (config.enemy_fall_scale * (age - config.enemy_fall_offset)) ** 4


def create_enemy(world: World, config: GameConfig, rng: random.Random) -> int:
    """Create an enemy at a random column above the play field."""
    entity_id = world.create_entity()

    x = math.floor(rng.random() * (config.field_width - config.enemy_width))
    drift = config.enemy_drift * 2 * (rng.random() - 0.5)

    world.add_component(entity_id, Position(x, config.enemy_spawn_y))
    world.add_component(entity_id, Velocity(drift, 0.0))
    world.add_component(entity_id, Size(config.enemy_width, config.enemy_height))
    world.add_component(entity_id, Age(0.0))
    world.add_component(entity_id, Health(1, 1))
    world.add_component(entity_id, Renderable(sprite=assets.ENEMY))
    world.add_component(entity_id, ParticleTrail(since_emit=config.particle_interval))
    world.add_component(entity_id, EnemyTag())

    return entity_id


def enemy_system(world: World, dt: float, config: GameConfig,
                 rng: random.Random) -> List[int]:
    """
    Advance every enemy: age, particles, position, then vertical speed.

    Enemies that fall past the bottom edge are destroyed.
    Returns the ids of escaped enemies.
    """
    escaped = []
    for entity_id, pos, vel, size, age, trail, _ in world.query(
        Position, Velocity, Size, Age, ParticleTrail, EnemyTag
    ):
        age.seconds += dt
        update_trail(trail, dt, config)

        pos.x += vel.x
        pos.y = math.ceil(pos.y + vel.y)
        vel.y = fall_speed(age.seconds, config)

        if pos.y > config.field_height:
            escaped.append(entity_id)
            world.destroy_entity(entity_id)
            continue

        tick_emitter(trail, dt, pos, size, vel, config, rng)

    return escaped

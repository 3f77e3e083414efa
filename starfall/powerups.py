"""
Powerups
=========
Milestone drops, their fall, and their pickup effects.
"""

import logging
from typing import List, Optional

from .ecs import World
from .components import (
    Position, Velocity, Size, Age, Renderable, Powerup, PowerupKind,
    PowerupTag, PlayerControlled, Weapon
)
from .config import GameConfig
from . import assets


logger = logging.getLogger(__name__)

POWERUP_SPRITES = {
    PowerupKind.BOMB: assets.BOMB_POWERUP,
    PowerupKind.SPEED: assets.SPEED_POWERUP,
}


def milestone_powerup(kills: int, config: GameConfig) -> Optional[PowerupKind]:
    """
    Which powerup a kill count earns, if any.

    The speed milestone is checked first, so the kill count that also
    satisfies the bomb rule (100) yields a speed powerup only.
    """
    if kills <= 0:
        return None
    if kills == config.speed_powerup_kills:
        return PowerupKind.SPEED
    if kills % config.bomb_powerup_every == 0:
        return PowerupKind.BOMB
    return None


def spawn_powerup(world: World, kind: PowerupKind, x: float, y: float,
                  config: GameConfig) -> int:
    """Create a powerup of the given kind at a canvas position."""
    eid = world.create_entity()

    world.add_component(eid, Position(x, y))
    world.add_component(eid, Velocity(0.0, 0.0))
    world.add_component(eid, Size(config.powerup_size, config.powerup_size))
    world.add_component(eid, Age(0.0))
    world.add_component(eid, Renderable(sprite=POWERUP_SPRITES[kind]))
    world.add_component(eid, Powerup(kind))
    world.add_component(eid, PowerupTag())

    logger.info('Spawned %s powerup at (%.0f, %.0f)', kind.name.lower(), x, y)
    return eid


def powerup_system(world: World, dt: float, config: GameConfig) -> List[int]:
    """
    Drift powerups downward with a speed growing linearly with age.

    Powerups that fall past the bottom edge are destroyed.
    Returns the ids of the ones lost.
    """
    lost = []
    for eid, pos, vel, age, _ in world.query(Position, Velocity, Age, PowerupTag):
        age.seconds += dt
        vel.x = 0.0
        vel.y = age.seconds
        pos.x += vel.x
        pos.y += vel.y

        if pos.y > config.field_height:
            lost.append(eid)
            world.destroy_entity(eid)
    return lost


def apply_powerup(kind: PowerupKind, control: PlayerControlled, weapon: Weapon,
                  config: GameConfig) -> None:
    """Apply the pickup effect of a powerup kind to the player."""
    if kind is PowerupKind.BOMB:
        control.bombs += 1
    elif kind is PowerupKind.SPEED:
        weapon.fire_delay = config.boosted_fire_delay
        weapon.laser_color = config.boosted_laser_color
    else:
        raise ValueError(f'unhandled powerup kind: {kind!r}')
    logger.info('Collected %s powerup', kind.name.lower())

"""
Laser System
=============
Laser lifecycle: spawn, move, collide, purge.

A laser that hits an enemy is only flagged; it is purged on the
lifecycle pass that follows, never while lasers are being iterated.
"""

from typing import List

from .ecs import World
from .components import (
    Position, Velocity, Size, Renderable, LaserState, LaserTag,
    Weapon, EnemyTag
)
from .collision import overlapping
from .config import GameConfig


def spawn_laser(world: World, player_pos: Position, player_size: Size,
                weapon: Weapon, config: GameConfig) -> int:
    """Spawn a laser at the top-center of the player ship."""
    eid = world.create_entity()

    world.add_component(eid, Position(player_pos.x + player_size.width / 2, player_pos.y))
    world.add_component(eid, Velocity(0.0, -config.laser_speed))
    world.add_component(eid, Size(config.laser_width, config.laser_height))
    world.add_component(eid, Renderable(color=weapon.laser_color))
    world.add_component(eid, LaserState())
    world.add_component(eid, LaserTag())

    return eid


def laser_system(world: World, dt: float) -> List[dict]:
    """
    Move every laser, then test it against every live enemy.

    Each overlapping enemy is destroyed and reported; the laser is
    flagged collided. Returns a list of event dicts, one per kill,
    in the order the hits happened.
    """
    events = []

    for laser_id, pos, vel, laser, _ in world.query(
        Position, Velocity, LaserState, LaserTag
    ):
        pos.y += vel.y * dt

        for enemy_id, e_pos, _ in overlapping(world, laser_id, EnemyTag):
            events.append({
                'type': 'enemy_killed',
                'entity_id': enemy_id,
                'x': e_pos.x,
                'y': e_pos.y,
                'laser_id': laser_id,
            })
            world.destroy_entity(enemy_id)
            laser.collided = True

    return events


def purge_lasers(world: World) -> int:
    """Destroy lasers that left the top of the field or hit something."""
    purged = 0
    for laser_id, pos, laser in world.query(Position, LaserState):
        if pos.y <= 0 or laser.collided:
            world.destroy_entity(laser_id)
            purged += 1
    return purged

"""
Collision Detection
====================
Axis-aligned bounding box tests between entity families.

Boxes that merely touch along an edge do not collide: every
half-plane test is strict.
"""

from typing import Iterator, Tuple, Type

from .ecs import World
from .components import Position, Size


def aabb_overlap(ax: float, ay: float, aw: float, ah: float,
                 bx: float, by: float, bw: float, bh: float) -> bool:
    """True when the two boxes share interior area."""
    return (
        ax < bx + bw and
        ax + aw > bx and
        ay < by + bh and
        ay + ah > by
    )


def boxes_overlap(pos_a: Position, size_a: Size, pos_b: Position, size_b: Size) -> bool:
    return aabb_overlap(pos_a.x, pos_a.y, size_a.width, size_a.height,
                        pos_b.x, pos_b.y, size_b.width, size_b.height)


def overlapping(world: World, entity_id: int,
                tag: Type) -> Iterator[Tuple[int, Position, Size]]:
    """
    Yield (id, position, size) of live entities carrying `tag` whose
    box overlaps the box of `entity_id`.

    Entities destroyed by the caller during iteration are skipped.
    """
    pos = world.get_component(entity_id, Position)
    size = world.get_component(entity_id, Size)
    if pos is None or size is None:
        return

    for other_id, o_pos, o_size, _ in world.query(Position, Size, tag):
        if other_id == entity_id:
            continue
        if boxes_overlap(pos, size, o_pos, o_size):
            yield other_id, o_pos, o_size

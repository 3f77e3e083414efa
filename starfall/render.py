"""
Render Pass
============
Draws a session through a render sink.

The sink is the only coupling to a display. Rects are
(x, y, width, height) in canvas pixels; the canvas is the play field
with the stat bar to its right.
"""

from typing import Optional, Tuple

from .components import (
    Position, Size, Renderable, ParticleTrail, EnemyTag, LaserTag,
    PowerupTag, PlayerTag
)
from . import assets


Rect = Tuple[float, float, float, float]

FIELD_COLOR = '#3f3073'
STAT_BAR_COLOR = '#70140d'
TEXT_COLOR = '#ffffff'
PARTICLE_COLOR = '#ffffff'
PARTICLE_SIZE = 5
STAT_LINE_HEIGHT = 30


class RenderSink:
    """Drawing primitives a display must provide."""

    def draw_sprite(self, image, dest: Rect, src: Optional[Rect] = None) -> None:
        raise NotImplementedError

    def fill_rect(self, rect: Rect, color: str) -> None:
        raise NotImplementedError

    def set_global_alpha(self, value: float) -> None:
        raise NotImplementedError

    def draw_text(self, text: str, position: Tuple[float, float]) -> None:
        raise NotImplementedError


def draw_trail(trail: ParticleTrail, sink: RenderSink) -> None:
    for particle in trail.particles:
        if particle.opacity is None:
            continue
        sink.set_global_alpha(particle.opacity)
        sink.fill_rect((particle.x, particle.y, PARTICLE_SIZE, PARTICLE_SIZE), PARTICLE_COLOR)
    sink.set_global_alpha(1.0)


def draw_entities(world, sink: RenderSink) -> None:
    """Player, enemies (with their trails), lasers, then powerups."""
    for tag in (PlayerTag, EnemyTag):
        for eid, pos, size, rend, _ in world.query(Position, Size, Renderable, tag):
            if not rend.visible:
                continue
            trail = world.get_component(eid, ParticleTrail)
            if trail is not None:
                draw_trail(trail, sink)
            sink.draw_sprite(rend.sprite, (pos.x, pos.y, rend.sprite.width, rend.sprite.height))

    for _, pos, size, rend, _ in world.query(Position, Size, Renderable, LaserTag):
        sink.fill_rect((pos.x, pos.y, size.width, size.height), rend.color)

    for _, pos, size, rend, _ in world.query(Position, Size, Renderable, PowerupTag):
        sink.draw_sprite(rend.sprite, (pos.x, pos.y, size.width, size.height))


def draw_stat_bar(game, sink: RenderSink) -> None:
    """Stats panel to the right of the field."""
    config = game.config
    left = config.field_width
    sink.fill_rect((left, 0, config.stat_bar_width, config.field_height), STAT_BAR_COLOR)

    lines = [
        f'HP: {game.player_health}',
        f'# of kills: {game.kills}',
        f'Time: {game.time_string}',
        f'Score: {game.score}',
        f'Enemies: {len(game.enemies)}',
        f'Bombs: {game.bombs}',
    ]
    sink.draw_text('Stats', (left + 50, 20))
    for i, line in enumerate(lines):
        sink.draw_text(line, (left + 15, 50 + i * STAT_LINE_HEIGHT))


def draw_hints(game, sink: RenderSink) -> None:
    """Control hints, fading out shortly after the session starts."""
    opacity = game.hint_opacity
    if opacity <= 0.01:
        return
    width = game.config.field_width
    sink.set_global_alpha(opacity)
    sink.draw_sprite(assets.ARROW_KEYS, (15, 8, assets.ARROW_KEYS.width, assets.ARROW_KEYS.height))
    sink.draw_sprite(assets.Z_KEY, (width - assets.Z_KEY.width - 60, 20,
                                    assets.Z_KEY.width, assets.Z_KEY.height))
    sink.draw_sprite(assets.X_KEY, (width - assets.X_KEY.width - 12, 20,
                                    assets.X_KEY.width, assets.X_KEY.height))
    sink.set_global_alpha(1.0)


def draw_game(game, sink: RenderSink) -> None:
    """Draw one frame of a GameManager session."""
    config = game.config

    sink.set_global_alpha(0.3)
    sink.fill_rect((0, 0, config.field_width, config.field_height), FIELD_COLOR)
    sink.set_global_alpha(1.0)

    for animation in game.animations:
        animation.draw(sink)

    draw_entities(game.world, sink)
    draw_stat_bar(game, sink)
    draw_hints(game, sink)

    if game.game_over:
        retry = assets.RETRY_KEY
        sink.draw_sprite(retry, (config.field_width / 2 - retry.width, config.field_height / 2,
                                 retry.width, retry.height))

"""
Game Configuration
===================
Every tunable constant of a session, gathered in one dataclass.

A GameConfig is handed to the GameManager and from there to each
system; nothing reads configuration from module globals.
"""

from dataclasses import dataclass, fields, replace, asdict
from typing import Any, Dict, Mapping

from .errors import InvalidArgument


@dataclass(frozen=True)
class GameConfig:
    """Session constants. Distances are canvas pixels, times are seconds."""

    # Play field (the stat bar sits to the right of it)
    field_width: int = 450
    field_height: int = 600
    stat_bar_width: int = 150

    # Fixed update rate
    fps: int = 60

    # Player
    player_speed: float = 250.0
    player_health: int = 50
    player_width: float = 34.0
    player_height: float = 37.0
    player_spawn_offset: float = 100.0  # distance of spawn point above the bottom edge
    contact_damage: int = 5
    starting_bombs: int = 3

    # Enemies and spawning
    enemy_width: float = 22.0
    enemy_height: float = 23.0
    enemy_spawn_y: float = -10.0
    enemy_drift: float = 1.0  # max horizontal drift, px per tick
    enemy_fall_scale: float = 1.8
    enemy_fall_offset: float = 0.8
    base_spawn_interval: float = 0.5
    spawn_interval_step: float = 0.01
    kills_per_step: int = 5
    min_spawn_interval: float = 0.1

    # Lasers
    laser_width: float = 4.0
    laser_height: float = 10.0
    laser_speed: float = 500.0
    fire_delay: float = 0.15
    laser_color: str = '#1eff00'
    boosted_fire_delay: float = 0.07
    boosted_laser_color: str = '#1111ff'

    # Powerups
    powerup_size: float = 20.0
    speed_powerup_kills: int = 100
    bomb_powerup_every: int = 50

    # Particles
    particle_interval: float = 0.5
    particle_lifetime: float = 0.4
    particle_damping: float = -0.3
    particle_jitter: float = 0.3

    # Score
    points_per_kill: int = 30

    def __post_init__(self):
        self.validate()

    @property
    def tick(self) -> float:
        """Duration of one simulation step."""
        return 1.0 / self.fps

    @property
    def canvas_width(self) -> int:
        """Play field plus stat bar."""
        return self.field_width + self.stat_bar_width

    def validate(self) -> None:
        """Reject values the simulation cannot run with."""
        positive = (
            'field_width', 'field_height', 'fps', 'player_width',
            'player_height', 'enemy_width', 'enemy_height', 'laser_width',
            'laser_height', 'powerup_size', 'kills_per_step',
            'bomb_powerup_every', 'particle_interval', 'particle_lifetime',
            'base_spawn_interval', 'min_spawn_interval',
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise InvalidArgument(f'{name} must be positive, got {getattr(self, name)!r}')

        non_negative = (
            'stat_bar_width', 'player_speed', 'player_health', 'contact_damage',
            'starting_bombs', 'laser_speed', 'fire_delay', 'boosted_fire_delay',
            'enemy_drift', 'spawn_interval_step',
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise InvalidArgument(f'{name} must not be negative, got {getattr(self, name)!r}')

        if self.player_width > self.field_width or self.player_height > self.field_height:
            raise InvalidArgument('player does not fit inside the play field')
        if self.enemy_width > self.field_width:
            raise InvalidArgument('enemy does not fit inside the play field')

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GameConfig':
        """Build a config from a plain mapping. Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidArgument(f'unknown config keys: {", ".join(unknown)}')
        return cls(**dict(data))

    def with_overrides(self, **changes) -> 'GameConfig':
        """Return a copy with some values replaced (validated again)."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

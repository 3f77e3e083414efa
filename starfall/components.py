"""
Component Definitions
======================
All components are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Any
from enum import Enum, auto

from .errors import InvalidArgument


class EntityKind(Enum):
    """Entity families taking part in collisions."""
    PLAYER = auto()
    ENEMY = auto()
    LASER = auto()
    POWERUP = auto()


class PowerupKind(Enum):
    """Powerup variants. The pickup effect is chosen by kind."""
    BOMB = auto()
    SPEED = auto()


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Position:
    """Canvas position of the top-left corner, in pixels."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Velocity:
    """Movement velocity. Units depend on the owning system."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Size:
    """Axis-aligned bounding box dimensions in pixels."""
    width: float = 10.0
    height: float = 10.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgument(
                f'size must be positive, got {self.width}x{self.height}'
            )


@dataclass
class Age:
    """Seconds since the entity was spawned."""
    seconds: float = 0.0


# =============================================================================
# RENDERING COMPONENTS
# =============================================================================

@dataclass
class Renderable:
    """Visual representation: a sprite handle, or a flat color fill."""
    sprite: Any = None
    color: Optional[str] = None
    visible: bool = True


@dataclass
class Particle:
    """A single trail particle. Owned by a ParticleTrail, not an entity."""
    x: float
    y: float
    vx: float
    vy: float
    age: float = 0.0
    opacity: Optional[float] = None


@dataclass
class ParticleTrail:
    """Particles emitted behind an entity, oldest first."""
    particles: List[Particle] = field(default_factory=list)
    since_emit: float = 0.0


# =============================================================================
# COMBAT COMPONENTS
# =============================================================================

@dataclass
class Health:
    """Entity health pool."""
    current: int = 50
    maximum: int = 50

    def __post_init__(self):
        if self.maximum < 0:
            raise InvalidArgument(f'maximum health must not be negative, got {self.maximum}')


@dataclass
class Weapon:
    """Laser cannon settings. Changed by the speed powerup."""
    fire_delay: float = 0.15
    laser_color: str = '#1eff00'


@dataclass
class LaserState:
    """Laser flight data. collided is terminal once set."""
    collided: bool = False


@dataclass
class Powerup:
    """Collectible dropped at kill milestones."""
    kind: PowerupKind = PowerupKind.BOMB


# =============================================================================
# PLAYER COMPONENTS
# =============================================================================

@dataclass
class PlayerControlled:
    """Per-tick control state of the player ship."""
    since_fire: float = 0.0  # seconds since the last laser
    bombs: int = 3
    bomb_armed: bool = True  # cleared while the bomb action stays held
    intent_x: float = 0.0
    intent_y: float = 0.0


# =============================================================================
# TAG COMPONENTS (empty, used for queries)
# =============================================================================

@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class EnemyTag:
    """Marks an enemy entity."""
    pass


@dataclass
class LaserTag:
    """Marks a laser entity."""
    pass


@dataclass
class PowerupTag:
    """Marks a powerup entity."""
    pass


KIND_TAGS = (
    (EntityKind.PLAYER, PlayerTag),
    (EntityKind.ENEMY, EnemyTag),
    (EntityKind.LASER, LaserTag),
    (EntityKind.POWERUP, PowerupTag),
)

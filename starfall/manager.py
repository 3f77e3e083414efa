"""
Game Manager
=============
Owns one game session and drives it one fixed tick at a time.

Per-tick order:
    1. timed effects        5. powerups
    2. frame counter        6. stop here when the game is over
    3. enemies              7. player (input, move, attack, collide)
    4. lasers, then purge   8. spawner
                            9. game-over check and derived stats
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple
import logging
import math
import random

from .ecs import World
from .components import (
    Position, Size, Health, Renderable, ParticleTrail, PlayerControlled,
    Weapon, EnemyTag, LaserTag, PowerupTag, EntityKind, KIND_TAGS
)
from .config import GameConfig
from .errors import NoBombCharges
from .animation import Animation, advance_animations
from .enemies import enemy_system
from .projectiles import laser_system, purge_lasers, spawn_laser
from .powerups import powerup_system, milestone_powerup, spawn_powerup
from .spawner import EnemySpawner, spawn_interval
from .player import (
    InputSnapshot, NO_INPUT, create_player, player_tick, destroy_player
)
from .render import draw_game
from . import assets


logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session state machine."""
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class EntityView:
    """Read-only view of one entity for renderers."""
    entity_id: int
    kind: EntityKind
    x: float
    y: float
    width: float
    height: float
    sprite: object = None
    color: Optional[str] = None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer or a test may read about a session."""
    entities: Tuple[EntityView, ...]
    health: int
    kills: int
    bombs: int
    enemy_count: int
    time: str
    score: int
    game_over: bool


def hint_opacity(seconds: float) -> float:
    """Opacity of the control hints; fully faded about 2 s in."""
    return min(1.0, 1000 * math.exp(-6 * seconds))


class GameManager:
    """
    Central session container. Owns the entity registry, the timed
    effects, the spawner and every counter, and hands them explicitly
    to the systems.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(seed)
        self.world = World()
        self.spawner = EnemySpawner(self.world, self.config, self.rng)
        self.animations: List[Animation] = []
        self.hint_time = 0.0
        self._start_session()
        logger.info('Session started (%dx%d field)',
                    self.config.field_width, self.config.field_height)

    def _start_session(self):
        self.phase = Phase.PLAYING
        self.kills = 0
        self.frame_count = 0
        self.elapsed_seconds = 0
        self.minutes = 0
        self.seconds = 0
        self.score = 0
        self.spawn_interval = spawn_interval(0, self.config)
        self.player_id = create_player(self.world, self.config)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def enemies(self) -> List[int]:
        return list(self.world.get_entities_with(EnemyTag))

    @property
    def lasers(self) -> List[int]:
        return list(self.world.get_entities_with(LaserTag))

    @property
    def powerups(self) -> List[int]:
        return list(self.world.get_entities_with(PowerupTag))

    @property
    def player_health(self) -> int:
        return max(0, self.world.get_component(self.player_id, Health).current)

    @property
    def bombs(self) -> int:
        return self.world.get_component(self.player_id, PlayerControlled).bombs

    @property
    def time_string(self) -> str:
        return f'{self.minutes:02d}:{self.seconds:02d}'

    @property
    def hint_opacity(self) -> float:
        return hint_opacity(self.hint_time)

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def update(self, dt: float, snapshot: InputSnapshot = NO_INPUT) -> None:
        """Advance the session by one tick of length dt."""
        if snapshot.reset_requested and self.phase is Phase.GAME_OVER:
            self.reset()

        world = self.world

        self.animations = advance_animations(self.animations, dt)

        self.frame_count += 1
        self.hint_time += dt

        enemy_system(world, dt, self.config, self.rng)

        for event in laser_system(world, dt):
            self._credit_kill(event['x'], event['y'])
        purge_lasers(world)

        powerup_system(world, dt, self.config)

        if self.phase is Phase.GAME_OVER:
            world.process_dead_entities()
            return

        for event in player_tick(world, self.player_id, dt, snapshot,
                                 self.config, self.rng, self.bomb_screen):
            if event['type'] == 'player_hit':
                logger.debug('Player hit, health %d', event['health'])

        self.spawner.update(dt, self.spawn_interval)

        self.check_game_over()
        self._update_stats()

        world.process_dead_entities()

    def _update_stats(self):
        self.elapsed_seconds = self.frame_count // self.config.fps
        self.minutes = self.elapsed_seconds // 60
        self.seconds = self.elapsed_seconds % 60
        self.score = self.config.points_per_kill * self.kills + self.seconds
        self.spawn_interval = spawn_interval(self.kills, self.config)

    def _credit_kill(self, x: float, y: float):
        self.animations.append(Animation(assets.EXPLOSION, x, y))
        self.kills += 1
        self.spawn_powerups((x, y))

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def check_game_over(self) -> bool:
        """Enter GAME_OVER once the player's health is gone."""
        if self.phase is not Phase.PLAYING:
            return False
        health = self.world.get_component(self.player_id, Health)
        if health.current > 0:
            return False

        pos = self.world.get_component(self.player_id, Position)
        self.animations.append(Animation(assets.EXPLOSION, pos.x, pos.y))
        destroy_player(self.world, self.player_id)
        self.phase = Phase.GAME_OVER
        logger.info('Game over: %d kills, score %d, time %s',
                    self.kills, self.score, self.time_string)
        return True

    def bomb_screen(self) -> int:
        """
        Destroy every live enemy at once.

        Each enemy counts as a kill and gets its own explosion. One bomb
        charge is consumed. Callers must check the charge first; with no
        charge left NoBombCharges is raised. Returns the enemies destroyed.
        """
        control = self.world.get_component(self.player_id, PlayerControlled)
        if control.bombs <= 0:
            raise NoBombCharges('no bomb charges left')

        width = self.config.field_width
        self.animations.append(Animation(
            assets.EXPLOSION, 0, self.config.field_height / 2 - width / 2, width, width
        ))

        destroyed = 0
        for enemy_id, pos, _ in self.world.query(Position, EnemyTag):
            self.kills += 1
            self.animations.append(Animation(assets.EXPLOSION, pos.x, pos.y))
            self.world.destroy_entity(enemy_id)
            destroyed += 1

        control.bombs -= 1
        logger.info('Bomb destroyed %d enemies, %d charges left', destroyed, control.bombs)
        return destroyed

    def spawn_powerups(self, position: Tuple[float, float]) -> Optional[int]:
        """Drop the powerup earned by the current kill count, if any."""
        kind = milestone_powerup(self.kills, self.config)
        if kind is None:
            return None
        x, y = position
        return spawn_powerup(self.world, kind, x, y, self.config)

    def create_laser(self) -> int:
        """Fire a laser from the player's top-center, ignoring cooldown."""
        return spawn_laser(
            self.world,
            self.world.get_component(self.player_id, Position),
            self.world.get_component(self.player_id, Size),
            self.world.get_component(self.player_id, Weapon),
            self.config,
        )

    def reset(self) -> None:
        """Start a fresh session: new player, empty field, zeroed counters."""
        self.world.clear()
        self.animations = []
        self.spawner.reset()
        self._start_session()
        logger.info('Session reset')

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Read-only state for renderers and tests."""
        views = []
        for kind, tag in KIND_TAGS:
            for eid, pos, size, rend, _ in self.world.query(Position, Size, Renderable, tag):
                if not rend.visible:
                    continue
                views.append(EntityView(eid, kind, pos.x, pos.y, size.width,
                                        size.height, rend.sprite, rend.color))
        return GameSnapshot(
            entities=tuple(views),
            health=self.player_health,
            kills=self.kills,
            bombs=self.bombs,
            enemy_count=self.world.count(EnemyTag),
            time=self.time_string,
            score=self.score,
            game_over=self.game_over,
        )

    def particles(self):
        """(x, y, opacity) of every live trail particle."""
        for _, trail in self.world.query(ParticleTrail):
            for particle in trail.particles:
                if particle.opacity is not None:
                    yield particle.x, particle.y, particle.opacity

    def draw(self, sink) -> None:
        """Draw the session through a render sink."""
        draw_game(self, sink)

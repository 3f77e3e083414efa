"""
Player Module
==============
Player entity creation, input snapshots and the ship's per-tick rules.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Optional
import logging
import math
import random

from .ecs import World
from .components import (
    Position, Velocity, Size, Health, Renderable, ParticleTrail,
    PlayerControlled, PlayerTag, Weapon, EnemyTag, PowerupTag, Powerup
)
from .collision import overlapping
from .config import GameConfig
from .particles import update_trail, tick_emitter
from .powerups import apply_powerup
from .projectiles import spawn_laser
from . import assets


logger = logging.getLogger(__name__)

OFF_FIELD = 999.0


class Action(Enum):
    """Actions the simulation understands. Raw keys never reach it."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    FIRE = auto()
    BOMB = auto()


# Signed contribution of each movement action: (axis, sign)
MOVEMENT = {
    Action.MOVE_LEFT: ('x', -1),
    Action.MOVE_RIGHT: ('x', 1),
    Action.MOVE_UP: ('y', -1),
    Action.MOVE_DOWN: ('y', 1),
}


@dataclass(frozen=True)
class InputSnapshot:
    """Actions held during one tick, plus the one-shot retry request."""
    held: FrozenSet[Action] = frozenset()
    reset_requested: bool = False

    @classmethod
    def of(cls, *actions: Action, reset: bool = False) -> 'InputSnapshot':
        return cls(frozenset(actions), reset)

    def is_held(self, action: Action) -> bool:
        return action in self.held


NO_INPUT = InputSnapshot()


class InputHandler:
    """
    Turns terminal keystrokes into per-tick InputSnapshots.

    Terminals report key presses (and auto-repeats) but no releases,
    so a key counts as held for `hold_duration` ticks after its last
    press. Actions listed in HOLD_TICKS use a longer window that spans
    the terminal's initial auto-repeat delay (up to about 500 ms), so
    one physical hold of the bomb key never reads as two presses.
    """

    KEY_ACTIONS: Dict[str, Action] = {
        'KEY_LEFT': Action.MOVE_LEFT,
        'KEY_RIGHT': Action.MOVE_RIGHT,
        'KEY_UP': Action.MOVE_UP,
        'KEY_DOWN': Action.MOVE_DOWN,
        'a': Action.MOVE_LEFT,
        'd': Action.MOVE_RIGHT,
        'w': Action.MOVE_UP,
        's': Action.MOVE_DOWN,
        'z': Action.FIRE,
        ' ': Action.FIRE,
        'x': Action.BOMB,
    }

    HOLD_TICKS: Dict[Action, int] = {
        Action.BOMB: 40,
    }

    def __init__(self, hold_duration: int = 12):
        self.held: Dict[Action, int] = {}  # action -> ticks remaining
        self.hold_duration = hold_duration
        self._reset_triggered = False
        self._quit_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        if key.is_sequence:
            name = key.name or ''
            if name == 'KEY_ESCAPE':
                self._quit_triggered = True
                return
            action = self.KEY_ACTIONS.get(name)
        else:
            key_str = str(key).lower()
            if key_str == 'q':
                self._quit_triggered = True
                return
            if key_str == 'r':
                self._reset_triggered = True
                return
            action = self.KEY_ACTIONS.get(key_str)

        if action is not None:
            self.press(action)

    def press(self, action: Action) -> None:
        """Refresh the hold timer of an action."""
        self.held[action] = self.HOLD_TICKS.get(action, self.hold_duration)

    def update(self) -> None:
        """Decay hold timers (call once per tick)."""
        expired = []
        for action, ticks in self.held.items():
            self.held[action] = ticks - 1
            if self.held[action] <= 0:
                expired.append(action)
        for action in expired:
            del self.held[action]

    def snapshot(self) -> InputSnapshot:
        """Current held actions; consumes the retry request."""
        snap = InputSnapshot(frozenset(self.held), self._reset_triggered)
        self._reset_triggered = False
        return snap

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered


# =============================================================================
# CREATION
# =============================================================================

def spawn_point(config: GameConfig):
    """Default player position: horizontally centered, near the bottom."""
    return config.field_width / 2, config.field_height - config.player_spawn_offset


def create_player(world: World, config: GameConfig) -> int:
    """Create the player entity with all required components."""
    entity_id = world.create_entity()
    x, y = spawn_point(config)

    world.add_component(entity_id, Position(x, y))
    world.add_component(entity_id, Velocity(0.0, 0.0))
    world.add_component(entity_id, Size(config.player_width, config.player_height))
    world.add_component(entity_id, Health(config.player_health, config.player_health))
    world.add_component(entity_id, Renderable(sprite=assets.SHIP))
    world.add_component(entity_id, ParticleTrail(since_emit=config.particle_interval))
    world.add_component(entity_id, PlayerControlled(
        since_fire=config.fire_delay,
        bombs=config.starting_bombs,
    ))
    world.add_component(entity_id, Weapon(config.fire_delay, config.laser_color))
    world.add_component(entity_id, PlayerTag())

    return entity_id


# =============================================================================
# PER-TICK RULES
# =============================================================================

def resolve_input(control: PlayerControlled, snapshot: InputSnapshot) -> None:
    """Sum held movement actions into a displacement intent."""
    for action in snapshot.held:
        movement = MOVEMENT.get(action)
        if movement is None:
            continue
        axis, sign = movement
        if axis == 'x':
            control.intent_x += sign
        else:
            control.intent_y += sign

    # Uniform diagonal speed
    if control.intent_x != 0 and control.intent_y != 0:
        control.intent_x /= math.sqrt(2)
        control.intent_y /= math.sqrt(2)


def clamp_to_field(pos: Position, size: Size, config: GameConfig) -> None:
    """Keep the whole ship inside the play field."""
    if pos.x > config.field_width - size.width:
        pos.x = config.field_width - size.width
    elif pos.x < 0:
        pos.x = 0.0
    if pos.y < 0:
        pos.y = 0.0
    elif pos.y > config.field_height - size.height:
        pos.y = config.field_height - size.height


def move_player(world: World, player_id: int, dt: float, config: GameConfig,
                rng: random.Random) -> None:
    """
    Apply this tick's intent, clamp, and emit exhaust.

    Velocity is scratch: it holds this tick's displacement and is
    zeroed before returning.
    """
    pos = world.get_component(player_id, Position)
    vel = world.get_component(player_id, Velocity)
    size = world.get_component(player_id, Size)
    control = world.get_component(player_id, PlayerControlled)
    trail = world.get_component(player_id, ParticleTrail)

    vel.x = control.intent_x * dt * config.player_speed
    vel.y = control.intent_y * dt * config.player_speed
    pos.x += vel.x
    pos.y += vel.y

    if trail is not None:
        tick_emitter(trail, dt, pos, size, vel, config, rng)

    clamp_to_field(pos, size, config)

    control.intent_x = 0.0
    control.intent_y = 0.0
    vel.x = 0.0
    vel.y = 0.0


def try_fire(world: World, player_id: int, snapshot: InputSnapshot,
             config: GameConfig) -> Optional[int]:
    """Fire a laser when the fire action is held and the cannon is cool."""
    control = world.get_component(player_id, PlayerControlled)
    weapon = world.get_component(player_id, Weapon)
    if not snapshot.is_held(Action.FIRE) or control.since_fire < weapon.fire_delay:
        return None

    control.since_fire = 0.0
    return spawn_laser(
        world,
        world.get_component(player_id, Position),
        world.get_component(player_id, Size),
        weapon, config,
    )


def bomb_requested(control: PlayerControlled, snapshot: InputSnapshot) -> bool:
    """
    Edge-detect the bomb action.

    True only on the first tick the action is held with a charge left;
    holding it longer never retriggers. Releasing re-arms the latch.
    """
    if not snapshot.is_held(Action.BOMB):
        control.bomb_armed = True
        return False
    if not control.bomb_armed:
        return False
    control.bomb_armed = False
    return control.bombs > 0


def player_collision_system(world: World, player_id: int,
                            config: GameConfig) -> List[dict]:
    """
    Test the ship against every live enemy and powerup.

    Enemy contact costs `contact_damage` health and destroys the enemy.
    Powerup contact applies its effect and removes it.
    Returns event dicts describing what happened.
    """
    events = []
    health = world.get_component(player_id, Health)
    control = world.get_component(player_id, PlayerControlled)
    weapon = world.get_component(player_id, Weapon)

    for enemy_id, e_pos, _ in overlapping(world, player_id, EnemyTag):
        health.current = max(0, health.current - config.contact_damage)
        world.destroy_entity(enemy_id)
        events.append({'type': 'player_hit', 'entity_id': enemy_id,
                       'x': e_pos.x, 'y': e_pos.y, 'health': health.current})

    for powerup_id, _, _ in overlapping(world, player_id, PowerupTag):
        powerup = world.get_component(powerup_id, Powerup)
        apply_powerup(powerup.kind, control, weapon, config)
        world.destroy_entity(powerup_id)
        events.append({'type': 'powerup_collected', 'entity_id': powerup_id,
                       'kind': powerup.kind})

    return events


def update_player_particles(world: World, player_id: int, dt: float,
                            config: GameConfig) -> None:
    trail = world.get_component(player_id, ParticleTrail)
    if trail is not None:
        update_trail(trail, dt, config)


def destroy_player(world: World, player_id: int) -> None:
    """Move the ship far off the field and hide it."""
    pos = world.get_component(player_id, Position)
    pos.x = OFF_FIELD
    pos.y = OFF_FIELD
    rend = world.get_component(player_id, Renderable)
    if rend:
        rend.visible = False
    trail = world.get_component(player_id, ParticleTrail)
    if trail:
        trail.particles.clear()


def player_tick(world: World, player_id: int, dt: float, snapshot: InputSnapshot,
                config: GameConfig, rng: random.Random,
                bomb_screen) -> List[dict]:
    """
    One player tick: particles, cooldown, input, movement, attack,
    collisions. `bomb_screen` is called when a bomb goes off.
    """
    update_player_particles(world, player_id, dt, config)
    control = world.get_component(player_id, PlayerControlled)
    control.since_fire += dt

    resolve_input(control, snapshot)
    move_player(world, player_id, dt, config, rng)

    events = []
    laser_id = try_fire(world, player_id, snapshot, config)
    if laser_id is not None:
        events.append({'type': 'laser_fired', 'entity_id': laser_id})
    if bomb_requested(control, snapshot):
        destroyed = bomb_screen()
        events.append({'type': 'bomb', 'destroyed': destroyed})

    events.extend(player_collision_system(world, player_id, config))
    return events

import random

import pytest

from starfall.components import Position, Velocity
from starfall.config import GameConfig
from starfall.ecs import World
from starfall.enemies import create_enemy
from starfall.manager import GameManager
from starfall.render import RenderSink


class RecordingSink(RenderSink):
    """Render sink that records every call with the alpha in effect."""

    def __init__(self):
        self.calls = []
        self.alpha = 1.0

    def draw_sprite(self, image, dest, src=None):
        self.calls.append(('sprite', image, dest, src, self.alpha))

    def fill_rect(self, rect, color):
        self.calls.append(('rect', rect, color, self.alpha))

    def set_global_alpha(self, value):
        self.alpha = value

    def draw_text(self, text, position):
        self.calls.append(('text', text, position, self.alpha))

    def of_type(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def texts(self):
        return [call[1] for call in self.of_type('text')]

    def sprites(self):
        return [call[1] for call in self.of_type('sprite')]


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def world():
    return World()


@pytest.fixture
def game(config):
    return GameManager(config, seed=42)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def place_enemy(config, rng):
    """Create a motionless enemy at an exact position in a world."""
    def place(world, x, y):
        eid = create_enemy(world, config, rng)
        pos = world.get_component(eid, Position)
        pos.x, pos.y = x, y
        vel = world.get_component(eid, Velocity)
        vel.x, vel.y = 0.0, 0.0
        return eid
    return place

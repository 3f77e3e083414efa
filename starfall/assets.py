"""
Sprite Handles
===============
Opaque image references passed through the simulation to the render
sink. The core never looks inside them; the terminal renderer reads
the glyphs, a graphical one would read the image name.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .animation import FrameSequence
from .errors import InvalidArgument


@dataclass(frozen=True)
class Sprite:
    """A single image with its natural pixel size."""
    name: str
    width: int
    height: int
    glyph: str = '?'
    color: str = '#ffffff'

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgument(f'sprite {self.name!r} needs a positive size')


@dataclass(frozen=True)
class SpriteSheet:
    """An image holding several cells, addressed by source-rect corner."""
    name: str
    width: int
    height: int
    cell_glyphs: Dict[Tuple[int, int], str] = field(default_factory=dict)
    color: str = '#ffffff'

    def glyph_at(self, x: int, y: int) -> str:
        return self.cell_glyphs.get((x, y), '*')


SHIP = Sprite('ship', 34, 37, glyph='/A\\', color='#00e5ff')
ENEMY = Sprite('enemy', 22, 23, glyph='V', color='#ff3355')
BOMB_POWERUP = Sprite('bomb_powerup', 20, 20, glyph='B', color='#ffaa00')
SPEED_POWERUP = Sprite('speed_powerup', 20, 20, glyph='S', color='#4466ff')
RETRY_KEY = Sprite('replay_key', 64, 32, glyph='[R] RETRY', color='#ffffff')
ARROW_KEYS = Sprite('arrow_keys', 96, 64, glyph='ARROWS: MOVE', color='#cccccc')
Z_KEY = Sprite('z_key', 32, 32, glyph='Z: FIRE', color='#cccccc')
X_KEY = Sprite('x_key', 32, 32, glyph='X: BOMB', color='#cccccc')

_EXPLOSION_CELL = 64
_EXPLOSION_GLYPHS = '.oO@*+:.'

EXPLOSION_SHEET = SpriteSheet(
    'explosion', 4 * _EXPLOSION_CELL, 2 * _EXPLOSION_CELL,
    cell_glyphs={
        ((i % 4) * _EXPLOSION_CELL, (i // 4) * _EXPLOSION_CELL): glyph
        for i, glyph in enumerate(_EXPLOSION_GLYPHS)
    },
    color='#ff8800',
)

# 8 frames, 0.04 s each, read row by row from a 4x2 grid of 64px cells
EXPLOSION = FrameSequence.grid(EXPLOSION_SHEET, columns=4, rows=2,
                               cell=_EXPLOSION_CELL, duration=0.04)

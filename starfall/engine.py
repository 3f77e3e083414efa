"""
Terminal Rendering Engine
==========================
Double-buffered terminal renderer implementing the render sink.

Canvas pixels are scaled onto terminal cells. Anything smaller than a
cell (lasers, trail particles) is drawn as a Unicode Braille dot, which
gives each cell a 2x4 sub-pixel grid.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .assets import Sprite, SpriteSheet
from .render import RenderSink, Rect


DEFAULT_FG = '#c0c0c0'


def parse_color(color: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> (r, g, b)."""
    value = color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f'expected #rrggbb color, got {color!r}')
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def scale_color(color: str, alpha: float) -> str:
    """Darken a color by an opacity factor (terminals cannot blend)."""
    r, g, b = parse_color(color)
    alpha = max(0.0, min(1.0, alpha))
    return '#{:02x}{:02x}{:02x}'.format(int(r * alpha), int(g * alpha), int(b * alpha))


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: str = DEFAULT_FG
    bg_color: Optional[str] = None  # None = terminal default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg_color = DEFAULT_FG
        self.bg_color = None


class DoubleBuffer:
    """
    Double-buffered terminal output.

    Writes go to a back buffer; present() emits only the cells that
    differ from the front buffer, then swaps. No screen clears needed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal
        self._fg_cache: Dict[str, str] = {}
        self._bg_cache: Dict[str, str] = {}

    def _init_buffers(self):
        self.front = [[Cell() for _ in range(self.width)] for _ in range(self.height)]
        self.back = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.width = width
        self.height = height
        self._init_buffers()

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: str = DEFAULT_FG):
        """Put a character in the back buffer, keeping its background."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color

    def put_string(self, x: int, y: int, text: str, fg_color: str = DEFAULT_FG):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color)

    def paint(self, x: int, y: int, bg_color: str):
        """Set the background of a cell."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x].bg_color = bg_color

    def _fg(self, color: str) -> str:
        if color not in self._fg_cache:
            self._fg_cache[color] = self.term.color_rgb(*parse_color(color))
        return self._fg_cache[color]

    def _bg(self, color: str) -> str:
        if color not in self._bg_cache:
            self._bg_cache[color] = self.term.on_color_rgb(*parse_color(color))
        return self._bg_cache[color]

    def present(self) -> str:
        """Swap buffers and return the escape sequence for changed cells."""
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                if back_cell.matches(self.front[y][x]):
                    continue
                output_parts.append(self.term.move_xy(x, y))
                output_parts.append(normal)
                if back_cell.bg_color is not None:
                    output_parts.append(self._bg(back_cell.bg_color))
                output_parts.append(self._fg(back_cell.fg_color))
                output_parts.append(back_cell.char or ' ')

        self.front, self.back = self.back, self.front
        return ''.join(output_parts)


class BrailleCanvas:
    """
    Sub-pixel dots using Unicode Braille patterns.

    Each character cell maps to a 2x4 dot grid.
    """

    # (column, row) -> bit
    DOTS = {
        (0, 0): 0x01, (0, 1): 0x02, (0, 2): 0x04, (0, 3): 0x40,
        (1, 0): 0x08, (1, 1): 0x10, (1, 2): 0x20, (1, 3): 0x80,
    }
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.cells: Dict[Tuple[int, int], Tuple[int, str]] = {}

    def clear(self):
        self.cells.clear()

    def set_pixel(self, px: int, py: int, color: str):
        """Set a sub-pixel dot at dot coordinates."""
        if 0 <= px < self.pixel_width and 0 <= py < self.pixel_height:
            key = (px // 2, py // 4)
            pattern, _ = self.cells.get(key, (0, color))
            self.cells[key] = (pattern | self.DOTS[(px % 2, py % 4)], color)

    def blit_to_buffer(self, buffer: DoubleBuffer):
        """Overlay dots onto cells that hold no character yet."""
        for (cx, cy), (pattern, color) in self.cells.items():
            if 0 <= cx < buffer.width and 0 <= cy < buffer.height:
                if buffer.back[cy][cx].char == ' ':
                    buffer.put(cx, cy, chr(self.BASE + pattern), color)


class TerminalRenderer(RenderSink):
    """
    Render sink drawing a pixel canvas onto a blessed terminal.

    The whole canvas (field plus stat bar) is stretched over the
    terminal; call begin_frame(), draw, then end_frame() for the
    escape sequence to print.
    """

    def __init__(self, term: Terminal, canvas_width: float, canvas_height: float):
        self.term = term
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.buffer = DoubleBuffer(term)
        self.braille = BrailleCanvas(term.width, term.height)
        self.alpha = 1.0

    @property
    def cell_width(self) -> float:
        return self.canvas_width / self.buffer.width

    @property
    def cell_height(self) -> float:
        return self.canvas_height / self.buffer.height

    def to_cell(self, x: float, y: float) -> Tuple[int, int]:
        return int(x // self.cell_width), int(y // self.cell_height)

    def _color(self, color: str) -> Optional[str]:
        """Color adjusted for the current alpha, or None when invisible."""
        if self.alpha <= 0.05:
            return None
        if self.alpha >= 1.0:
            return color
        return scale_color(color, self.alpha)

    def resize(self, width: int, height: int):
        self.buffer.resize(width, height)
        self.braille = BrailleCanvas(width, height)

    def begin_frame(self):
        self.buffer.clear_back()
        self.braille.clear()
        self.alpha = 1.0

    def end_frame(self) -> str:
        self.braille.blit_to_buffer(self.buffer)
        return self.buffer.present()

    # -------------------------------------------------------------------------
    # RenderSink
    # -------------------------------------------------------------------------

    def set_global_alpha(self, value: float) -> None:
        self.alpha = value

    def fill_rect(self, rect: Rect, color: str) -> None:
        color = self._color(color)
        if color is None:
            return
        x, y, w, h = rect

        # Smaller than a cell: one braille dot at the rect's center
        if w < self.cell_width and h < self.cell_height:
            px = int((x + w / 2) / self.cell_width * 2)
            py = int((y + h / 2) / self.cell_height * 4)
            self.braille.set_pixel(px, py, color)
            return

        x0, y0 = self.to_cell(x, y)
        x1, y1 = self.to_cell(x + w - 1e-6, y + h - 1e-6)
        for cy in range(y0, y1 + 1):
            for cx in range(x0, x1 + 1):
                self.buffer.paint(cx, cy, color)

    def draw_sprite(self, image, dest: Rect, src: Optional[Rect] = None) -> None:
        x, y, w, h = dest
        if isinstance(image, SpriteSheet):
            glyph = image.glyph_at(src[0], src[1]) if src else '*'
        elif isinstance(image, Sprite):
            glyph = image.glyph
        else:
            glyph = '?'

        color = self._color(getattr(image, 'color', DEFAULT_FG))
        if color is None:
            return

        x0, y0 = self.to_cell(x, y)
        x1, y1 = self.to_cell(x + w, y + h)

        # Large destinations (screen bomb) get a scattered fill
        if x1 - x0 > 4 and y1 - y0 > 2:
            for cy in range(y0, y1 + 1):
                for cx in range(x0, x1 + 1):
                    if (cx + cy) % 3 == 0:
                        self.buffer.put(cx, cy, glyph[0], color)
            return

        cx, cy = self.to_cell(x + w / 2, y + h / 2)
        self.buffer.put_string(cx - len(glyph) // 2, cy, glyph, color)

    def draw_text(self, text: str, position: Tuple[float, float]) -> None:
        color = self._color('#ffffff')
        if color is None:
            return
        cx, cy = self.to_cell(*position)
        self.buffer.put_string(cx, cy, text, color)

import pytest

from starfall.engine import BrailleCanvas, Cell, TerminalRenderer, parse_color, scale_color
from starfall.log import setup_logging
from starfall.main import Game, parse_args


def test_parse_color():
    assert parse_color('#1eff00') == (0x1e, 0xff, 0x00)
    with pytest.raises(ValueError):
        parse_color('#fff')


def test_scale_color_darkens():
    assert scale_color('#ff8040', 0.5) == '#7f4020'
    assert scale_color('#ff8040', 2.0) == '#ff8040'
    assert scale_color('#ff8040', -1) == '#000000'


def test_cells_compare_visually():
    cell = Cell('x', '#ffffff', '#000000')
    assert cell.matches(Cell('x', '#ffffff', '#000000'))
    cell.reset()
    assert cell.matches(Cell())


def test_braille_dots_combine_per_cell():
    canvas = BrailleCanvas(4, 2)
    canvas.set_pixel(0, 0, '#ffffff')
    canvas.set_pixel(1, 3, '#ffffff')
    canvas.set_pixel(100, 100, '#ffffff')
    assert canvas.cells == {(0, 0): (0x01 | 0x80, '#ffffff')}


def test_cli_defaults():
    args = parse_args([])
    assert args.seed is None
    assert args.log_level == 'INFO'
    assert args.log_file == 'starfall.log'


def test_cli_options():
    args = parse_args(['--seed', '3', '--log-level', 'DEBUG', '--log-file', 'x.log'])
    assert (args.seed, args.log_level, args.log_file) == (3, 'DEBUG', 'x.log')


def test_setup_logging_returns_package_logger():
    assert setup_logging(path=None).name == 'starfall'


class FakeTerminal:
    """Just enough of blessed.Terminal for the buffers."""
    normal = home = clear = ''

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height


def test_renderer_resize_rebuilds_buffers():
    renderer = TerminalRenderer(FakeTerminal(), 600, 600)
    renderer.resize(40, 12)
    assert (renderer.buffer.width, renderer.buffer.height) == (40, 12)
    assert len(renderer.buffer.back) == 12
    assert renderer.braille.char_width == 40
    assert renderer.cell_width == 15


def test_game_follows_terminal_resize(config):
    term = FakeTerminal()
    game = Game(term, config, seed=1)
    assert not game.check_resize()

    term.width, term.height = 100, 30
    assert game.check_resize()
    assert (game.renderer.buffer.width, game.renderer.buffer.height) == (100, 30)
    assert not game.check_resize()

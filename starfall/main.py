#!/usr/bin/env python3
"""
STARFALL - Terminal Arcade Shooter
===================================
Dodge the falling swarm, shoot it down, and bomb the screen when it
gets crowded.

Controls:
    ARROWS/WASD - Move
    Z/SPACE     - Fire
    X           - Bomb (destroys every enemy on screen)
    R           - Retry after game over
    Q/ESC       - Quit
"""

import argparse
import logging
import sys
import time

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .config import GameConfig
from .engine import TerminalRenderer
from .log import setup_logging, DEFAULT_LOG_FILE
from .manager import GameManager
from .player import InputHandler
from .scheduler import FixedStepScheduler


# =============================================================================
# CONSTANTS
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MIN_WIDTH = 80
MIN_HEIGHT = 24

logger = logging.getLogger(__name__)


class Game:
    """Glue between the terminal, the input handler and a session."""

    def __init__(self, term: Terminal, config: GameConfig, seed=None):
        self.term = term
        self.config = config
        self.manager = GameManager(config, seed=seed)
        self.input_handler = InputHandler()
        self.renderer = TerminalRenderer(term, config.canvas_width, config.field_height)
        self.scheduler = FixedStepScheduler(self.tick, config.tick)
        self.running = True

    def tick(self, dt: float):
        """One fixed step: poll input, update, draw into the back buffer."""
        snapshot = self.input_handler.snapshot()
        self.manager.update(dt, snapshot)
        self.input_handler.update()
        self.renderer.begin_frame()
        self.manager.draw(self.renderer)

    def handle_input(self):
        """Drain all pending input from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)
        if self.input_handler.consume_quit():
            self.running = False

    def check_resize(self) -> bool:
        """Rebuild the buffers when the terminal size changed."""
        size = (self.term.width, self.term.height)
        if size == (self.renderer.buffer.width, self.renderer.buffer.height):
            return False
        self.renderer.resize(*size)
        print(self.term.home + self.term.clear, end='', flush=True)
        logger.info('Terminal resized to %dx%d', *size)
        return True

    def frame(self, now: float):
        self.check_resize()
        self.handle_input()
        ticks = self.scheduler.advance(now)
        if ticks > 1:
            logger.debug('Caught up %d ticks in one frame', ticks)
        if ticks:
            output = self.renderer.end_frame()
            if output:
                print(output, end='', flush=True)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='STARFALL terminal arcade shooter')
    parser.add_argument('--seed', type=int, default=None,
                        help='random seed for reproducible enemy spawns')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--log-file', default=DEFAULT_LOG_FILE,
                        help='file to write the game log to')
    return parser.parse_args(argv)


# =============================================================================
# MAIN LOOP
# =============================================================================

def main(argv=None):
    """Entry point. Sets up the terminal and runs the frame loop."""
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    term = Terminal()
    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    config = GameConfig(fps=TARGET_FPS)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        game = Game(term, config, seed=args.seed)

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        while game.running:
            started = time.perf_counter()
            game.frame(started)

            # Sleep for remaining frame time
            elapsed = time.perf_counter() - started
            sleep_time = FRAME_TIME - elapsed
            if sleep_time > 0.001:
                time.sleep(sleep_time * 0.9)

        print(term.normal, end='', flush=True)
    logger.info('Exited after %d ticks', game.scheduler.ticks_run)


if __name__ == '__main__':
    main()

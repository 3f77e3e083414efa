"""
Timed-Frame Animations
=======================
Spritesheet animations played once (explosions).

A FrameSequence is immutable data: the sheet handle, the source rect
of every frame and how long each frame stays on screen. An Animation
is one playback of a sequence at a canvas position.
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from .errors import InvalidArgument


@dataclass(frozen=True)
class Frame:
    """One spritesheet cell: seconds on screen and top-left source pixel."""
    duration: float
    x: int
    y: int


@dataclass(frozen=True)
class FrameSequence:
    """Spritesheet plus ordered frames of a fixed cell size."""
    sheet: Any
    frames: Tuple[Frame, ...]
    frame_width: int
    frame_height: int

    def __post_init__(self):
        if not self.frames:
            raise InvalidArgument('animation needs at least one frame')
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise InvalidArgument(
                f'frame size must be positive, got {self.frame_width}x{self.frame_height}'
            )
        for frame in self.frames:
            if frame.duration <= 0:
                raise InvalidArgument(f'frame duration must be positive, got {frame.duration}')
        # Accept lists from callers, store a tuple
        object.__setattr__(self, 'frames', tuple(self.frames))

    @classmethod
    def grid(cls, sheet: Any, columns: int, rows: int, cell: int,
             duration: float) -> 'FrameSequence':
        """Build a sequence reading a square-cell sheet row by row."""
        frames = [
            Frame(duration, col * cell, row * cell)
            for row in range(rows)
            for col in range(columns)
        ]
        return cls(sheet, tuple(frames), cell, cell)

    @property
    def total_duration(self) -> float:
        return sum(frame.duration for frame in self.frames)


class Animation:
    """
    One playback of a FrameSequence.

    The destination size defaults to the frame size. Once the last
    frame has been shown for its duration, finished becomes True and
    the animation should be evicted by its owner.
    """

    def __init__(self, sequence: FrameSequence, x: float, y: float,
                 width: float = 0, height: float = 0):
        if width < 0 or height < 0:
            raise InvalidArgument(f'animation size must not be negative, got {width}x{height}')
        self.sequence = sequence
        self.x = x
        self.y = y
        self.width = width or sequence.frame_width
        self.height = height or sequence.frame_height
        self.current = 0
        self.remaining = sequence.frames[0].duration
        self.finished = False

    def update(self, dt: float) -> None:
        """Advance the frame timer."""
        if self.finished:
            return
        self.remaining -= dt
        if self.remaining <= 0:
            self.current += 1
            if self.current >= len(self.sequence.frames):
                self.current = len(self.sequence.frames) - 1
                self.finished = True
                return
            self.remaining = self.sequence.frames[self.current].duration

    @property
    def frame(self) -> Frame:
        return self.sequence.frames[self.current]

    def source_rect(self) -> Tuple[int, int, int, int]:
        frame = self.frame
        return (frame.x, frame.y, self.sequence.frame_width, self.sequence.frame_height)

    def dest_rect(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def draw(self, sink) -> None:
        """Draw the current frame through a render sink."""
        if not self.finished:
            sink.draw_sprite(self.sequence.sheet, self.dest_rect(), self.source_rect())


def advance_animations(animations: Sequence[Animation], dt: float) -> list:
    """Advance every animation and return the ones still playing."""
    for animation in animations:
        animation.update(dt)
    return [animation for animation in animations if not animation.finished]

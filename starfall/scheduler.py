"""
Fixed-Step Scheduler
=====================
Turns wall-clock frames into fixed simulation ticks.

Every tick is exactly `tick` seconds long whatever the frame rate.
When the host stalls, several ticks run back to back on the next
frame; nothing is capped, so a long stall shows as a catch-up burst
rather than lost game time.
"""

from typing import Callable, Optional

from .errors import InvalidArgument


class FixedStepScheduler:
    """Runs `step(tick)` once per elapsed tick on every advance()."""

    def __init__(self, step: Callable[[float], None], tick: float = 1.0 / 60):
        if tick <= 0:
            raise InvalidArgument(f'tick must be positive, got {tick}')
        self.step = step
        self.tick = tick
        self.last_time: Optional[float] = None
        self.ticks_run = 0

    def advance(self, now: float) -> int:
        """Catch up to wall-clock time `now` (seconds). Returns ticks run."""
        if self.last_time is None:
            self.last_time = now
            return 0

        elapsed = now - self.last_time
        ticks = 0
        while elapsed >= self.tick:
            self.step(self.tick)
            elapsed -= self.tick
            self.last_time += self.tick
            ticks += 1

        self.ticks_run += ticks
        return ticks

    def reset(self) -> None:
        self.last_time = None

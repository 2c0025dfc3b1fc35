from __future__ import annotations

import logging
from typing import Callable

from .constants import MAX_TICKS_PER_FRAME, TICK_RATE

logger = logging.getLogger(__name__)


class TickScheduler:
    """Turn variable wall-clock frame times into fixed logical ticks.

    Elapsed time, scaled by the speed multiplier, is banked into a budget
    that is spent one ``tick_rate`` at a time.  At most
    ``max_ticks_per_frame`` ticks run per frame; if a large budget is still
    left after that it is dropped instead of carried over, so a long stall
    never turns into an unbounded catch-up.
    """

    def __init__(
        self,
        step: Callable[[], object],
        tick_rate: float = TICK_RATE,
        max_ticks_per_frame: int = MAX_TICKS_PER_FRAME,
    ) -> None:
        self.step = step
        self.tick_rate = tick_rate
        self.max_ticks_per_frame = max_ticks_per_frame
        self.budget = 0.0
        self.total_ticks = 0
        self.dropped_time = 0.0

    def advance(self, elapsed: float, speed: float = 1, playing: bool = True) -> int:
        """Bank ``elapsed`` seconds and run the ticks it pays for.

        Returns the number of ticks processed this frame.
        """
        if not playing:
            return 0
        self.budget += max(0.0, elapsed) * speed
        ticks = 0
        while self.budget >= self.tick_rate and ticks < self.max_ticks_per_frame:
            self.step()
            self.budget -= self.tick_rate
            ticks += 1
        if self.budget > self.tick_rate * 2:
            logger.debug(
                "Dropping %.2fs of banked time after %d ticks", self.budget, ticks
            )
            self.dropped_time += self.budget
            self.budget = 0.0
        self.total_ticks += ticks
        return ticks

    def reset(self) -> None:
        self.budget = 0.0

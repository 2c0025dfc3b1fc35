from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    HOURS_PER_TICK,
    NIGHT_END,
    NIGHT_START,
    START_TIME_OF_DAY,
    YEARS_PER_TICK,
)


@dataclass
class Calendar:
    """Simple container for the year count and day/night cycle."""

    year: float = 0.0
    time_of_day: float = START_TIME_OF_DAY
    tick_count: int = 0

    def tick(self) -> None:
        """Advance calendar time by one tick."""
        self.tick_count += 1
        self.year += YEARS_PER_TICK
        self.time_of_day += HOURS_PER_TICK
        if self.time_of_day >= 24:
            self.time_of_day -= 24

    @property
    def is_night(self) -> bool:
        """Return True if time is after dusk or before dawn."""
        return self.time_of_day > NIGHT_START or self.time_of_day < NIGHT_END

    @property
    def clock(self) -> str:
        """Return the current time of day as ``HH:MM``."""
        hours = int(self.time_of_day)
        minutes = int((self.time_of_day - hours) * 60)
        return f"{hours:02d}:{minutes:02d}"

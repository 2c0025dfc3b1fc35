from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_ZOOM_INDEX,
    MAP_LIMIT,
    VIEWPORT_HEIGHT,
    VIEWPORT_WIDTH,
    ZOOM_LEVELS,
)

# The first screen row holds the top bar
MAP_ROWS = VIEWPORT_HEIGHT - 1


@dataclass
class Camera:
    """View onto the continuous plane, centred on ``x, z``."""

    x: float = 0.0
    z: float = 0.0
    zoom_index: int = DEFAULT_ZOOM_INDEX
    limit: float = MAP_LIMIT

    @property
    def zoom(self) -> float:
        """Screen columns per world unit."""
        return ZOOM_LEVELS[self.zoom_index]

    @property
    def columns(self) -> int:
        return VIEWPORT_WIDTH

    @property
    def rows(self) -> int:
        return MAP_ROWS

    def move(self, dx: float, dz: float) -> None:
        """Pan the camera, keeping its centre on the map."""
        self.x = min(max(self.x + dx, -self.limit), self.limit)
        self.z = min(max(self.z + dz, -self.limit), self.limit)

    def zoom_in(self) -> None:
        if self.zoom_index < len(ZOOM_LEVELS) - 1:
            self.zoom_index += 1

    def zoom_out(self) -> None:
        if self.zoom_index > 0:
            self.zoom_index -= 1

    def world_to_screen(self, wx: float, wz: float) -> tuple[int, int]:
        """Translate world coordinates to a screen cell.

        Terminal cells are about twice as tall as wide, so rows advance at
        half the column rate.
        """
        sx = int((wx - self.x) * self.zoom + self.columns / 2)
        sy = int((wz - self.z) * self.zoom / 2 + self.rows / 2)
        return sx, sy

    def visible(self, sx: int, sy: int) -> bool:
        return 0 <= sx < self.columns and 0 <= sy < self.rows

from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING

from blessed import Terminal

from .camera import Camera
from .constants import (
    CAMERA_STEP,
    STATUS_PANEL_Y,
    UI_COLOR_RGB,
    UI_PANEL_HEIGHT,
    AnimalKind,
    Color,
    FoodKind,
    ResourceKind,
    TreeStage,
)
from .villager import describe

logger = logging.getLogger(__name__)

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from .game import Game

FOOD_GLYPHS = {FoodKind.WILD: ('"', Color.FOOD), FoodKind.FARM: ("#", Color.FARM)}
RESOURCE_GLYPHS = {
    ResourceKind.ROCK: ("^", Color.ROCK),
    ResourceKind.IRON: ("%", Color.IRON),
}
TREE_GLYPHS = {TreeStage.SAPLING: ",", TreeStage.YOUNG: "t", TreeStage.ADULT: "T"}
ANIMAL_GLYPHS = {AnimalKind.RABBIT: "r", AnimalKind.CHICKEN: "c"}

HELP_LINE = "[space] play/pause  [1/2/3] speed  [.] step  [arrows] pan  [+/-] zoom  [q] quit"


class Renderer:
    """Terminal viewer: top bar, map and event log."""

    UI_RGB = UI_COLOR_RGB
    COLOR_ATTRS = {
        Color.GRASS: "green",
        Color.TREE: "bold_green",
        Color.ROCK: "white",
        Color.IRON: "cyan",
        Color.FOOD: "yellow",
        Color.FARM: "bold_yellow",
        Color.HOUSE: "magenta",
        Color.FIRE: "bold_red",
        Color.ANIMAL: "bright_white",
    }

    def __init__(self, term: Terminal | None = None, camera: Camera | None = None) -> None:
        self.term = term or Terminal()
        if not self.term.does_styling:
            # Some environments mis-report TTY capabilities; keep colours on.
            self.term = Terminal(force_styling=True)
        self.camera = camera or Camera()

        # Previously drawn frame, so only changed rows are rewritten
        self._last_glyphs: list[list[str]] | None = None
        self._last_colors: list[list[object | None]] | None = None
        self._last_size: tuple[int, int] = (0, 0)

    def clear(self) -> None:
        sys.stdout.write(self.term.clear())
        sys.stdout.flush()
        self._last_glyphs = None
        self._last_colors = None

    def _apply_color(self, text: str, color: object | None) -> str:
        if color is None:
            return text
        if color is Color.UI:
            if hasattr(self.term, "color_rgb"):
                return self.term.color_rgb(*self.UI_RGB) + text + self.term.normal
            return text
        attr = self.COLOR_ATTRS.get(color)
        if attr and hasattr(self.term, attr):
            return getattr(self.term, attr)(text)
        return text

    def draw_grid(
        self, glyphs: list[list[str]], colors: list[list[object | None]] | None = None
    ) -> None:
        if colors is None:
            colors = [[None for _ in row] for row in glyphs]

        height = len(glyphs)
        width = len(glyphs[0]) if height else 0
        size = (width, height)
        full_redraw = size != self._last_size or self._last_glyphs is None
        if full_redraw:
            self.clear()
            self._last_size = size

        out: list[str] = []
        for y, row in enumerate(glyphs):
            color_row = colors[y]
            if not full_redraw and self._last_glyphs is not None:
                if row == self._last_glyphs[y] and color_row == self._last_colors[y]:
                    continue
            segments: list[str] = []
            start = 0
            current = color_row[0] if color_row else None
            for x, color in enumerate(color_row):
                if color != current:
                    segments.append(self._apply_color("".join(row[start:x]), current))
                    start = x
                    current = color
            segments.append(self._apply_color("".join(row[start:]), current))
            out.append(self.term.move_xy(0, y) + "".join(segments))

        sys.stdout.write("".join(out))
        sys.stdout.flush()

        self._last_glyphs = [row.copy() for row in glyphs]
        self._last_colors = [row.copy() for row in colors]

    # ------------------------------------------------------------------
    def top_bar(self, game: "Game") -> str:
        state = game.state
        cal = state.calendar
        inv = state.inventory
        phase = "Night" if cal.is_night else "Day"
        status = "PLAYING" if game.playing else "PAUSED"
        return (
            f"Year {cal.year:.1f} {cal.clock} {phase} | "
            f"Pop {game.population} {game.population_label} | "
            f"Wood {inv['wood']} Stone {inv['stone']} Iron {inv['iron']} | "
            f"{status} x{game.speed:g}"
        )

    def build_frame(self, game: "Game") -> tuple[list[list[str]], list[list[object | None]]]:
        """Compose the top bar and the visible map into glyph/colour grids."""
        cam = self.camera
        state = game.state
        night = state.calendar.is_night
        ground = " " if night else "."
        ground_color = None if night else Color.GRASS
        glyphs = [[ground] * cam.columns for _ in range(cam.rows)]
        colors: list[list[object | None]] = [
            [ground_color] * cam.columns for _ in range(cam.rows)
        ]

        def plot(pos, glyph: str, color: object | None) -> None:
            sx, sy = cam.world_to_screen(*pos)
            if cam.visible(sx, sy):
                glyphs[sy][sx] = glyph
                colors[sy][sx] = color

        # Later layers draw over earlier ones
        for food in state.foods.values():
            plot(food.position, *FOOD_GLYPHS[food.kind])
        for tree in state.trees.values():
            plot(tree.position, TREE_GLYPHS[tree.stage], Color.TREE)
        for node in state.resources.values():
            plot(node.position, *RESOURCE_GLYPHS[node.kind])
        for bonfire in state.bonfires.values():
            plot(bonfire.position, "*", Color.FIRE)
        for house in state.houses.values():
            bp = house.blueprint
            plot(house.position, bp.glyph, bp.color)
        for animal in state.animals.values():
            plot(game.spatial.position_of(animal), ANIMAL_GLYPHS[animal.kind], Color.ANIMAL)
        for human in state.humans.values():
            plot(game.spatial.position_of(human), "@" if human.is_mature else "o", Color.UI)

        bar = self.top_bar(game)[: cam.columns].ljust(cam.columns)
        glyphs.insert(0, list(bar))
        colors.insert(0, [Color.UI] * cam.columns)
        return glyphs, colors

    def log_lines(self, game: "Game") -> list[str]:
        lines = game.state.log.recent(UI_PANEL_HEIGHT - 2)
        oldest = min(game.state.humans, default=None)
        if oldest is not None:
            human = game.state.humans[oldest]
            memory = game.memories.get(oldest)
            thought = describe(human, memory) if memory is not None else ""
            lines.insert(0, f"{human.name}: {thought} (hunger {human.hunger:.0f})")
        return lines

    def render(self, game: "Game") -> None:
        start = time.perf_counter()
        glyphs, colors = self.build_frame(game)
        self.draw_grid(glyphs, colors)
        self.render_status(HELP_LINE)
        self.render_overlay(self.log_lines(game), STATUS_PANEL_Y + 1)
        logger.debug("render took %.2f ms", (time.perf_counter() - start) * 1000)

    def render_status(self, text: str) -> None:
        """Render a status line below the map."""
        line = text.ljust(self.term.width)
        prefix = self.term.color_rgb(*self.UI_RGB) if hasattr(self.term, "color_rgb") else ""
        sys.stdout.write(self.term.move_xy(0, STATUS_PANEL_Y) + prefix + line)
        sys.stdout.flush()

    def render_overlay(self, lines: list[str], start_y: int = 0) -> None:
        """Render generic overlay lines starting at ``start_y``."""
        width = self.term.width
        for idx in range(UI_PANEL_HEIGHT - 1):
            line = lines[idx] if idx < len(lines) else ""
            sys.stdout.write(self.term.move_xy(0, start_y + idx) + line[:width].ljust(width))
        sys.stdout.flush()

    def handle_key(self, key) -> bool:
        """Camera keys; returns True if the key was consumed."""
        name = getattr(key, "name", None)
        moves = {
            "KEY_LEFT": (-CAMERA_STEP, 0),
            "KEY_RIGHT": (CAMERA_STEP, 0),
            "KEY_UP": (0, -CAMERA_STEP),
            "KEY_DOWN": (0, CAMERA_STEP),
        }
        if name in moves:
            self.camera.move(*moves[name])
            return True
        if key == "+":
            self.camera.zoom_in()
            return True
        if key == "-":
            self.camera.zoom_out()
            return True
        return False

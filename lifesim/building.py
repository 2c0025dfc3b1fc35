from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import Color


@dataclass
class HouseBlueprint:
    """Template describing one material tier of a house."""

    name: str
    level: int
    glyph: str
    color: Color
    shelter_bonus: float
    # Inventory counter spent to reach this tier from the one below
    upgrade_resource: Optional[str] = None
    upgrade_cost: int = 0


@dataclass
class House:
    """Instance of a placed house."""

    id: int
    position: Tuple[float, float]
    owner_id: int | None = None
    level: int = 1

    @property
    def blueprint(self) -> HouseBlueprint:
        from .blueprints import BLUEPRINTS

        return BLUEPRINTS[self.level]

    @property
    def shelter_bonus(self) -> float:
        return self.blueprint.shelter_bonus

    def next_blueprint(self) -> HouseBlueprint | None:
        """Return the tier this house would upgrade to, if any."""
        from .blueprints import BLUEPRINTS

        return BLUEPRINTS.get(self.level + 1)

    def apply_upgrade(self) -> None:
        """Raise the house one material tier."""
        if self.next_blueprint() is None:
            return
        self.level += 1


@dataclass
class Bonfire:
    """A permanent fire that shelters anyone standing near it."""

    id: int
    position: Tuple[float, float]

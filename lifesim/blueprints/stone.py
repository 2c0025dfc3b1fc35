from __future__ import annotations

from ..building import HouseBlueprint
from ..constants import Color

BLUEPRINT = HouseBlueprint(
    name="Stone house",
    level=2,
    glyph="H",
    color=Color.ROCK,
    shelter_bonus=0.12,
    upgrade_resource="stone",
    upgrade_cost=10,
)

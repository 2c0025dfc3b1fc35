from __future__ import annotations

from ..building import HouseBlueprint
from ..constants import Color

BLUEPRINT = HouseBlueprint(
    name="Iron fortress",
    level=3,
    glyph="F",
    color=Color.IRON,
    shelter_bonus=0.15,
    upgrade_resource="iron",
    upgrade_cost=10,
)

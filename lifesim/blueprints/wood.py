from __future__ import annotations

from ..building import HouseBlueprint
from ..constants import Color

BLUEPRINT = HouseBlueprint(
    name="Wooden hut",
    level=1,
    glyph="h",
    color=Color.HOUSE,
    shelter_bonus=0.10,
)

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .constants import (
    ANIMAL_HEALTH,
    AnimalKind,
    FoodKind,
    ResourceKind,
    TreeStage,
    WILD_CAPACITY,
)


@dataclass
class FoodSource:
    """Bush or farm plot that can be eaten from ``capacity`` more times."""

    id: int
    position: Tuple[float, float]
    kind: FoodKind = FoodKind.WILD
    capacity: int = WILD_CAPACITY

    @property
    def depleted(self) -> bool:
        return self.capacity <= 0


@dataclass
class ResourceNode:
    """Rock or iron vein mined one unit at a time."""

    id: int
    position: Tuple[float, float]
    kind: ResourceKind = ResourceKind.ROCK
    durability: int = 20

    def __repr__(self) -> str:
        return (
            f"ResourceNode(id={self.id}, kind={self.kind.name}, "
            f"durability={self.durability})"
        )

    @property
    def material(self) -> str:
        """Inventory counter fed by this node."""
        return "stone" if self.kind is ResourceKind.ROCK else "iron"

    def extract(self, amount: int = 1) -> int:
        """Remove up to ``amount`` units of durability from this node."""
        if amount <= 0 or self.durability <= 0:
            return 0
        removed = min(self.durability, amount)
        self.durability -= removed
        return removed

    @property
    def depleted(self) -> bool:
        return self.durability <= 0


@dataclass
class Tree:
    id: int
    position: Tuple[float, float]
    stage: TreeStage = TreeStage.SAPLING
    growth: float = 0.0

    @property
    def harvestable(self) -> bool:
        return self.stage is TreeStage.ADULT

    def grow(self, amount: float) -> bool:
        """Accumulate growth; return True when the tree reached a new stage."""
        if self.stage is TreeStage.ADULT:
            return False
        self.growth += amount
        if self.growth < 1.0:
            return False
        self.growth = 0.0
        stages = list(TreeStage)
        self.stage = stages[stages.index(self.stage) + 1]
        return True


@dataclass
class Animal:
    id: int
    position: Tuple[float, float]
    kind: AnimalKind = AnimalKind.RABBIT
    age: float = 0.0
    health: float = ANIMAL_HEALTH
    reproduction_cooldown: int = 0

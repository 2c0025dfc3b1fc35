"""Authoritative world state owned by the :class:`~lifesim.game.Game`."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List

from .building import Bonfire, House
from .constants import MAX_LOG_ENTRIES
from .entities import Animal, FoodSource, ResourceNode, Tree
from .villager import Human
from .world import Calendar

INVENTORY_KEYS = ("wood", "stone", "iron")

@dataclass
class EventLog:
    """Bounded record of notable occurrences, most recent first."""

    limit: int = MAX_LOG_ENTRIES
    entries: Deque[str] = field(default_factory=deque)

    def add(self, text: str) -> None:
        self.entries.appendleft(text)
        while len(self.entries) > self.limit:
            self.entries.pop()

    def recent(self, count: int) -> List[str]:
        return list(self.entries)[:count]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

@dataclass
class WorldState:
    """Every entity collection plus inventory, calendar and event log."""

    humans: Dict[int, Human] = field(default_factory=dict)
    foods: Dict[int, FoodSource] = field(default_factory=dict)
    houses: Dict[int, House] = field(default_factory=dict)
    bonfires: Dict[int, Bonfire] = field(default_factory=dict)
    resources: Dict[int, ResourceNode] = field(default_factory=dict)
    trees: Dict[int, Tree] = field(default_factory=dict)
    animals: Dict[int, Animal] = field(default_factory=dict)
    inventory: Dict[str, int] = field(
        default_factory=lambda: {key: 0 for key in INVENTORY_KEYS}
    )
    calendar: Calendar = field(default_factory=Calendar)
    log: EventLog = field(default_factory=EventLog)
    next_id: int = 1

    def allocate_id(self) -> int:
        """Return a fresh id; ids are never reused, even after removal."""
        new_id = self.next_id
        self.next_id += 1
        return new_id

    @property
    def population(self) -> int:
        return len(self.humans)

    def obstacles(self) -> Iterable[object]:
        """Everything a new building may not overlap."""
        for collection in (
            self.foods,
            self.houses,
            self.bonfires,
            self.resources,
            self.trees,
        ):
            yield from collection.values()

    # --- Inventory -------------------------------------------------
    def can_afford(self, resource: str, amount: int) -> bool:
        return self.inventory.get(resource, 0) >= amount

    def adjust_inventory(self, resource: str, amount: int) -> bool:
        """Add or remove ``amount``; refuse changes that would go negative."""
        if resource not in self.inventory:
            raise ValueError(f"unknown inventory resource: {resource!r}")
        if self.inventory[resource] + amount < 0:
            return False
        self.inventory[resource] += amount
        return True

import logging
import random
from typing import TYPE_CHECKING, Tuple

from .constants import (
    ANIMAL_COOLDOWN,
    INITIAL_ANIMALS,
    INITIAL_FOOD,
    INITIAL_IRON,
    INITIAL_ROCKS,
    INITIAL_TREES,
    IRON_DURABILITY,
    MAP_LIMIT,
    ROCK_DURABILITY,
    AnimalKind,
    FoodKind,
    ResourceKind,
    TreeStage,
)
from .entities import Animal, FoodSource, ResourceNode, Tree

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from .spatial import SpatialLookup
    from .state import WorldState

logger = logging.getLogger(__name__)


class GameMap:
    """Bounded square plane and the procedural generator for its contents."""

    def __init__(self, rng: random.Random, limit: float = MAP_LIMIT) -> None:
        self.limit = limit
        self._rand = rng

    @property
    def width(self) -> float:
        return self.limit * 2

    @property
    def height(self) -> float:
        return self.limit * 2

    def in_bounds(self, x: float, z: float) -> bool:
        return -self.limit <= x <= self.limit and -self.limit <= z <= self.limit

    def clamp(self, x: float, z: float) -> Tuple[float, float]:
        """Return ``x,z`` pulled back inside the map."""
        return (
            max(-self.limit, min(self.limit, x)),
            max(-self.limit, min(self.limit, z)),
        )

    def random_position(self) -> Tuple[float, float]:
        return (
            (self._rand.random() - 0.5) * self.width,
            (self._rand.random() - 0.5) * self.height,
        )

    def random_offset(self, origin: Tuple[float, float], spread: float) -> Tuple[float, float]:
        """Uniform random point in a square of half-size ``spread`` around ``origin``."""
        x = origin[0] + (self._rand.random() - 0.5) * spread * 2
        z = origin[1] + (self._rand.random() - 0.5) * spread * 2
        return self.clamp(x, z)

    # ------------------------------------------------------------------
    def populate(self, state: "WorldState", spatial: "SpatialLookup") -> None:
        """Scatter the initial food, minerals, trees and animals."""
        for _ in range(INITIAL_FOOD):
            fid = state.allocate_id()
            state.foods[fid] = FoodSource(fid, self.random_position(), FoodKind.WILD)
        for kind, count, durability in (
            (ResourceKind.ROCK, INITIAL_ROCKS, ROCK_DURABILITY),
            (ResourceKind.IRON, INITIAL_IRON, IRON_DURABILITY),
        ):
            for _ in range(count):
                rid = state.allocate_id()
                state.resources[rid] = ResourceNode(
                    rid, self.random_position(), kind, durability
                )
        stages = list(TreeStage)
        for _ in range(INITIAL_TREES):
            tid = state.allocate_id()
            state.trees[tid] = Tree(
                tid,
                self.random_position(),
                stage=self._rand.choice(stages),
                growth=self._rand.random() * 0.9,
            )
        kinds = list(AnimalKind)
        for _ in range(INITIAL_ANIMALS):
            aid = state.allocate_id()
            animal = Animal(
                aid,
                self.random_position(),
                kind=self._rand.choice(kinds),
                age=self._rand.random() * 3,
                reproduction_cooldown=self._rand.randint(0, ANIMAL_COOLDOWN),
            )
            state.animals[aid] = animal
            spatial.set(aid, animal.position)
        logger.debug(
            "Generated %d foods, %d resources, %d trees, %d animals",
            len(state.foods),
            len(state.resources),
            len(state.trees),
            len(state.animals),
        )

# Engine state and the world-mutation operations
from __future__ import annotations

import copy
import logging
import math
import random
import time
from typing import Callable, Dict, Optional

from .building import Bonfire, House
from .constants import (
    BIRTH_SCATTER,
    BONFIRE_WOOD_COST,
    CHOP_HUNGER_COST,
    CHOP_WOOD_YIELD,
    CHOP_XP,
    FARM_CAPACITY,
    FARM_CHANCE,
    FARM_XP,
    FLEE_RANGE,
    FRAME_RATE,
    HOUSE_HUNGER_COST,
    HOUSE_WOOD_COST,
    MAX_HUNGER,
    MIN_BUILD_DISTANCE,
    MINE_HUNGER_COST,
    MINE_XP,
    NAMES,
    NEWBORN_EXTRA_COOLDOWN,
    REPRODUCTION_COOLDOWN,
    REPRODUCTION_HUNGER_COST,
    REPRODUCTION_MIN_HUNGER,
    SPEED_PRESETS,
    FoodKind,
    Mode,
)
from .map import GameMap
from .scheduler import TickScheduler
from .spatial import (
    Position,
    SpatialLookup,
    any_within,
    find_nearest,
    validate_position,
)
from .state import WorldState
from .villager import Action, AgentMemory, Decision, Human, decide, steer
from . import ecosystem

logger = logging.getLogger(__name__)

FOUNDERS = (("Adán", (-5.0, 0.0)), ("Eva", (5.0, 0.0)))


class Game:
    """Owns the world state and runs the simulation loop."""

    def __init__(
        self,
        seed: int | None = None,
        *,
        rng: random.Random | None = None,
        populate: bool = True,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.map = GameMap(self.rng)
        self.state = WorldState()
        self.spatial = SpatialLookup()
        self.memories: Dict[int, AgentMemory] = {}
        self.scheduler = TickScheduler(self.tick)
        self.playing = False
        self.speed: float = 1
        self.running = False
        self.births = 0
        self.founder_ids: set[int] = set()

        if populate:
            self.map.populate(self.state, self.spatial)
            for name, pos in FOUNDERS:
                human = self.spawn_human(name, pos, age=20, xp=2)
                self.founder_ids.add(human.id)
            self.log_event("[History] The Iron Age begins.")
            self.log_event("[System] Continent generated.")

    # --- Population helpers ------------------------------------------
    def spawn_human(
        self,
        name: str,
        position: Position,
        *,
        age: float = 0.0,
        hunger: float = MAX_HUNGER,
        xp: float = 0.0,
        cooldown: int = 0,
    ) -> Human:
        """Add a human to the world, the spatial lookup and the agent memory."""
        position = self.map.clamp(*validate_position(position))
        human = Human(
            id=self.state.allocate_id(),
            name=name,
            position=position,
            hunger=hunger,
            age=age,
            reproduction_cooldown=cooldown,
            xp=xp,
        )
        self.state.humans[human.id] = human
        self.spatial.set(human.id, position)
        self.memories[human.id] = AgentMemory(last_cooldown=cooldown)
        return human

    def remove_human(self, human_id: int) -> None:
        """Delete a human everywhere it is referenced; the house stays."""
        human = self.state.humans.pop(human_id, None)
        self.spatial.remove(human_id)
        self.memories.pop(human_id, None)
        if human is None or human.house_id is None:
            return
        house = self.state.houses.get(human.house_id)
        if house is not None and house.owner_id == human_id:
            house.owner_id = None

    def log_event(self, text: str) -> None:
        """Record a short message for the HUD."""
        self.state.log.add(text)
        logger.info(text)

    @property
    def population(self) -> int:
        return self.state.population

    @property
    def population_label(self) -> str:
        if self.founder_ids and set(self.state.humans) == self.founder_ids:
            return "(Adán y Eva)"
        return f"({self.births} born)"

    # --- World mutation ----------------------------------------------
    def eat(self, human_id: int, food_id: int) -> bool:
        human = self.state.humans.get(human_id)
        food = self.state.foods.get(food_id)
        if human is None or food is None:
            return False
        if (
            human.xp > FARM_XP
            and food.kind is FoodKind.WILD
            and self.rng.random() < FARM_CHANCE
        ):
            food.kind = FoodKind.FARM
            food.capacity = FARM_CAPACITY
            self.log_event(f"[Progress] {human.name} has planted a farm!")
        food.capacity -= 1
        if food.depleted:
            del self.state.foods[food_id]
        human.hunger = MAX_HUNGER
        human.xp += 1
        return True

    def hunt_animal(self, human_id: int, animal_id: int) -> bool:
        human = self.state.humans.get(human_id)
        if human is None or animal_id not in self.state.animals:
            return False
        del self.state.animals[animal_id]
        self.spatial.remove(animal_id)
        human.hunger = MAX_HUNGER
        human.xp += 2
        return True

    def mine_resource(self, human_id: int, resource_id: int) -> bool:
        human = self.state.humans.get(human_id)
        node = self.state.resources.get(resource_id)
        if human is None or node is None:
            return False
        gained = node.extract(1)
        self.state.adjust_inventory(node.material, gained)
        if node.depleted:
            del self.state.resources[resource_id]
            self.log_event(f"[Mining] A {node.material} vein has been exhausted.")
        human.hunger -= MINE_HUNGER_COST
        human.xp += MINE_XP
        return True

    def chop_tree(self, human_id: int, tree_id: int) -> bool:
        human = self.state.humans.get(human_id)
        tree = self.state.trees.get(tree_id)
        if human is None or tree is None or not tree.harvestable:
            return False
        del self.state.trees[tree_id]
        self.state.adjust_inventory("wood", CHOP_WOOD_YIELD)
        human.hunger -= CHOP_HUNGER_COST
        human.xp += CHOP_XP
        return True

    def is_area_free(self, position: Position) -> bool:
        """True if nothing is standing within the minimum build distance."""
        return not any_within(position, self.state.obstacles(), MIN_BUILD_DISTANCE)

    def build_house(self, human_id: int, position: Position) -> bool:
        position = validate_position(position)
        human = self.state.humans.get(human_id)
        if human is None or human.house_id is not None:
            return False
        if not self.state.can_afford("wood", HOUSE_WOOD_COST):
            return False
        if not self.is_area_free(position):
            logger.debug("House site %s for %s is blocked", position, human.name)
            return False
        self.state.adjust_inventory("wood", -HOUSE_WOOD_COST)
        house = House(self.state.allocate_id(), position, owner_id=human_id)
        self.state.houses[house.id] = house
        human.house_id = house.id
        human.hunger -= HOUSE_HUNGER_COST
        self.log_event(f"[Construction] {human.name} has founded a home!")
        return True

    def claim_house(self, human_id: int, house_id: int) -> bool:
        human = self.state.humans.get(human_id)
        house = self.state.houses.get(house_id)
        if human is None or house is None:
            return False
        if house.owner_id is not None or human.house_id is not None:
            return False
        house.owner_id = human_id
        human.house_id = house_id
        logger.debug("%s moved into house %s", human.name, house_id)
        return True

    def build_bonfire(self, position: Position, *, builder: str | None = None) -> bool:
        position = validate_position(position)
        if not self.state.adjust_inventory("wood", -BONFIRE_WOOD_COST):
            return False
        bonfire = Bonfire(self.state.allocate_id(), position)
        self.state.bonfires[bonfire.id] = bonfire
        if builder:
            self.log_event(f"[Technology] {builder} has lit a bonfire!")
        else:
            self.log_event("[Technology] A bonfire has been lit!")
        return True

    def attempt_reproduction(
        self, parent1_id: int, parent2_id: int, location: Position
    ) -> bool:
        location = validate_position(location)
        if parent1_id == parent2_id:
            return False
        p1 = self.state.humans.get(parent1_id)
        p2 = self.state.humans.get(parent2_id)
        if p1 is None or p2 is None:
            return False
        if p1.reproduction_cooldown > 0 or p2.reproduction_cooldown > 0:
            return False
        if p1.hunger < REPRODUCTION_MIN_HUNGER or p2.hunger < REPRODUCTION_MIN_HUNGER:
            return False
        baby_pos = (
            location[0] + (self.rng.random() - 0.5) * 2 * BIRTH_SCATTER,
            location[1] + (self.rng.random() - 0.5) * 2 * BIRTH_SCATTER,
        )
        baby = self.spawn_human(
            self.rng.choice(NAMES),
            baby_pos,
            cooldown=REPRODUCTION_COOLDOWN + NEWBORN_EXTRA_COOLDOWN,
        )
        for parent in (p1, p2):
            parent.reproduction_cooldown = REPRODUCTION_COOLDOWN
            parent.hunger -= REPRODUCTION_HUNGER_COST
        self.births += 1
        self.log_event(f"[Birth] {baby.name} has been born!")
        return True

    def apply_action(self, action: Action) -> bool:
        """Dispatch an agent's mutation request; rejections are no-ops."""
        handlers: Dict[str, Callable[..., bool]] = {
            "eat": self.eat,
            "hunt": self.hunt_animal,
            "mine": self.mine_resource,
            "chop": self.chop_tree,
            "build": self.build_house,
            "claim": self.claim_house,
            "reproduce": self.attempt_reproduction,
        }
        handler = handlers.get(action.type)
        if handler is None:
            raise ValueError(f"unknown action type: {action.type!r}")
        applied = handler(*action.payload)
        if not applied:
            logger.debug("Rejected %s %s", action.type, action.payload)
        return applied

    # --- Perception -----------------------------------------------------
    def closest(self, kind: str, position: Position):
        """Nearest entity of collection ``kind`` to ``position``, or None."""
        collection = getattr(self.state, kind, None)
        if not isinstance(collection, dict) or kind == "inventory":
            raise ValueError(f"unknown collection: {kind!r}")
        position = validate_position(position)
        found, _ = find_nearest(
            position, collection.values(), position_of=self.spatial.position_of
        )
        return found

    def snapshot(self) -> WorldState:
        """Deep copy of the world for read-only consumers."""
        return copy.deepcopy(self.state)

    # --- Simulation step ------------------------------------------------
    def _check_flee(self, human: Human, memory: AgentMemory) -> None:
        if memory.last_cooldown == 0 and human.reproduction_cooldown > 0:
            # Just became a parent: walk off somewhere else once
            pos = self.spatial.position_of(human)
            memory.flee_target = self.map.random_offset(pos, FLEE_RANGE)
            memory.wander_target = None
            memory.moving = True
        memory.last_cooldown = human.reproduction_cooldown

    def _update_agent(self, human: Human) -> None:
        memory = self.memories.setdefault(human.id, AgentMemory())
        self._check_flee(human, memory)
        decision: Decision = decide(human, self, memory)
        memory.mode = decision.mode
        if decision.mode is Mode.IDLE:
            if decision.target is not None and memory.flee_target is None:
                memory.wander_target = decision.target
        else:
            memory.wander_target = None
        if decision.action is not None:
            self.apply_action(decision.action)
            self._check_flee(human, memory)
        if human.id in self.state.humans:
            steer(human, memory, decision, self)

    def tick(self) -> WorldState:
        """Advance the world by one fixed step and return the live state.

        Agents act one after another in ascending id order, each seeing what
        the previous ones did this tick.
        """
        for human_id in sorted(self.state.humans):
            human = self.state.humans.get(human_id)
            if human is not None:
                self._update_agent(human)
        for human in self.state.humans.values():
            pos = self.spatial.get(human.id)
            if pos is not None:
                human.position = pos
        ecosystem.update(self)
        return self.state

    def step(self) -> None:
        """Run a single tick regardless of the play state."""
        self.tick()

    # --- User intents ---------------------------------------------------
    def toggle_play(self) -> None:
        self.playing = not self.playing
        if not self.playing:
            self.scheduler.reset()

    def set_speed(self, multiplier: float) -> None:
        if not isinstance(multiplier, (int, float)) or not math.isfinite(multiplier):
            raise ValueError(f"invalid speed: {multiplier!r}")
        if multiplier <= 0:
            raise ValueError(f"speed must be positive, got {multiplier}")
        self.speed = multiplier

    def advance(self, elapsed: float) -> int:
        """Feed a frame's wall time to the scheduler."""
        return self.scheduler.advance(elapsed, self.speed, self.playing)

    # --- Game loop ------------------------------------------------------
    def handle_key(self, key: Optional[str]) -> None:
        if not key:
            return
        if key == " ":
            self.toggle_play()
        elif len(key) == 1 and key in "123":
            self.set_speed(SPEED_PRESETS[int(key) - 1])
        elif key == "." and not self.playing:
            self.step()
        elif key.lower() == "q":
            self.running = False

    def run(self, renderer=None) -> None:
        """Run the interactive loop until quit."""
        from .renderer import Renderer

        renderer = renderer or Renderer()
        term = renderer.term
        self.running = True
        with term.cbreak(), term.hidden_cursor():
            last = time.perf_counter()
            while self.running:
                start = time.perf_counter()
                key = term.inkey(timeout=0)
                if key and not renderer.handle_key(key):
                    self.handle_key(str(key))
                self.advance(start - last)
                last = start
                renderer.render(self)
                sleep = max(0, (1 / FRAME_RATE) - (time.perf_counter() - start))
                time.sleep(sleep)

    def run_headless(self, ticks: int) -> None:
        """Run ``ticks`` ticks back to back without a terminal."""
        for _ in range(ticks):
            self.tick()
            if not self.state.humans:
                logger.info(
                    "Population died out after %d ticks",
                    self.state.calendar.tick_count,
                )
                break

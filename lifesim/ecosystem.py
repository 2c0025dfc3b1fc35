"""Per-tick update of everything that is not an agent decision.

Each helper is an independent probabilistic event; several of them can fire
in the same tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import (
    AGE_PER_TICK,
    ANIMAL_BREED_CHANCE,
    ANIMAL_BREED_RANGE,
    ANIMAL_COOLDOWN,
    ANIMAL_MOVE_CHANCE,
    ANIMAL_STEP,
    BONFIRE_BONUS,
    BONFIRE_INVENT_CHANCE,
    BONFIRE_RADIUS,
    BONFIRE_SPACING,
    BONFIRE_WOOD_COST,
    BONFIRE_XP,
    COLD_DAMAGE_MULTIPLIER,
    FOOD_SPAWN_RATE,
    HOUSE_SHELTER_RADIUS,
    HUNGER_DECAY_BASE,
    MAX_ANIMALS,
    MAX_FOOD,
    MAX_TREES,
    TREE_GROWTH_RATE,
    TREE_SEED_CHANCE,
    TREE_SEED_RANGE,
    UPGRADE_CHANCE,
    FoodKind,
    TreeStage,
)
from .entities import Animal, FoodSource, Tree
from .spatial import any_within, distance_sq, find_nearest

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from .game import Game
    from .villager import Human

logger = logging.getLogger(__name__)


def update(game: "Game") -> None:
    """Advance the ecosystem by one tick."""
    game.state.calendar.tick()
    upgrade_houses(game)
    decay_hunger(game)
    age_humans(game)
    spawn_food(game)
    grow_trees(game)
    move_animals(game)
    breed_animals(game)


# --- Houses -----------------------------------------------------------
def upgrade_houses(game: "Game") -> None:
    """Maybe raise the first affordable house one material tier."""
    state = game.state
    for house_id in sorted(state.houses):
        house = state.houses[house_id]
        nxt = house.next_blueprint()
        if nxt is None or not state.can_afford(nxt.upgrade_resource, nxt.upgrade_cost):
            continue
        if game.rng.random() >= UPGRADE_CHANCE:
            return
        state.adjust_inventory(nxt.upgrade_resource, -nxt.upgrade_cost)
        house.apply_upgrade()
        game.log_event(f"[Evolution] A house has been upgraded to {nxt.name.upper()}!")
        return


# --- Humans -----------------------------------------------------------
def shelter_bonus(human: "Human", game: "Game") -> float | None:
    """Hunger-decay reduction for ``human`` right now, or None if unsheltered."""
    state = game.state
    pos = game.spatial.position_of(human)
    house = state.houses.get(human.house_id) if human.house_id is not None else None
    if house is not None and distance_sq(pos, house.position) < HOUSE_SHELTER_RADIUS ** 2:
        return house.shelter_bonus
    if any_within(pos, state.bonfires.values(), BONFIRE_RADIUS):
        return BONFIRE_BONUS
    return None


def decay_hunger(game: "Game") -> None:
    state = game.state
    night = state.calendar.is_night
    for human_id in sorted(state.humans):
        human = state.humans[human_id]
        bonus = shelter_bonus(human, game)
        decay = HUNGER_DECAY_BASE
        if bonus is not None:
            decay -= bonus
        elif night:
            decay *= COLD_DAMAGE_MULTIPLIER
            _maybe_invent_bonfire(human, game)
        human.hunger -= max(0.0, decay)


def _maybe_invent_bonfire(human: "Human", game: "Game") -> None:
    state = game.state
    if human.xp <= BONFIRE_XP or not state.can_afford("wood", BONFIRE_WOOD_COST):
        return
    if game.rng.random() >= BONFIRE_INVENT_CHANCE:
        return
    pos = game.spatial.position_of(human)
    if any_within(pos, state.bonfires.values(), BONFIRE_SPACING):
        return
    game.build_bonfire(pos, builder=human.name)


def age_humans(game: "Game") -> None:
    """Age everyone, tick cooldowns down and remove the starved."""
    state = game.state
    for human_id in sorted(state.humans):
        human = state.humans[human_id]
        human.age += AGE_PER_TICK
        human.reproduction_cooldown = max(0, human.reproduction_cooldown - 1)
        if human.hunger <= 0:
            game.log_event(f"[Death] {human.name} has died. XP: {human.xp:.1f}")
            game.remove_human(human_id)


# --- Plants -----------------------------------------------------------
def spawn_food(game: "Game") -> None:
    state = game.state
    if len(state.foods) >= MAX_FOOD or game.rng.random() >= FOOD_SPAWN_RATE:
        return
    fid = state.allocate_id()
    state.foods[fid] = FoodSource(fid, game.map.random_position(), FoodKind.WILD)


def grow_trees(game: "Game") -> None:
    state = game.state
    for tree in list(state.trees.values()):
        if tree.grow(TREE_GROWTH_RATE):
            logger.debug("Tree %s grew to %s", tree.id, tree.stage.name.lower())
        if tree.stage is not TreeStage.ADULT or len(state.trees) >= MAX_TREES:
            continue
        if game.rng.random() < TREE_SEED_CHANCE:
            tid = state.allocate_id()
            pos = game.map.random_offset(tree.position, TREE_SEED_RANGE)
            state.trees[tid] = Tree(tid, pos)


# --- Animals ----------------------------------------------------------
def move_animals(game: "Game") -> None:
    state = game.state
    for animal in state.animals.values():
        animal.age += AGE_PER_TICK
        animal.reproduction_cooldown = max(0, animal.reproduction_cooldown - 1)
        if game.rng.random() >= ANIMAL_MOVE_CHANCE:
            continue
        x, z = animal.position
        x += (game.rng.random() - 0.5) * 2 * ANIMAL_STEP
        z += (game.rng.random() - 0.5) * 2 * ANIMAL_STEP
        animal.position = game.map.clamp(x, z)
        game.spatial.set(animal.id, animal.position)


def breed_animals(game: "Game") -> None:
    state = game.state
    for animal_id in sorted(state.animals):
        if len(state.animals) >= MAX_ANIMALS:
            return
        animal = state.animals[animal_id]
        if animal.reproduction_cooldown > 0:
            continue
        mate, _ = find_nearest(
            animal.position,
            state.animals.values(),
            radius=ANIMAL_BREED_RANGE,
            predicate=lambda a: a.id != animal.id
            and a.kind is animal.kind
            and a.reproduction_cooldown == 0,
        )
        if mate is None or game.rng.random() >= ANIMAL_BREED_CHANCE:
            continue
        aid = state.allocate_id()
        pos = (
            (animal.position[0] + mate.position[0]) / 2,
            (animal.position[1] + mate.position[1]) / 2,
        )
        state.animals[aid] = Animal(
            aid, pos, kind=animal.kind, reproduction_cooldown=ANIMAL_COOLDOWN
        )
        game.spatial.set(aid, pos)
        animal.reproduction_cooldown = ANIMAL_COOLDOWN
        mate.reproduction_cooldown = ANIMAL_COOLDOWN
        logger.debug("A %s was born", animal.kind.name.lower())

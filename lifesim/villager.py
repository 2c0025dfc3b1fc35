from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from .game import Game

from .constants import (
    ACTION_DISTANCE,
    ARRIVAL_DISTANCE,
    BASE_SPEED,
    BUILD_CHANCE,
    BUILD_HUNGER,
    CLAIM_DISTANCE,
    EAT_DISTANCE,
    HOME_FORAGE_RADIUS,
    HOME_REST_DISTANCE,
    HOUSE_PERSONAL_SPACE,
    HOUSE_SEARCH_RADIUS,
    HOUSE_WOOD_COST,
    HUNGER_BOOST,
    HUNGER_CRITICAL,
    HUNGER_SEEK,
    HUNGER_SEEK_HOMELESS,
    HUNT_BOOST,
    HUNT_DISTANCE,
    IDLE_TIME_MAX,
    IDLE_TIME_MIN,
    LOVE_HUNGER,
    LOVING_DISTANCE,
    MATE_BOOST,
    MATURITY_AGE,
    MAX_HUNGER,
    PERSONAL_SPACE,
    REPRODUCTION_CHANCE,
    REPRODUCTION_REQUIRES_HOUSE,
    SEPARATION_STRENGTH,
    TICK_RATE,
    VELOCITY_SMOOTHING,
    VISION_RADIUS,
    WANDER_RANGE,
    WOOD_LOW,
    WORK_BASE_CHANCE,
    WORK_HUNGER,
    WORK_RADIUS,
    WORK_XP_FACTOR,
    Mode,
)
from .spatial import Position, distance, distance_sq, find_nearest

logger = logging.getLogger(__name__)


@dataclass
class Human:
    """An autonomous agent.  Plain record; behaviour lives in :func:`decide`."""

    id: int
    name: str
    position: Position
    hunger: float = MAX_HUNGER
    age: float = 0.0
    reproduction_cooldown: int = 0
    xp: float = 0.0
    house_id: int | None = None

    @property
    def is_mature(self) -> bool:
        return self.age > MATURITY_AGE

    @property
    def ready_to_mate(self) -> bool:
        return self.is_mature and self.reproduction_cooldown == 0

    @property
    def status(self) -> str:
        if self.hunger > 50:
            return "fed"
        if self.hunger > HUNGER_CRITICAL:
            return "hungry"
        return "starving"


@dataclass
class AgentMemory:
    """Per-agent scratch state that survives between ticks."""

    velocity: Tuple[float, float] = (0.0, 0.0)
    moving: bool = False
    mode: Mode = Mode.IDLE
    wander_target: Optional[Position] = None
    flee_target: Optional[Position] = None
    idle_timer: float = 0.0
    time_to_wait: float = 0.0
    last_cooldown: int = 0


@dataclass(frozen=True)
class Action:
    """Mutation request emitted by an agent and applied by the game."""

    type: str  # "eat", "hunt", "mine", "chop", "build", "claim" or "reproduce"
    payload: tuple = ()


@dataclass(frozen=True)
class Decision:
    target: Optional[Position] = None
    mode: Mode = Mode.IDLE
    action: Optional[Action] = None
    # Stand still this tick, e.g. while eating or working at the target
    halt: bool = False


# ---------------------------------------------------------------------------
def _own_house(human: Human, game: "Game"):
    if human.house_id is None:
        return None
    return game.state.houses.get(human.house_id)


def _prefer_near_home(
    origin: Position,
    candidates: Iterable,
    home: Optional[Position],
    radius: float,
):
    """Nearest candidate within ``radius`` of home, else the nearest overall."""
    candidates = list(candidates)
    if home is not None:
        r_sq = radius * radius
        best, dist = find_nearest(
            origin,
            candidates,
            predicate=lambda c: distance_sq(c.position, home) <= r_sq,
        )
        if best is not None:
            return best, dist
    return find_nearest(origin, candidates)


def _seek_food(human: Human, pos: Position, game: "Game") -> Optional[Decision]:
    homeless = human.house_id is None
    if not (
        human.hunger < HUNGER_SEEK
        or (homeless and human.hunger < HUNGER_SEEK_HOMELESS)
    ):
        return None
    state = game.state

    # Game is a richer meal than foraging
    animal, a_dist = find_nearest(
        pos,
        state.animals.values(),
        position_of=game.spatial.position_of,
        radius=VISION_RADIUS,
    )
    if animal is not None:
        a_pos = game.spatial.position_of(animal)
        if a_dist < HUNT_DISTANCE:
            return Decision(a_pos, Mode.HUNTING, Action("hunt", (human.id, animal.id)), True)
        return Decision(a_pos, Mode.HUNTING)

    house = _own_house(human, game)
    if house is not None and human.hunger > HUNGER_CRITICAL:
        food, f_dist = _prefer_near_home(
            pos, state.foods.values(), house.position, HOME_FORAGE_RADIUS
        )
    else:
        food, f_dist = find_nearest(pos, state.foods.values())
    if food is None:
        return None
    if f_dist < EAT_DISTANCE:
        return Decision(
            food.position, Mode.SEEKING_FOOD, Action("eat", (human.id, food.id)), True
        )
    return Decision(food.position, Mode.SEEKING_FOOD)


def _seek_shelter(human: Human, pos: Position, game: "Game") -> Optional[Decision]:
    if human.house_id is not None:
        return None
    state = game.state
    house, dist = find_nearest(
        pos,
        state.houses.values(),
        radius=HOUSE_SEARCH_RADIUS,
        predicate=lambda h: h.owner_id is None,
    )
    if house is not None:
        if dist < CLAIM_DISTANCE:
            return Decision(
                house.position,
                Mode.GOING_HOME,
                Action("claim", (human.id, house.id)),
                True,
            )
        return Decision(house.position, Mode.GOING_HOME)
    if (
        human.hunger > BUILD_HUNGER
        and state.can_afford("wood", HOUSE_WOOD_COST)
        and game.rng.random() < BUILD_CHANCE
    ):
        return Decision(pos, Mode.BUILDING, Action("build", (human.id, pos)), True)
    return None


def _seek_mate(human: Human, pos: Position, game: "Game") -> Optional[Decision]:
    if not (human.hunger > LOVE_HUNGER and human.ready_to_mate):
        return None
    if REPRODUCTION_REQUIRES_HOUSE and human.house_id is None:
        return None
    mate, dist = find_nearest(
        pos,
        game.state.humans.values(),
        position_of=game.spatial.position_of,
        predicate=lambda o: o.id != human.id and o.ready_to_mate,
    )
    if mate is None:
        return None
    mate_pos = game.spatial.position_of(mate)
    if dist < LOVING_DISTANCE:
        action = None
        if game.rng.random() < REPRODUCTION_CHANCE:
            middle = ((pos[0] + mate_pos[0]) / 2, (pos[1] + mate_pos[1]) / 2)
            action = Action("reproduce", (human.id, mate.id, middle))
        return Decision(mate_pos, Mode.SEEKING_MATE, action, True)
    return Decision(mate_pos, Mode.SEEKING_MATE)


def _work_at(
    human: Human, target, dist: float, kind: str, mode: Mode, game: "Game"
) -> Decision:
    if dist >= ACTION_DISTANCE:
        return Decision(target.position, mode)
    chance = min(1.0, WORK_BASE_CHANCE + human.xp * WORK_XP_FACTOR)
    action = None
    if game.rng.random() < chance:
        action = Action(kind, (human.id, target.id))
    return Decision(target.position, mode, action, True)


def _seek_work(human: Human, pos: Position, game: "Game") -> Optional[Decision]:
    if human.hunger <= WORK_HUNGER:
        return None
    state = game.state
    house = _own_house(human, game)
    home = house.position if house is not None else None
    if state.inventory["wood"] < WOOD_LOW:
        trees = [t for t in state.trees.values() if t.harvestable]
        if trees:
            tree, dist = _prefer_near_home(pos, trees, home, WORK_RADIUS)
            return _work_at(human, tree, dist, "chop", Mode.LUMBERJACKING, game)
    if state.resources:
        node, dist = _prefer_near_home(pos, state.resources.values(), home, WORK_RADIUS)
        return _work_at(human, node, dist, "mine", Mode.MINING, game)
    return None


def _go_home(human: Human, pos: Position, game: "Game") -> Optional[Decision]:
    house = _own_house(human, game)
    if house is None or distance(pos, house.position) <= HOME_REST_DISTANCE:
        return None
    return Decision(house.position, Mode.GOING_HOME)


def _wander(
    human: Human, pos: Position, game: "Game", memory: AgentMemory
) -> Decision:
    if memory.moving and memory.wander_target is not None:
        return Decision(memory.wander_target, Mode.IDLE)
    if memory.idle_timer < memory.time_to_wait:
        return Decision(None, Mode.IDLE)
    house = _own_house(human, game)
    centre = house.position if house is not None else pos
    return Decision(game.map.random_offset(centre, WANDER_RANGE), Mode.IDLE)


def decide(human: Human, game: "Game", memory: AgentMemory) -> Decision:
    """Pick this tick's target, mode and action for ``human``.

    Needs are scanned top-down and the first one that yields a decision
    wins.  Nothing here mutates the world; the game applies the action.
    """
    pos = game.spatial.position_of(human)
    for need in (_seek_food, _seek_shelter):
        decision = need(human, pos, game)
        if decision is not None:
            return decision
    if memory.flee_target is not None:
        return Decision(memory.flee_target, Mode.IDLE)
    for need in (_seek_mate, _seek_work, _go_home):
        decision = need(human, pos, game)
        if decision is not None:
            return decision
    return _wander(human, pos, game, memory)


# ---------------------------------------------------------------------------
def _boost(mode: Mode, human: Human) -> float:
    boost = 1.0
    if mode is Mode.HUNTING:
        boost *= HUNT_BOOST
    elif mode is Mode.SEEKING_MATE:
        boost *= MATE_BOOST
    if human.hunger < HUNGER_CRITICAL:
        boost *= HUNGER_BOOST
    return boost


def _separation(
    human: Human, pos: Position, target: Optional[Position], game: "Game"
) -> Tuple[float, float]:
    """Inverse-distance push away from nearby people and houses."""
    fx = fz = 0.0

    def push(other: Position, radius: float) -> None:
        nonlocal fx, fz
        dx = pos[0] - other[0]
        dz = pos[1] - other[1]
        d = math.hypot(dx, dz)
        if d >= radius:
            return
        if d < 1e-6:
            angle = game.rng.random() * math.tau
            dx, dz, d = math.cos(angle), math.sin(angle), 1.0
        weight = 1.0 / max(d, 0.1)
        fx += dx / d * weight
        fz += dz / d * weight

    for other in game.state.humans.values():
        if other.id != human.id:
            push(game.spatial.position_of(other), PERSONAL_SPACE)
    for house in game.state.houses.values():
        # Never get pushed off the thing we are walking to
        if target is not None and distance(target, house.position) < HOUSE_PERSONAL_SPACE:
            continue
        push(house.position, HOUSE_PERSONAL_SPACE)
    return fx * SEPARATION_STRENGTH, fz * SEPARATION_STRENGTH


def _settle(memory: AgentMemory, game: "Game") -> None:
    memory.moving = False
    memory.wander_target = None
    memory.flee_target = None
    memory.idle_timer = 0.0
    memory.time_to_wait = IDLE_TIME_MIN + game.rng.random() * (
        IDLE_TIME_MAX - IDLE_TIME_MIN
    )


def steer(
    human: Human,
    memory: AgentMemory,
    decision: Decision,
    game: "Game",
    dt: float = TICK_RATE,
) -> Position:
    """Move ``human`` one tick toward the decision target.

    Returns the new position, which is also written to the spatial lookup.
    """
    pos = game.spatial.position_of(human)
    target = decision.target
    desired = (0.0, 0.0)
    if decision.halt:
        memory.velocity = (0.0, 0.0)
        memory.moving = False
        target = None
    elif target is not None:
        dx = target[0] - pos[0]
        dz = target[1] - pos[1]
        dist = math.hypot(dx, dz)
        if dist < ARRIVAL_DISTANCE:
            memory.velocity = (0.0, 0.0)
            _settle(memory, game)
            target = None
        else:
            speed = BASE_SPEED * _boost(decision.mode, human)
            desired = (dx / dist * speed, dz / dist * speed)
            memory.moving = True
    else:
        memory.moving = False
        memory.idle_timer += dt

    sx, sz = _separation(human, pos, target, game)
    vx, vz = memory.velocity
    vx += (desired[0] + sx - vx) * VELOCITY_SMOOTHING
    vz += (desired[1] + sz - vz) * VELOCITY_SMOOTHING
    if abs(vx) < 1e-4 and abs(vz) < 1e-4:
        vx = vz = 0.0
    memory.velocity = (vx, vz)

    step_x, step_z = vx * dt, vz * dt
    if target is not None and math.hypot(step_x, step_z) >= distance(pos, target):
        new_pos = game.map.clamp(*target)
    else:
        new_pos = game.map.clamp(pos[0] + step_x, pos[1] + step_z)
    game.spatial.set(human.id, new_pos)
    return new_pos


def describe(human: Human, memory: AgentMemory) -> str:
    """Short human-readable line about what the agent is doing."""
    if memory.mode is Mode.IDLE:
        return "Wandering" if memory.moving else "Idle"
    if memory.mode is Mode.SEEKING_FOOD:
        return "Starving, looking for food" if human.status == "starving" else "Looking for food"
    if memory.mode is Mode.HUNTING:
        return "Hunting"
    if memory.mode is Mode.SEEKING_MATE:
        return "Looking for a partner"
    if memory.mode is Mode.GOING_HOME:
        return "Going home" if human.house_id is not None else "Heading to an empty house"
    if memory.mode is Mode.BUILDING:
        return "Building a house"
    if memory.mode is Mode.MINING:
        return "Mining"
    if memory.mode is Mode.LUMBERJACKING:
        return "Chopping wood"
    return memory.mode.name.lower()

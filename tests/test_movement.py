import math

import pytest

from lifesim.building import House
from lifesim.constants import BASE_SPEED, IDLE_TIME_MAX, IDLE_TIME_MIN, VELOCITY_SMOOTHING, Mode
from lifesim.villager import AgentMemory, Decision, steer


def add_house(game, pos, owner):
    house = House(game.state.allocate_id(), pos, owner_id=owner)
    game.state.houses[house.id] = house
    game.state.humans[owner].house_id = house.id
    return house


def test_humans_on_same_spot_drift_apart(empty_game):
    a = empty_game.spawn_human("Ana", (0.0, 0.0))
    b = empty_game.spawn_human("Bea", (0.0, 0.0))
    for _ in range(5):
        empty_game.tick()
    assert math.dist(a.position, b.position) > 0


def test_separation_pushes_away_from_neighbour(empty_game):
    a = empty_game.spawn_human("Ana", (0.0, 0.0))
    empty_game.spawn_human("Bea", (0.5, 0.0))
    x, z = steer(a, AgentMemory(), Decision(None), empty_game)
    assert x < 0.0
    assert z == pytest.approx(0.0)
    assert empty_game.spatial.get(a.id) == (x, z)


def test_separation_pushes_away_from_house(empty_game):
    a = empty_game.spawn_human("Ana", (0.0, 0.0))
    house = House(empty_game.state.allocate_id(), (0.0, 0.6))
    empty_game.state.houses[house.id] = house
    _, z = steer(a, AgentMemory(), Decision(None), empty_game)
    assert z < 0.0


def test_velocity_ramps_up_smoothly(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    memory = AgentMemory()
    decision = Decision((50.0, 0.0), Mode.IDLE)
    speeds = []
    for _ in range(30):
        steer(human, memory, decision, empty_game)
        speeds.append(math.hypot(*memory.velocity))
    assert speeds[0] == pytest.approx(BASE_SPEED * VELOCITY_SMOOTHING)
    assert all(later > earlier for earlier, later in zip(speeds, speeds[1:]))
    assert speeds[-1] == pytest.approx(BASE_SPEED, abs=0.01)


def test_step_snaps_onto_target_instead_of_overshooting(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    memory = AgentMemory(velocity=(10.0, 0.0))
    pos = steer(human, memory, Decision((0.35, 0.0), Mode.IDLE), empty_game)
    assert pos == (0.35, 0.0)


def test_halt_stops_in_place(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    memory = AgentMemory(velocity=(2.0, 0.0), moving=True)
    pos = steer(human, memory, Decision((5.0, 0.0), Mode.MINING, halt=True), empty_game)
    assert pos == (0.0, 0.0)
    assert memory.velocity == (0.0, 0.0)
    assert not memory.moving


def test_arrival_settles_and_picks_wait(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    memory = AgentMemory(moving=True, wander_target=(0.1, 0.0), idle_timer=3.0)
    steer(human, memory, Decision((0.1, 0.0), Mode.IDLE), empty_game)
    assert not memory.moving
    assert memory.wander_target is None
    assert memory.idle_timer == 0.0
    assert IDLE_TIME_MIN <= memory.time_to_wait <= IDLE_TIME_MAX


def test_movement_is_clamped_to_map(empty_game):
    human = empty_game.spawn_human("Ana", (69.99, 0.0))
    memory = AgentMemory(velocity=(5.0, 0.0))
    for _ in range(10):
        x, _ = steer(human, memory, Decision((200.0, 0.0), Mode.IDLE), empty_game)
        assert x <= empty_game.map.limit


def test_new_parents_walk_off_then_settle(empty_game, fixed_rng):
    a = empty_game.spawn_human("Ana", (0.0, 0.0), age=20)
    b = empty_game.spawn_human("Beto", (1.0, 0.0), age=20)
    add_house(empty_game, (0.0, 1.5), a.id)
    add_house(empty_game, (1.0, 1.5), b.id)
    assert empty_game.memories[a.id].flee_target is None

    empty_game.tick()
    assert empty_game.births == 1
    # Both parents pick a spot on the same tick their cooldown starts
    assert empty_game.memories[a.id].flee_target == (-6.0, -6.0)
    assert empty_game.memories[b.id].flee_target == (-5.0, -6.0)

    # Only follow one parent from here so nobody else courts them
    empty_game.remove_human(b.id)
    target = empty_game.memories[a.id].flee_target
    for _ in range(150):
        empty_game.tick()
        if empty_game.memories[a.id].flee_target is None:
            break
    assert empty_game.memories[a.id].flee_target is None
    assert math.dist(a.position, target) < 0.5

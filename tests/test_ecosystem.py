import pytest

from lifesim import ecosystem
from lifesim.building import Bonfire, House
from lifesim.constants import MAX_LOG_ENTRIES, TreeStage
from lifesim.entities import Animal, Tree
from lifesim.state import EventLog


def test_starved_agent_is_removed_and_id_not_reused(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0), hunger=0.1)
    house = House(empty_game.state.allocate_id(), (0.0, 30.0), owner_id=human.id)
    empty_game.state.houses[house.id] = house
    human.house_id = house.id
    empty_game.tick()
    assert human.id not in empty_game.state.humans
    assert human.id not in empty_game.spatial
    assert human.id not in empty_game.memories
    assert house.owner_id is None
    assert any(line.startswith("[Death] Ana") for line in empty_game.state.log)
    newcomer = empty_game.spawn_human("Bea", (0.0, 0.0))
    assert newcomer.id > house.id > human.id


def test_hunger_never_rises_without_eating(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    last = human.hunger
    for _ in range(100):
        empty_game.tick()
        assert human.hunger <= last
        last = human.hunger


def test_cold_night_doubles_decay(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    empty_game.state.calendar.time_of_day = 23
    ecosystem.decay_hunger(empty_game)
    assert human.hunger == pytest.approx(99.7)


def test_house_shelters_owner(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    house = House(empty_game.state.allocate_id(), (1.0, 0.0), owner_id=human.id)
    empty_game.state.houses[house.id] = house
    human.house_id = house.id
    empty_game.state.calendar.time_of_day = 23
    ecosystem.decay_hunger(empty_game)
    assert human.hunger == pytest.approx(99.95)


def test_bonfire_shelters_anyone_nearby(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0))
    fire = Bonfire(empty_game.state.allocate_id(), (2.0, 0.0))
    empty_game.state.bonfires[fire.id] = fire
    empty_game.state.calendar.time_of_day = 23
    ecosystem.decay_hunger(empty_game)
    assert human.hunger == pytest.approx(99.9)


def test_cold_experienced_agent_lights_bonfire(empty_game, fixed_rng):
    empty_game.spawn_human("Ana", (0.0, 0.0), xp=9)
    empty_game.state.inventory["wood"] = 5
    empty_game.state.calendar.time_of_day = 23
    ecosystem.decay_hunger(empty_game)
    assert len(empty_game.state.bonfires) == 1
    assert empty_game.state.inventory["wood"] == 0
    assert "[Technology] Ana has lit a bonfire!" in empty_game.state.log


def test_house_upgrades_one_tier(empty_game, fixed_rng):
    house = House(empty_game.state.allocate_id(), (0.0, 0.0))
    empty_game.state.houses[house.id] = house
    empty_game.state.inventory["stone"] = 15
    ecosystem.upgrade_houses(empty_game)
    assert house.level == 2
    assert house.blueprint.name == "Stone house"
    assert empty_game.state.inventory["stone"] == 5
    # No iron yet, so no further upgrade
    ecosystem.upgrade_houses(empty_game)
    assert house.level == 2
    empty_game.state.inventory["iron"] = 10
    ecosystem.upgrade_houses(empty_game)
    assert house.level == 3
    assert house.next_blueprint() is None


def test_only_one_house_upgrades_per_tick(empty_game, fixed_rng):
    for x in (0.0, 10.0):
        house = House(empty_game.state.allocate_id(), (x, 0.0))
        empty_game.state.houses[house.id] = house
    empty_game.state.inventory["stone"] = 20
    ecosystem.upgrade_houses(empty_game)
    levels = sorted(h.level for h in empty_game.state.houses.values())
    assert levels == [1, 2]


def test_tree_grows_to_next_stage(empty_game):
    tree = Tree(empty_game.state.allocate_id(), (0.0, 0.0), growth=0.999)
    empty_game.state.trees[tree.id] = tree
    ecosystem.grow_trees(empty_game)
    assert tree.stage is TreeStage.YOUNG
    assert tree.growth == 0.0


def test_adult_tree_seeds_sapling(empty_game, fixed_rng):
    tree = Tree(empty_game.state.allocate_id(), (0.0, 0.0), stage=TreeStage.ADULT)
    empty_game.state.trees[tree.id] = tree
    ecosystem.grow_trees(empty_game)
    assert len(empty_game.state.trees) == 2


def test_food_spawns(empty_game, fixed_rng):
    ecosystem.spawn_food(empty_game)
    assert len(empty_game.state.foods) == 1


def test_animals_stay_inside_map(empty_game):
    animal = Animal(empty_game.state.allocate_id(), (70.0, -70.0))
    empty_game.state.animals[animal.id] = animal
    for _ in range(200):
        ecosystem.move_animals(empty_game)
        assert empty_game.map.in_bounds(*animal.position)
    assert empty_game.spatial.get(animal.id) == animal.position


def test_animals_breed(empty_game, fixed_rng):
    a = Animal(empty_game.state.allocate_id(), (0.0, 0.0))
    b = Animal(empty_game.state.allocate_id(), (1.0, 0.0))
    empty_game.state.animals.update({a.id: a, b.id: b})
    ecosystem.breed_animals(empty_game)
    assert len(empty_game.state.animals) == 3
    assert a.reproduction_cooldown > 0 and b.reproduction_cooldown > 0


def test_event_log_is_bounded_most_recent_first():
    log = EventLog()
    for i in range(MAX_LOG_ENTRIES + 10):
        log.add(f"event {i}")
    assert len(log) == MAX_LOG_ENTRIES
    assert log.recent(2) == [f"event {MAX_LOG_ENTRIES + 9}", f"event {MAX_LOG_ENTRIES + 8}"]

from lifesim.game import Game


def test_initial_world(game):
    names = sorted(h.name for h in game.state.humans.values())
    assert names == ["Adán", "Eva"]
    assert game.population == 2
    assert game.population_label == "(Adán y Eva)"
    assert len(game.state.foods) == 100
    assert len(game.state.resources) == 60
    assert game.state.log.recent(2) == [
        "[System] Continent generated.",
        "[History] The Iron Age begins.",
    ]
    for human in game.state.humans.values():
        assert human.age == 20
        assert human.xp == 2
    assert not game.playing
    assert game.speed == 1


def test_everything_starts_inside_map(game):
    state = game.state
    for collection in (state.foods, state.resources, state.trees, state.animals):
        for entity in collection.values():
            assert game.map.in_bounds(*entity.position)


def test_same_seed_same_history():
    a = Game(seed=7)
    b = Game(seed=7)
    for _ in range(50):
        a.tick()
        b.tick()
    assert {h.id: h.position for h in a.state.humans.values()} == {
        h.id: h.position for h in b.state.humans.values()
    }
    assert a.state.inventory == b.state.inventory
    assert list(a.state.log) == list(b.state.log)


def test_snapshot_is_detached(game):
    snap = game.snapshot()
    game.tick()
    assert snap.calendar.tick_count == 0
    assert game.state.calendar.tick_count == 1


def test_positions_follow_spatial_lookup(game):
    game.tick()
    for human in game.state.humans.values():
        assert game.spatial.get(human.id) == human.position


def test_keys_drive_play_state(game):
    game.handle_key(" ")
    assert game.playing
    game.handle_key("3")
    assert game.speed == 20
    game.handle_key(".")
    assert game.state.calendar.tick_count == 0
    game.handle_key(" ")
    game.handle_key(".")
    assert game.state.calendar.tick_count == 1
    game.running = True
    game.handle_key("q")
    assert not game.running


def test_headless_run_stops_when_everyone_is_gone(empty_game):
    empty_game.spawn_human("Ana", (0.0, 0.0), hunger=0.1)
    empty_game.run_headless(20)
    assert empty_game.population == 0
    assert empty_game.state.calendar.tick_count == 1

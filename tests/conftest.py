import pytest

from lifesim.game import Game


@pytest.fixture
def game():
    """Fully generated world with the two founders."""
    return Game(seed=1)


@pytest.fixture
def empty_game():
    """World with nothing in it, for hand-built scenarios."""
    return Game(seed=1, populate=False)


@pytest.fixture
def fixed_rng(empty_game, monkeypatch):
    """Make every probabilistic roll succeed."""
    monkeypatch.setattr(empty_game.rng, "random", lambda: 0.0)
    return empty_game.rng

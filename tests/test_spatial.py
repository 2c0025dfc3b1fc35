import math

import pytest

from lifesim.entities import FoodSource
from lifesim.spatial import SpatialLookup, any_within, find_nearest, validate_position


def test_find_nearest_picks_closest():
    foods = [FoodSource(1, (5.0, 0.0)), FoodSource(2, (1.0, 1.0)), FoodSource(3, (-3.0, 0.0))]
    best, dist = find_nearest((0.0, 0.0), foods)
    assert best.id == 2
    assert dist == pytest.approx(math.sqrt(2))


def test_find_nearest_radius_and_predicate():
    foods = [FoodSource(1, (5.0, 0.0)), FoodSource(2, (1.0, 0.0))]
    best, _ = find_nearest((0.0, 0.0), foods, predicate=lambda f: f.id != 2)
    assert best.id == 1
    best, dist = find_nearest((0.0, 0.0), foods, radius=0.5)
    assert best is None
    assert dist == math.inf


def test_any_within_is_strict():
    foods = [FoodSource(1, (2.5, 0.0))]
    assert not any_within((0.0, 0.0), foods, 2.5)
    assert any_within((0.1, 0.0), foods, 2.5)


def test_lookup_falls_back_to_stored_position():
    lookup = SpatialLookup()
    food = FoodSource(7, (3.0, 4.0))
    assert lookup.position_of(food) == (3.0, 4.0)
    lookup.set(7, (1.0, 1.0))
    assert lookup.position_of(food) == (1.0, 1.0)
    lookup.remove(7)
    assert 7 not in lookup
    assert lookup.position_of(food) == (3.0, 4.0)


@pytest.mark.parametrize("bad", [(1.0,), ("a", 1.0), (float("nan"), 0.0), None])
def test_validate_position_rejects_malformed(bad):
    with pytest.raises(ValueError):
        validate_position(bad)

import random

import pytest

from seabattle.abilities import (
    AbilityManager,
    AbilityStatus,
    DoubleHit,
    Scanner,
    Shelling,
)
from seabattle.errors import NoAbilities, OutOfField
from seabattle.field import GameField
from seabattle.ship import SegmentState, ShipManager


class FakeReader:
    def __init__(self, *coordinates):
        self._coordinates = list(coordinates)

    def read_coordinates(self):
        return self._coordinates.pop(0)


def _field_with_ship(x, y, sizes=(1,)):
    field = GameField(5, 5)
    ships = ShipManager(sizes)
    field.add_ship(x, y, ships[0], 0)
    return field, ships


def test_double_hit_sets_flag_once():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(rng=random.Random(1))
    assert DoubleHit().apply(field, ships, manager) == (False, AbilityStatus.SUCCESS)
    assert manager.take_double_hit() is True
    assert manager.take_double_hit() is False


@pytest.mark.parametrize(
    "factory, expected",
    [
        (DoubleHit, "Double Damage"),
        (Scanner, "Scanner"),
        (Shelling, "Shelling"),
    ],
)
def test_ability_names(factory, expected):
    ability = factory()
    assert ability.name == expected


def test_scanner_finds_ship_in_square():
    field, ships = _field_with_ship(2, 2)
    manager = AbilityManager(reader=FakeReader((1, 1)))
    assert Scanner().apply(field, ships, manager) == (True, AbilityStatus.SHIP)


def test_scanner_reports_empty_area():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(reader=FakeReader((3, 3)))
    assert Scanner().apply(field, ships, manager) == (False, AbilityStatus.EMPTY)


def test_scanner_at_corner_stays_in_field():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(reader=FakeReader((4, 4)))
    assert Scanner().apply(field, ships, manager) == (False, AbilityStatus.EMPTY)


def test_scanner_rejects_coordinates_outside_field():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(reader=FakeReader((5, 0)))
    with pytest.raises(OutOfField):
        Scanner().apply(field, ships, manager)


def test_scanner_without_reader():
    field, ships = _field_with_ship(0, 0)
    with pytest.raises(RuntimeError):
        Scanner().apply(field, ships, AbilityManager())


def test_shelling_damages_then_destroys():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(rng=random.Random(7))
    assert Shelling().apply(field, ships, manager) == (
        False,
        AbilityStatus.NOT_DESTROYED,
    )
    assert ships[0].segment_state(0) is SegmentState.DAMAGED
    assert Shelling().apply(field, ships, manager) == (True, AbilityStatus.DESTROYED)
    assert ships[0].is_destroyed()


def test_shelling_skips_destroyed_segments():
    ships = ShipManager([1, 1])
    ships[0].segment(0).state = SegmentState.DESTROYED
    manager = AbilityManager(rng=random.Random(3))
    field = GameField(5, 5)
    Shelling().apply(field, ships, manager)
    Shelling().apply(field, ships, manager)
    assert ships[1].is_destroyed()


def test_shelling_with_everything_destroyed():
    ships = ShipManager([1])
    ships[0].segment(0).state = SegmentState.DESTROYED
    with pytest.raises(ValueError):
        Shelling().apply(GameField(2, 2), ships, AbilityManager())


def test_shelling_without_ships():
    with pytest.raises(ValueError):
        Shelling().apply(GameField(2, 2), ShipManager(), AbilityManager())


def test_manager_holds_one_of_each_ability():
    field, ships = _field_with_ship(0, 0)
    manager = AbilityManager(reader=FakeReader((0, 0)), rng=random.Random(11))
    assert len(manager) == 3
    statuses = {manager.apply_ability(field, ships)[1] for _ in range(3)}
    assert statuses == {
        AbilityStatus.SUCCESS,
        AbilityStatus.SHIP,
        AbilityStatus.NOT_DESTROYED,
    }
    assert len(manager) == 0
    with pytest.raises(NoAbilities):
        manager.apply_ability(field, ships)


def test_add_and_remove_abilities():
    manager = AbilityManager(rng=random.Random(5))
    manager.add_random_ability()
    assert len(manager) == 4
    manager.remove_ability()
    manager.remove_ability()
    assert len(manager) == 2


def test_remove_from_empty_queue():
    manager = AbilityManager()
    manager.resize(0)
    with pytest.raises(NoAbilities):
        manager.remove_ability()


@pytest.mark.parametrize("count", [0, 1, 3, 6])
def test_resize(count):
    manager = AbilityManager(rng=random.Random(2))
    manager.resize(count)
    assert len(manager) == count


def test_resize_negative():
    with pytest.raises(ValueError):
        AbilityManager().resize(-1)
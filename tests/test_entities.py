"""Tests for simulation entities: Person, PersonNeeds and Building."""

from __future__ import annotations

import math

import pytest

from complexcity.errors import UnknownBuildingKindError
from complexcity.simulation.entities import (
    KIND_TO_NEED,
    NEED_TO_KIND,
    Building,
    BuildingKind,
    IdleDirection,
    Person,
    PersonNeeds,
    default_position,
)
from complexcity.simulation.geometry import Vec2


class TestPersonNeeds:
    """Tests for PersonNeeds clamping and aggregation."""

    def test_default_values(self):
        """Needs default to 50, health to 100."""
        needs = PersonNeeds()
        assert needs.hunger == 50.0
        assert needs.shelter == 50.0
        assert needs.health == 100.0

    @pytest.mark.parametrize(
        "value,expected",
        [
            (-10.0, 0.0),
            (0.0, 0.0),
            (55.5, 55.5),
            (100.0, 100.0),
            (250.0, 100.0),
        ],
    )
    def test_construction_clamps(self, value, expected):
        """Out-of-range values are clamped even at construction."""
        needs = PersonNeeds(hunger=value)
        assert needs.hunger == expected

    def test_attribute_assignment_clamps(self):
        needs = PersonNeeds()
        needs.sport = -5
        needs.creativity = 1000
        assert needs.sport == 0.0
        assert needs.creativity == 100.0

    def test_adjust_clamps(self):
        needs = PersonNeeds(hunger=95)
        needs.adjust("hunger", 20)
        assert needs.hunger == 100.0
        needs.adjust("hunger", -150)
        assert needs.hunger == 0.0

    def test_set_unknown_need_raises(self):
        with pytest.raises(KeyError):
            PersonNeeds().set("thirst", 10)

    def test_mean_of_seven(self):
        needs = PersonNeeds(
            shelter=10, hunger=20, social=30, entertainment=40, health=50, sport=60, creativity=70
        )
        assert needs.mean() == pytest.approx(40.0)

    def test_as_dict_order(self):
        assert list(PersonNeeds().as_dict()) == [
            "shelter",
            "hunger",
            "social",
            "entertainment",
            "health",
            "sport",
            "creativity",
        ]


class TestPerson:
    """Tests for Person."""

    def test_satisfaction_initialized_from_needs(self):
        person = Person(person_id=3, needs=PersonNeeds(health=50))
        assert person.satisfaction == pytest.approx(50.0)

    def test_knows(self):
        person = Person(person_id=0)
        person.liked.add(1)
        person.disliked.add(2)
        assert person.knows(1)
        assert person.knows(2)
        assert not person.knows(3)

    def test_contains_point(self):
        person = Person(person_id=0, position=Vec2(10, 10))
        assert person.contains_point(Vec2(12, 8), size=16)
        assert not person.contains_point(Vec2(18, 10), size=16)
        assert not person.contains_point(Vec2(30, 30), size=16)


class TestIdleDirection:
    """Idle direction unit vectors."""

    @pytest.mark.parametrize("direction", list(IdleDirection))
    def test_all_directions_have_unit_length(self, direction):
        """Diagonals are normalized so every direction moves at the same speed."""
        assert direction.unit().length() == pytest.approx(1.0)

    def test_diagonal_components(self):
        unit = IdleDirection.MINUS_BOTH.unit()
        assert unit.x == pytest.approx(-1 / math.sqrt(2))
        assert unit.y == pytest.approx(-1 / math.sqrt(2))


class TestBuildingKind:
    """Building kinds, needs and footprints."""

    def test_from_key_is_case_insensitive(self):
        assert BuildingKind.from_key(" Restaurant ") is BuildingKind.RESTAURANT

    def test_from_key_unknown(self):
        with pytest.raises(UnknownBuildingKindError):
            BuildingKind.from_key("castle")

    def test_need_mapping_is_bijective(self):
        assert len(NEED_TO_KIND) == 7
        assert len(KIND_TO_NEED) == 7
        for need, kind in NEED_TO_KIND.items():
            assert kind.need == need

    def test_underground_is_decorative(self):
        assert BuildingKind.UNDERGROUND.need is None
        assert not BuildingKind.UNDERGROUND.is_functional

    def test_default_position_is_half_footprint(self):
        assert default_position(BuildingKind.FORUM) == Vec2(40.0, 48.0)


class TestBuilding:
    """Building hit-testing."""

    def test_bounds(self):
        building = Building(building_id=0, kind=BuildingKind.HOUSE, position=Vec2(24, 24))
        bottom_left, top_right = building.bounds()
        assert bottom_left == Vec2(0, 0)
        assert top_right == Vec2(48, 48)

    def test_contains_point_is_strict(self):
        building = Building(building_id=0, kind=BuildingKind.HOUSE, position=Vec2(24, 24))
        assert building.contains_point(Vec2(1, 1))
        assert not building.contains_point(Vec2(0, 10))
        assert not building.contains_point(Vec2(60, 10))

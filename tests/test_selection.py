"""Tests for SelectionTracker and problem sentences."""

from __future__ import annotations

import pytest

from complexcity.agents.registry import PersonRegistry
from complexcity.agents.selection import PROBLEM_SENTENCES, SelectionTracker, current_problems
from complexcity.config import SimulationConfig
from complexcity.errors import SelectorError
from complexcity.simulation.entities import PersonNeeds
from complexcity.simulation.geometry import Vec2


@pytest.fixture
def tracker(registry: PersonRegistry) -> SelectionTracker:
    return SelectionTracker(registry, person_size=16.0)


class TestSingleton:
    """Exactly one selector per registry."""

    def test_second_tracker_fails_fast(self, registry: PersonRegistry, tracker: SelectionTracker):
        with pytest.raises(SelectorError):
            SelectionTracker(registry)

    def test_tracker_bound_to_registry(self, registry: PersonRegistry, tracker: SelectionTracker):
        assert registry.selector is tracker


class TestEnsureValid:
    """Selection is empty only when nobody exists."""

    def test_empty_registry_means_no_selection(self, tracker: SelectionTracker):
        assert tracker.ensure_valid() is None

    def test_selects_first_when_empty(self, registry: PersonRegistry, tracker: SelectionTracker):
        registry.spawn()
        registry.spawn()
        assert tracker.ensure_valid() == 0

    def test_keeps_valid_selection(self, registry: PersonRegistry, tracker: SelectionTracker):
        registry.spawn()
        registry.spawn()
        tracker.select(1)
        assert tracker.ensure_valid() == 1

    def test_clears_after_registry_cleared(
        self, registry: PersonRegistry, tracker: SelectionTracker
    ):
        registry.spawn()
        tracker.ensure_valid()
        registry.clear()
        assert tracker.ensure_valid() is None


class TestClickSelection:
    """Hit-testing persons' bounding boxes."""

    def test_click_on_person(self, registry: PersonRegistry, tracker: SelectionTracker):
        registry.spawn(Vec2(0, 0))
        registry.spawn(Vec2(100, 100))
        assert tracker.select_at(Vec2(103, 97)) == 1
        assert tracker.selected == 1
        assert tracker.selected_person().person_id == 1

    def test_click_on_nothing_keeps_selection(
        self, registry: PersonRegistry, tracker: SelectionTracker
    ):
        registry.spawn(Vec2(0, 0))
        tracker.select(0)
        assert tracker.select_at(Vec2(500, 500)) is None
        assert tracker.selected == 0

    def test_overlapping_persons_first_wins(
        self, registry: PersonRegistry, tracker: SelectionTracker
    ):
        registry.spawn(Vec2(0, 0))
        registry.spawn(Vec2(2, 2))
        assert tracker.select_at(Vec2(1, 1)) == 0


class TestLeastSatisfied:
    """Selecting the least satisfied person."""

    def test_picks_lowest(self, registry: PersonRegistry, tracker: SelectionTracker):
        registry.spawn(needs=PersonNeeds(hunger=80))
        low = registry.spawn(needs=PersonNeeds(hunger=0, shelter=0))
        registry.spawn(needs=PersonNeeds(hunger=40))
        assert tracker.select_least_satisfied() == low.person_id

    def test_ties_go_to_first(self, registry: PersonRegistry, tracker: SelectionTracker):
        for _ in range(3):
            registry.spawn(needs=PersonNeeds(hunger=10))
        assert tracker.select_least_satisfied() == 0

    def test_empty_registry(self, tracker: SelectionTracker):
        assert tracker.select_least_satisfied() is None


class TestNextPrevious:
    """Stepping through ids, clamped to the live range."""

    def test_next_and_previous(self, registry: PersonRegistry, tracker: SelectionTracker):
        for _ in range(3):
            registry.spawn()
        tracker.select(0)
        assert tracker.select_next() == 1
        assert tracker.select_next() == 2
        assert tracker.select_next() == 2
        assert tracker.select_previous() == 1
        assert tracker.select_previous() == 0
        assert tracker.select_previous() == 0

    def test_no_persons(self, tracker: SelectionTracker):
        assert tracker.select_next() is None
        assert tracker.select_previous() is None

    def test_select_unknown_id(self, registry: PersonRegistry, tracker: SelectionTracker):
        registry.spawn()
        assert tracker.select(5) is False


class TestProblems:
    """Problem sentences for unmet needs."""

    def test_no_problems_when_satisfied(self):
        assert current_problems(PersonNeeds(), SimulationConfig()) == []

    def test_problems_in_need_order(self):
        needs = PersonNeeds(creativity=5, hunger=10, shelter=5)
        assert current_problems(needs, SimulationConfig()) == [
            PROBLEM_SENTENCES["shelter"],
            PROBLEM_SENTENCES["hunger"],
            PROBLEM_SENTENCES["creativity"],
        ]

    def test_threshold_is_exclusive(self):
        needs = PersonNeeds(hunger=25.0)
        assert current_problems(needs, SimulationConfig()) == []

"""Selection: the one person currently focused for inspection."""

from __future__ import annotations

from complexcity.agents.registry import PersonRegistry
from complexcity.config import NEED_NAMES, SimulationConfig
from complexcity.simulation.entities import Person, PersonNeeds
from complexcity.simulation.geometry import Vec2

# What a person says about each unmet need
PROBLEM_SENTENCES: dict[str, str] = {
    "shelter": "I need a comfy home...",
    "hunger": "I could eat a horse!",
    "social": "I need friends...",
    "entertainment": "I'm bored.",
    "health": "I don't feel so good...",
    "sport": "I have energy to spare!",
    "creativity": "I feel like creating something today!",
}


def current_problems(needs: PersonNeeds, config: SimulationConfig) -> list[str]:
    """Problem sentences for every need below its threshold, in need order."""
    return [
        PROBLEM_SENTENCES[need]
        for need in NEED_NAMES
        if needs.get(need) < config.threshold_for(need)
    ]


class SelectionTracker:
    """Tracks zero or one selected person id.

    Exactly one tracker may be bound to a registry; binding a second one
    raises SelectorError at construction time.
    """

    def __init__(self, registry: PersonRegistry, person_size: float = 16.0):
        registry.bind_selector(self)
        self._registry = registry
        self.person_size = person_size
        self.selected: int | None = None

    def selected_person(self) -> Person | None:
        if self.selected is None:
            return None
        return self._registry.get(self.selected)

    def ensure_valid(self) -> int | None:
        """Keep the selection pointing at a live person when any exist."""
        ids = self._registry.ids()
        if not ids:
            self.selected = None
        elif self.selected not in ids:
            self.selected = ids[0]
        return self.selected

    def select(self, person_id: int) -> bool:
        """Select a specific live person."""
        if self._registry.get(person_id) is None:
            return False
        self.selected = person_id
        return True

    def select_at(self, point: Vec2) -> int | None:
        """Select the first person whose bounding box contains `point`.

        Returns:
            The selected id, or None if the click hit nobody (selection kept)
        """
        for person in self._registry.living():
            if person.contains_point(point, self.person_size):
                self.selected = person.person_id
                return person.person_id
        return None

    def select_least_satisfied(self) -> int | None:
        """Select the person with the lowest satisfaction; first wins ties."""
        lowest: Person | None = None
        for person in self._registry.living():
            if lowest is None or person.satisfaction < lowest.satisfaction:
                lowest = person
        if lowest is not None:
            self.selected = lowest.person_id
        return self.selected

    def select_next(self) -> int | None:
        return self._step(1)

    def select_previous(self) -> int | None:
        return self._step(-1)

    def _step(self, offset: int) -> int | None:
        ids = self._registry.ids()
        if not ids:
            self.selected = None
            return None
        current = self.selected if self.selected is not None else ids[0]
        target = max(ids[0], min(ids[-1], current + offset))
        if target not in ids:
            # nearest live id in the direction of travel
            ahead = [i for i in ids if (i - current) * offset > 0]
            target = min(ahead, key=lambda i: abs(i - current)) if ahead else current
        self.selected = target
        return target

    def clear(self) -> None:
        self.selected = None

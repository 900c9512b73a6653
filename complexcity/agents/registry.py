"""Person registry: manages person lifecycle (spawn, lookup, reset)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from complexcity.errors import SelectorError
from complexcity.simulation.entities import Person, PersonNeeds
from complexcity.simulation.geometry import Vec2

if TYPE_CHECKING:
    from complexcity.agents.selection import SelectionTracker

logger = logging.getLogger(__name__)


class PersonRegistry:
    """Manages person lifecycle: spawn, lookup, reset.

    Single source of truth for all persons in the simulation. Ids come from a
    counter that only moves forward until the registry is cleared.
    """

    def __init__(self, population_cap: int = 200):
        self.population_cap = population_cap
        self._persons: dict[int, Person] = {}
        self._next_id = 0
        self._selector: SelectionTracker | None = None

    def spawn(self, position: Vec2 | None = None, needs: PersonNeeds | None = None) -> Person | None:
        """Spawn a new person, or return None if the population is at its cap.

        Requests beyond the cap are dropped, not queued.
        """
        if self.count_living >= self.population_cap:
            logger.debug(f"Spawn dropped: population cap {self.population_cap} reached")
            return None
        person = Person(
            person_id=self._next_id,
            position=position if position is not None else Vec2(),
            needs=needs if needs is not None else PersonNeeds(),
        )
        self._persons[person.person_id] = person
        self._next_id += 1
        logger.debug(f"Spawned person {person.person_id} at {person.position.as_tuple()}")
        return person

    def get(self, person_id: int) -> Person | None:
        """Look up a living person by id."""
        return self._persons.get(person_id)

    def living(self) -> list[Person]:
        """All persons, in spawn order."""
        return list(self._persons.values())

    def ids(self) -> list[int]:
        """All live ids, ascending."""
        return sorted(self._persons)

    def clear(self) -> None:
        """Remove every person and restart ids at zero."""
        self._persons = {}
        self._next_id = 0

    def bind_selector(self, selector: SelectionTracker) -> None:
        """Attach the one selector allowed per registry."""
        if self._selector is not None and self._selector is not selector:
            raise SelectorError("A selector is already bound to this registry")
        self._selector = selector

    @property
    def selector(self) -> SelectionTracker | None:
        return self._selector

    @property
    def count_living(self) -> int:
        return len(self._persons)

    @property
    def next_id(self) -> int:
        return self._next_id

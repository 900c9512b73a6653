"""Shared test builders for the complexcity test suite.

Plain functions returning real entities, not unittest.mock doubles.
"""

from __future__ import annotations

from complexcity.simulation.entities import Person, PersonNeeds
from complexcity.simulation.geometry import Vec2


def make_person(person_id: int = 0, x: float = 0.0, y: float = 0.0, **needs: float) -> Person:
    """Build a person with all needs satisfied unless overridden."""
    values = {
        "shelter": 100.0,
        "hunger": 100.0,
        "social": 100.0,
        "entertainment": 100.0,
        "health": 100.0,
        "sport": 100.0,
        "creativity": 100.0,
    }
    values.update(needs)
    return Person(person_id=person_id, position=Vec2(x, y), needs=PersonNeeds(**values))

"""Satisfaction and population score."""

from __future__ import annotations

from collections.abc import Iterable

from complexcity.simulation.entities import Person


class ScoreAggregator:
    """Derives per-person satisfaction and the population-wide score.

    The population score is None while nobody lives in town, rather than a
    division by zero.
    """

    def __init__(self):
        self.score: float | None = None

    @staticmethod
    def satisfaction(person: Person) -> float:
        """Mean of the person's seven needs."""
        return person.needs.mean()

    def update(self, persons: Iterable[Person]) -> float | None:
        """Recompute every satisfaction and the population score."""
        total = 0.0
        count = 0
        for person in persons:
            person.satisfaction = self.satisfaction(person)
            total += person.satisfaction
            count += 1
        self.score = total / count if count else None
        return self.score

    def reset(self) -> None:
        self.score = None

"""Social graph: permanent like/dislike relations between persons."""

from __future__ import annotations

import enum
import random
from collections.abc import Iterable

from complexcity.simulation.entities import Person


class Relation(enum.Enum):
    """How one person feels about another."""

    LIKED = "liked"
    DISLIKED = "disliked"
    UNKNOWN = "unknown"


class SocialGraph:
    """Classifies every other person as liked or disliked, once and for good.

    Relations are directional: A may like B while B dislikes A. The sets live
    on each Person; this class decides and reads them.
    """

    def __init__(self, rng: random.Random):
        self._rng = rng

    def classify(self, person: Person, other_id: int) -> Relation:
        """Classify other_id for person with a fair coin, unless already done.

        Returns:
            The (possibly pre-existing) relation
        """
        if other_id == person.person_id:
            return Relation.UNKNOWN
        existing = self.relation(person, other_id)
        if existing is not Relation.UNKNOWN:
            return existing
        if self._rng.random() < 0.5:
            person.liked.add(other_id)
            return Relation.LIKED
        person.disliked.add(other_id)
        return Relation.DISLIKED

    def observe(self, persons: Iterable[Person], ids: Iterable[int]) -> int:
        """Classify every unclassified (person, id) pair.

        Returns:
            Number of new classifications made
        """
        id_list = list(ids)
        made = 0
        for person in persons:
            for other_id in id_list:
                if other_id != person.person_id and not person.knows(other_id):
                    self.classify(person, other_id)
                    made += 1
        return made

    @staticmethod
    def relation(person: Person, other_id: int) -> Relation:
        if other_id in person.liked:
            return Relation.LIKED
        if other_id in person.disliked:
            return Relation.DISLIKED
        return Relation.UNKNOWN

    @staticmethod
    def sign(person: Person, other_id: int) -> float:
        """+1 toward liked persons, -1 away from disliked, 0 otherwise."""
        if other_id in person.liked:
            return 1.0
        if other_id in person.disliked:
            return -1.0
        return 0.0

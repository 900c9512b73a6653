"""Movement: summing idle, social and desire forces into one step per person.

Resolution is two-phase. `accumulate()` reads every position and writes only
each person's own `movement_vector`; `apply()` then moves everyone. No force
ever sees a position updated earlier in the same tick, so iteration order
does not change the outcome.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from complexcity.config import NEED_NAMES, SimulationConfig
from complexcity.memory.social import SocialGraph
from complexcity.simulation.entities import NEED_TO_KIND, BuildingKind, IdleDirection, Person
from complexcity.simulation.geometry import ZERO, Vec2
from complexcity.simulation.world import World

IDLE_DIRECTIONS: tuple[IdleDirection, ...] = tuple(IdleDirection)


@dataclass
class ForceBreakdown:
    """One person's force contributions for a tick."""

    idle: Vec2 = ZERO
    social: Vec2 = ZERO
    desire: dict[str, Vec2] = field(default_factory=dict)

    @property
    def desire_total(self) -> Vec2:
        total = ZERO
        for force in self.desire.values():
            total = total + force
        return total

    @property
    def total(self) -> Vec2:
        return self.idle + self.social + self.desire_total


def desire_weights(config: SimulationConfig) -> dict[BuildingKind, float]:
    """Pull strength per building kind."""
    return {
        BuildingKind.RESTAURANT: config.restaurant_weight,
        BuildingKind.HOSPITAL: config.hospital_weight,
        BuildingKind.FORUM: config.forum_weight,
        BuildingKind.POOL: config.pool_weight,
        BuildingKind.CREATIVE: config.creative_weight,
        BuildingKind.CINEMA: config.cinema_weight,
        BuildingKind.HOUSE: config.house_weight,
    }


class MovementResolver:
    """Accumulates and resolves per-person movement vectors."""

    def __init__(self, config: SimulationConfig, world: World, social: SocialGraph):
        self.config = config
        self.world = world
        self.social = social
        self._weights = desire_weights(config)
        self._thresholds = {need: config.threshold_for(need) for need in NEED_NAMES}

    # --- Phase 0: reset ---

    @staticmethod
    def reset(persons: Sequence[Person]) -> None:
        for person in persons:
            person.movement_vector = ZERO

    @staticmethod
    def reroll_idle_directions(persons: Sequence[Person], rng: random.Random) -> None:
        """Pick a fresh idle direction for everyone, uniformly among the six."""
        for person in persons:
            person.idle_direction = rng.choice(IDLE_DIRECTIONS)

    # --- Phase 1: accumulate ---

    def idle_force(self, person: Person) -> Vec2:
        return person.idle_direction.unit() * self.config.idle_force

    def social_pull(self, person: Person, other: Person) -> Vec2:
        """Force on `person` from `other`, by person's own feeling about other."""
        sign = self.social.sign(person, other.person_id)
        if sign == 0.0:
            return ZERO
        displacement = (other.position - person.position).clamp_length(
            self.config.max_pull_distance
        )
        return displacement * (sign * self.config.social_force)

    def social_forces(self, persons: Sequence[Person]) -> dict[int, Vec2]:
        """Social force per person, evaluating each unordered pair once."""
        forces = {person.person_id: ZERO for person in persons}
        for i in range(len(persons)):
            a = persons[i]
            for j in range(i + 1, len(persons)):
                b = persons[j]
                forces[a.person_id] = forces[a.person_id] + self.social_pull(a, b)
                forces[b.person_id] = forces[b.person_id] + self.social_pull(b, a)
        return forces

    def desire_forces(self, person: Person) -> dict[str, Vec2]:
        """Pull toward the nearest matching building for each deficient need.

        A need with no matching building still gets an entry, equal to zero.
        """
        forces: dict[str, Vec2] = {}
        for need in NEED_NAMES:
            if person.needs.get(need) >= self._thresholds[need]:
                continue
            kind = NEED_TO_KIND[need]
            target = self.world.closest_of_kind(person.position, kind)
            displacement = (target - person.position).clamp_length(self.config.max_pull_distance)
            forces[need] = displacement * self._weights[kind]
        return forces

    def accumulate(self, persons: Sequence[Person]) -> dict[int, ForceBreakdown]:
        """Compute every person's force breakdown and store the sum.

        Returns:
            Breakdown per person id
        """
        social = self.social_forces(persons)
        breakdowns: dict[int, ForceBreakdown] = {}
        for person in persons:
            breakdown = ForceBreakdown(
                idle=self.idle_force(person),
                social=social[person.person_id],
                desire=self.desire_forces(person),
            )
            person.movement_vector = person.movement_vector + breakdown.total
            breakdowns[person.person_id] = breakdown
        return breakdowns

    # --- Phase 2: resolve ---

    def resolve_vector(self, vector: Vec2) -> Vec2:
        """Clamp a raw movement vector into the [min_speed, max_speed] band.

        An exactly-zero vector is nudged along +x first so it has a direction.
        """
        if vector.is_zero():
            vector = Vec2(self.config.zero_nudge, 0.0)
        return vector.clamp_length_band(self.config.min_speed, self.config.max_speed)

    def apply(self, persons: Sequence[Person], elapsed: float) -> None:
        """Move every person by its resolved vector and clear the accumulator."""
        scale = self.config.movement_factor * elapsed
        for person in persons:
            step = self.resolve_vector(person.movement_vector) * scale
            person.position = person.position + step
            person.movement_vector = ZERO

"""Needs model: decay and replenishment of person needs."""

from __future__ import annotations

import random

from complexcity.config import SimulationConfig
from complexcity.simulation.entities import NEED_MAX, BuildingKind, PersonNeeds


class NeedsModel:
    """Applies decay and replenishment rules to PersonNeeds.

    Shelter and hunger decay deterministically with elapsed time. Social,
    entertainment, sport and creativity decay through independent Bernoulli
    draws, and health suffers a rare catastrophic loss. Every write clamps.
    """

    def __init__(self, config: SimulationConfig, rng: random.Random):
        self.config = config
        self._rng = rng
        self._random_decay: tuple[tuple[str, float], ...] = (
            ("entertainment", config.entertainment_decay_probability),
            ("sport", config.sport_decay_probability),
            ("creativity", config.creativity_decay_probability),
            ("social", config.social_decay_probability),
        )
        self._rates: dict[BuildingKind, float] = {
            BuildingKind.RESTAURANT: config.restaurant_rate,
            BuildingKind.HOSPITAL: config.hospital_rate,
            BuildingKind.POOL: config.pool_rate,
            BuildingKind.CREATIVE: config.creative_rate,
            BuildingKind.CINEMA: config.cinema_rate,
            BuildingKind.FORUM: config.forum_rate,
        }

    def decay(self, needs: PersonNeeds, elapsed: float) -> None:
        """Apply one decay step covering `elapsed` seconds.

        Args:
            needs: Needs to decay in place
            elapsed: Length of the decay step in seconds
        """
        cfg = self.config
        needs.adjust("shelter", -cfg.shelter_decay * elapsed)
        needs.adjust("hunger", -cfg.hunger_decay * elapsed)

        for need, probability in self._random_decay:
            if self._rng.random() < probability:
                needs.adjust(need, -cfg.random_decay_amount)

        if self._rng.random() < cfg.health_loss_probability:
            needs.adjust("health", -cfg.health_loss_amount)

    def replenish(self, needs: PersonNeeds, kind: BuildingKind, elapsed: float) -> None:
        """Raise the need served by `kind` for a person standing near it.

        Houses restore shelter instantly; other kinds restore their need at a
        kind-specific rate per second. Decorative kinds do nothing.
        """
        need = kind.need
        if need is None:
            return
        if kind is BuildingKind.HOUSE:
            needs.set(need, NEED_MAX)
            return
        needs.adjust(need, self._rates[kind] * elapsed)

    def rate_for(self, kind: BuildingKind) -> float | None:
        """Replenish rate per second, or None for instant/decorative kinds."""
        return self._rates.get(kind)

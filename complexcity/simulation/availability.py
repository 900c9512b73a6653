"""Building availability: per-kind cooldowns gating placement."""

from __future__ import annotations

import logging

from complexcity.config import SimulationConfig
from complexcity.simulation.entities import BuildingKind
from complexcity.simulation.timers import Cooldown

logger = logging.getLogger(__name__)


def cooldowns_from_config(config: SimulationConfig) -> dict[BuildingKind, float]:
    """Cooldown duration for every timed building kind."""
    return {
        BuildingKind.HOUSE: config.house_cooldown,
        BuildingKind.RESTAURANT: config.restaurant_cooldown,
        BuildingKind.CINEMA: config.cinema_cooldown,
        BuildingKind.FORUM: config.forum_cooldown,
        BuildingKind.POOL: config.pool_cooldown,
        BuildingKind.CREATIVE: config.creative_cooldown,
        BuildingKind.HOSPITAL: config.hospital_cooldown,
    }


class BuildingAvailability:
    """Cooldown state machine for each timed building kind.

    Each timed kind cycles Cooldown(remaining) -> Available -> (placement) ->
    Cooldown(full). Kinds without a cooldown (decorative ones) are always
    available and never consumed.
    """

    def __init__(self, durations: dict[BuildingKind, float]):
        self._cooldowns: dict[BuildingKind, Cooldown] = {
            kind: Cooldown(duration) for kind, duration in durations.items()
        }
        self._just_available: set[BuildingKind] = set()

    @classmethod
    def from_config(cls, config: SimulationConfig) -> BuildingAvailability:
        return cls(cooldowns_from_config(config))

    def tick(self, elapsed: float) -> set[BuildingKind]:
        """Advance every cooling-down kind.

        Returns:
            Kinds that became available during this step (edge signal)
        """
        became = {kind for kind, cooldown in self._cooldowns.items() if cooldown.tick(elapsed)}
        if became:
            logger.debug(f"Now available: {sorted(k.value for k in became)}")
        self._just_available = became
        return became

    def just_became_available(self, kind: BuildingKind) -> bool:
        """True only for the step on which the kind's cooldown expired."""
        return kind in self._just_available

    def is_timed(self, kind: BuildingKind) -> bool:
        return kind in self._cooldowns

    def is_available(self, kind: BuildingKind) -> bool:
        """Level signal: the kind may be placed now."""
        cooldown = self._cooldowns.get(kind)
        return cooldown is None or cooldown.expired

    def remaining(self, kind: BuildingKind) -> float:
        """Seconds until the kind becomes available (0 if available)."""
        cooldown = self._cooldowns.get(kind)
        return 0.0 if cooldown is None else cooldown.remaining

    def consume(self, kind: BuildingKind) -> bool:
        """Use up availability for one placement.

        Returns:
            True if the kind was available (and its cooldown restarted)
        """
        cooldown = self._cooldowns.get(kind)
        if cooldown is None:
            return True
        if not cooldown.expired:
            return False
        cooldown.restart()
        self._just_available.discard(kind)
        return True

    def snapshot(self) -> dict[BuildingKind, bool]:
        """Availability of every kind, timed or not."""
        return {kind: self.is_available(kind) for kind in BuildingKind}

    def reset(self) -> None:
        for cooldown in self._cooldowns.values():
            cooldown.restart()
        self._just_available = set()

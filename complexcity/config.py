"""Configuration settings for the complexcity simulation.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via COMPLEXCITY_* environment variables.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

NEED_NAMES: tuple[str, ...] = (
    "shelter",
    "hunger",
    "social",
    "entertainment",
    "health",
    "sport",
    "creativity",
)


class SimulationConfig(BaseSettings):
    """Global configuration for the town simulation."""

    # Randomness
    seed: int = 42

    # Population
    population_cap: int = 200
    spawn_interval: float = 7.0  # seconds between spawn attempts
    person_size: float = 16.0  # bounding box edge for click selection

    # Needs decay (one step per decay_interval)
    decay_interval: float = 1.0
    shelter_decay: float = 1.0  # per elapsed second of a decay step
    hunger_decay: float = 0.75  # per elapsed second of a decay step
    random_decay_amount: float = 1.0  # loss on a successful Bernoulli draw
    entertainment_decay_probability: float = 0.45
    sport_decay_probability: float = 0.7
    creativity_decay_probability: float = 0.68
    social_decay_probability: float = 0.4
    health_loss_probability: float = 0.005
    health_loss_amount: float = 75.0

    # Replenishment (need points per second while in range)
    interaction_radius: float = 40.0
    restaurant_rate: float = 50.0
    hospital_rate: float = 30.0
    pool_rate: float = 20.0
    creative_rate: float = 15.0
    cinema_rate: float = 10.0
    forum_rate: float = 5.0
    # "stack": every building in range replenishes; "single": once per kind per tick
    replenish_policy: Literal["stack", "single"] = "stack"

    # Desire thresholds (need below threshold -> seek building)
    hunger_threshold: float = 25.0
    shelter_threshold: float = 10.0
    health_threshold: float = 30.0
    social_threshold: float = 25.0
    creativity_threshold: float = 20.0
    sport_threshold: float = 20.0
    entertainment_threshold: float = 20.0

    # Desire weights (restaurant strongest, house weakest)
    restaurant_weight: float = 0.5
    hospital_weight: float = 0.4
    forum_weight: float = 0.3
    pool_weight: float = 0.25
    creative_weight: float = 0.25
    cinema_weight: float = 0.2
    house_weight: float = 0.1

    # Movement
    idle_direction_interval: float = 3.0
    idle_force: float = 1.0
    social_force: float = 0.05
    max_pull_distance: float = 100.0  # displacement clamp for social and desire forces
    min_speed: float = 0.2
    max_speed: float = 1.0
    zero_nudge: float = 1e-4
    movement_factor: float = 18.0

    # Building availability cooldowns (seconds)
    house_cooldown: float = 11.0
    restaurant_cooldown: float = 17.0
    cinema_cooldown: float = 29.0
    forum_cooldown: float = 37.0
    pool_cooldown: float = 43.0
    creative_cooldown: float = 53.0
    hospital_cooldown: float = 109.0

    # Placement gates: building kind -> minimum population score
    placement_score_gates: dict[str, float] = Field(default_factory=dict)

    # De-stacking
    building_min_distance: float = 30.0

    # Tick history
    history_limit: int = 1000

    model_config = {"env_prefix": "COMPLEXCITY_"}

    @model_validator(mode="after")
    def _check_ranges(self) -> "SimulationConfig":
        if self.min_speed > self.max_speed:
            raise ValueError(
                f"min_speed ({self.min_speed}) must not exceed max_speed ({self.max_speed})"
            )
        for name in ("decay_interval", "spawn_interval", "idle_direction_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in type(self).model_fields:
            if name.endswith("_cooldown") and getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.population_cap < 1:
            raise ValueError("population_cap must be at least 1 to hold the seed person")
        return self

    def threshold_for(self, need: str) -> float:
        """Desire threshold for a need name."""
        return float(getattr(self, f"{need}_threshold"))

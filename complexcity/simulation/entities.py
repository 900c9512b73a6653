"""Entities in the simulation: persons, their needs, and buildings.

A Person wanders the town, driven by seven needs that decay over time and are
replenished by standing near the matching kind of Building.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from complexcity.config import NEED_NAMES
from complexcity.errors import UnknownBuildingKindError
from complexcity.simulation.geometry import Vec2

NEED_MIN = 0.0
NEED_MAX = 100.0


class BuildingKind(enum.Enum):
    """Kinds of buildings that can be placed in town."""

    HOUSE = "house"
    FORUM = "forum"
    CINEMA = "cinema"
    HOSPITAL = "hospital"
    POOL = "pool"
    RESTAURANT = "restaurant"
    CREATIVE = "creative"
    UNDERGROUND = "underground"  # decorative

    @classmethod
    def from_key(cls, key: str) -> BuildingKind:
        """Look up a kind by its value, case-insensitively.

        Raises:
            UnknownBuildingKindError: If no kind matches.
        """
        try:
            return cls(key.strip().lower())
        except ValueError:
            raise UnknownBuildingKindError(key) from None

    @property
    def footprint(self) -> tuple[float, float]:
        """Sprite dimensions (width, height)."""
        return FOOTPRINTS[self]

    @property
    def need(self) -> str | None:
        """The need this kind replenishes, or None for decorative kinds."""
        return KIND_TO_NEED.get(self)

    @property
    def is_functional(self) -> bool:
        return self in KIND_TO_NEED


FOOTPRINTS: dict[BuildingKind, tuple[float, float]] = {
    BuildingKind.HOUSE: (48.0, 48.0),
    BuildingKind.FORUM: (80.0, 96.0),
    BuildingKind.CINEMA: (48.0, 42.0),
    BuildingKind.HOSPITAL: (48.0, 96.0),
    BuildingKind.POOL: (64.0, 54.0),
    BuildingKind.RESTAURANT: (64.0, 48.0),
    BuildingKind.CREATIVE: (68.0, 42.0),
    BuildingKind.UNDERGROUND: (32.0, 48.0),
}

NEED_TO_KIND: dict[str, BuildingKind] = {
    "shelter": BuildingKind.HOUSE,
    "hunger": BuildingKind.RESTAURANT,
    "social": BuildingKind.FORUM,
    "entertainment": BuildingKind.CINEMA,
    "health": BuildingKind.HOSPITAL,
    "sport": BuildingKind.POOL,
    "creativity": BuildingKind.CREATIVE,
}

KIND_TO_NEED: dict[BuildingKind, str] = {kind: need for need, kind in NEED_TO_KIND.items()}


class IdleDirection(enum.Enum):
    """The six directions a person drifts in while idle."""

    PLUS_X = (1.0, 0.0)
    PLUS_Y = (0.0, 1.0)
    PLUS_BOTH = (1.0, 1.0)
    MINUS_X = (-1.0, 0.0)
    MINUS_Y = (0.0, -1.0)
    MINUS_BOTH = (-1.0, -1.0)

    def unit(self) -> Vec2:
        """Direction with diagonal components scaled by 1/sqrt(2)."""
        dx, dy = self.value
        if dx != 0.0 and dy != 0.0:
            return Vec2(dx / math.sqrt(2.0), dy / math.sqrt(2.0))
        return Vec2(dx, dy)


def clamp_need(value: float) -> float:
    """Clamp a need score into [0, 100]."""
    return max(NEED_MIN, min(NEED_MAX, value))


@dataclass
class PersonNeeds:
    """The seven need scores of a person.

    All values range from 0-100 and are clamped on every assignment,
    including construction.
    """

    shelter: float = 50.0
    hunger: float = 50.0  # 0 = starving, 100 = full
    social: float = 50.0
    entertainment: float = 50.0
    health: float = 100.0
    sport: float = 50.0
    creativity: float = 50.0

    def __setattr__(self, name: str, value: float) -> None:
        if name in NEED_NAMES:
            value = clamp_need(float(value))
        super().__setattr__(name, value)

    def get(self, need: str) -> float:
        return float(getattr(self, need))

    def set(self, need: str, value: float) -> None:
        """Set a need, clamping to [0, 100]."""
        if need not in NEED_NAMES:
            raise KeyError(need)
        setattr(self, need, value)

    def adjust(self, need: str, delta: float) -> None:
        """Add delta to a need, clamping to [0, 100]."""
        self.set(need, self.get(need) + delta)

    def mean(self) -> float:
        return sum(self.get(n) for n in NEED_NAMES) / len(NEED_NAMES)

    def as_dict(self) -> dict[str, float]:
        """Return needs as a flat dictionary in canonical order."""
        return {n: self.get(n) for n in NEED_NAMES}


@dataclass
class Person:
    """A simulated townsperson."""

    person_id: int
    position: Vec2 = field(default_factory=Vec2)
    needs: PersonNeeds = field(default_factory=PersonNeeds)
    satisfaction: float = 0.0
    idle_direction: IdleDirection = IdleDirection.PLUS_BOTH
    movement_vector: Vec2 = field(default_factory=Vec2)
    liked: set[int] = field(default_factory=set)
    disliked: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.satisfaction = self.needs.mean()

    def knows(self, other_id: int) -> bool:
        """Whether other_id has already been classified as liked or disliked."""
        return other_id in self.liked or other_id in self.disliked

    def contains_point(self, point: Vec2, size: float) -> bool:
        """Hit-test a point against the person's bounding box."""
        half = size / 2.0
        return (
            self.position.x - half < point.x < self.position.x + half
            and self.position.y - half < point.y < self.position.y + half
        )


@dataclass
class Building:
    """A placed building."""

    building_id: int
    kind: BuildingKind
    position: Vec2 = field(default_factory=Vec2)
    being_dragged: bool = False

    @property
    def footprint(self) -> tuple[float, float]:
        return self.kind.footprint

    def bounds(self) -> tuple[Vec2, Vec2]:
        """Bottom-left and top-right corners of the footprint box."""
        w, h = self.footprint
        half = Vec2(w / 2.0, h / 2.0)
        return self.position - half, self.position + half

    def contains_point(self, point: Vec2) -> bool:
        """Strict hit-test against the footprint box."""
        bottom_left, top_right = self.bounds()
        return bottom_left.x < point.x < top_right.x and bottom_left.y < point.y < top_right.y


def default_position(kind: BuildingKind) -> Vec2:
    """Where a freshly placed building of this kind appears."""
    w, h = kind.footprint
    return Vec2(w / 2.0, h / 2.0)

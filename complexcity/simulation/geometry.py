"""Plane geometry for positions and force vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def normalized(self) -> Vec2:
        """Unit vector in the same direction, or zero for the zero vector."""
        magnitude = self.length()
        if magnitude == 0.0:
            return Vec2()
        return Vec2(self.x / magnitude, self.y / magnitude)

    def clamp_length(self, max_length: float) -> Vec2:
        """Shorten the vector to at most max_length, keeping its direction."""
        if max_length <= 0.0:
            return Vec2()
        magnitude = self.length()
        if magnitude <= max_length:
            return self
        return self * (max_length / magnitude)

    def clamp_length_band(self, min_length: float, max_length: float) -> Vec2:
        """Scale the vector so its length lies in [min_length, max_length].

        The zero vector has no direction and is returned unchanged.
        """
        magnitude = self.length()
        if magnitude == 0.0:
            return self
        if magnitude < min_length:
            return self * (min_length / magnitude)
        if magnitude > max_length:
            return self * (max_length / magnitude)
        return self

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vec2()

"""Small 2D math helpers shared by the simulation.

Everything here is pure Python. Positions are plain ``(x, y)`` floats on
entities; ``Vector2`` is used for headings and steering forces.
"""

from __future__ import annotations

import math

# Below this distance two points are treated as coincident when computing bearings.
EPSILON = 1e-9


class Vector2:
    """A 2D vector for headings and steering."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        """Build a vector pointing along ``angle`` (radians)."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def angle(self) -> float:
        """Heading of this vector in radians (0 for the zero vector)."""
        if abs(self.x) < EPSILON and abs(self.y) < EPSILON:
            return 0.0
        return math.atan2(self.y, self.x)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


def bearing(x1: float, y1: float, x2: float, y2: float, fallback: float = 0.0) -> float:
    """Angle in radians from (x1, y1) towards (x2, y2).

    Coincident points have no defined bearing; ``fallback`` is returned
    instead so callers never see NaN headings.
    """
    dx = x2 - x1
    dy = y2 - y1
    if abs(dx) < EPSILON and abs(dy) < EPSILON:
        return fallback
    return math.atan2(dy, dx)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


__all__ = ["Vector2", "bearing", "clamp", "distance", "distance_squared"]

"""World boundary geometry."""

import math
import random
from typing import Tuple


class WorldBounds:
    """
    Rectangular world extent shared by every moving entity.

    Positions are valid in ``[0, width] x [0, height]``; movement is
    clamped rather than wrapped.
    """

    def __init__(self, width: float, height: float):
        """
        Initialize the world bounds.

        Args:
            width: Width of the world in world units
            height: Height of the world in world units
        """
        self.width = float(width)
        self.height = float(height)

    def get_dimensions(self) -> Tuple[float, float]:
        """Get the world dimensions (width, height)."""
        return (self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        """Clamp a point into the world rectangle."""
        return (min(max(x, 0.0), self.width), min(max(y, 0.0), self.height))

    def random_point(self, rng: random.Random, margin: float = 0.0) -> Tuple[float, float]:
        """Uniform random point at least ``margin`` away from every edge."""
        margin = min(margin, self.width / 2, self.height / 2)
        return (
            rng.uniform(margin, self.width - margin),
            rng.uniform(margin, self.height - margin),
        )

    def random_edge_point(self, rng: random.Random, jitter: float = 0.0) -> Tuple[float, float]:
        """Random point on a random edge, nudged up to ``jitter`` inward or outward.

        The result is clamped, so it is always a valid position.
        """
        edge = rng.randrange(4)
        offset = rng.uniform(-jitter, jitter)
        if edge == 0:  # top
            x, y = rng.uniform(0, self.width), offset
        elif edge == 1:  # right
            x, y = self.width + offset, rng.uniform(0, self.height)
        elif edge == 2:  # bottom
            x, y = rng.uniform(0, self.width), self.height + offset
        else:  # left
            x, y = offset, rng.uniform(0, self.height)
        return self.clamp(x, y)

    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def __repr__(self) -> str:
        return f"WorldBounds(width={self.width}, height={self.height})"

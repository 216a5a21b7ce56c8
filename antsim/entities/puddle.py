"""Puddle hazard entity."""

from dataclasses import dataclass


@dataclass(eq=False)
class Puddle:
    """A circular patch of water that drowns ants who linger.

    ``death_count`` only increases; it scales the danger burst the puddle
    releases.
    """

    puddle_id: int
    x: float
    y: float
    radius: float
    death_count: int = 0

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.x
        dy = y - self.y
        return dx * dx + dy * dy <= self.radius * self.radius

    def record_death(self) -> int:
        self.death_count += 1
        return self.death_count

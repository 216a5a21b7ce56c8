"""Pheromone deposit data."""

from dataclasses import dataclass
from enum import Enum


class PheromoneType(Enum):
    """Kinds of chemical marker an ant can leave."""

    FOOD_TRAIL = "food_trail"  # Laid by carriers walking home; leads followers to food
    EXPLORATION = "exploration"  # Faint "been here" marker from wandering ants
    DANGER = "danger"  # Permanent warning near drowning sites


@dataclass(eq=False)
class PheromoneDeposit:
    """A single marker owned by the pheromone field.

    ``intensity`` is recomputed from ``base_intensity`` and ``age`` every
    tick. ``active`` turns False when the field removes the deposit, so
    ants still holding a reference can tell it is gone. Identity equality
    (``eq=False``) keeps deposits usable as dict keys and set members.
    """

    deposit_id: int
    x: float
    y: float
    kind: PheromoneType
    base_intensity: float
    intensity: float
    age: float = 0.0
    followers: int = 0
    active: bool = True

    def __repr__(self) -> str:
        return (
            f"PheromoneDeposit(id={self.deposit_id}, kind={self.kind.value}, "
            f"pos=({self.x:.1f}, {self.y:.1f}), intensity={self.intensity:.3f})"
        )

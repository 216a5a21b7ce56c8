"""Food source entity."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FoodSource:
    """A pile of food that ants carry home piece by piece.

    ``amount`` only ever goes down. Once it reaches zero the source is
    permanently inactive. A source whose remaining amount drops to the
    grace threshold or below stays collectable for a short grace window
    and is then force-depleted.
    """

    def __init__(
        self,
        source_id: int,
        x: float,
        y: float,
        amount: float,
        grace_threshold: float = 1.0,
        grace_ms: float = 5000.0,
    ) -> None:
        if amount <= 0:
            raise ValueError(f"Food source amount must be positive, got {amount}")
        self.source_id = source_id
        self.x = x
        self.y = y
        self.amount = float(amount)
        self.max_amount = float(amount)
        self.active = True
        self.destroyed = False
        self._grace_threshold = grace_threshold
        self._grace_ms = grace_ms
        # Remaining grace time, or None while the source is healthy
        self._grace_remaining: Optional[float] = None

    @property
    def is_depleted(self) -> bool:
        return not self.active

    @property
    def fullness(self) -> float:
        return self.amount / self.max_amount if self.max_amount > 0 else 0.0

    @property
    def in_grace_period(self) -> bool:
        return self._grace_remaining is not None

    def collect(self, requested: float) -> float:
        """Take up to ``requested`` food.

        Returns:
            The amount actually taken (0 for an inactive source or a
            non-positive request).
        """
        if not self.active or requested <= 0:
            return 0.0
        taken = min(requested, self.amount)
        self.amount -= taken
        if self.amount <= 0:
            self.amount = 0.0
            self.active = False
        elif self.amount <= self._grace_threshold and self._grace_remaining is None:
            self._grace_remaining = self._grace_ms
        return taken

    def advance(self, delta_ms: float) -> bool:
        """Run the grace timer.

        Returns:
            True if the source became depleted during this call
        """
        if not self.active or self._grace_remaining is None:
            return False
        self._grace_remaining -= delta_ms
        if self._grace_remaining <= 0:
            logger.debug(f"Food source {self.source_id} grace expired with {self.amount:.2f} left")
            self.deplete()
            return True
        return False

    def deplete(self, destroyed: bool = False) -> None:
        """Empty the source immediately."""
        self.amount = 0.0
        self.active = False
        self.destroyed = self.destroyed or destroyed
        self._grace_remaining = None

    def __repr__(self) -> str:
        return f"FoodSource(id={self.source_id}, pos=({self.x:.0f}, {self.y:.0f}), amount={self.amount:.1f})"

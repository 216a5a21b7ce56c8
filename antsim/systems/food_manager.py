"""Food source ownership, placement and depletion."""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, List, Optional, Tuple

from antsim.clock import SimulationClock
from antsim.config import FoodConfig
from antsim.entities.food import FoodSource
from antsim.events import EventSink, FoodDepletedEvent
from antsim.spatial.bounds import WorldBounds
from antsim.systems.base import BaseSystem, SystemResult
from antsim.update_phases import UpdatePhase, runs_in_phase

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.RESOURCES)
class FoodManager(BaseSystem):
    """Owns every food source in the world.

    Sources are depleted by ants (``collect``) or destroyed by termites
    (``destroy``). Either way they stay in the roster, inactive, until the
    next update sweeps them out and emits a single ``FoodDepletedEvent``.
    """

    def __init__(
        self,
        config: FoodConfig,
        bounds: WorldBounds,
        rng: random.Random,
        events: EventSink,
        clock: SimulationClock,
        colony_position: Tuple[float, float],
    ) -> None:
        super().__init__("FoodManager")
        self.config = config
        self.bounds = bounds
        self.rng = rng
        self.events = events
        self.clock = clock
        self.colony_position = colony_position
        self._sources: Dict[int, FoodSource] = {}
        self._next_id = 1
        self.total_collected = 0.0
        self.total_depleted = 0

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def add_source(self, x: float, y: float, amount: Optional[float] = None) -> FoodSource:
        """Place a source at (x, y), clamped into the world."""
        x, y = self.bounds.clamp(x, y)
        source = FoodSource(
            source_id=self._next_id,
            x=x,
            y=y,
            amount=self.config.default_amount if amount is None else amount,
            grace_threshold=self.config.grace_threshold,
            grace_ms=self.config.grace_ms,
        )
        self._next_id += 1
        self._sources[source.source_id] = source
        logger.debug(f"Added food source {source.source_id} at ({x:.0f}, {y:.0f}) amount={source.amount:.0f}")
        return source

    def _random_position(self, margin: float) -> Tuple[float, float]:
        """Random point that keeps clear of the nest when possible."""
        cx, cy = self.colony_position
        x, y = self.bounds.random_point(self.rng, margin)
        for _ in range(self.config.placement_attempts):
            if math.hypot(x - cx, y - cy) >= self.config.colony_clearance:
                break
            x, y = self.bounds.random_point(self.rng, margin)
        return x, y

    def add_random_source(self, amount: Optional[float] = None) -> FoodSource:
        if amount is None:
            amount = self.rng.uniform(*self.config.random_amount)
        x, y = self._random_position(self.config.drop_margin)
        return self.add_source(x, y, amount)

    def populate(self, count: int) -> List[FoodSource]:
        """Scatter ``count`` random sources (used at setup and reset)."""
        return [self.add_random_source() for _ in range(count)]

    def add_random_food(self) -> List[FoodSource]:
        """Host action: drop a small random batch of fresh food."""
        low, high = self.config.drop_count
        count = self.rng.randint(low, high)
        added = [
            self.add_random_source(self.rng.uniform(*self.config.drop_amount)) for _ in range(count)
        ]
        logger.info("Dropped %d random food sources", len(added))
        return added

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def collect(self, source: FoodSource, amount: float) -> float:
        """Take food from a source on behalf of an ant."""
        taken = source.collect(amount)
        self.total_collected += taken
        return taken

    def destroy(self, source: FoodSource) -> None:
        """Wipe out a source entirely (termite attack)."""
        if source.active:
            logger.debug(f"Food source {source.source_id} destroyed")
        source.deplete(destroyed=True)

    def _do_update(self, delta_ms: float) -> SystemResult:
        swept: List[FoodSource] = []
        for source in self._sources.values():
            source.advance(delta_ms)
            if not source.active:
                swept.append(source)

        for source in swept:
            del self._sources[source.source_id]
            self.total_depleted += 1
            self.events.emit(
                FoodDepletedEvent(
                    source_id=source.source_id,
                    x=source.x,
                    y=source.y,
                    destroyed=source.destroyed,
                    elapsed_ms=self.clock.elapsed_ms,
                )
            )

        return SystemResult(entities_removed=len(swept), events_emitted=len(swept))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def sources(self) -> List[FoodSource]:
        return list(self._sources.values())

    def active_sources(self) -> List[FoodSource]:
        return [source for source in self._sources.values() if source.active]

    def nearest_active(
        self, x: float, y: float, max_distance: Optional[float] = None
    ) -> Optional[FoodSource]:
        """Closest active source within ``max_distance`` (default search radius)."""
        limit = self.config.nearest_search_radius if max_distance is None else max_distance
        best: Optional[FoodSource] = None
        best_dist = limit
        for source in self._sources.values():
            if not source.active:
                continue
            dist = math.hypot(source.x - x, source.y - y)
            if dist <= best_dist:
                best = source
                best_dist = dist
        return best

    def clear(self) -> None:
        for source in self._sources.values():
            source.deplete()
        self._sources.clear()

    def get_stats(self) -> Dict[str, Any]:
        active = self.active_sources()
        return {
            "total_sources": len(self._sources),
            "active_sources": len(active),
            "total_food_collected": self.total_collected,
            "total_remaining_food": sum(source.amount for source in active),
            "total_depleted": self.total_depleted,
        }

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(self.get_stats())
        return info

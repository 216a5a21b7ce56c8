"""Puddle hazards and the danger pheromone they release."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from antsim.clock import SimulationClock
from antsim.config import HazardConfig
from antsim.entities.pheromone import PheromoneType
from antsim.entities.puddle import Puddle
from antsim.events import DangerBurstEvent, EventSink, PuddleSpawnedEvent
from antsim.spatial.bounds import WorldBounds
from antsim.systems.base import BaseSystem, SystemResult
from antsim.systems.pheromone_field import PheromoneField
from antsim.update_phases import UpdatePhase, runs_in_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DangerBurst:
    """Size of the danger ring a puddle releases."""

    count: int
    strength: float


def danger_burst(death_count: int, config: HazardConfig) -> DangerBurst:
    """Burst size for a puddle that has drowned ``death_count`` ants.

    count = min(death_count * 8, 30), strength = min(2.0 * death_count / 3, 4.0).
    A puddle with no deaths releases nothing.
    """
    if death_count <= 0:
        return DangerBurst(count=0, strength=0.0)
    count = min(death_count * config.deposits_per_death, config.max_deposits)
    strength = min(config.base_strength * (death_count / 3), config.max_strength)
    return DangerBurst(count=count, strength=strength)


@runs_in_phase(UpdatePhase.HAZARDS)
class HazardField(BaseSystem):
    """Owns puddles, spawns new ones and turns drownings into danger markers."""

    def __init__(
        self,
        config: HazardConfig,
        bounds: WorldBounds,
        rng: random.Random,
        pheromones: PheromoneField,
        events: EventSink,
        clock: SimulationClock,
        colony_position: Tuple[float, float],
    ) -> None:
        super().__init__("HazardField")
        self.config = config
        self.bounds = bounds
        self.rng = rng
        self.pheromones = pheromones
        self.events = events
        self.clock = clock
        self.colony_position = colony_position
        self._puddles: List[Puddle] = []
        self._next_id = 1
        self.warnings_released = 0

    @property
    def puddles(self) -> List[Puddle]:
        return list(self._puddles)

    @property
    def total_deaths(self) -> int:
        return sum(puddle.death_count for puddle in self._puddles)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def add_puddle(self, x: float, y: float, radius: float) -> Puddle:
        puddle = Puddle(puddle_id=self._next_id, x=x, y=y, radius=radius)
        self._next_id += 1
        self._puddles.append(puddle)
        self.events.emit(
            PuddleSpawnedEvent(
                puddle_id=puddle.puddle_id,
                x=x,
                y=y,
                radius=radius,
                elapsed_ms=self.clock.elapsed_ms,
            )
        )
        return puddle

    def spawn_random_puddle(self) -> Optional[Puddle]:
        """Place a puddle away from the nest.

        Returns:
            The new puddle, or None when at capacity or no clear spot was
            found within the placement attempts
        """
        cfg = self.config
        if len(self._puddles) >= cfg.max_puddles:
            return None
        cx, cy = self.colony_position
        radius = self.rng.uniform(*cfg.radius)
        for _ in range(cfg.placement_attempts):
            x, y = self.bounds.random_point(self.rng, radius)
            if math.hypot(x - cx, y - cy) >= cfg.colony_clearance + radius:
                return self.add_puddle(x, y, radius)
        logger.debug("No clear spot for a new puddle")
        return None

    def populate(self, count: Optional[int] = None) -> List[Puddle]:
        wanted = self.config.initial_puddles if count is None else count
        spawned = [self.spawn_random_puddle() for _ in range(wanted)]
        return [puddle for puddle in spawned if puddle is not None]

    def clear(self) -> None:
        self._puddles.clear()

    # ------------------------------------------------------------------
    # Danger
    # ------------------------------------------------------------------

    def puddle_at(self, x: float, y: float) -> Optional[Puddle]:
        for puddle in self._puddles:
            if puddle.contains(x, y):
                return puddle
        return None

    def release_burst(self, puddle: Puddle) -> int:
        """Scatter a ring of danger deposits around a puddle.

        Deposits sit at evenly spaced angles and random distances within
        the burst radius.

        Returns:
            Number of deposits placed
        """
        burst = danger_burst(puddle.death_count, self.config)
        if burst.count == 0:
            return 0
        step = 2 * math.pi / burst.count
        for i in range(burst.count):
            angle = i * step
            dist = self.rng.uniform(0, self.config.burst_radius)
            self.pheromones.deposit(
                puddle.x + math.cos(angle) * dist,
                puddle.y + math.sin(angle) * dist,
                PheromoneType.DANGER,
                burst.strength,
            )
        self.events.emit(
            DangerBurstEvent(
                puddle_id=puddle.puddle_id,
                deposits=burst.count,
                strength=burst.strength,
                death_count=puddle.death_count,
                elapsed_ms=self.clock.elapsed_ms,
            )
        )
        return burst.count

    def warn(self, puddle: Puddle) -> int:
        """An ant is close to drowning: re-broadcast the puddle's warning."""
        placed = self.release_burst(puddle)
        if placed:
            self.warnings_released += 1
        return placed

    def record_death(self, puddle: Puddle, x: float, y: float) -> None:
        """An ant drowned at (x, y) inside ``puddle``."""
        deaths = puddle.record_death()
        self.release_burst(puddle)
        self.pheromones.deposit(x, y, PheromoneType.DANGER, self.config.death_marker_strength)
        logger.debug(f"Puddle {puddle.puddle_id} claimed ant #{deaths}")

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def _do_update(self, delta_ms: float) -> SystemResult:
        chance = self.config.spawn_rate_per_second * delta_ms / 1000.0
        if len(self._puddles) < self.config.max_puddles and self.rng.random() < chance:
            if self.spawn_random_puddle() is not None:
                return SystemResult(entities_spawned=1, events_emitted=1)
        return SystemResult.empty()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_puddles": len(self._puddles),
            "deadly_puddles": sum(1 for puddle in self._puddles if puddle.death_count > 0),
            "total_deaths": self.total_deaths,
            "warnings_released": self.warnings_released,
        }

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(self.get_stats())
        return info

"""Termite raids: spawning, updating and ending them."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from antsim.entities.termite import Termite
from antsim.events import AttackEndedEvent, AttackStartedEvent, TermiteDiedEvent
from antsim.systems.base import BaseSystem, SystemResult
from antsim.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.TERMITES)
class TermiteSwarm(BaseSystem):
    """Owns every termite.

    A raid is active from ``start_raid`` until the last termite dies. When
    it ends, every ant is sent back to exploring.
    """

    def __init__(self, ctx: "SimulationContext") -> None:
        super().__init__("TermiteSwarm")
        self.ctx = ctx
        self.config = ctx.config.termites
        self._termites: List[Termite] = []
        self._next_id = 1
        self.attack_active = False
        self.raids_started = 0
        self.total_killed = 0
        self._raid_kills = 0

    @property
    def termites(self) -> List[Termite]:
        return list(self._termites)

    def __len__(self) -> int:
        return len(self._termites)

    def raid_size(self, population: int) -> int:
        return max(self.config.min_raid_size, population // self.config.ants_per_raider)

    def spawn_termite(self, x: float, y: float) -> Termite:
        x, y = self.ctx.bounds.clamp(x, y)
        termite = Termite(self._next_id, x, y, self.config, self.ctx.rng)
        self._next_id += 1
        self._termites.append(termite)
        return termite

    def start_raid(self, count: Optional[int] = None) -> int:
        """Spawn a raiding party at random world edges.

        Returns:
            Number of termites spawned (0 if a raid is already under way)
        """
        if self.attack_active:
            return 0
        if count is None:
            population = self.ctx.colony.population if self.ctx.colony is not None else 0
            count = self.raid_size(population)
        if count <= 0:
            return 0

        for _ in range(count):
            x, y = self.ctx.bounds.random_edge_point(self.ctx.rng, self.config.spawn_edge_margin)
            self.spawn_termite(x, y)
        self.attack_active = True
        self.raids_started += 1
        self._raid_kills = 0
        logger.info("Termite raid started with %d termites", count)
        self.ctx.events.emit(AttackStartedEvent(termite_count=count, elapsed_ms=self.ctx.elapsed_ms))
        return count

    def end_raid(self) -> None:
        self.attack_active = False
        logger.info("Termite raid over (%d killed)", self._raid_kills)
        if self.ctx.colony is not None:
            self.ctx.colony.recall_ants()
        self.ctx.events.emit(AttackEndedEvent(termites_killed=self._raid_kills, elapsed_ms=self.ctx.elapsed_ms))

    def nearest(self, x: float, y: float, radius: float) -> Optional[Termite]:
        best: Optional[Termite] = None
        best_dist = radius
        for termite in self._termites:
            if not termite.alive:
                continue
            dist = math.hypot(termite.x - x, termite.y - y)
            if dist <= best_dist:
                best = termite
                best_dist = dist
        return best

    def _do_update(self, delta_ms: float) -> SystemResult:
        for termite in self._termites:
            termite.update(delta_ms, self.ctx)

        dead = [termite for termite in self._termites if not termite.alive]
        for termite in dead:
            self._termites.remove(termite)
            self.total_killed += 1
            self._raid_kills += 1
            self.ctx.events.emit(
                TermiteDiedEvent(
                    termite_id=termite.termite_id,
                    x=termite.x,
                    y=termite.y,
                    elapsed_ms=self.ctx.elapsed_ms,
                )
            )

        events = len(dead)
        if self.attack_active and not self._termites:
            self.end_raid()
            events += 1

        return SystemResult(
            entities_affected=len(self._termites),
            entities_removed=len(dead),
            events_emitted=events,
        )

    def clear(self) -> None:
        for termite in self._termites:
            termite.alive = False
        self._termites.clear()
        self.attack_active = False

    def get_stats(self) -> Dict[str, Any]:
        return {
            "termites": len(self._termites),
            "attack_active": self.attack_active,
            "raids_started": self.raids_started,
            "total_killed": self.total_killed,
        }

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(self.get_stats())
        return info

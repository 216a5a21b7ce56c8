"""Colony lifecycle: roster, food storage, spawning, brood and evolution.

Ants are updated by ``AntActivity`` earlier in the tick and may die
there; dying only flags them. ``sweep_dead`` turns flagged ants into
corpses and removes them from the roster. It runs at the start of the
colony update and again at frame end (for ants killed by termites), so
``total_born - total_died == population`` holds after every tick.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from antsim.entities.ant import Ant
from antsim.entities.ant_state import AntRole, AntState
from antsim.events import AntDiedEvent, AntSpawnedEvent, ColonyEvolvedEvent, EmergencyReliefEvent
from antsim.systems.base import BaseSystem, SystemResult
from antsim.systems.reproduction import BroodPipeline, QueenCycle
from antsim.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)

AntFilter = Callable[[Ant], bool]


@runs_in_phase(UpdatePhase.COLONY)
class Colony(BaseSystem):
    """Owns the ant roster and the colony's shared resources."""

    def __init__(self, ctx: "SimulationContext") -> None:
        super().__init__("Colony")
        self.ctx = ctx
        self.config = ctx.config.colony
        self.x, self.y = ctx.home

        self.food_storage = self.config.initial_food_storage
        self.max_population = self.config.max_population
        self.spawn_cost = self.config.spawn_cost
        self.generation = 1

        self._ants: Dict[int, Ant] = {}
        self._role_counts: Dict[AntRole, int] = {role: 0 for role in AntRole}
        self._next_id = 1
        self.total_born = 0
        self.total_died = 0
        self.brood_feedings = 0
        self.total_food_delivered = 0.0

        self.brood = BroodPipeline(self.config, ctx.rng)
        self.queen_cycle = QueenCycle(self.config, ctx.rng, ctx.events)

        self._spawn_elapsed_ms = 0.0
        self._relief_cooldown_ms = 0.0

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @property
    def ants(self) -> List[Ant]:
        return list(self._ants.values())

    @property
    def population(self) -> int:
        return len(self._ants)

    @property
    def has_queen(self) -> bool:
        return self._role_counts[AntRole.QUEEN] > 0

    def has_role(self, role: AntRole) -> bool:
        return self._role_counts[role] > 0

    def get_ant(self, ant_id: int) -> Optional[Ant]:
        return self._ants.get(ant_id)

    def _choose_role(self) -> AntRole:
        if not self.has_queen and self.ctx.rng.random() < self.config.queen_spawn_chance:
            return AntRole.QUEEN
        return AntRole(self.ctx.rng.choice(self.config.roles))

    def spawn_ant(self, free: bool = False, from_brood: bool = False, role: Optional[AntRole] = None) -> Optional[Ant]:
        """Add an ant near the nest.

        Args:
            free: Skip the food cost (founding ants and emerging brood)
            from_brood: The ant emerged from a pupa
            role: Force a role instead of picking one at random

        Returns:
            The new ant, or None at the population cap or when storage
            cannot pay the spawn cost (nothing changes in either case)
        """
        if self.population >= self.max_population:
            return None
        if not free and self.food_storage < self.spawn_cost:
            return None
        if role is AntRole.QUEEN and self.has_queen:
            role = None

        if not free:
            self.food_storage -= self.spawn_cost

        rng = self.ctx.rng
        jitter = self.config.spawn_jitter
        x, y = self.ctx.bounds.clamp(
            self.x + rng.uniform(-jitter, jitter), self.y + rng.uniform(-jitter, jitter)
        )
        ant = Ant(
            ant_id=self._next_id,
            role=role or self._choose_role(),
            x=x,
            y=y,
            config=self.ctx.config.ants,
            rng=rng,
        )
        self._next_id += 1
        self._ants[ant.ant_id] = ant
        self._role_counts[ant.role] += 1
        self.total_born += 1
        if ant.role is AntRole.QUEEN:
            logger.info("A new queen was born (ant %d)", ant.ant_id)

        self.ctx.events.emit(
            AntSpawnedEvent(
                ant_id=ant.ant_id,
                role=ant.role.value,
                x=x,
                y=y,
                from_brood=from_brood,
                elapsed_ms=self.ctx.elapsed_ms,
            )
        )
        return ant

    def seed_population(self, count: int) -> int:
        """Create the founding ants at no cost."""
        spawned = 0
        for _ in range(count):
            if self.spawn_ant(free=True) is None:
                break
            spawned += 1
        return spawned

    def sweep_dead(self) -> int:
        """Turn every flagged ant into a corpse and drop it from the roster."""
        dead = [ant for ant in self._ants.values() if not ant.alive]
        for ant in dead:
            del self._ants[ant.ant_id]
            self._role_counts[ant.role] -= 1
            self.total_died += 1
            ant.release_trail(self.ctx)
            cause = ant.death_cause.value if ant.death_cause else "unknown"
            self.ctx.corpses.add(ant.x, ant.y, ant.ant_id, cause)
            if ant.role is AntRole.QUEEN and not self.has_queen:
                self.queen_cycle.reset()
                logger.info("The queen died (%s); the colony is queenless", cause)
            self.ctx.events.emit(
                AntDiedEvent(
                    ant_id=ant.ant_id,
                    role=ant.role.value,
                    cause=cause,
                    x=ant.x,
                    y=ant.y,
                    elapsed_ms=self.ctx.elapsed_ms,
                )
            )
        return len(dead)

    def recall_ants(self) -> None:
        """After a raid: everyone back to exploring with no target.

        Resting ants keep their rest; their timer returns them to exploring.
        """
        for ant in self._ants.values():
            if ant.alive and not ant.is_resting:
                ant.clear_target(self.ctx)
                ant.speed_boost = 1.0
                ant.set_state(AntState.EXPLORING)

    # ------------------------------------------------------------------
    # Food
    # ------------------------------------------------------------------

    def deposit_food(self, amount: float) -> None:
        if amount > 0:
            self.food_storage += amount
            self.total_food_delivered += amount

    def take_food(self, amount: float) -> float:
        """Remove up to ``amount`` from storage (never below zero)."""
        taken = min(max(amount, 0.0), self.food_storage)
        self.food_storage -= taken
        return taken

    def _pay(self, cost: float) -> bool:
        if self.food_storage < cost:
            return False
        self.food_storage -= cost
        return True

    def record_brood_feeding(self) -> None:
        self.brood_feedings += 1

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def _do_update(self, delta_ms: float) -> SystemResult:
        removed = self.sweep_dead()
        spawned = 0
        cfg = self.config
        elapsed = self.ctx.elapsed_ms

        self._spawn_elapsed_ms += delta_ms
        if self._spawn_elapsed_ms >= cfg.spawn_interval_ms:
            self._spawn_elapsed_ms = 0.0
            if self.spawn_ant() is not None:
                spawned += 1

        if self.has_queen:
            self.queen_cycle.update(delta_ms, elapsed, self.food_storage, self._pay, self.brood)

        self.brood.advance(delta_ms, self._pay)
        spawned += self._emerge_adults()

        self._emergency_relief(delta_ms)
        self._maybe_evolve(delta_ms)

        return SystemResult(
            entities_affected=self.population,
            entities_spawned=spawned,
            entities_removed=removed,
            details={"food_storage": self.food_storage},
        )

    def _emerge_adults(self) -> int:
        adults = self.brood.counts.adults
        if adults <= 0:
            return 0
        wanted = min(adults, self.ctx.rng.randint(1, self.config.max_adults_per_tick))
        emerged = 0
        for _ in range(wanted):
            if self.spawn_ant(free=True, from_brood=True) is None:
                break
            self.brood.take_adult()
            emerged += 1
        return emerged

    def _emergency_relief(self, delta_ms: float) -> None:
        if self._relief_cooldown_ms > 0:
            self._relief_cooldown_ms -= delta_ms
            return
        if self.food_storage >= self.config.emergency_storage_threshold:
            return
        fed = 0
        for ant in self._ants.values():
            if ant.alive:
                ant.gain_energy(self.config.emergency_energy_boost)
                fed += 1
        self._relief_cooldown_ms = self.config.emergency_cooldown_ms
        if fed:
            logger.debug(f"Emergency relief fed {fed} ants (storage {self.food_storage:.1f})")
            self.ctx.events.emit(
                EmergencyReliefEvent(ants_fed=fed, food_storage=self.food_storage, elapsed_ms=self.ctx.elapsed_ms)
            )

    def _maybe_evolve(self, delta_ms: float) -> None:
        cfg = self.config
        if self.food_storage <= cfg.evolution_storage_threshold:
            return
        if self.ctx.rng.random() < cfg.evolution_rate_per_second * delta_ms / 1000.0:
            self.evolve()

    def evolve(self) -> None:
        """Advance a generation: cheaper spawning and a larger cap."""
        cfg = self.config
        self.generation += 1
        self.spawn_cost = max(cfg.min_spawn_cost, self.spawn_cost - 1)
        self.max_population = min(cfg.max_population_ceiling, self.max_population + cfg.evolution_population_step)
        logger.info(
            "Colony evolved to generation %d (spawn cost %.0f, max population %d)",
            self.generation,
            self.spawn_cost,
            self.max_population,
        )
        self.ctx.events.emit(
            ColonyEvolvedEvent(
                generation=self.generation,
                spawn_cost=self.spawn_cost,
                max_population=self.max_population,
                elapsed_ms=self.ctx.elapsed_ms,
            )
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def nearest_ant(
        self, x: float, y: float, radius: float, predicate: Optional[AntFilter] = None
    ) -> Optional[Ant]:
        best: Optional[Ant] = None
        best_dist = radius
        for ant in self._ants.values():
            if not ant.alive or (predicate is not None and not predicate(ant)):
                continue
            dist = math.hypot(ant.x - x, ant.y - y)
            if dist <= best_dist:
                best = ant
                best_dist = dist
        return best

    def ants_by_state(self) -> Dict[str, int]:
        counts = {state.value: 0 for state in AntState}
        for ant in self._ants.values():
            counts[ant.state.value] += 1
        return counts

    def ants_by_role(self) -> Dict[str, int]:
        return {role.value: count for role, count in self._role_counts.items()}

    @property
    def efficiency(self) -> float:
        """Share of all ants ever born that are still alive."""
        if self.total_born == 0:
            return 1.0
        return (self.total_born - self.total_died) / self.total_born

    def health_status(self) -> str:
        """Colony-wide condition label based on food storage."""
        cfg = self.config
        if self.food_storage < cfg.status_sick_below:
            return "Sick"
        if self.food_storage < cfg.status_needs_food_below:
            return "Needs Food"
        if self.food_storage < cfg.status_weak_below:
            return "Weak"
        return "Healthy"

    def get_stats(self) -> Dict[str, Any]:
        return {
            "population": self.population,
            "food_storage": self.food_storage,
            "generation": self.generation,
            "max_population": self.max_population,
            "spawn_cost": self.spawn_cost,
            "total_born": self.total_born,
            "total_died": self.total_died,
            "efficiency": self.efficiency,
            "status": self.health_status(),
            "has_queen": self.has_queen,
            "queen_phase": self.queen_cycle.state.value,
            "nuptial_flight_active": self.queen_cycle.in_flight,
            "brood_feedings": self.brood_feedings,
            "ant_states": self.ants_by_state(),
            "ant_roles": self.ants_by_role(),
            "reproduction_stages": self.brood.counts.as_dict(),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(
            {
                "population": self.population,
                "food_storage": round(self.food_storage, 1),
                "generation": self.generation,
                "brood": self.brood.counts.as_dict(),
            }
        )
        return info

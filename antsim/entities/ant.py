"""The ant agent.

An ant's tick runs in a fixed order:

1. Energy drains; an ant out of energy starves.
2. Puddle exposure is tracked; long exposure costs energy, then drowns.
3. A resting ant only counts down its rest and stops there.
4. ``decide`` picks this tick's state; its effects are applied.
5. The state's behaviour runs (see ``antsim.behavior.actions``).
6. Pheromone is emitted on a fixed cadence.
7. The ant moves along its heading and is clamped to the world.

Dying only flags the ant. The colony sweeps flagged ants into corpses so
that no collection is mutated while it is being iterated.
"""

from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Dict, Optional, Set

from antsim.behavior import actions, steering
from antsim.behavior.senses import Senses
from antsim.behavior.transitions import AntView, Effect, Transition, decide
from antsim.clock import Countdown
from antsim.config import AntConfig
from antsim.entities.ant_state import AntRole, AntState, DeathCause
from antsim.entities.pheromone import PheromoneDeposit, PheromoneType
from antsim.entities.targets import Target, TrailTarget
from antsim.math_utils import distance

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)


class Ant:
    """A single colony member."""

    def __init__(
        self,
        ant_id: int,
        role: AntRole,
        x: float,
        y: float,
        config: AntConfig,
        rng: random.Random,
    ) -> None:
        self.ant_id = ant_id
        self.role = role
        self.x = x
        self.y = y
        self.config = config

        self.base_speed = config.base_speed_min + rng.random() * config.base_speed_range
        self.speed_boost = 1.0
        self.heading = rng.uniform(0, 2 * math.pi)
        self.wander_angle = 0.0

        self.energy = config.max_energy
        self.food_amount = 0.0
        self.carrying_food = False
        self.carrying_corpse = False

        self.state = AntState.EXPLORING
        self.target: Optional[Target] = None
        self.alive = True
        self.death_cause: Optional[DeathCause] = None

        self.fed_brood = False
        self.lifespan_ms = 0.0
        self.food_collected = 0.0
        self.corpses_collected = 0
        self.brood_feedings = 0

        self.hazard_exposure_ms = 0.0
        self._hazard_penalized = False
        self._hazard_warned = False

        self._rest = Countdown()
        self._attack_cooldown_ms = 0.0
        self._since_pheromone_ms = 0.0
        self._followed: Optional[PheromoneDeposit] = None
        self._trail_memory: Deque[int] = deque(maxlen=config.trail_memory_size)

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    @property
    def fullness(self) -> float:
        return self.food_amount / self.config.max_food_carry

    @property
    def speed(self) -> float:
        return self.base_speed * self.speed_boost

    @property
    def is_resting(self) -> bool:
        return self.state is AntState.RESTING

    @property
    def ready_to_attack(self) -> bool:
        return self._attack_cooldown_ms <= 0

    def reset_attack_cooldown(self) -> None:
        self._attack_cooldown_ms = self.config.attack_cooldown_ms

    def gain_energy(self, amount: float) -> None:
        self.energy = min(self.config.max_energy, self.energy + amount)

    def spend_energy(self, amount: float) -> None:
        self.energy = max(0.0, self.energy - amount)

    def die(self, cause: DeathCause) -> None:
        """Flag the ant as dead; the colony sweep removes it."""
        if not self.alive:
            return
        self.alive = False
        self.death_cause = cause
        self.energy = 0.0
        logger.debug(f"Ant {self.ant_id} ({self.role.value}) died: {cause.value}")

    # ------------------------------------------------------------------
    # State and targets
    # ------------------------------------------------------------------

    def set_state(self, state: AntState) -> None:
        self.state = state

    def set_target(self, target: Optional[Target], ctx: "SimulationContext") -> None:
        """Point the ant at ``target``. Trail deposits go through ``follow``."""
        self.release_trail(ctx)
        self.target = target

    def clear_target(self, ctx: "SimulationContext") -> None:
        self.set_target(None, ctx)

    def follow(self, deposit: PheromoneDeposit, ctx: "SimulationContext") -> None:
        """Target a trail deposit and count as one of its followers."""
        if self._followed is not deposit:
            self.release_trail(ctx)
            ctx.pheromones.add_follower(deposit)
            self._followed = deposit
        self.target = TrailTarget(deposit)

    def release_trail(self, ctx: "SimulationContext") -> None:
        if self._followed is not None:
            ctx.pheromones.remove_follower(self._followed)
            self._followed = None
        if isinstance(self.target, TrailTarget):
            self.target = None

    def remember_trail_point(self, deposit: PheromoneDeposit) -> None:
        self._trail_memory.append(deposit.deposit_id)

    @property
    def visited_trail_ids(self) -> Set[int]:
        return set(self._trail_memory)

    def start_resting(self, ctx: "SimulationContext") -> None:
        """Rest at the nest; longer after feeding the brood."""
        low, high = self.config.brood_rest_ms if self.fed_brood else self.config.rest_ms
        self.fed_brood = False
        self.clear_target(ctx)
        self.speed_boost = 1.0
        self._rest.start(ctx.rng.uniform(low, high))
        self.state = AntState.RESTING

    def apply_transition(self, transition: Transition, ctx: "SimulationContext") -> None:
        effects = transition.effects
        if Effect.AVOID_DANGER in effects and transition.danger is not None:
            danger = transition.danger
            self.heading = steering.away_from(
                self.x, self.y, danger.x, danger.y, ctx.rng, self.config.danger_heading_jitter, self.heading
            )
            self.speed_boost = min(self.config.danger_speed_boost, self.config.max_speed / self.base_speed)
        if Effect.RESET_SPEED in effects:
            self.speed_boost = 1.0
        if Effect.FOLLOW_TRAIL in effects and isinstance(transition.target, TrailTarget):
            self.follow(transition.target.deposit, ctx)
        elif not transition.keep_target:
            self.set_target(transition.target, ctx)
        self.state = transition.state

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, delta_ms: float, ctx: "SimulationContext") -> None:
        if not self.alive or delta_ms <= 0:
            return

        cfg = self.config
        self.lifespan_ms += delta_ms
        if self._attack_cooldown_ms > 0:
            self._attack_cooldown_ms -= delta_ms

        self.spend_energy(cfg.energy_drain_per_second * delta_ms / 1000.0)
        if self.energy <= 0:
            self.die(DeathCause.STARVATION)
            return

        self._update_hazard_exposure(delta_ms, ctx)
        if not self.alive:
            return

        if self.state is AntState.RESTING:
            if self._rest.advance(delta_ms):
                self.state = AntState.EXPLORING
            return

        self.apply_transition(decide(self.state, AntView.of(self), Senses(self, ctx)), ctx)
        actions.act(self, delta_ms, ctx)
        if not self.alive or self.state is AntState.RESTING:
            return

        self._emit_pheromones(delta_ms, ctx)
        self._move(delta_ms, ctx)

    def _update_hazard_exposure(self, delta_ms: float, ctx: "SimulationContext") -> None:
        puddle = ctx.hazards.puddle_at(self.x, self.y)
        if puddle is None:
            self.hazard_exposure_ms = 0.0
            self._hazard_penalized = False
            self._hazard_warned = False
            return

        cfg = self.config
        self.hazard_exposure_ms += delta_ms
        if self.hazard_exposure_ms >= cfg.hazard_penalty_ms and not self._hazard_penalized:
            self._hazard_penalized = True
            self.spend_energy(self.energy * cfg.hazard_penalty_fraction)

        warn_at = cfg.hazard_lethal_ms * ctx.config.hazards.warning_exposure_fraction
        if self.hazard_exposure_ms >= warn_at and not self._hazard_warned:
            self._hazard_warned = True
            ctx.hazards.warn(puddle)

        if self.hazard_exposure_ms >= cfg.hazard_lethal_ms:
            ctx.hazards.record_death(puddle, self.x, self.y)
            self.die(DeathCause.DROWNED)

    def _emit_pheromones(self, delta_ms: float, ctx: "SimulationContext") -> None:
        cfg = self.config
        self._since_pheromone_ms += delta_ms
        if self._since_pheromone_ms < cfg.pheromone_drop_interval_ms:
            return
        self._since_pheromone_ms = 0.0

        field = ctx.pheromones
        if self.carrying_food and self.food_amount > 0:
            fullness = self.fullness
            strength = cfg.food_trail_strength * fullness
            field.deposit(self.x, self.y, PheromoneType.FOOD_TRAIL, strength)
            if fullness >= cfg.near_full_fraction:
                jitter = cfg.near_full_extra_jitter
                for _ in range(cfg.near_full_extra_deposits):
                    field.deposit(
                        self.x + ctx.rng.uniform(-jitter, jitter),
                        self.y + ctx.rng.uniform(-jitter, jitter),
                        PheromoneType.FOOD_TRAIL,
                        strength * cfg.near_full_extra_scale,
                    )
        elif self.state is AntState.EXPLORING:
            field.deposit(self.x, self.y, PheromoneType.EXPLORATION, cfg.exploration_strength)

    def _move(self, delta_ms: float, ctx: "SimulationContext") -> None:
        if self.state is AntState.HIDING:
            home_x, home_y = ctx.home
            if distance(self.x, self.y, home_x, home_y) <= self.config.hide_stop_radius:
                return

        low, high = self.config.speed_variation
        speed = self.speed * ctx.rng.uniform(low, high) * ctx.speed_modifier_at(self.x, self.y)
        step = speed * delta_ms / 1000.0
        nx = self.x + math.cos(self.heading) * step
        ny = self.y + math.sin(self.heading) * step
        cx, cy = ctx.bounds.clamp(nx, ny)
        if cx != nx or cy != ny:
            self.heading = steering.reflect(self.heading, cx != nx, cy != ny)
        self.x, self.y = cx, cy

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        return {
            "id": self.ant_id,
            "role": self.role.value,
            "state": self.state.value,
            "health_percent": round(100.0 * self.energy / self.config.max_energy, 1),
            "food_collected": self.food_collected,
            "brood_feedings": self.brood_feedings,
            "corpses_collected": self.corpses_collected,
            "lifespan_seconds": round(self.lifespan_ms / 1000.0, 1),
        }

    def __repr__(self) -> str:
        return (
            f"Ant(id={self.ant_id}, role={self.role.value}, state={self.state.value}, "
            f"pos=({self.x:.0f}, {self.y:.0f}), energy={self.energy:.1f})"
        )

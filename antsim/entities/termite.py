"""Termite raiders.

Termites pick the most valuable thing within reach each tick: food
first, then the nest itself, then an ant, and otherwise march towards
the nest. While the colony still has soldiers, termites only dare to
pick on non-soldiers that wander close.
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum
from typing import TYPE_CHECKING, Optional

from antsim.behavior import steering
from antsim.config import TermiteConfig
from antsim.entities.ant_state import AntRole, DeathCause
from antsim.entities.targets import AntTarget, FoodTarget, Target, is_valid, position_of
from antsim.math_utils import distance

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)


class TermiteState(Enum):
    SEEKING = "seeking"
    ATTACKING_FOOD = "attacking_food"
    ATTACKING_COLONY = "attacking_colony"
    ATTACKING_ANT = "attacking_ant"


class Termite:
    def __init__(self, termite_id: int, x: float, y: float, config: TermiteConfig, rng: random.Random) -> None:
        self.termite_id = termite_id
        self.x = x
        self.y = y
        self.config = config
        self.speed = config.speed_min + rng.random() * config.speed_range
        self.health = config.health
        self.alive = True
        self.state = TermiteState.SEEKING
        self.target: Optional[Target] = None
        self.heading = rng.uniform(0, 2 * math.pi)
        self.wander_angle = 0.0
        self._cooldown_ms = 0.0
        self.attacks_made = 0

    def take_damage(self, amount: float) -> bool:
        """Apply damage.

        Returns:
            True if this blow killed the termite
        """
        if not self.alive:
            return False
        self.health -= amount
        if self.health <= 0:
            self.health = 0.0
            self.alive = False
            return True
        return False

    def _choose(self, ctx: "SimulationContext") -> None:
        cfg = self.config
        food = ctx.food.nearest_active(self.x, self.y, cfg.food_sense_radius)
        if food is not None:
            self.state, self.target = TermiteState.ATTACKING_FOOD, FoodTarget(food)
            return

        home_x, home_y = ctx.home
        if distance(self.x, self.y, home_x, home_y) < cfg.colony_sense_radius:
            self.state, self.target = TermiteState.ATTACKING_COLONY, None
            return

        colony = ctx.colony
        if colony is not None:
            guarded = colony.has_role(AntRole.SOLDIER)
            radius = cfg.ant_sense_radius_guarded if guarded else cfg.ant_sense_radius_unguarded
            ant = colony.nearest_ant(
                self.x,
                self.y,
                radius,
                predicate=(lambda a: a.role is not AntRole.SOLDIER) if guarded else None,
            )
            if ant is not None:
                self.state, self.target = TermiteState.ATTACKING_ANT, AntTarget(ant)
                return

        self.state, self.target = TermiteState.SEEKING, None

    def update(self, delta_ms: float, ctx: "SimulationContext") -> None:
        if not self.alive or delta_ms <= 0:
            return
        if self._cooldown_ms > 0:
            self._cooldown_ms -= delta_ms

        self._choose(ctx)
        cfg = self.config
        home_x, home_y = ctx.home

        if self.state is TermiteState.ATTACKING_COLONY:
            if self._approach(home_x, home_y, cfg.attack_range + cfg.colony_range_bonus, delta_ms, ctx):
                if self._strike():
                    ctx.colony.take_food(cfg.colony_damage)
            return

        if self.state in (TermiteState.ATTACKING_FOOD, TermiteState.ATTACKING_ANT) and is_valid(self.target):
            tx, ty = position_of(self.target)
            if self._approach(tx, ty, cfg.attack_range, delta_ms, ctx) and self._strike():
                self._hit(ctx)
            return

        if distance(self.x, self.y, home_x, home_y) > cfg.colony_approach:
            self.heading = steering.towards(self.x, self.y, home_x, home_y, ctx.rng, cfg.seek_jitter, self.heading)
        else:
            self.heading, self.wander_angle = steering.wander(
                self.heading, self.wander_angle, ctx.rng, cfg.wander_jitter, cfg.wander_distance
            )
        self._step(delta_ms, ctx)

    def _approach(self, tx: float, ty: float, reach: float, delta_ms: float, ctx: "SimulationContext") -> bool:
        """Move towards (tx, ty); True once within ``reach``."""
        if distance(self.x, self.y, tx, ty) <= reach:
            return True
        self.heading = steering.towards(self.x, self.y, tx, ty, ctx.rng, 0.0, self.heading)
        self._step(delta_ms, ctx)
        return distance(self.x, self.y, tx, ty) <= reach

    def _strike(self) -> bool:
        if self._cooldown_ms > 0:
            return False
        self._cooldown_ms = self.config.attack_cooldown_ms
        self.attacks_made += 1
        return True

    def _hit(self, ctx: "SimulationContext") -> None:
        target = self.target
        if isinstance(target, FoodTarget):
            ctx.food.destroy(target.source)
        elif isinstance(target, AntTarget):
            ant = target.ant
            ant.spend_energy(self.config.damage)
            if ant.energy <= 0:
                ant.die(DeathCause.COMBAT)
                logger.debug(f"Termite {self.termite_id} killed ant {ant.ant_id}")

    def _step(self, delta_ms: float, ctx: "SimulationContext") -> None:
        step = self.speed * delta_ms / 1000.0
        nx = self.x + math.cos(self.heading) * step
        ny = self.y + math.sin(self.heading) * step
        self.x, self.y = ctx.bounds.clamp(nx, ny)

    def __repr__(self) -> str:
        return (
            f"Termite(id={self.termite_id}, state={self.state.value}, "
            f"pos=({self.x:.0f}, {self.y:.0f}), health={self.health:.0f})"
        )

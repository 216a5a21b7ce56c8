"""Per-state ant behaviours.

Each behaviour runs after ``decide`` has chosen the state for this tick.
Behaviours set the ant's heading and perform arrival actions (picking up
food, delivering it, striking a termite, ...). Movement itself happens
afterwards in ``Ant.update``.

Targets are re-validated here as well: another ant may have emptied a
food source or picked up a corpse earlier in the same tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

from antsim.behavior import steering
from antsim.entities.ant_state import AntRole, AntState, DeathCause
from antsim.entities.pheromone import PheromoneType
from antsim.entities.targets import (
    CorpseTarget,
    FoodTarget,
    TermiteTarget,
    TrailTarget,
    is_valid,
)
from antsim.math_utils import distance, distance_squared

if TYPE_CHECKING:
    from antsim.entities.ant import Ant
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)

Behaviour = Callable[["Ant", float, "SimulationContext"], None]


def _head_for(ant: "Ant", tx: float, ty: float, ctx: "SimulationContext") -> float:
    """Point the ant at (tx, ty) and return the remaining distance."""
    ant.heading = steering.towards(ant.x, ant.y, tx, ty, ctx.rng, ant.config.direction_noise, ant.heading)
    return distance(ant.x, ant.y, tx, ty)


def explore(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    cfg = ant.config
    ant.heading, ant.wander_angle = steering.wander(
        ant.heading, ant.wander_angle, ctx.rng, cfg.wander_jitter, cfg.wander_distance
    )


def seek_food(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    target = ant.target
    if not isinstance(target, FoodTarget) or not is_valid(target):
        ant.clear_target(ctx)
        ant.set_state(AntState.EXPLORING)
        return

    source = target.source
    if _head_for(ant, source.x, source.y, ctx) > ant.config.food_reach:
        return

    taken = ctx.food.collect(source, ant.config.max_food_carry - ant.food_amount)
    ant.food_amount += taken
    ant.food_collected += taken
    full = ant.food_amount >= ant.config.max_food_carry
    if full or (ant.config.carry_on_first_bite and ant.food_amount > 0):
        ant.carrying_food = True
        ant.clear_target(ctx)
        ant.set_state(AntState.RETURNING_HOME)
    elif not source.active:
        ant.clear_target(ctx)


def return_home(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    home_x, home_y = ctx.home
    if _head_for(ant, home_x, home_y, ctx) > ant.config.home_reach:
        return

    if ant.carrying_corpse:
        ant.carrying_corpse = False
        ant.corpses_collected += 1
        ant.set_state(AntState.EXPLORING)
        return

    if ant.carrying_food:
        ctx.colony.deposit_food(ant.food_amount)
        ant.food_amount = 0.0
        ant.carrying_food = False
        ant.gain_energy(ant.config.home_energy_restore)
        if ant.role is not AntRole.NURSE:
            _try_feed_brood(ant, ctx)
    ant.start_resting(ctx)


def _try_feed_brood(ant: "Ant", ctx: "SimulationContext") -> bool:
    """Nurses always manage to feed the brood; others sometimes do."""
    cfg = ant.config
    if ant.role is not AntRole.NURSE and ctx.rng.random() >= cfg.non_nurse_brood_success:
        return False
    ant.spend_energy(cfg.brood_feed_energy_cost)
    ant.fed_brood = True
    ant.brood_feedings += 1
    ctx.colony.record_brood_feeding()
    if ant.energy <= 0:
        ant.die(DeathCause.EXHAUSTION)
    return True


def feed_brood(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    """Tend the brood wherever the ant is, then rest."""
    if not _try_feed_brood(ant, ctx):
        ant.set_state(AntState.EXPLORING)
    elif ant.alive:
        ant.start_resting(ctx)


def follow_trail(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    target = ant.target
    if not isinstance(target, TrailTarget) or not is_valid(target):
        ant.clear_target(ctx)
        ant.set_state(AntState.EXPLORING)
        return

    current = target.deposit
    if _head_for(ant, current.x, current.y, ctx) >= ant.config.trail_point_reach:
        return

    ant.remember_trail_point(current)
    home_x, home_y = ctx.home
    current_home_dist = distance_squared(current.x, current.y, home_x, home_y)

    def leads_outward(deposit) -> bool:
        return distance_squared(deposit.x, deposit.y, home_x, home_y) >= current_home_dist

    radius = ant.config.next_trail_point_radius
    visited = ant.visited_trail_ids
    following = ctx.pheromones.find_strongest(
        current.x, current.y, radius, PheromoneType.FOOD_TRAIL, exclude=visited, predicate=leads_outward
    )
    if following is None:
        following = ctx.pheromones.find_strongest(
            current.x, current.y, radius, PheromoneType.FOOD_TRAIL, exclude=visited
        )
    if following is not None:
        ant.follow(following, ctx)
        return

    food = ctx.food.nearest_active(ant.x, ant.y, ant.config.food_sense_radius)
    if food is not None:
        ant.set_target(FoodTarget(food), ctx)
        ant.set_state(AntState.SEEKING_FOOD)
    else:
        ant.clear_target(ctx)
        ant.set_state(AntState.EXPLORING)


def attack_termite(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    target = ant.target
    if not isinstance(target, TermiteTarget) or not is_valid(target):
        ant.clear_target(ctx)
        ant.set_state(AntState.EXPLORING)
        return

    termite = target.termite
    if _head_for(ant, termite.x, termite.y, ctx) > ant.config.attack_reach:
        return
    if not ant.ready_to_attack:
        return

    if termite.take_damage(ant.config.attack_damage):
        logger.debug(f"Ant {ant.ant_id} killed termite {termite.termite_id}")
    ant.spend_energy(ant.config.attack_energy_cost)
    ant.reset_attack_cooldown()
    if ant.energy <= 0:
        ant.die(DeathCause.EXHAUSTION)


def hide(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    home_x, home_y = ctx.home
    _head_for(ant, home_x, home_y, ctx)


def collect_corpse(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    target = ant.target
    if not isinstance(target, CorpseTarget) or not is_valid(target):
        ant.clear_target(ctx)
        ant.set_state(AntState.EXPLORING)
        return

    corpse = target.corpse
    if _head_for(ant, corpse.x, corpse.y, ctx) > ant.config.corpse_reach:
        return
    ant.clear_target(ctx)
    if ctx.corpses.collect(corpse):
        ant.carrying_corpse = True
        ant.set_state(AntState.RETURNING_HOME)
    else:
        ant.set_state(AntState.EXPLORING)


def avoid_danger(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    """Heading and speed were set when the danger was sensed; keep running."""


BEHAVIOURS: Dict[AntState, Behaviour] = {
    AntState.EXPLORING: explore,
    AntState.SEEKING_FOOD: seek_food,
    AntState.RETURNING_HOME: return_home,
    AntState.FOLLOWING_TRAIL: follow_trail,
    AntState.ATTACKING_TERMITE: attack_termite,
    AntState.HIDING: hide,
    AntState.FEEDING_BROOD: feed_brood,
    AntState.COLLECTING_CORPSE: collect_corpse,
    AntState.AVOIDING_DANGER: avoid_danger,
}


def act(ant: "Ant", delta_ms: float, ctx: "SimulationContext") -> None:
    """Run the behaviour for the ant's current state."""
    behaviour = BEHAVIOURS.get(ant.state)
    if behaviour is not None:
        behaviour(ant, delta_ms, ctx)

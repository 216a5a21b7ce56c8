"""Tests for the Ant agent's per-tick behaviour."""

import pytest

from antsim.behavior.transitions import Effect, Transition
from antsim.entities.ant_state import AntRole, AntState, DeathCause
from antsim.entities.pheromone import PheromoneType
from antsim.entities.targets import FoodTarget, TrailTarget
from antsim.events import AntDiedEvent


def _worker(ctx, x=None, y=None):
    ant = ctx.colony.spawn_ant(free=True, role=AntRole.WORKER)
    if x is not None:
        ant.x, ant.y = x, y
    return ant


class TestEnergy:
    def test_energy_stays_within_bounds(self, ctx) -> None:
        ant = _worker(ctx)
        ant.gain_energy(1000)
        assert ant.energy == ant.config.max_energy
        ant.spend_energy(1000)
        assert ant.energy == 0.0

    def test_starving_ant_dies_and_leaves_a_corpse(self, engine, ctx) -> None:
        """An ant whose drain exceeds its energy dies and is swept into a corpse."""
        ant = _worker(ctx, 400.0, 300.0)
        ant.energy = 5.0

        ant.update(60_000.0, ctx)

        assert not ant.alive
        assert ant.death_cause is DeathCause.STARVATION
        assert ctx.colony.get_ant(ant.ant_id) is not None

        assert ctx.colony.sweep_dead() == 1
        assert ctx.colony.get_ant(ant.ant_id) is None
        assert ctx.colony.population == 0
        corpses = list(ctx.corpses)
        assert len(corpses) == 1
        assert (corpses[0].x, corpses[0].y) == (400.0, 300.0)
        assert corpses[0].cause == "starvation"
        assert engine.events.events_of_type(AntDiedEvent)[-1].ant_id == ant.ant_id

    def test_dead_ant_does_not_update(self, ctx) -> None:
        ant = _worker(ctx, 400.0, 300.0)
        ant.die(DeathCause.COMBAT)
        ant.update(100.0, ctx)
        assert (ant.x, ant.y) == (400.0, 300.0)
        assert ant.lifespan_ms == 0.0

    def test_die_is_idempotent(self, ctx) -> None:
        ant = _worker(ctx)
        ant.die(DeathCause.DROWNED)
        ant.die(DeathCause.COMBAT)
        assert ant.death_cause is DeathCause.DROWNED


class TestForaging:
    def test_full_carrier_with_depleted_target_leaves_seeking_food(self, ctx) -> None:
        """A full ant next to a depleted source turns for home without collecting."""
        ant = _worker(ctx, 300.0, 300.0)
        source = ctx.food.add_source(310.0, 300.0, 20)
        source.deplete()
        ant.food_amount = ant.config.max_food_carry
        ant.carrying_food = True
        ant.state = AntState.SEEKING_FOOD
        ant.target = FoodTarget(source)

        ant.update(16.0, ctx)

        assert ant.state is AntState.RETURNING_HOME
        assert ant.food_amount == ant.config.max_food_carry
        assert ctx.food.total_collected == 0.0

    def test_picks_up_food_within_reach(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        source = ctx.food.add_source(305.0, 300.0, 50)

        ant.update(16.0, ctx)

        assert ant.carrying_food
        assert ant.food_amount == pytest.approx(ant.config.max_food_carry)
        assert source.amount == pytest.approx(40.0)
        assert ant.state is AntState.RETURNING_HOME

    def test_delivery_fills_storage_and_rests(self, ctx) -> None:
        home_x, home_y = ctx.home
        ant = _worker(ctx, home_x + 5, home_y)
        ant.food_amount = 10.0
        ant.carrying_food = True
        ant.state = AntState.RETURNING_HOME
        storage = ctx.colony.food_storage

        ant.update(16.0, ctx)

        assert ctx.colony.food_storage == pytest.approx(storage + 10.0)
        assert not ant.carrying_food
        assert ant.state is AntState.RESTING

    def test_resting_ends_in_exploring(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ant.start_resting(ctx)
        assert ant.is_resting

        ant.update(10_000.0, ctx)

        assert ant.state is AntState.EXPLORING

    def test_carrier_lays_food_trail(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ant.food_amount = 5.0
        ant.carrying_food = True
        ant.state = AntState.RETURNING_HOME

        ant.update(150.0, ctx)

        counts = ctx.pheromones.counts_by_type()
        assert counts[PheromoneType.FOOD_TRAIL] == 1

    def test_near_full_carrier_lays_wider_trail(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ant.food_amount = ant.config.max_food_carry
        ant.carrying_food = True
        ant.state = AntState.RETURNING_HOME

        ant.update(150.0, ctx)

        assert ctx.pheromones.counts_by_type()[PheromoneType.FOOD_TRAIL] == 3

    def test_explorer_leaves_exploration_marker(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ant.update(150.0, ctx)
        assert ctx.pheromones.counts_by_type()[PheromoneType.EXPLORATION] == 1


class TestTrails:
    def test_follower_registers_on_deposit(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        trail = ctx.pheromones.deposit(330.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)

        ant.update(16.0, ctx)

        assert ant.state is AntState.FOLLOWING_TRAIL
        assert ant.target == TrailTarget(trail)
        assert trail.followers == 1

    def test_clearing_target_releases_follower(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        trail = ctx.pheromones.deposit(330.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)
        ant.follow(trail, ctx)
        ant.follow(trail, ctx)
        assert trail.followers == 1

        ant.clear_target(ctx)

        assert trail.followers == 0
        assert ant.target is None

    def test_dead_follower_is_released_on_sweep(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        trail = ctx.pheromones.deposit(330.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)
        ant.follow(trail, ctx)

        ant.die(DeathCause.COMBAT)
        ctx.colony.sweep_dead()

        assert trail.followers == 0

    def test_follow_trail_effect_registers_the_follower(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        trail = ctx.pheromones.deposit(330.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)
        follow = Transition(
            AntState.FOLLOWING_TRAIL, target=TrailTarget(trail), effects=frozenset({Effect.FOLLOW_TRAIL})
        )

        ant.apply_transition(follow, ctx)
        ant.apply_transition(follow, ctx)

        assert ant.state is AntState.FOLLOWING_TRAIL
        assert ant.target == TrailTarget(trail)
        assert trail.followers == 1

    def test_plain_trail_target_is_not_counted(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        trail = ctx.pheromones.deposit(330.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)

        ant.apply_transition(Transition(AntState.FOLLOWING_TRAIL, target=TrailTarget(trail)), ctx)

        assert ant.target == TrailTarget(trail)
        assert trail.followers == 0

    def _arrive(self, ctx):
        """A follower standing on the deposit it is following."""
        ant = _worker(ctx, 300.0, 300.0)
        current = ctx.pheromones.deposit(305.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)
        ant.follow(current, ctx)
        ant.state = AntState.FOLLOWING_TRAIL
        return ant, current

    def test_arrival_moves_on_to_the_next_deposit(self, ctx) -> None:
        ant, current = self._arrive(ctx)
        # Further from the nest than the current point
        following = ctx.pheromones.deposit(285.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)

        ant.update(16.0, ctx)

        assert ant.state is AntState.FOLLOWING_TRAIL
        assert ant.target == TrailTarget(following)
        assert current.deposit_id in ant.visited_trail_ids
        assert current.followers == 0
        assert following.followers == 1

    def test_visited_deposits_are_skipped(self, ctx) -> None:
        ant, current = self._arrive(ctx)
        seen = ctx.pheromones.deposit(285.0, 300.0, PheromoneType.FOOD_TRAIL, 1.0)
        ant.remember_trail_point(seen)

        ant.update(16.0, ctx)

        assert ant.state is AntState.EXPLORING
        assert ant.target is None
        assert current.followers == 0
        assert seen.followers == 0

    def test_trail_end_falls_back_to_visible_food(self, ctx) -> None:
        ant, current = self._arrive(ctx)
        source = ctx.food.add_source(400.0, 300.0, 50)

        ant.update(16.0, ctx)

        assert ant.state is AntState.SEEKING_FOOD
        assert ant.target == FoodTarget(source)
        assert current.followers == 0


class TestDanger:
    def test_danger_makes_ant_flee_faster(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ctx.pheromones.deposit(320.0, 300.0, PheromoneType.DANGER, 1.0)

        ant.update(16.0, ctx)

        assert ant.state is AntState.AVOIDING_DANGER
        assert ant.speed_boost > 1.0
        assert ant.speed <= ant.config.max_speed

    def test_speed_boost_is_reset_after_escape(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        ant.state = AntState.AVOIDING_DANGER
        ant.speed_boost = 1.8

        ant.update(16.0, ctx)

        assert ant.state is AntState.EXPLORING
        assert ant.speed_boost == 1.0


class TestNurse:
    def test_feeding_costs_energy(self, ctx) -> None:
        home_x, home_y = ctx.home
        nurse = ctx.colony.spawn_ant(free=True, role=AntRole.NURSE)
        nurse.x, nurse.y = home_x, home_y
        energy = nurse.energy

        nurse.update(16.0, ctx)

        assert ctx.colony.brood_feedings == 1
        assert nurse.brood_feedings == 1
        assert nurse.state is AntState.RESTING
        assert nurse.energy < energy - 4.0

    def test_nurse_feeds_brood_where_it_stands(self, ctx) -> None:
        nurse = ctx.colony.spawn_ant(free=True, role=AntRole.NURSE)
        nurse.x, nurse.y = 300.0, 300.0

        nurse.update(16.0, ctx)

        assert ctx.colony.brood_feedings == 1
        assert nurse.state is AntState.RESTING
        assert (nurse.x, nurse.y) == (300.0, 300.0)


class TestCombat:
    def _soldier(self, ctx):
        soldier = ctx.colony.spawn_ant(free=True, role=AntRole.SOLDIER)
        soldier.x, soldier.y = 300.0, 300.0
        ctx.termites.attack_active = True
        return soldier

    def test_strike_damages_termite_and_costs_energy(self, ctx) -> None:
        soldier = self._soldier(ctx)
        termite = ctx.termites.spawn_termite(310.0, 300.0)

        soldier.update(16.0, ctx)

        assert soldier.state is AntState.ATTACKING_TERMITE
        assert termite.health == pytest.approx(35.0)
        assert soldier.energy == pytest.approx(95.0, abs=0.01)

    def test_strikes_wait_for_the_cooldown(self, ctx) -> None:
        soldier = self._soldier(ctx)
        termite = ctx.termites.spawn_termite(310.0, 300.0)

        soldier.update(16.0, ctx)
        soldier.update(16.0, ctx)

        assert termite.health == pytest.approx(35.0)

    def test_last_strike_can_exhaust_the_soldier(self, ctx) -> None:
        soldier = self._soldier(ctx)
        soldier.energy = 5.0
        termite = ctx.termites.spawn_termite(310.0, 300.0)

        soldier.update(16.0, ctx)

        assert termite.health == pytest.approx(35.0)
        assert not soldier.alive
        assert soldier.death_cause is DeathCause.EXHAUSTION


class TestCorpses:
    def test_corpse_in_reach_is_picked_up(self, ctx) -> None:
        ant = _worker(ctx, 300.0, 300.0)
        corpse = ctx.corpses.add(310.0, 300.0, 99, "starvation")

        ant.update(16.0, ctx)

        assert corpse.collected
        assert len(ctx.corpses) == 0
        assert ctx.corpses.total_collected == 1
        assert ant.carrying_corpse
        assert ant.state is AntState.RETURNING_HOME

    def test_corpse_is_dropped_at_the_nest(self, ctx) -> None:
        home_x, home_y = ctx.home
        ant = _worker(ctx, home_x + 5, home_y)
        ant.carrying_corpse = True
        ant.state = AntState.RETURNING_HOME
        storage = ctx.colony.food_storage

        ant.update(16.0, ctx)

        assert not ant.carrying_corpse
        assert ant.corpses_collected == 1
        assert ant.state is AntState.EXPLORING
        assert ctx.colony.food_storage == pytest.approx(storage)


class TestHiding:
    def test_hiding_ant_stops_near_the_nest(self, ctx) -> None:
        home_x, home_y = ctx.home
        ant = _worker(ctx, home_x + 20, home_y)
        ctx.termites.attack_active = True

        ant.update(50.0, ctx)

        assert ant.state is AntState.HIDING
        assert (ant.x, ant.y) == (home_x + 20, home_y)

    def test_distant_ant_runs_for_the_nest(self, ctx) -> None:
        home_x, home_y = ctx.home
        ant = _worker(ctx, 300.0, 300.0)
        ctx.termites.attack_active = True
        start = ((home_x - ant.x) ** 2 + (home_y - ant.y) ** 2) ** 0.5

        for _ in range(5):
            ant.update(50.0, ctx)

        assert ant.state is AntState.HIDING
        assert ((home_x - ant.x) ** 2 + (home_y - ant.y) ** 2) ** 0.5 < start


class TestMovement:
    def test_ant_stays_inside_world(self, ctx) -> None:
        ant = _worker(ctx, 1.0, 1.0)
        for _ in range(200):
            ant.update(50.0, ctx)
            assert ctx.bounds.contains(ant.x, ant.y)

    def test_stats(self, ctx) -> None:
        ant = _worker(ctx)
        stats = ant.get_stats()
        assert stats["role"] == "worker"
        assert stats["health_percent"] == 100.0

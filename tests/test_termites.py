"""Tests for termites and raids."""

import random

import pytest

from antsim.config import TermiteConfig
from antsim.entities.ant_state import AntRole, AntState
from antsim.entities.termite import Termite, TermiteState
from antsim.events import AntDiedEvent, AttackEndedEvent, AttackStartedEvent, TermiteDiedEvent


def _ant(ctx, x, y, role=AntRole.WORKER):
    ant = ctx.colony.spawn_ant(free=True, role=role)
    ant.x, ant.y = x, y
    return ant


class TestTermite:
    def test_take_damage_reports_the_kill_once(self) -> None:
        termite = Termite(1, 0.0, 0.0, TermiteConfig(), random.Random(0))
        assert termite.health == 50.0
        assert not termite.take_damage(30)
        assert termite.take_damage(30)
        assert not termite.alive
        assert termite.health == 0.0
        assert not termite.take_damage(30)

    def test_speed_range(self) -> None:
        rng = random.Random(0)
        for termite_id in range(20):
            termite = Termite(termite_id, 0.0, 0.0, TermiteConfig(), rng)
            assert 60.0 <= termite.speed < 80.0

    def test_destroys_food_in_reach(self, ctx) -> None:
        source = ctx.food.add_source(310.0, 300.0, 80)
        termite = ctx.termites.spawn_termite(300.0, 300.0)

        termite.update(16.0, ctx)

        assert termite.state is TermiteState.ATTACKING_FOOD
        assert source.destroyed
        assert not source.active

    def test_steals_from_the_nest_once_per_cooldown(self, ctx) -> None:
        home_x, home_y = ctx.home
        termite = ctx.termites.spawn_termite(home_x + 20.0, home_y)

        termite.update(16.0, ctx)
        termite.update(16.0, ctx)

        assert termite.state is TermiteState.ATTACKING_COLONY
        assert ctx.colony.food_storage == pytest.approx(490.0)
        assert termite.attacks_made == 1

    def test_bites_an_ant_once_per_cooldown(self, ctx) -> None:
        ant = _ant(ctx, 305.0, 300.0)
        termite = ctx.termites.spawn_termite(300.0, 300.0)

        termite.update(16.0, ctx)
        termite.update(500.0, ctx)

        assert termite.state is TermiteState.ATTACKING_ANT
        assert ant.energy == pytest.approx(90.0)
        assert ant.alive

    def test_soldiers_guard_distant_workers(self, ctx) -> None:
        _ant(ctx, 1500.0, 1200.0, role=AntRole.SOLDIER)
        worker = _ant(ctx, 380.0, 300.0)
        termite = ctx.termites.spawn_termite(300.0, 300.0)

        termite.update(16.0, ctx)

        assert termite.state is TermiteState.SEEKING
        assert worker.energy == pytest.approx(100.0)

    def test_unguarded_worker_is_hunted(self, ctx) -> None:
        _ant(ctx, 380.0, 300.0)
        termite = ctx.termites.spawn_termite(300.0, 300.0)

        termite.update(16.0, ctx)

        assert termite.state is TermiteState.ATTACKING_ANT

    def test_seeking_termite_heads_for_the_nest(self, ctx) -> None:
        home_x, home_y = ctx.home
        termite = ctx.termites.spawn_termite(100.0, 100.0)
        start = ((home_x - 100.0) ** 2 + (home_y - 100.0) ** 2) ** 0.5

        for _ in range(60):
            termite.update(50.0, ctx)

        now = ((home_x - termite.x) ** 2 + (home_y - termite.y) ** 2) ** 0.5
        assert now < start


class TestTermiteSwarm:
    def test_raid_size(self, ctx) -> None:
        swarm = ctx.termites
        assert swarm.raid_size(0) == 3
        assert swarm.raid_size(8) == 3
        assert swarm.raid_size(30) == 10

    def test_start_raid_spawns_at_edges(self, engine, ctx) -> None:
        swarm = ctx.termites

        assert swarm.start_raid(4) == 4

        assert swarm.attack_active
        assert ctx.attack_active
        assert len(swarm) == 4
        for termite in swarm.termites:
            assert ctx.bounds.contains(termite.x, termite.y)
        assert engine.events.events_of_type(AttackStartedEvent)[-1].termite_count == 4

    def test_only_one_raid_at_a_time(self, ctx) -> None:
        ctx.termites.start_raid(2)
        assert ctx.termites.start_raid(5) == 0
        assert len(ctx.termites) == 2

    def test_default_raid_size_follows_population(self, ctx) -> None:
        ctx.colony.seed_population(30)
        assert ctx.termites.start_raid() == 10

    def test_raid_ends_when_every_termite_dies(self, engine, ctx) -> None:
        swarm = ctx.termites
        swarm.start_raid(2)
        hiding = _ant(ctx, 100.0, 100.0)
        hiding.state = AntState.HIDING
        for termite in swarm.termites:
            termite.take_damage(1000)

        result = swarm.update(16.0)

        assert result.entities_removed == 2
        assert not swarm.attack_active
        assert len(engine.events.events_of_type(TermiteDiedEvent)) == 2
        assert engine.events.events_of_type(AttackEndedEvent)[-1].termites_killed == 2
        assert hiding.state is AntState.EXPLORING
        assert swarm.get_stats() == {
            "termites": 0,
            "attack_active": False,
            "raids_started": 1,
            "total_killed": 2,
        }

    def test_raid_end_does_not_wake_resting_ants(self, ctx) -> None:
        swarm = ctx.termites
        swarm.start_raid(2)
        resting = _ant(ctx, 100.0, 100.0)
        resting.start_resting(ctx)
        for termite in swarm.termites:
            termite.take_damage(1000)

        swarm.update(16.0)

        assert not swarm.attack_active
        assert resting.state is AntState.RESTING

    def test_nearest_skips_dead_termites(self, ctx) -> None:
        swarm = ctx.termites
        near = swarm.spawn_termite(105.0, 100.0)
        far = swarm.spawn_termite(150.0, 100.0)

        assert swarm.nearest(100.0, 100.0, 100.0) is near
        near.take_damage(1000)
        assert swarm.nearest(100.0, 100.0, 100.0) is far
        assert swarm.nearest(100.0, 100.0, 10.0) is None

    def test_spawn_is_clamped(self, ctx) -> None:
        termite = ctx.termites.spawn_termite(-50.0, 99999.0)
        assert (termite.x, termite.y) == (0.0, ctx.bounds.height)


class TestCombatDeaths:
    def test_bitten_ant_is_swept_at_frame_end(self, engine, ctx) -> None:
        """An ant killed in the termite step is a corpse by the end of the tick."""
        ant = _ant(ctx, 300.0, 300.0)
        ant.energy = 5.0
        ctx.termites.spawn_termite(302.0, 300.0)

        engine.advance(16.0)

        assert not ant.alive
        assert ctx.colony.population == 0
        assert ctx.colony.total_born - ctx.colony.total_died == ctx.colony.population
        assert engine.events.events_of_type(AntDiedEvent)[-1].cause == "combat"
        assert [corpse.cause for corpse in ctx.corpses] == ["combat"]

"""Tests for puddle hazards and danger bursts."""

import math

import pytest

from antsim.config import HazardConfig
from antsim.entities.ant_state import AntRole, DeathCause
from antsim.entities.pheromone import PheromoneType
from antsim.events import DangerBurstEvent, PuddleSpawnedEvent
from antsim.systems.hazard_field import danger_burst


class TestDangerBurst:
    """The burst-size formula."""

    def test_three_deaths(self) -> None:
        """Three deaths give strength 2.0 and 24 deposits."""
        burst = danger_burst(3, HazardConfig())
        assert burst.strength == pytest.approx(2.0)
        assert burst.count == 24

    def test_caps(self) -> None:
        burst = danger_burst(10, HazardConfig())
        assert burst.count == 30
        assert burst.strength == pytest.approx(4.0)

    def test_grows_with_deaths(self) -> None:
        config = HazardConfig()
        bursts = [danger_burst(deaths, config) for deaths in range(1, 7)]
        assert all(a.count <= b.count for a, b in zip(bursts, bursts[1:]))
        assert all(a.strength <= b.strength for a, b in zip(bursts, bursts[1:]))

    def test_no_deaths_no_burst(self) -> None:
        burst = danger_burst(0, HazardConfig())
        assert burst.count == 0
        assert burst.strength == 0.0


class TestHazardField:
    def test_add_puddle_emits_event(self, engine, ctx) -> None:
        puddle = ctx.hazards.add_puddle(100, 100, 40)

        events = engine.events.events_of_type(PuddleSpawnedEvent)
        assert events[-1].puddle_id == puddle.puddle_id
        assert ctx.hazards.puddle_at(120, 100) is puddle
        assert ctx.hazards.puddle_at(150, 100) is None

    def test_record_death_releases_burst_and_marker(self, engine, ctx) -> None:
        puddle = ctx.hazards.add_puddle(300, 300, 40)

        ctx.hazards.record_death(puddle, 310, 300)

        assert puddle.death_count == 1
        # 8 burst deposits plus the death marker
        assert ctx.pheromones.counts_by_type()[PheromoneType.DANGER] == 9
        event = engine.events.events_of_type(DangerBurstEvent)[-1]
        assert event.deposits == 8
        assert event.strength == pytest.approx(2.0 / 3)

    def test_burst_stays_within_radius(self, ctx) -> None:
        puddle = ctx.hazards.add_puddle(600, 600, 40)
        puddle.death_count = 3

        ctx.hazards.release_burst(puddle)

        for deposit in ctx.pheromones:
            assert math.hypot(deposit.x - 600, deposit.y - 600) <= 80.0 + 1e-9

    def test_warning_without_deaths_places_nothing(self, ctx) -> None:
        puddle = ctx.hazards.add_puddle(300, 300, 40)
        assert ctx.hazards.warn(puddle) == 0
        assert ctx.hazards.warnings_released == 0

    def test_random_puddles_keep_clear_of_nest(self, ctx) -> None:
        home_x, home_y = ctx.home
        for puddle in ctx.hazards.populate(8):
            assert math.hypot(puddle.x - home_x, puddle.y - home_y) >= 150.0 + puddle.radius

    def test_puddle_count_is_capped(self, ctx) -> None:
        ctx.hazards.populate(25)
        assert len(ctx.hazards.puddles) <= ctx.config.hazards.max_puddles
        assert ctx.hazards.spawn_random_puddle() is None

    def test_stats(self, ctx) -> None:
        first = ctx.hazards.add_puddle(300, 300, 40)
        ctx.hazards.add_puddle(600, 300, 40)
        ctx.hazards.record_death(first, 300, 300)

        stats = ctx.hazards.get_stats()
        assert stats["total_puddles"] == 2
        assert stats["deadly_puddles"] == 1
        assert stats["total_deaths"] == 1


class TestDrowning:
    """An ant that lingers in a puddle."""

    def test_lingering_ant_is_warned_then_drowns(self, ctx) -> None:
        puddle = ctx.hazards.add_puddle(900, 675, 5000)
        puddle.death_count = 1
        ant = ctx.colony.spawn_ant(free=True, role=AntRole.WORKER)

        for _ in range(39):
            ant.update(100.0, ctx)
        assert ant.alive
        assert ant.energy < 55.0
        assert ctx.hazards.warnings_released == 1

        ant.update(100.0, ctx)

        assert not ant.alive
        assert ant.death_cause is DeathCause.DROWNED
        assert puddle.death_count == 2

    def test_leaving_the_puddle_resets_exposure(self, ctx) -> None:
        ctx.hazards.add_puddle(100, 100, 30)
        ant = ctx.colony.spawn_ant(free=True, role=AntRole.WORKER)
        ant.hazard_exposure_ms = 3000.0

        ant.update(16.0, ctx)

        assert ant.hazard_exposure_ms == 0.0
        assert ant.alive

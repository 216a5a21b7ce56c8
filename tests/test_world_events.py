"""Tests for rain, random world events and terrain."""

import random

import pytest

from antsim.config import WorldConfig
from antsim.events import AttackStartedEvent, RainEndedEvent, RainStartedEvent
from antsim.world.terrain import TerrainMap, UniformTerrain, Weather, WorldQuery


class TestRain:
    def test_start_and_stop(self, engine, ctx) -> None:
        scheduler = engine.world_events

        assert scheduler.start_rain(5000.0)
        assert scheduler.raining
        assert ctx.weather is Weather.RAIN
        assert not scheduler.start_rain(5000.0)

        scheduler.stop_rain()

        assert ctx.weather is Weather.CLEAR
        assert scheduler.rain_remaining_ms is None
        assert len(engine.events.events_of_type(RainStartedEvent)) == 1
        assert len(engine.events.events_of_type(RainEndedEvent)) == 1

    def test_rain_runs_out(self, engine, ctx) -> None:
        scheduler = engine.world_events
        scheduler.start_rain(1000.0)

        scheduler.update(600.0)
        assert scheduler.raining
        assert scheduler.rain_remaining_ms == pytest.approx(400.0)

        scheduler.update(600.0)
        assert not scheduler.raining
        assert engine.events.events_of_type(RainEndedEvent)

    def test_random_duration_is_in_range(self, engine) -> None:
        scheduler = engine.world_events
        scheduler.start_rain()
        assert 10_000.0 <= scheduler.rain_remaining_ms <= 25_000.0

    def test_rain_slows_ants(self, engine, ctx) -> None:
        assert ctx.speed_modifier_at(100.0, 100.0) == 1.0
        engine.world_events.start_rain(1000.0)
        # UniformTerrain ignores weather
        assert ctx.speed_modifier_at(100.0, 100.0) == 1.0


class TestEventRolls:
    def test_low_roll_starts_a_raid(self, engine, ctx) -> None:
        scheduler = engine.world_events
        assert scheduler.roll(0.001) == "termite_raid"
        assert ctx.attack_active
        assert scheduler.raid_count == 1
        assert engine.events.events_of_type(AttackStartedEvent)

    def test_raid_roll_during_a_raid_does_nothing(self, engine, ctx) -> None:
        scheduler = engine.world_events
        scheduler.roll(0.001)
        assert scheduler.roll(0.001) is None
        assert scheduler.raid_count == 1

    def test_rain_band(self, engine) -> None:
        scheduler = engine.world_events
        assert scheduler.roll(0.05) == "rain"
        assert scheduler.roll(0.05) is None

    @pytest.mark.parametrize("value", [0.104, 0.5, 0.999])
    def test_high_roll_does_nothing(self, engine, ctx, value: float) -> None:
        assert engine.world_events.roll(value) is None
        assert ctx.weather is Weather.CLEAR
        assert not ctx.attack_active

    def test_rolls_only_on_the_check_interval(self, engine) -> None:
        scheduler = engine.world_events
        calls = []
        scheduler.roll = lambda value: calls.append(value)

        for _ in range(29):
            scheduler.update(1000.0)
        assert calls == []

        scheduler.update(1000.0)
        assert len(calls) == 1


class TestTerrain:
    def test_uniform_terrain_is_a_world_query(self) -> None:
        assert isinstance(UniformTerrain(), WorldQuery)
        assert UniformTerrain().speed_modifier_at(0, 0, Weather.RAIN) == 1.0

    def test_grid_covers_the_world(self) -> None:
        terrain = TerrainMap(WorldConfig(), random.Random(1))
        assert (terrain.cols, terrain.rows) == (18, 14)
        assert sum(terrain.counts().values()) == 18 * 14
        assert isinstance(terrain, WorldQuery)

    def test_speed_modifier_matches_terrain_type(self) -> None:
        config = WorldConfig()
        terrain = TerrainMap(config, random.Random(1))
        name = terrain.terrain_at(250.0, 250.0)
        expected = config.terrain_types[name]["speed"]

        assert terrain.speed_modifier_at(250.0, 250.0, Weather.CLEAR) == pytest.approx(expected)
        assert terrain.speed_modifier_at(250.0, 250.0, Weather.RAIN) == pytest.approx(expected * 0.7)

    def test_outside_the_world_is_neutral(self) -> None:
        terrain = TerrainMap(WorldConfig(), random.Random(1))
        assert terrain.terrain_at(-10.0, 50.0) is None
        assert terrain.speed_modifier_at(-10.0, 50.0, Weather.CLEAR) == 1.0
        assert terrain.speed_modifier_at(5000.0, 50.0, Weather.RAIN) == pytest.approx(0.7)

    def test_same_seed_same_map(self) -> None:
        first = TerrainMap(WorldConfig(), random.Random(9))
        second = TerrainMap(WorldConfig(), random.Random(9))
        assert first.counts() == second.counts()

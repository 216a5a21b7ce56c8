"""Pytest configuration and fixtures for ant simulation tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def quiet_config():
    """A seeded config with an empty world: no ants, food or puddles."""
    from antsim.config import SimulationConfig

    config = SimulationConfig(seed=42, ant_count=0)
    config.food.initial_sources = 0
    config.hazards.initial_puddles = 0
    return config


@pytest.fixture
def engine(quiet_config):
    """A set-up engine on flat terrain that records every emitted event."""
    from antsim.events import EventBus
    from antsim.simulation import SimulationEngine
    from antsim.world.terrain import UniformTerrain

    engine = SimulationEngine(
        quiet_config,
        events=EventBus(record_history=True),
        world_query=UniformTerrain(),
    )
    engine.setup()
    return engine


@pytest.fixture
def ctx(engine):
    """The engine's SimulationContext."""
    return engine.context


@pytest.fixture
def simulation_engine():
    """Setup a fully populated simulation engine with a deterministic seed."""
    from antsim.config import SimulationConfig
    from antsim.simulation import SimulationEngine

    engine = SimulationEngine(SimulationConfig(seed=42, ant_count=30))
    engine.setup()
    return engine

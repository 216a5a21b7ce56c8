"""Ant colony agent simulation engine.

Usage:
    from antsim import SimulationConfig, SimulationEngine

    engine = SimulationEngine(SimulationConfig(seed=42, ant_count=30))
    engine.setup()
    for _ in range(600):
        engine.advance(1000 / 60)
    print(engine.population, engine.food_storage)
"""

from antsim.config import SimulationConfig
from antsim.events import EventBus
from antsim.exceptions import AntSimError, ConfigurationError, InvalidTransitionError, SimulationError
from antsim.simulation import FrameResult, SimulationEngine

__version__ = "0.1.0"

__all__ = [
    "AntSimError",
    "ConfigurationError",
    "EventBus",
    "FrameResult",
    "InvalidTransitionError",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationError",
    "__version__",
]

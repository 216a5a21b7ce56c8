"""Configuration for the ant colony simulation.

Tuned defaults live in the constant modules (``pheromones``, ``ants``,
``colony``, ``food``, ``hazards``, ``termites``, ``world``). The
dataclasses in ``simulation_config`` bundle them per run.
"""

from antsim.config.simulation_config import (
    AntConfig,
    ColonyConfig,
    FoodConfig,
    HazardConfig,
    PheromoneConfig,
    SimulationConfig,
    TermiteConfig,
    WorldConfig,
    WorldEventConfig,
)

__all__ = [
    "AntConfig",
    "ColonyConfig",
    "FoodConfig",
    "HazardConfig",
    "PheromoneConfig",
    "SimulationConfig",
    "TermiteConfig",
    "WorldConfig",
    "WorldEventConfig",
]

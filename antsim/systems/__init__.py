"""Simulation systems package.

Each system owns one slice of world state and follows the BaseSystem
contract. Systems run once per tick in this order:

```
FRAME_START    clock advances, per-frame counters reset
PHEROMONES     PheromoneField       decay, ageing, removal
ANTS           AntActivity          every live ant senses, decides, acts
COLONY         Colony               sweep dead, spawn, queen cycle, brood
RESOURCES      FoodManager          grace timers, depleted sources dropped
HAZARDS        HazardField          puddle spawning
TERMITES       TermiteSwarm         termite behaviour, raid bookkeeping
WORLD_EVENTS   WorldEventScheduler  rain expiry, random event rolls
FRAME_END      Colony.sweep_dead    ants killed by termites this tick
```

The order is owned by ``antsim.simulation.pipeline``; the phase each
system declares with ``@runs_in_phase`` is used for diagnostics.
"""

from antsim.systems.ant_activity import AntActivity
from antsim.systems.base import BaseSystem, System, SystemResult
from antsim.systems.colony import Colony
from antsim.systems.food_manager import FoodManager
from antsim.systems.hazard_field import DangerBurst, HazardField, danger_burst
from antsim.systems.pheromone_field import PheromoneField
from antsim.systems.reproduction import BroodCounts, BroodPipeline, QueenCycle
from antsim.systems.termite_swarm import TermiteSwarm
from antsim.systems.world_events import WorldEventScheduler

__all__ = [
    "AntActivity",
    "BaseSystem",
    "BroodCounts",
    "BroodPipeline",
    "Colony",
    "DangerBurst",
    "FoodManager",
    "HazardField",
    "PheromoneField",
    "QueenCycle",
    "System",
    "SystemResult",
    "TermiteSwarm",
    "WorldEventScheduler",
    "danger_burst",
]

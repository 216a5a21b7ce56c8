"""SimulationContext: the explicit bundle of collaborators an agent sees.

Ants and termites never reach for globals or a scene object. Each tick
they receive the context, which holds the shared services (config, RNG,
clock, event sink, world query) and the systems that own world state.
The engine builds a fresh context on setup and on every reset.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple

from antsim.clock import SimulationClock
from antsim.config import SimulationConfig
from antsim.entities.corpse import CorpseRegistry
from antsim.events import EventSink
from antsim.spatial.bounds import WorldBounds
from antsim.systems.food_manager import FoodManager
from antsim.systems.hazard_field import HazardField
from antsim.systems.pheromone_field import PheromoneField
from antsim.world.terrain import Weather, WorldQuery

if TYPE_CHECKING:
    from antsim.systems.colony import Colony
    from antsim.systems.termite_swarm import TermiteSwarm


@dataclass
class SimulationContext:
    """Everything an agent may read or mutate during its update.

    ``colony`` and ``termites`` are attached right after construction
    because both systems need the context themselves.
    """

    config: SimulationConfig
    rng: random.Random
    bounds: WorldBounds
    clock: SimulationClock
    events: EventSink
    world_query: WorldQuery
    pheromones: PheromoneField
    food: FoodManager
    hazards: HazardField
    corpses: CorpseRegistry = field(default_factory=CorpseRegistry)
    weather: Weather = Weather.CLEAR
    colony: Optional["Colony"] = None
    termites: Optional["TermiteSwarm"] = None

    @property
    def home(self) -> Tuple[float, float]:
        """Nest position."""
        return self.config.world.colony_position

    @property
    def elapsed_ms(self) -> float:
        return self.clock.elapsed_ms

    @property
    def attack_active(self) -> bool:
        return self.termites is not None and self.termites.attack_active

    def speed_modifier_at(self, x: float, y: float) -> float:
        return self.world_query.speed_modifier_at(x, y, self.weather)

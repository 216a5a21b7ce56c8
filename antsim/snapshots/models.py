"""Snapshot models for hosts and exports.

A snapshot is a read-only copy of the world at one instant, suitable for
rendering or JSON export. Nothing in a snapshot refers back to live
simulation objects.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class AntSnapshot(BaseModel):
    """A single ant."""

    id: int
    role: str  # 'worker', 'soldier', 'scout', 'forager', 'nurse', 'queen'
    state: str
    x: float
    y: float
    heading: float  # Radians
    energy: float
    food_amount: float = 0.0
    carrying_food: bool = False
    carrying_corpse: bool = False


class FoodSnapshot(BaseModel):
    id: int
    x: float
    y: float
    amount: float
    max_amount: float
    fullness: float  # 0.0-1.0, hosts scale the sprite with this
    active: bool = True


class PuddleSnapshot(BaseModel):
    id: int
    x: float
    y: float
    radius: float
    death_count: int = 0


class TermiteSnapshot(BaseModel):
    id: int
    x: float
    y: float
    health: float
    state: str


class CorpseSnapshot(BaseModel):
    id: int
    x: float
    y: float
    ant_id: int
    cause: str


class PheromoneSnapshot(BaseModel):
    """A single pheromone deposit (only included on request)."""

    id: int
    kind: str  # 'food_trail', 'exploration', 'danger'
    x: float
    y: float
    intensity: float
    age_ms: float
    followers: int = 0


class BroodSnapshot(BaseModel):
    eggs: int = 0
    larvae: int = 0
    pupae: int = 0
    adults: int = 0


class ColonySnapshot(BaseModel):
    """Colony-wide counters."""

    x: float
    y: float
    population: int
    food_storage: float
    max_population: int
    spawn_cost: float
    generation: int
    total_born: int
    total_died: int
    efficiency: float
    status: str  # 'Healthy', 'Weak', 'Needs Food', 'Sick'
    has_queen: bool
    queen_phase: str
    brood: BroodSnapshot
    ant_states: Dict[str, int]
    ant_roles: Dict[str, int]


class SimulationSnapshot(BaseModel):
    """The whole world at one instant."""

    frame: int
    elapsed_ms: float
    speed: float
    paused: bool
    weather: str  # 'clear' or 'rain'
    attack_active: bool
    world_width: float
    world_height: float
    colony: ColonySnapshot
    ants: List[AntSnapshot]
    food: List[FoodSnapshot]
    puddles: List[PuddleSnapshot]
    termites: List[TermiteSnapshot]
    corpses: List[CorpseSnapshot]
    pheromone_counts: Dict[str, int]
    pheromones: Optional[List[PheromoneSnapshot]] = None

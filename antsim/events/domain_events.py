"""Domain event definitions for the ant colony simulation.

These events represent significant occurrences in the simulation. They
are data-only (frozen dataclasses) and carry all the context a host needs
to react, so handlers never have to call back into the simulation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AntSpawnedEvent:
    """An ant joined the colony.

    Attributes:
        ant_id: ID of the new ant
        role: Role name ("worker", "soldier", "scout", "forager", "nurse", "queen")
        x: Spawn position
        y: Spawn position
        from_brood: True if the ant emerged from a pupa rather than being bought
        elapsed_ms: Simulation time when this occurred
    """

    ant_id: int
    role: str
    x: float
    y: float
    from_brood: bool
    elapsed_ms: float


@dataclass(frozen=True)
class AntDiedEvent:
    """An ant died and left a corpse.

    Attributes:
        ant_id: ID of the ant
        role: Role name
        cause: "starvation", "drowned", "combat" or "exhaustion"
        x: Corpse position
        y: Corpse position
        elapsed_ms: Simulation time when the death was swept
    """

    ant_id: int
    role: str
    cause: str
    x: float
    y: float
    elapsed_ms: float


@dataclass(frozen=True)
class FoodDepletedEvent:
    """A food source ran out (or was destroyed by termites)."""

    source_id: int
    x: float
    y: float
    destroyed: bool
    elapsed_ms: float


@dataclass(frozen=True)
class PuddleSpawnedEvent:
    puddle_id: int
    x: float
    y: float
    radius: float
    elapsed_ms: float


@dataclass(frozen=True)
class DangerBurstEvent:
    """A puddle released a ring of danger pheromone."""

    puddle_id: int
    deposits: int
    strength: float
    death_count: int
    elapsed_ms: float


@dataclass(frozen=True)
class AttackStartedEvent:
    """A termite raid began."""

    termite_count: int
    elapsed_ms: float


@dataclass(frozen=True)
class AttackEndedEvent:
    """The last raiding termite died."""

    termites_killed: int
    elapsed_ms: float


@dataclass(frozen=True)
class TermiteDiedEvent:
    termite_id: int
    x: float
    y: float
    elapsed_ms: float


@dataclass(frozen=True)
class RainStartedEvent:
    duration_ms: float
    elapsed_ms: float


@dataclass(frozen=True)
class RainEndedEvent:
    elapsed_ms: float


@dataclass(frozen=True)
class NuptialFlightStartedEvent:
    """The queen left on a nuptial flight (food cost already paid)."""

    food_spent: float
    elapsed_ms: float


@dataclass(frozen=True)
class NuptialFlightEndedEvent:
    elapsed_ms: float


@dataclass(frozen=True)
class EggsLaidEvent:
    count: int
    elapsed_ms: float


@dataclass(frozen=True)
class ColonyEvolvedEvent:
    """The colony advanced a generation.

    Attributes:
        generation: New generation number
        spawn_cost: Spawn cost after the change
        max_population: Population cap after the change
        elapsed_ms: Simulation time when this occurred
    """

    generation: int
    spawn_cost: float
    max_population: int
    elapsed_ms: float


@dataclass(frozen=True)
class EmergencyReliefEvent:
    """Colony stores ran dry and every ant received an energy ration."""

    ants_fed: int
    food_storage: float
    elapsed_ms: float

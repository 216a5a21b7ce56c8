"""Events module for simulation event dispatch.

Provides the EventBus (the default event sink) plus typed domain event
definitions.
"""

from antsim.events.domain_events import (
    AntDiedEvent,
    AntSpawnedEvent,
    AttackEndedEvent,
    AttackStartedEvent,
    ColonyEvolvedEvent,
    DangerBurstEvent,
    EggsLaidEvent,
    EmergencyReliefEvent,
    FoodDepletedEvent,
    NuptialFlightEndedEvent,
    NuptialFlightStartedEvent,
    PuddleSpawnedEvent,
    RainEndedEvent,
    RainStartedEvent,
    TermiteDiedEvent,
)
from antsim.events.event_bus import EventBus, EventSink

__all__ = [
    "AntDiedEvent",
    "AntSpawnedEvent",
    "AttackEndedEvent",
    "AttackStartedEvent",
    "ColonyEvolvedEvent",
    "DangerBurstEvent",
    "EggsLaidEvent",
    "EmergencyReliefEvent",
    "EventBus",
    "EventSink",
    "FoodDepletedEvent",
    "NuptialFlightEndedEvent",
    "NuptialFlightStartedEvent",
    "PuddleSpawnedEvent",
    "RainEndedEvent",
    "RainStartedEvent",
    "TermiteDiedEvent",
]

"""Read-only snapshot models and the builder that fills them."""

from antsim.snapshots.builder import SnapshotBuilder
from antsim.snapshots.models import (
    AntSnapshot,
    BroodSnapshot,
    ColonySnapshot,
    CorpseSnapshot,
    FoodSnapshot,
    PheromoneSnapshot,
    PuddleSnapshot,
    SimulationSnapshot,
    TermiteSnapshot,
)

__all__ = [
    "AntSnapshot",
    "BroodSnapshot",
    "ColonySnapshot",
    "CorpseSnapshot",
    "FoodSnapshot",
    "PheromoneSnapshot",
    "PuddleSnapshot",
    "SimulationSnapshot",
    "SnapshotBuilder",
    "TermiteSnapshot",
]

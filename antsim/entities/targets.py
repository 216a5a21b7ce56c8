"""Closed set of things an ant or termite can be heading for.

Targets are non-owning references: the owning system (food manager,
pheromone field, colony, termite swarm) may remove the underlying object
at any time. Every consumer must call ``is_valid`` before acting on a
target and fall back to a default behaviour when it returns False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from antsim.entities.ant import Ant
    from antsim.entities.corpse import Corpse
    from antsim.entities.food import FoodSource
    from antsim.entities.pheromone import PheromoneDeposit
    from antsim.entities.termite import Termite


@dataclass(frozen=True)
class FoodTarget:
    source: "FoodSource"


@dataclass(frozen=True)
class TrailTarget:
    deposit: "PheromoneDeposit"


@dataclass(frozen=True)
class CorpseTarget:
    corpse: "Corpse"


@dataclass(frozen=True)
class TermiteTarget:
    termite: "Termite"


@dataclass(frozen=True)
class AntTarget:
    ant: "Ant"


Target = Union[FoodTarget, TrailTarget, CorpseTarget, TermiteTarget, AntTarget]


def is_valid(target: Optional[Target]) -> bool:
    """Whether the referenced object still exists in the world."""
    if target is None:
        return False
    if isinstance(target, FoodTarget):
        return target.source.active
    if isinstance(target, TrailTarget):
        return target.deposit.active
    if isinstance(target, CorpseTarget):
        return not target.corpse.collected
    if isinstance(target, TermiteTarget):
        return target.termite.alive
    if isinstance(target, AntTarget):
        return target.ant.alive
    raise TypeError(f"Unknown target type: {type(target).__name__}")


def position_of(target: Target) -> Tuple[float, float]:
    """Current world position of a target's referent."""
    if isinstance(target, FoodTarget):
        return (target.source.x, target.source.y)
    if isinstance(target, TrailTarget):
        return (target.deposit.x, target.deposit.y)
    if isinstance(target, CorpseTarget):
        return (target.corpse.x, target.corpse.y)
    if isinstance(target, TermiteTarget):
        return (target.termite.x, target.termite.y)
    if isinstance(target, AntTarget):
        return (target.ant.x, target.ant.y)
    raise TypeError(f"Unknown target type: {type(target).__name__}")

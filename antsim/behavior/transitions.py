"""Pure ant decision rules.

``decide`` maps (current state, what the ant knows about itself, what it
senses) to the state it should be in this tick. It never mutates
anything: side effects are described by ``Effect`` flags on the returned
``Transition`` and applied by the ant.

Rules, highest priority first:

1. During a termite raid soldiers engage a termite in range and everyone
   else hides. When the raid is over hiding ants go back to exploring.
2. Nurses that are not carrying food tend the brood.
3. Ants with empty mandibles fetch nearby corpses.
4. Ants not carrying food flee nearby danger pheromone, and go back to
   exploring once none is sensed.
5. Carriers head home; otherwise keep a valid food or trail task, pick
   up a food trail, head for visible food, or explore.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import TYPE_CHECKING, FrozenSet, Optional

from antsim.entities.ant_state import AntRole, AntState
from antsim.entities.targets import (
    CorpseTarget,
    FoodTarget,
    Target,
    TermiteTarget,
    TrailTarget,
    is_valid,
)

if TYPE_CHECKING:
    from antsim.behavior.senses import Senses
    from antsim.entities.ant import Ant
    from antsim.entities.pheromone import PheromoneDeposit


class Effect(Enum):
    AVOID_DANGER = auto()  # Turn away from ``Transition.danger`` and speed up
    RESET_SPEED = auto()  # Drop any flee speed boost
    FOLLOW_TRAIL = auto()  # Register as a follower of the target deposit


@dataclass(frozen=True)
class AntView:
    """The facts about itself an ant's decision depends on."""

    role: AntRole
    carrying_food: bool
    carrying_corpse: bool
    target: Optional[Target]

    @property
    def target_valid(self) -> bool:
        return is_valid(self.target)

    @classmethod
    def of(cls, ant: "Ant") -> "AntView":
        return cls(
            role=ant.role,
            carrying_food=ant.carrying_food,
            carrying_corpse=ant.carrying_corpse,
            target=ant.target,
        )


@dataclass(frozen=True)
class Transition:
    """Outcome of one decision.

    Attributes:
        state: State for this tick
        target: New target (ignored when ``keep_target`` is set)
        keep_target: Keep whatever target the ant already has
        effects: Side effects for the ant to apply
        danger: Deposit to flee from (with ``Effect.AVOID_DANGER``)
    """

    state: AntState
    target: Optional[Target] = None
    keep_target: bool = False
    effects: FrozenSet[Effect] = frozenset()
    danger: Optional["PheromoneDeposit"] = None


def _keep(state: AntState) -> Transition:
    return Transition(state, keep_target=True)


def decide(state: AntState, view: AntView, senses: "Senses") -> Transition:
    """Choose this tick's state for an ant that is not resting."""
    transition = _decide(state, view, senses)
    if state is AntState.AVOIDING_DANGER and transition.state is not AntState.AVOIDING_DANGER:
        transition = replace(transition, effects=transition.effects | {Effect.RESET_SPEED})
    return transition


def _decide(state: AntState, view: AntView, senses: "Senses") -> Transition:
    # 1. Termite raid
    if senses.attack_active:
        if view.role is AntRole.SOLDIER:
            if state is AntState.ATTACKING_TERMITE and isinstance(view.target, TermiteTarget) and view.target_valid:
                return _keep(state)
            termite = senses.nearest_termite
            if termite is not None:
                return Transition(AntState.ATTACKING_TERMITE, target=TermiteTarget(termite))
        else:
            return Transition(AntState.HIDING)
    elif state is AntState.HIDING:
        state = AntState.EXPLORING
        view = replace(view, target=None)

    # 2. Brood care
    if view.role is AntRole.NURSE and not view.carrying_food and not view.carrying_corpse:
        if state is AntState.FEEDING_BROOD:
            return _keep(state)
        return Transition(AntState.FEEDING_BROOD)

    # 3. Corpse collection
    if not view.carrying_food and not view.carrying_corpse:
        if state is AntState.COLLECTING_CORPSE and isinstance(view.target, CorpseTarget) and view.target_valid:
            return _keep(state)
        corpse = senses.nearest_corpse
        if corpse is not None:
            return Transition(AntState.COLLECTING_CORPSE, target=CorpseTarget(corpse))

    # 4. Danger avoidance
    if not view.carrying_food:
        danger = senses.danger
        if danger is not None:
            return Transition(
                AntState.AVOIDING_DANGER,
                effects=frozenset({Effect.AVOID_DANGER}),
                danger=danger,
            )
        if state is AntState.AVOIDING_DANGER and not view.carrying_corpse:
            return Transition(AntState.EXPLORING)

    # 5. Foraging
    if view.carrying_food or view.carrying_corpse:
        return Transition(AntState.RETURNING_HOME)
    if isinstance(view.target, FoodTarget) and view.target_valid:
        return _keep(AntState.SEEKING_FOOD)
    if state is AntState.FOLLOWING_TRAIL and isinstance(view.target, TrailTarget) and view.target_valid:
        return _keep(state)
    trail = senses.trail
    if trail is not None:
        return Transition(
            AntState.FOLLOWING_TRAIL,
            target=TrailTarget(trail),
            effects=frozenset({Effect.FOLLOW_TRAIL}),
        )
    food = senses.food
    if food is not None:
        return Transition(AntState.SEEKING_FOOD, target=FoodTarget(food))
    return Transition(AntState.EXPLORING)

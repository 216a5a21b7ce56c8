"""Ant roles, behaviour states and causes of death."""

from enum import Enum


class AntRole(Enum):
    WORKER = "worker"
    SOLDIER = "soldier"  # Fights termites during raids
    SCOUT = "scout"
    FORAGER = "forager"
    NURSE = "nurse"  # Tends brood instead of foraging
    QUEEN = "queen"  # At most one; drives the nuptial-flight cycle


class AntState(Enum):
    """Behaviour state of a single ant.

    Exactly one state is active per ant. ``RESTING`` is entered only
    through ``Ant.start_resting`` and always exits to ``EXPLORING``.
    """

    EXPLORING = "exploring"
    SEEKING_FOOD = "seeking_food"
    RETURNING_HOME = "returning_home"
    FOLLOWING_TRAIL = "following_trail"
    ATTACKING_TERMITE = "attacking_termite"
    HIDING = "hiding"
    FEEDING_BROOD = "feeding_brood"
    COLLECTING_CORPSE = "collecting_corpse"
    AVOIDING_DANGER = "avoiding_danger"
    RESTING = "resting"


class DeathCause(Enum):
    STARVATION = "starvation"
    DROWNED = "drowned"
    COMBAT = "combat"  # Killed by a termite
    EXHAUSTION = "exhaustion"  # Spent its last energy on an action

"""Update phase definitions for explicit execution ordering.

Every simulation tick runs the same fixed sequence of phases. Systems
declare the phase they belong to with ``@runs_in_phase``; the engine
pipeline (``antsim.simulation.pipeline``) drives execution order and the
phase metadata is used for diagnostics and validation.

    @runs_in_phase(UpdatePhase.PHEROMONES)
    class PheromoneField(BaseSystem):
        ...
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Optional

__all__ = [
    "UpdatePhase",
    "PHASE_DESCRIPTIONS",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from antsim.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a simulation tick, in execution order.

    1. FRAME_START: Advance the clock, reset per-frame counters
    2. PHEROMONES: Age, decay and remove pheromone deposits
    3. ANTS: Every live ant senses, decides and acts
    4. COLONY: Sweep the dead, spawn, queen cycle, brood, relief, evolution
    5. RESOURCES: Food grace timers and depleted-source removal
    6. HAZARDS: Puddle spawning and exposure warnings
    7. TERMITES: Termite behaviour and raid bookkeeping
    8. WORLD_EVENTS: Rain expiry and random event rolls
    9. FRAME_END: Final sweep of ants killed late in the tick
    """

    FRAME_START = auto()
    PHEROMONES = auto()
    ANTS = auto()
    COLONY = auto()
    RESOURCES = auto()
    HAZARDS = auto()
    TERMITES = auto()
    WORLD_EVENTS = auto()
    FRAME_END = auto()


# Human-readable descriptions for debugging
PHASE_DESCRIPTIONS: Dict[UpdatePhase, str] = {
    UpdatePhase.FRAME_START: "Advancing clock, resetting counters",
    UpdatePhase.PHEROMONES: "Decaying pheromone deposits",
    UpdatePhase.ANTS: "Ants sensing, deciding and acting",
    UpdatePhase.COLONY: "Processing colony lifecycle",
    UpdatePhase.RESOURCES: "Updating food sources",
    UpdatePhase.HAZARDS: "Updating puddles",
    UpdatePhase.TERMITES: "Updating termites",
    UpdatePhase.WORLD_EVENTS: "Rolling world events",
    UpdatePhase.FRAME_END: "Sweeping late deaths",
}


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.COLONY)
        class Colony(BaseSystem):
            def _do_update(self, delta_ms: float) -> None:
                ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)

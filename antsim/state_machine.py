"""State machine abstractions for explicit state management.

This module provides a small generic state machine where:
- All valid states are enumerated
- Valid transitions are defined explicitly
- Invalid transitions are caught immediately (fail-fast)
- State history can be tracked for debugging

Per-tick ant behaviour does not use this class: ant transitions are the
output of a pure decision function (see ``antsim.behavior.transitions``).
The machine is used where the set of legal moves is fixed and a wrong
move is a bug, such as the queen's nuptial-flight cycle.

Usage:
------
    class DoorState(Enum):
        OPEN = "open"
        CLOSED = "closed"

    door = StateMachine(DoorState.CLOSED, {
        DoorState.OPEN: [DoorState.CLOSED],
        DoorState.CLOSED: [DoorState.OPEN],
    })
    door.transition(DoorState.OPEN)  # OK
    door.transition(DoorState.OPEN)  # Raises InvalidTransitionError
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, TypeVar

from antsim.exceptions import InvalidTransitionError

# Type variable for state enum types
S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging.

    Attributes:
        from_state: The state before transition
        to_state: The state after transition
        elapsed_ms: Simulation time when the transition occurred
        reason: Optional description of why transition happened
    """

    from_state: S
    to_state: S
    elapsed_ms: float
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation."""

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        """Initialize the state machine.

        Args:
            initial_state: The starting state
            valid_transitions: Map of state -> list of valid target states
            track_history: Whether to record transition history
            max_history: Maximum number of transitions to keep in history
        """
        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )

        self._state = initial_state
        self._initial_state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Get transition history (empty if tracking disabled)."""
        return self._history.copy()

    def can_transition(self, target: S) -> bool:
        return target in self._transitions.get(self._state, [])

    def transition(self, target: S, elapsed_ms: float = 0.0, reason: str = "") -> S:
        """Transition to a new state, raising on invalid transition.

        Raises:
            InvalidTransitionError: If ``target`` is not reachable from the current state
        """
        if not self.can_transition(target):
            valid_targets = self._transitions.get(self._state, [])
            raise InvalidTransitionError(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {[t.name for t in valid_targets]}"
            )

        old_state = self._state
        self._state = target
        if self._track_history:
            self._record_transition(old_state, target, elapsed_ms, reason)
        return target

    def reset(self) -> None:
        """Return to the initial state and forget history."""
        self._state = self._initial_state
        self._history.clear()

    def _record_transition(self, from_state: S, to_state: S, elapsed_ms: float, reason: str) -> None:
        self._history.append(
            StateTransition(
                from_state=from_state,
                to_state=to_state,
                elapsed_ms=elapsed_ms,
                reason=reason,
            )
        )
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history :]

    def get_valid_transitions(self) -> List[S]:
        """Get list of valid target states from current state."""
        return list(self._transitions.get(self._state, []))

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"


# ============================================================================
# Queen Nuptial Flight State Machine
# ============================================================================


class QueenFlightState(Enum):
    """Phases of the queen's reproduction cycle."""

    IDLE = "idle"  # Accumulating time and food before the next flight
    NUPTIAL_FLIGHT = "nuptial_flight"  # Queen is away mating
    POST_FLIGHT = "post_flight"  # Queen back, eggs about to be laid


# The cycle only ever moves forward and wraps back to IDLE.
QUEEN_FLIGHT_TRANSITIONS: Dict[QueenFlightState, List[QueenFlightState]] = {
    QueenFlightState.IDLE: [QueenFlightState.NUPTIAL_FLIGHT],
    QueenFlightState.NUPTIAL_FLIGHT: [QueenFlightState.POST_FLIGHT],
    QueenFlightState.POST_FLIGHT: [QueenFlightState.IDLE],
}


def create_queen_flight_state_machine(track_history: bool = False) -> StateMachine[QueenFlightState]:
    """Create a state machine for the queen's nuptial-flight cycle."""
    return StateMachine(
        initial_state=QueenFlightState.IDLE,
        valid_transitions=QUEEN_FLIGHT_TRANSITIONS,
        track_history=track_history,
    )

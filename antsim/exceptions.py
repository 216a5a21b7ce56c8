"""Ant simulation exception hierarchy.

Centralised base classes so callers can catch simulation failures
narrowly instead of relying on bare ``except Exception`` blocks.

Behavioural edge cases (stale targets, spawning without food, empty
queries) are ordinary control flow and never raise. These exceptions are
reserved for programming and configuration mistakes.
"""


class AntSimError(Exception):
    """Root of all ant-simulation domain exceptions."""


class SimulationError(AntSimError):
    """Errors during simulation execution (engine, systems, entities)."""


class InvalidTransitionError(SimulationError):
    """A state machine was asked to perform a transition it does not allow."""


class ConfigurationError(AntSimError):
    """Invalid or missing configuration."""

"""Per-frame state for pipeline steps.

A FrameContext is created at the start of every ``advance`` call and
passed through all pipeline steps, so data produced by one step (the
scaled delta, each system's result) is handed on explicitly rather than
stashed on the engine. The engine turns it into the FrameResult returned
to the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from antsim.systems.base import SystemResult


@dataclass
class FrameContext:
    """Explicit per-frame state passed through pipeline steps.

    Attributes:
        real_delta_ms: Elapsed host time handed to ``advance``
        delta_ms: Simulation delta after the speed multiplier (set in frame_start)
        halted: Set by a step to stop the rest of the pipeline (paused clock)
        results: SystemResult per system name, in execution order
        late_deaths: Ants swept at frame end (killed after the colony step)
    """

    real_delta_ms: float = 0.0
    delta_ms: float = 0.0
    halted: bool = False
    results: Dict[str, SystemResult] = field(default_factory=dict)
    late_deaths: int = 0


@dataclass
class FrameResult:
    """What one call to ``SimulationEngine.advance`` did."""

    frame: int
    delta_ms: float
    elapsed_ms: float
    population: int
    food_storage: float
    skipped: bool = False
    results: Dict[str, SystemResult] = field(default_factory=dict)

    @property
    def totals(self) -> SystemResult:
        """All system results combined."""
        total = SystemResult.empty()
        for result in self.results.values():
            total = total + result
        return total

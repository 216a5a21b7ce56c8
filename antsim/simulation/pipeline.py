"""Engine pipeline: the ordered steps of one simulation tick.

The default pipeline is the canonical order. A host (or a test) can build
its own EnginePipeline to add, remove or reorder steps without touching
SimulationEngine.

Design Notes:
- Steps receive the engine AND a FrameContext for explicit data flow
- A step may halt the frame; the remaining steps are then skipped
- Each system step records its SystemResult in the FrameContext
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List

from antsim.simulation.frame_context import FrameContext
from antsim.update_phases import UpdatePhase

if TYPE_CHECKING:
    from antsim.simulation.engine import SimulationEngine


@dataclass
class PipelineStep:
    """A single step in the engine update pipeline.

    Attributes:
        name: Human-readable identifier for the step (e.g., "frame_start")
        fn: Function that executes this step, receiving engine and context
    """

    name: str
    fn: Callable[["SimulationEngine", FrameContext], None]


class EnginePipeline:
    """Ordered sequence of steps executed once per ``advance``."""

    def __init__(self, steps: List[PipelineStep]) -> None:
        self._steps = steps

    @property
    def steps(self) -> List[PipelineStep]:
        return self._steps

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self._steps]

    def run(self, engine: "SimulationEngine", delta_ms: float) -> FrameContext:
        """Execute all pipeline steps in order.

        Args:
            engine: The SimulationEngine instance to update
            delta_ms: Host time elapsed since the previous call

        Returns:
            The FrameContext after the last step that ran
        """
        ctx = FrameContext(real_delta_ms=delta_ms)
        for step in self._steps:
            step.fn(engine, ctx)
            if ctx.halted:
                break
        return ctx


# =============================================================================
# Default Pipeline
# =============================================================================


def _step_frame_start(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """FRAME_START: Advance the clock; halt when paused."""
    engine._phase_frame_start(ctx)


def _step_pheromones(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """PHEROMONES: Age, decay and remove deposits."""
    engine._run_system(UpdatePhase.PHEROMONES, engine.pheromones, ctx)


def _step_ants(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """ANTS: Every live ant runs its state machine."""
    engine._run_system(UpdatePhase.ANTS, engine.ant_activity, ctx)


def _step_colony(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """COLONY: Sweep the dead, spawn, queen cycle, brood, relief, evolution."""
    engine._run_system(UpdatePhase.COLONY, engine.colony, ctx)


def _step_resources(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """RESOURCES: Food grace timers and depleted-source removal."""
    engine._run_system(UpdatePhase.RESOURCES, engine.food, ctx)


def _step_hazards(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """HAZARDS: Puddle spawning."""
    engine._run_system(UpdatePhase.HAZARDS, engine.hazards, ctx)


def _step_termites(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """TERMITES: Termite behaviour and raid bookkeeping."""
    engine._run_system(UpdatePhase.TERMITES, engine.termites, ctx)


def _step_world_events(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """WORLD_EVENTS: Rain expiry and random event rolls."""
    engine._run_system(UpdatePhase.WORLD_EVENTS, engine.world_events, ctx)


def _step_frame_end(engine: "SimulationEngine", ctx: FrameContext) -> None:
    """FRAME_END: Sweep ants killed after the colony step."""
    engine._phase_frame_end(ctx)


def default_pipeline() -> EnginePipeline:
    """Build the canonical tick order.

    Phase Order:
        1. frame_start: Advance the clock (speed multiplier applied)
        2. pheromones: Decay, age and remove deposits
        3. ants: Every live ant senses, decides and acts
        4. colony: Sweep dead ants into corpses, spawn, reproduce
        5. resources: Food grace timers, drop depleted sources
        6. hazards: Spawn puddles
        7. termites: Run termites, end the raid when none remain
        8. world_events: Expire rain, roll new events
        9. frame_end: Final sweep for ants killed by termites

    Returns:
        EnginePipeline configured with the canonical step order
    """
    return EnginePipeline(
        [
            PipelineStep("frame_start", _step_frame_start),
            PipelineStep("pheromones", _step_pheromones),
            PipelineStep("ants", _step_ants),
            PipelineStep("colony", _step_colony),
            PipelineStep("resources", _step_resources),
            PipelineStep("hazards", _step_hazards),
            PipelineStep("termites", _step_termites),
            PipelineStep("world_events", _step_world_events),
            PipelineStep("frame_end", _step_frame_end),
        ]
    )

"""Simulation package: orchestration components.

- engine.py: SimulationEngine, the slim orchestrator
- context.py: SimulationContext handed to every agent
- pipeline.py: the ordered steps of one tick
- system_registry.py: system registration and management

Usage:
    from antsim.simulation import SimulationEngine

    engine = SimulationEngine(SimulationConfig(seed=42))
    engine.setup()
    result = engine.advance(1000 / 60)
"""

from antsim.simulation.context import SimulationContext
from antsim.simulation.engine import SimulationEngine
from antsim.simulation.frame_context import FrameContext, FrameResult
from antsim.simulation.pipeline import EnginePipeline, PipelineStep, default_pipeline
from antsim.simulation.system_registry import SystemRegistry

__all__ = [
    "EnginePipeline",
    "FrameContext",
    "FrameResult",
    "PipelineStep",
    "SimulationContext",
    "SimulationEngine",
    "SystemRegistry",
    "default_pipeline",
]

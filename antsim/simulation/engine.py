"""Simulation engine: the slim orchestrator.

The engine builds every component, wires them into a SimulationContext
and runs the tick pipeline. It holds no business logic itself: ants,
the colony, food, hazards, termites and world events each live in their
own system.

Design Decisions:
-----------------
1. The engine is a COORDINATOR, not a DOER. It owns the systems but does
   not contain simulation rules inline.

2. Tick order is owned by the EnginePipeline (see ``pipeline.py``); the
   engine only provides the phase hooks the steps call.

3. A reset tears down and rebuilds every component from the current
   configuration. Host knobs that change counts (ants, food sources)
   are stored in the configuration and take effect on the next reset.
"""

import copy
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import orjson

from antsim.clock import SimulationClock
from antsim.config import SimulationConfig
from antsim.entities.food import FoodSource
from antsim.events import EventBus, EventSink
from antsim.exceptions import SimulationError
from antsim.math_utils import clamp
from antsim.simulation.context import SimulationContext
from antsim.simulation.frame_context import FrameContext, FrameResult
from antsim.simulation.pipeline import EnginePipeline, default_pipeline
from antsim.simulation.system_registry import SystemRegistry
from antsim.snapshots import SimulationSnapshot, SnapshotBuilder
from antsim.spatial.bounds import WorldBounds
from antsim.systems import (
    AntActivity,
    BaseSystem,
    Colony,
    FoodManager,
    HazardField,
    PheromoneField,
    TermiteSwarm,
    WorldEventScheduler,
)
from antsim.update_phases import PHASE_DESCRIPTIONS, UpdatePhase
from antsim.world.terrain import TerrainMap, WorldQuery

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


class SimulationEngine:
    """A headless ant colony simulation.

    Architecture:
        SimulationEngine (coordinator)
        ├── EnginePipeline (tick order)
        ├── SystemRegistry (system lifecycle)
        └── SimulationContext (shared services + systems)
            ├── PheromoneField, FoodManager, HazardField
            ├── Colony (+ AntActivity), TermiteSwarm
            └── WorldEventScheduler

    Attributes:
        config: Working copy of the configuration (host knobs write here)
        events: Event sink every system emits to
        context: Current SimulationContext (None until setup)
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        events: Optional[EventSink] = None,
        world_query: Optional[WorldQuery] = None,
        pipeline: Optional[EnginePipeline] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Simulation configuration (copied; the caller's object is
                never mutated)
            events: Event sink; a new EventBus by default
            world_query: Terrain speed source; a TerrainMap by default
            pipeline: Tick pipeline; ``default_pipeline()`` by default
        """
        self.config = copy.deepcopy(config) if config is not None else SimulationConfig()
        self.events: EventSink = events if events is not None else EventBus()
        self.pipeline = pipeline or default_pipeline()
        self._world_query_override = world_query
        self._registry = SystemRegistry()
        self._snapshot_builder = SnapshotBuilder()
        self._current_phase: Optional[UpdatePhase] = None
        self._setup_done = False
        self.resets = 0

        self.rng = random.Random(self.config.seed)
        self.context: Optional[SimulationContext] = None
        self.clock: Optional[SimulationClock] = None
        self.world_query: Optional[WorldQuery] = None
        self.pheromones: Optional[PheromoneField] = None
        self.food: Optional[FoodManager] = None
        self.hazards: Optional[HazardField] = None
        self.colony: Optional[Colony] = None
        self.ant_activity: Optional[AntActivity] = None
        self.termites: Optional[TermiteSwarm] = None
        self.world_events: Optional[WorldEventScheduler] = None

    # =========================================================================
    # Setup and Reset
    # =========================================================================

    def setup(self) -> None:
        """Validate the configuration and build the world.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config.validate()
        self._build(paused=False)
        self._setup_done = True
        logger.info(
            "Simulation ready: %d ants, %d food sources, %d puddles (seed=%s)",
            self.colony.population,
            len(self.food.sources),
            len(self.hazards.puddles),
            self.config.seed,
        )

    def reset(self) -> None:
        """Tear down every component and rebuild from the configuration."""
        if not self._setup_done:
            self.setup()
            return
        self.config.validate()
        paused = self.clock.paused
        self._build(paused=paused)
        self.resets += 1
        logger.info("Simulation reset (%d ants)", self.colony.population)

    def _build(self, paused: bool) -> None:
        config = self.config
        self.rng = random.Random(config.seed)
        home = config.world.colony_position

        bounds = WorldBounds(config.world.width, config.world.height)
        clock = SimulationClock(speed=config.simulation_speed)
        clock.paused = paused
        world_query = self._world_query_override or TerrainMap(config.world, self.rng)

        pheromones = PheromoneField(config.pheromones)
        food = FoodManager(config.food, bounds, self.rng, self.events, clock, home)
        hazards = HazardField(config.hazards, bounds, self.rng, pheromones, self.events, clock, home)

        ctx = SimulationContext(
            config=config,
            rng=self.rng,
            bounds=bounds,
            clock=clock,
            events=self.events,
            world_query=world_query,
            pheromones=pheromones,
            food=food,
            hazards=hazards,
        )
        colony = Colony(ctx)
        ctx.colony = colony
        termites = TermiteSwarm(ctx)
        ctx.termites = termites

        self.context = ctx
        self.clock = clock
        self.world_query = world_query
        self.pheromones = pheromones
        self.food = food
        self.hazards = hazards
        self.colony = colony
        self.ant_activity = AntActivity(ctx)
        self.termites = termites
        self.world_events = WorldEventScheduler(ctx)

        # Register systems in execution order
        self._registry.clear()
        for system in (
            self.pheromones,
            self.ant_activity,
            self.colony,
            self.food,
            self.hazards,
            self.termites,
            self.world_events,
        ):
            self._registry.register(system)

        food.populate(config.food.initial_sources)
        hazards.populate()
        colony.seed_population(config.ant_count)

    def _require_setup(self) -> SimulationContext:
        if not self._setup_done or self.context is None:
            raise SimulationError("SimulationEngine.setup() must be called first")
        return self.context

    @property
    def is_setup(self) -> bool:
        return self._setup_done

    # =========================================================================
    # Core Update Loop
    # =========================================================================

    def advance(self, delta_ms: float) -> FrameResult:
        """Advance the simulation by ``delta_ms`` of host time.

        The delta is scaled by the speed multiplier. While paused, or for a
        non-positive delta, nothing changes and the result is marked skipped.

        Raises:
            SimulationError: If called before ``setup()``
        """
        self._require_setup()
        frame = self.pipeline.run(self, delta_ms)
        return FrameResult(
            frame=self.clock.frame,
            delta_ms=frame.delta_ms,
            elapsed_ms=self.clock.elapsed_ms,
            population=self.colony.population,
            food_storage=self.colony.food_storage,
            skipped=frame.halted,
            results=frame.results,
        )

    def _phase_frame_start(self, frame: FrameContext) -> None:
        """FRAME_START: Advance the clock; halt the frame when nothing elapsed."""
        self._current_phase = UpdatePhase.FRAME_START
        frame.delta_ms = self.clock.tick(frame.real_delta_ms)
        if frame.delta_ms <= 0:
            frame.halted = True
            self._current_phase = None

    def _run_system(self, phase: UpdatePhase, system: BaseSystem, frame: FrameContext) -> None:
        self._current_phase = phase
        frame.results[system.name] = system.update(frame.delta_ms)

    def _phase_frame_end(self, frame: FrameContext) -> None:
        """FRAME_END: Sweep ants killed after the colony step (termite bites)."""
        self._current_phase = UpdatePhase.FRAME_END
        frame.late_deaths = self.colony.sweep_dead()
        self._current_phase = None

    # =========================================================================
    # Phase Tracking
    # =========================================================================

    def get_current_phase(self) -> Optional[UpdatePhase]:
        """Get the current update phase (None if not in update loop)."""
        return self._current_phase

    def get_phase_description(self, phase: Optional[UpdatePhase] = None) -> str:
        if phase is None:
            phase = self._current_phase
        if phase is None:
            return "Not in update loop"
        return PHASE_DESCRIPTIONS.get(phase, phase.name)

    # =========================================================================
    # System Registry Methods (delegate to SystemRegistry)
    # =========================================================================

    def get_systems(self) -> List[BaseSystem]:
        return self._registry.get_all()

    def get_system(self, name: str) -> Optional[BaseSystem]:
        return self._registry.get(name)

    def set_system_enabled(self, name: str, enabled: bool) -> bool:
        return self._registry.set_enabled(name, enabled)

    # =========================================================================
    # Host Knobs
    # =========================================================================

    def set_ant_count(self, count: int) -> None:
        """Founding population for the next reset."""
        self.config.ant_count = max(0, int(count))

    def set_food_source_count(self, count: int) -> None:
        """Initial food source count for the next reset."""
        self.config.food.initial_sources = max(0, int(count))

    def set_decay_rate(self, rate: float) -> float:
        """Set the exploration decay rate (per ms); applies immediately.

        Returns:
            The clamped rate actually applied
        """
        if self.pheromones is not None:
            rate = self.pheromones.set_decay_rate(rate)
        else:
            cfg = self.config.pheromones
            rate = clamp(rate, cfg.min_decay_rate, cfg.max_decay_rate)
        self.config.pheromones.decay_rate = rate
        return rate

    def set_simulation_speed(self, speed: float) -> float:
        """Set the speed multiplier; applies immediately.

        Returns:
            The clamped speed actually applied
        """
        if self.clock is not None:
            speed = self.clock.set_speed(speed)
        else:
            speed = SimulationClock(speed=speed).speed
        self.config.simulation_speed = speed
        return speed

    def pause(self) -> None:
        self._require_setup()
        self.clock.pause()

    def resume(self) -> None:
        self._require_setup()
        self.clock.resume()

    @property
    def paused(self) -> bool:
        return self.clock is not None and self.clock.paused

    def add_food_source(self, x: float, y: float, amount: Optional[float] = None) -> FoodSource:
        """Place a food source (e.g. where the user clicked)."""
        self._require_setup()
        return self.food.add_source(x, y, amount)

    def add_random_food(self) -> List[FoodSource]:
        """Drop a small random batch of food around the world."""
        self._require_setup()
        return self.food.add_random_food()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def population(self) -> int:
        self._require_setup()
        return self.colony.population

    @property
    def food_storage(self) -> float:
        self._require_setup()
        return self.colony.food_storage

    def pheromone_counts(self) -> Dict[str, int]:
        self._require_setup()
        return {kind.value: count for kind, count in self.pheromones.counts_by_type().items()}

    def ant_state_counts(self) -> Dict[str, int]:
        self._require_setup()
        return self.colony.ants_by_state()

    def snapshot(self, include_pheromones: bool = False) -> SimulationSnapshot:
        """Read-only copy of the whole world."""
        ctx = self._require_setup()
        if include_pheromones:
            return SnapshotBuilder(include_pheromones=True).build(ctx)
        return self._snapshot_builder.build(ctx)

    def get_stats(self) -> Dict[str, Any]:
        """Current simulation statistics."""
        ctx = self._require_setup()
        return {
            "frame": self.clock.frame,
            "elapsed_seconds": self.clock.elapsed_seconds,
            "speed": self.clock.speed,
            "paused": self.clock.paused,
            "weather": ctx.weather.value,
            "attack_active": ctx.attack_active,
            "colony": self.colony.get_stats(),
            "food": self.food.get_stats(),
            "hazards": self.hazards.get_stats(),
            "termites": self.termites.get_stats(),
            "pheromones": self.pheromones.get_stats(),
            "corpses": len(ctx.corpses),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "phase": self.get_phase_description(),
            "pipeline": self.pipeline.step_names,
            "systems": self._registry.get_debug_info(),
        }

    # =========================================================================
    # Run Methods
    # =========================================================================

    def log_stats(self) -> None:
        stats = self.get_stats()
        colony = stats["colony"]
        logger.info(
            "t=%.1fs pop=%d storage=%.1f gen=%d born=%d died=%d status=%s",
            stats["elapsed_seconds"],
            colony["population"],
            colony["food_storage"],
            colony["generation"],
            colony["total_born"],
            colony["total_died"],
            colony["status"],
        )
        logger.info(
            "  food=%d/%d pheromones=%s termites=%d weather=%s",
            stats["food"]["active_sources"],
            stats["food"]["total_sources"],
            stats["pheromones"]["by_type"],
            stats["termites"]["termites"],
            stats["weather"],
        )

    def export_snapshot(self, path: Union[str, Path], include_pheromones: bool = False) -> Path:
        """Write the current snapshot plus stats to a JSON file."""
        target = Path(path)
        payload = {
            "stats": self.get_stats(),
            "snapshot": self.snapshot(include_pheromones).model_dump(),
        }
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        logger.info("Snapshot exported to %s", target)
        return target

    def run_headless(
        self,
        seconds: float,
        tick_ms: float,
        stats_interval_s: float = 0.0,
        export_path: Optional[Union[str, Path]] = None,
    ) -> Dict[str, Any]:
        """Run for ``seconds`` of host time in fixed ``tick_ms`` steps.

        Returns:
            Final statistics
        """
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("HEADLESS ANT COLONY SIMULATION")
        logger.info("=" * SEPARATOR_WIDTH)

        if not self._setup_done:
            self.setup()

        ticks = int(seconds * 1000.0 / tick_ms)
        next_stats_ms = stats_interval_s * 1000.0
        for _ in range(ticks):
            self.advance(tick_ms)
            if stats_interval_s > 0 and self.clock.elapsed_ms >= next_stats_ms:
                self.log_stats()
                next_stats_ms += stats_interval_s * 1000.0

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("SIMULATION COMPLETE - Final Statistics")
        logger.info("=" * SEPARATOR_WIDTH)
        self.log_stats()

        if export_path:
            self.export_snapshot(export_path)
        return self.get_stats()

"""Queen nuptial-flight cycle and brood development.

Both run inside the colony update. The queen cycle is an explicit state
machine (idle -> nuptial flight -> post flight -> idle) driven by numeric
countdowns; at the end of each cycle the queen lays a clutch of eggs. The
brood pipeline then moves individuals one stage at a time:

    eggs -> larvae -> pupae -> adults

Each stage advances at most one individual per tick with probability
``delta / window * count`` and the later stages cost colony food. Adults
leave the pipeline only when the colony actually spawns them as ants, so
no individual is ever lost between stages.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict

from antsim.clock import Countdown
from antsim.config import ColonyConfig
from antsim.events import EggsLaidEvent, EventSink, NuptialFlightEndedEvent, NuptialFlightStartedEvent
from antsim.state_machine import QueenFlightState, create_queen_flight_state_machine

logger = logging.getLogger(__name__)

# Pays a food cost if the colony can afford it; returns whether it did.
PayFn = Callable[[float], bool]


@dataclass
class BroodCounts:
    eggs: int = 0
    larvae: int = 0
    pupae: int = 0
    adults: int = 0

    @property
    def total(self) -> int:
        return self.eggs + self.larvae + self.pupae + self.adults

    def as_dict(self) -> Dict[str, int]:
        return {"eggs": self.eggs, "larvae": self.larvae, "pupae": self.pupae, "adults": self.adults}


class BroodPipeline:
    """Stage counts for the colony's developing young."""

    def __init__(self, config: ColonyConfig, rng: random.Random) -> None:
        self.config = config
        self.rng = rng
        self.counts = BroodCounts()

    def lay_eggs(self, count: int) -> None:
        if count > 0:
            self.counts.eggs += count

    def _roll(self, delta_ms: float, window_ms: float, count: int) -> bool:
        if count <= 0:
            return False
        return self.rng.random() < delta_ms / window_ms * count

    def advance(self, delta_ms: float, pay: PayFn) -> int:
        """Run one tick of development.

        Returns:
            Number of stage transitions that happened (0 to 3)
        """
        cfg = self.config
        counts = self.counts
        moved = 0

        if self._roll(delta_ms, cfg.egg_hatch_window_ms, counts.eggs):
            counts.eggs -= 1
            counts.larvae += 1
            moved += 1

        if self._roll(delta_ms, cfg.larva_window_ms, counts.larvae) and pay(cfg.larva_food_cost):
            counts.larvae -= 1
            counts.pupae += 1
            moved += 1

        if self._roll(delta_ms, cfg.pupa_window_ms, counts.pupae) and pay(cfg.pupa_food_cost):
            counts.pupae -= 1
            counts.adults += 1
            moved += 1

        return moved

    def take_adult(self) -> bool:
        """Remove one adult that has just been spawned as an ant."""
        if self.counts.adults <= 0:
            return False
        self.counts.adults -= 1
        return True

    def reset(self) -> None:
        self.counts = BroodCounts()


class QueenCycle:
    """Timers and state for the queen's reproduction cycle."""

    def __init__(self, config: ColonyConfig, rng: random.Random, events: EventSink) -> None:
        self.config = config
        self.rng = rng
        self.events = events
        self.machine = create_queen_flight_state_machine(track_history=True)
        self.idle_ms = 0.0
        self._phase_timer = Countdown()
        self.flights_completed = 0

    @property
    def state(self) -> QueenFlightState:
        return self.machine.state

    @property
    def in_flight(self) -> bool:
        return self.machine.state is QueenFlightState.NUPTIAL_FLIGHT

    def update(self, delta_ms: float, elapsed_ms: float, food_storage: float, pay: PayFn, brood: BroodPipeline) -> None:
        cfg = self.config
        state = self.machine.state

        if state is QueenFlightState.IDLE:
            self.idle_ms += delta_ms
            if self.idle_ms < cfg.nuptial_flight_interval_ms:
                return
            self.idle_ms = 0.0
            if food_storage < cfg.nuptial_flight_cost or not pay(cfg.nuptial_flight_cost):
                logger.debug("Nuptial flight postponed: not enough food")
                return
            self.machine.transition(QueenFlightState.NUPTIAL_FLIGHT, elapsed_ms, "interval elapsed")
            self._phase_timer.start(cfg.nuptial_flight_duration_ms)
            self.events.emit(NuptialFlightStartedEvent(food_spent=cfg.nuptial_flight_cost, elapsed_ms=elapsed_ms))
            logger.info("Queen left on a nuptial flight")

        elif state is QueenFlightState.NUPTIAL_FLIGHT:
            if self._phase_timer.advance(delta_ms):
                self.machine.transition(QueenFlightState.POST_FLIGHT, elapsed_ms, "flight over")
                self._phase_timer.start(cfg.post_flight_duration_ms)
                self.events.emit(NuptialFlightEndedEvent(elapsed_ms=elapsed_ms))

        elif state is QueenFlightState.POST_FLIGHT:
            if self._phase_timer.advance(delta_ms):
                low, high = cfg.eggs_per_clutch
                eggs = self.rng.randint(low, high)
                brood.lay_eggs(eggs)
                self.machine.transition(QueenFlightState.IDLE, elapsed_ms, "eggs laid")
                self.flights_completed += 1
                self.events.emit(EggsLaidEvent(count=eggs, elapsed_ms=elapsed_ms))
                logger.info("Queen laid %d eggs", eggs)

    def reset(self) -> None:
        self.machine.reset()
        self.idle_ms = 0.0
        self._phase_timer.cancel()

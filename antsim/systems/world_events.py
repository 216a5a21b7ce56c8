"""Random world events: rain and termite raids.

Every ``check_interval_ms`` one roll decides whether something happens.
The raid band comes first, then the rain band:

    roll < raid_chance                  -> termite raid
    roll < raid_chance + rain_chance    -> rain (unless it is raining)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from antsim.clock import Countdown
from antsim.events import RainEndedEvent, RainStartedEvent
from antsim.systems.base import BaseSystem, SystemResult
from antsim.update_phases import UpdatePhase, runs_in_phase
from antsim.world.terrain import Weather

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.WORLD_EVENTS)
class WorldEventScheduler(BaseSystem):
    """Rolls for world events and runs the rain timer."""

    def __init__(self, ctx: "SimulationContext") -> None:
        super().__init__("WorldEvents")
        self.ctx = ctx
        self.config = ctx.config.events
        self._since_check_ms = 0.0
        self._rain = Countdown()
        self.rain_count = 0
        self.raid_count = 0

    @property
    def raining(self) -> bool:
        return self.ctx.weather is Weather.RAIN

    @property
    def rain_remaining_ms(self) -> Optional[float]:
        return self._rain.remaining

    def start_rain(self, duration_ms: Optional[float] = None) -> bool:
        """Start raining. Returns False if it already is."""
        if self.raining:
            return False
        if duration_ms is None:
            low, high = self.config.rain_duration_ms
            duration_ms = self.ctx.rng.uniform(low, high)
        self.ctx.weather = Weather.RAIN
        self._rain.start(duration_ms)
        self.rain_count += 1
        logger.info("Rain started for %.1f s", duration_ms / 1000.0)
        self.ctx.events.emit(RainStartedEvent(duration_ms=duration_ms, elapsed_ms=self.ctx.elapsed_ms))
        return True

    def stop_rain(self) -> None:
        if not self.raining:
            return
        self.ctx.weather = Weather.CLEAR
        self._rain.cancel()
        logger.info("Rain stopped")
        self.ctx.events.emit(RainEndedEvent(elapsed_ms=self.ctx.elapsed_ms))

    def start_raid(self) -> int:
        if self.ctx.termites is None:
            return 0
        spawned = self.ctx.termites.start_raid()
        if spawned:
            self.raid_count += 1
        return spawned

    def roll(self, value: float) -> Optional[str]:
        """Apply one event roll; returns the event that started, if any."""
        cfg = self.config
        if value < cfg.termite_raid_chance:
            return "termite_raid" if self.start_raid() else None
        if value < cfg.termite_raid_chance + cfg.rain_chance:
            return "rain" if self.start_rain() else None
        return None

    def _do_update(self, delta_ms: float) -> SystemResult:
        events = 0
        if self._rain.advance(delta_ms):
            self.stop_rain()
            events += 1

        self._since_check_ms += delta_ms
        if self._since_check_ms >= self.config.check_interval_ms:
            self._since_check_ms = 0.0
            started = self.roll(self.ctx.rng.random())
            if started is not None:
                logger.debug(f"World event triggered: {started}")
                events += 1

        return SystemResult(events_emitted=events, details={"raining": self.raining})

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(
            {
                "raining": self.raining,
                "rain_remaining_ms": self._rain.remaining,
                "rain_count": self.rain_count,
                "raid_count": self.raid_count,
            }
        )
        return info

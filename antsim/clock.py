"""Simulation time.

All simulation time is expressed in milliseconds. The host hands the
engine real elapsed time; the clock scales it by the speed multiplier
and every system receives the scaled delta. Timers are plain numeric
countdowns advanced by that delta, never wall-clock callbacks, so a run
is fully reproducible from its seed and the sequence of deltas.
"""

import logging
from typing import Optional

from antsim.config import world
from antsim.math_utils import clamp

logger = logging.getLogger(__name__)


class SimulationClock:
    """Elapsed time, frame counter, speed multiplier and pause flag."""

    def __init__(
        self,
        speed: float = 1.0,
        min_speed: float = world.SIMULATION_SPEED_MIN,
        max_speed: float = world.SIMULATION_SPEED_MAX,
    ) -> None:
        self._min_speed = min_speed
        self._max_speed = max_speed
        self.speed = clamp(speed, min_speed, max_speed)
        self.elapsed_ms = 0.0
        self.frame = 0
        self.paused = False
        self.last_delta_ms = 0.0

    def tick(self, delta_ms: float) -> float:
        """Advance by ``delta_ms`` real milliseconds.

        Returns:
            The scaled simulation delta (0 while paused or for a
            non-positive input)
        """
        if self.paused or delta_ms <= 0:
            self.last_delta_ms = 0.0
            return 0.0
        scaled = delta_ms * self.speed
        self.elapsed_ms += scaled
        self.frame += 1
        self.last_delta_ms = scaled
        return scaled

    def set_speed(self, speed: float) -> float:
        self.speed = clamp(speed, self._min_speed, self._max_speed)
        logger.debug(f"Simulation speed set to {self.speed}")
        return self.speed

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def reset(self) -> None:
        self.elapsed_ms = 0.0
        self.frame = 0
        self.last_delta_ms = 0.0

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0


class Countdown:
    """A numeric deadline advanced by simulation deltas.

    Idle until ``start`` is called; ``advance`` reports True exactly once,
    on the tick the remaining time reaches zero.
    """

    __slots__ = ("remaining",)

    def __init__(self, duration_ms: Optional[float] = None) -> None:
        self.remaining: Optional[float] = duration_ms

    @property
    def running(self) -> bool:
        return self.remaining is not None

    def start(self, duration_ms: float) -> None:
        self.remaining = max(0.0, duration_ms)

    def cancel(self) -> None:
        self.remaining = None

    def advance(self, delta_ms: float) -> bool:
        if self.remaining is None:
            return False
        self.remaining -= delta_ms
        if self.remaining <= 0:
            self.remaining = None
            return True
        return False

    def __repr__(self) -> str:
        return f"Countdown(remaining={self.remaining})"

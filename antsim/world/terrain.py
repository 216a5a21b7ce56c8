"""Terrain speed modifiers.

The simulation core only needs to know how fast an ant can move at a
point, so the host supplies a ``WorldQuery``. ``TerrainMap`` is the
default implementation: a coarse grid of randomly assigned ground types,
each with its own speed multiplier, slowed further while it rains.
"""

import logging
import math
import random
from enum import Enum
from typing import Dict, List, Optional, Protocol, runtime_checkable

from antsim.config import WorldConfig

logger = logging.getLogger(__name__)


class Weather(Enum):
    CLEAR = "clear"
    RAIN = "rain"


@runtime_checkable
class WorldQuery(Protocol):
    """Anything that can report a movement speed multiplier at a point."""

    def speed_modifier_at(self, x: float, y: float, weather: Weather) -> float: ...


class UniformTerrain:
    """Flat ground everywhere: speed is unaffected (useful in tests)."""

    def speed_modifier_at(self, x: float, y: float, weather: Weather) -> float:
        return 1.0


class TerrainMap:
    """Grid of weighted random terrain types."""

    def __init__(self, config: WorldConfig, rng: random.Random) -> None:
        self.cell_size = config.terrain_cell_size
        self.rain_modifier = config.rain_speed_modifier
        self.cols = max(1, math.ceil(config.width / self.cell_size))
        self.rows = max(1, math.ceil(config.height / self.cell_size))
        self._speeds: Dict[str, float] = {
            name: spec["speed"] for name, spec in config.terrain_types.items()
        }
        names = list(config.terrain_types)
        weights = [config.terrain_types[name]["weight"] for name in names]
        self._cells: List[List[str]] = [
            rng.choices(names, weights=weights, k=self.cols) for _ in range(self.rows)
        ]
        logger.debug(f"Generated {self.cols}x{self.rows} terrain map")

    def terrain_at(self, x: float, y: float) -> Optional[str]:
        col = int(x // self.cell_size)
        row = int(y // self.cell_size)
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self._cells[row][col]
        return None

    def speed_modifier_at(self, x: float, y: float, weather: Weather) -> float:
        terrain = self.terrain_at(x, y)
        modifier = self._speeds[terrain] if terrain is not None else 1.0
        if weather is Weather.RAIN:
            modifier *= self.rain_modifier
        return modifier

    def counts(self) -> Dict[str, int]:
        totals = {name: 0 for name in self._speeds}
        for row in self._cells:
            for name in row:
                totals[name] += 1
        return totals

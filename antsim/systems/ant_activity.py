"""Runs every live ant's tick."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from antsim.systems.base import BaseSystem, SystemResult
from antsim.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext


@runs_in_phase(UpdatePhase.ANTS)
class AntActivity(BaseSystem):
    """Updates each ant in roster order.

    Ants that die here are only flagged; the roster is iterated over a
    snapshot and the colony sweeps the dead afterwards.
    """

    def __init__(self, ctx: "SimulationContext") -> None:
        super().__init__("AntActivity")
        self.ctx = ctx
        self.deaths_last_tick = 0

    def _do_update(self, delta_ms: float) -> SystemResult:
        colony = self.ctx.colony
        if colony is None:
            return SystemResult.empty()

        updated = 0
        died = 0
        for ant in colony.ants:
            if not ant.alive:
                continue
            ant.update(delta_ms, self.ctx)
            updated += 1
            if not ant.alive:
                died += 1

        self.deaths_last_tick = died
        return SystemResult(entities_affected=updated, details={"died": died})

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info["deaths_last_tick"] = self.deaths_last_tick
        return info

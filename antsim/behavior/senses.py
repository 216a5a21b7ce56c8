"""What an ant can perceive this tick.

``Senses`` answers world queries lazily: each question is asked at most
once per tick and only if the decision rules actually reach it, so a
nurse never pays for a pheromone search it will not use.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Optional

from antsim.entities.ant_state import AntRole
from antsim.entities.pheromone import PheromoneType

if TYPE_CHECKING:
    from antsim.entities.ant import Ant
    from antsim.entities.corpse import Corpse
    from antsim.entities.food import FoodSource
    from antsim.entities.pheromone import PheromoneDeposit
    from antsim.entities.termite import Termite
    from antsim.simulation.context import SimulationContext


class Senses:
    """Lazy, per-tick view of the world around one ant."""

    def __init__(self, ant: "Ant", ctx: "SimulationContext") -> None:
        self._ant = ant
        self._ctx = ctx
        self._cfg = ant.config

    @cached_property
    def attack_active(self) -> bool:
        return self._ctx.attack_active

    @cached_property
    def nearest_termite(self) -> Optional["Termite"]:
        if self._ctx.termites is None:
            return None
        return self._ctx.termites.nearest(self._ant.x, self._ant.y, self._cfg.termite_sense_radius)

    @cached_property
    def nearest_corpse(self) -> Optional["Corpse"]:
        return self._ctx.corpses.nearest(self._ant.x, self._ant.y, self._cfg.corpse_sense_radius)

    @cached_property
    def danger(self) -> Optional["PheromoneDeposit"]:
        return self._ctx.pheromones.find_strongest(
            self._ant.x, self._ant.y, self._cfg.danger_sense_radius, PheromoneType.DANGER
        )

    @cached_property
    def trail(self) -> Optional["PheromoneDeposit"]:
        return self._ctx.pheromones.find_strongest(
            self._ant.x,
            self._ant.y,
            self._cfg.trail_sense_radius,
            PheromoneType.FOOD_TRAIL,
            exclude=self._ant.visited_trail_ids,
        )

    @cached_property
    def food(self) -> Optional["FoodSource"]:
        return self._ctx.food.nearest_active(self._ant.x, self._ant.y, self._cfg.food_sense_radius)

    @cached_property
    def soldiers_alive(self) -> bool:
        colony = self._ctx.colony
        return colony is not None and colony.has_role(AntRole.SOLDIER)

"""Build SimulationSnapshot models from a running simulation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from antsim.entities.ant import Ant
from antsim.entities.corpse import Corpse
from antsim.entities.food import FoodSource
from antsim.entities.pheromone import PheromoneDeposit
from antsim.entities.puddle import Puddle
from antsim.entities.termite import Termite
from antsim.snapshots.models import (
    AntSnapshot,
    BroodSnapshot,
    ColonySnapshot,
    CorpseSnapshot,
    FoodSnapshot,
    PheromoneSnapshot,
    PuddleSnapshot,
    SimulationSnapshot,
    TermiteSnapshot,
)

if TYPE_CHECKING:
    from antsim.simulation.context import SimulationContext
    from antsim.systems.colony import Colony


class SnapshotBuilder:
    """Convert live simulation state into snapshot models.

    Pheromone deposits can number in the thousands, so they are left out
    unless ``include_pheromones`` is set; per-type counts are always
    present.
    """

    def __init__(self, include_pheromones: bool = False) -> None:
        self.include_pheromones = include_pheromones

    def build(self, ctx: "SimulationContext") -> SimulationSnapshot:
        colony = ctx.colony
        termites = ctx.termites
        if colony is None or termites is None:
            raise ValueError("Context has no colony or termite swarm attached")

        pheromones = None
        if self.include_pheromones:
            pheromones = [self.pheromone(deposit) for deposit in ctx.pheromones]

        width, height = ctx.bounds.get_dimensions()
        return SimulationSnapshot(
            frame=ctx.clock.frame,
            elapsed_ms=ctx.clock.elapsed_ms,
            speed=ctx.clock.speed,
            paused=ctx.clock.paused,
            weather=ctx.weather.value,
            attack_active=ctx.attack_active,
            world_width=width,
            world_height=height,
            colony=self.colony(colony),
            ants=[self.ant(ant) for ant in colony.ants],
            food=[self.food(source) for source in ctx.food.sources],
            puddles=[self.puddle(puddle) for puddle in ctx.hazards.puddles],
            termites=[self.termite(termite) for termite in termites.termites],
            corpses=[self.corpse(corpse) for corpse in ctx.corpses],
            pheromone_counts={kind.value: count for kind, count in ctx.pheromones.counts_by_type().items()},
            pheromones=pheromones,
        )

    def colony(self, colony: "Colony") -> ColonySnapshot:
        stats = colony.get_stats()
        return ColonySnapshot(
            x=colony.x,
            y=colony.y,
            population=colony.population,
            food_storage=colony.food_storage,
            max_population=colony.max_population,
            spawn_cost=colony.spawn_cost,
            generation=colony.generation,
            total_born=colony.total_born,
            total_died=colony.total_died,
            efficiency=colony.efficiency,
            status=stats["status"],
            has_queen=colony.has_queen,
            queen_phase=stats["queen_phase"],
            brood=BroodSnapshot(**colony.brood.counts.as_dict()),
            ant_states=stats["ant_states"],
            ant_roles=stats["ant_roles"],
        )

    @staticmethod
    def ant(ant: Ant) -> AntSnapshot:
        return AntSnapshot(
            id=ant.ant_id,
            role=ant.role.value,
            state=ant.state.value,
            x=ant.x,
            y=ant.y,
            heading=ant.heading,
            energy=ant.energy,
            food_amount=ant.food_amount,
            carrying_food=ant.carrying_food,
            carrying_corpse=ant.carrying_corpse,
        )

    @staticmethod
    def food(source: FoodSource) -> FoodSnapshot:
        return FoodSnapshot(
            id=source.source_id,
            x=source.x,
            y=source.y,
            amount=source.amount,
            max_amount=source.max_amount,
            fullness=source.fullness,
            active=source.active,
        )

    @staticmethod
    def puddle(puddle: Puddle) -> PuddleSnapshot:
        return PuddleSnapshot(
            id=puddle.puddle_id, x=puddle.x, y=puddle.y, radius=puddle.radius, death_count=puddle.death_count
        )

    @staticmethod
    def termite(termite: Termite) -> TermiteSnapshot:
        return TermiteSnapshot(
            id=termite.termite_id, x=termite.x, y=termite.y, health=termite.health, state=termite.state.value
        )

    @staticmethod
    def corpse(corpse: Corpse) -> CorpseSnapshot:
        return CorpseSnapshot(id=corpse.corpse_id, x=corpse.x, y=corpse.y, ant_id=corpse.ant_id, cause=corpse.cause)

    @staticmethod
    def pheromone(deposit: PheromoneDeposit) -> PheromoneSnapshot:
        return PheromoneSnapshot(
            id=deposit.deposit_id,
            kind=deposit.kind.value,
            x=deposit.x,
            y=deposit.y,
            intensity=deposit.intensity,
            age_ms=deposit.age,
            followers=deposit.followers,
        )

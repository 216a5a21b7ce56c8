"""Tests for the Colony system: roster, storage, spawning and evolution."""

import pytest

from antsim.entities.ant_state import AntRole, AntState, DeathCause
from antsim.events import AntSpawnedEvent, ColonyEvolvedEvent, EmergencyReliefEvent
from antsim.state_machine import QueenFlightState


class TestSpawning:
    def test_spawn_without_enough_food_returns_none(self, ctx) -> None:
        """Storage 9 cannot pay a spawn cost of 10."""
        colony = ctx.colony
        colony.food_storage = 9.0
        colony.spawn_cost = 10.0

        assert colony.spawn_ant() is None
        assert colony.population == 0
        assert colony.food_storage == 9.0

    def test_paid_spawn_deducts_cost(self, ctx) -> None:
        colony = ctx.colony
        storage = colony.food_storage

        ant = colony.spawn_ant()

        assert ant is not None
        assert colony.food_storage == pytest.approx(storage - colony.spawn_cost)
        assert colony.total_born == 1

    def test_spawn_near_nest(self, ctx) -> None:
        colony = ctx.colony
        for _ in range(20):
            ant = colony.spawn_ant(free=True)
            assert abs(ant.x - colony.x) <= 20.0
            assert abs(ant.y - colony.y) <= 20.0

    def test_population_cap(self, ctx) -> None:
        colony = ctx.colony
        colony.max_population = 3

        assert colony.seed_population(5) == 3
        assert colony.spawn_ant(free=True) is None
        assert colony.population == 3

    def test_spawn_emits_event(self, engine, ctx) -> None:
        ant = ctx.colony.spawn_ant(free=True, from_brood=True, role=AntRole.SCOUT)

        event = engine.events.events_of_type(AntSpawnedEvent)[-1]
        assert event.ant_id == ant.ant_id
        assert event.role == "scout"
        assert event.from_brood

    def test_at_most_one_queen(self, ctx) -> None:
        colony = ctx.colony
        queen = colony.spawn_ant(free=True, role=AntRole.QUEEN)
        second = colony.spawn_ant(free=True, role=AntRole.QUEEN)

        assert queen.role is AntRole.QUEEN
        assert second.role is not AntRole.QUEEN
        assert colony.has_queen
        assert colony.ants_by_role()["queen"] == 1

    def test_random_roles_come_from_config(self, ctx) -> None:
        colony = ctx.colony
        colony.spawn_ant(free=True, role=AntRole.QUEEN)
        colony.seed_population(50)
        roles = {ant.role.value for ant in colony.ants if ant.role is not AntRole.QUEEN}
        assert roles <= set(ctx.config.colony.roles)

    def test_ids_are_unique(self, ctx) -> None:
        ctx.colony.seed_population(30)
        ids = [ant.ant_id for ant in ctx.colony.ants]
        assert len(ids) == len(set(ids))


class TestDeaths:
    def test_sweep_keeps_population_accounting(self, ctx) -> None:
        colony = ctx.colony
        colony.seed_population(10)
        for ant in colony.ants[:4]:
            ant.die(DeathCause.STARVATION)

        assert colony.sweep_dead() == 4
        assert colony.population == 6
        assert colony.total_born - colony.total_died == colony.population
        assert len(ctx.corpses) == 4
        assert colony.sweep_dead() == 0

    def test_queen_death_resets_cycle(self, ctx) -> None:
        colony = ctx.colony
        queen = colony.spawn_ant(free=True, role=AntRole.QUEEN)
        colony.queen_cycle.machine.transition(QueenFlightState.NUPTIAL_FLIGHT)

        queen.die(DeathCause.COMBAT)
        colony.sweep_dead()

        assert not colony.has_queen
        assert colony.queen_cycle.state is QueenFlightState.IDLE

    def test_recall_sends_everyone_exploring(self, ctx) -> None:
        colony = ctx.colony
        colony.seed_population(5)
        for ant in colony.ants:
            ant.state = AntState.HIDING
            ant.speed_boost = 1.5

        colony.recall_ants()

        assert all(ant.state is AntState.EXPLORING for ant in colony.ants)
        assert all(ant.speed_boost == 1.0 for ant in colony.ants)

    def test_recall_leaves_resting_ants_alone(self, ctx) -> None:
        colony = ctx.colony
        colony.seed_population(2)
        resting, hiding = colony.ants
        resting.start_resting(ctx)
        hiding.state = AntState.HIDING

        colony.recall_ants()

        assert resting.state is AntState.RESTING
        assert resting.is_resting
        assert hiding.state is AntState.EXPLORING


class TestStorage:
    def test_take_food_never_goes_negative(self, ctx) -> None:
        colony = ctx.colony
        colony.food_storage = 7.0
        assert colony.take_food(10.0) == 7.0
        assert colony.food_storage == 0.0
        assert colony.take_food(-5.0) == 0.0

    def test_deposit_food(self, ctx) -> None:
        colony = ctx.colony
        storage = colony.food_storage
        colony.deposit_food(12.5)
        colony.deposit_food(-3.0)
        assert colony.food_storage == pytest.approx(storage + 12.5)
        assert colony.total_food_delivered == pytest.approx(12.5)

    @pytest.mark.parametrize(
        "storage, status",
        [(5.0, "Sick"), (30.0, "Needs Food"), (75.0, "Weak"), (500.0, "Healthy")],
    )
    def test_health_status(self, ctx, storage: float, status: str) -> None:
        ctx.colony.food_storage = storage
        assert ctx.colony.health_status() == status

    def test_emergency_relief_feeds_everyone_with_cooldown(self, engine, ctx) -> None:
        colony = ctx.colony
        colony.seed_population(3)
        for ant in colony.ants:
            ant.energy = 50.0
        colony.food_storage = 5.0

        colony.update(16.0)
        colony.update(16.0)

        assert all(ant.energy == pytest.approx(60.0) for ant in colony.ants)
        events = engine.events.events_of_type(EmergencyReliefEvent)
        assert len(events) == 1
        assert events[0].ants_fed == 3


class TestEvolution:
    def test_evolve_adjusts_cost_and_cap(self, engine, ctx) -> None:
        colony = ctx.colony
        colony.evolve()

        assert colony.generation == 2
        assert colony.spawn_cost == pytest.approx(9.0)
        assert colony.max_population == 205
        assert engine.events.events_of_type(ColonyEvolvedEvent)[-1].generation == 2

    def test_evolution_respects_limits(self, ctx) -> None:
        colony = ctx.colony
        colony.spawn_cost = 5.0
        colony.max_population = 298

        colony.evolve()

        assert colony.spawn_cost == pytest.approx(5.0)
        assert colony.max_population == 300

    def test_no_evolution_below_storage_threshold(self, ctx) -> None:
        colony = ctx.colony
        colony.food_storage = 150.0
        for _ in range(100):
            colony.update(1000.0)
        assert colony.generation == 1


class TestBroodEmergence:
    def test_adults_emerge_as_free_ants(self, engine, ctx) -> None:
        colony = ctx.colony
        colony.brood.counts.adults = 5
        storage = colony.food_storage

        colony.update(16.0)

        emerged = colony.population
        assert 1 <= emerged <= ctx.config.colony.max_adults_per_tick
        assert colony.brood.counts.adults == 5 - emerged
        assert colony.food_storage == pytest.approx(storage)
        spawned = engine.events.events_of_type(AntSpawnedEvent)
        assert all(event.from_brood for event in spawned)

    def test_adults_wait_when_colony_is_full(self, ctx) -> None:
        colony = ctx.colony
        colony.max_population = 1
        colony.seed_population(1)
        colony.brood.counts.adults = 2

        colony.update(16.0)

        assert colony.brood.counts.adults == 2
        assert colony.population == 1

    def test_stats_keys(self, ctx) -> None:
        stats = ctx.colony.get_stats()
        for key in (
            "population",
            "food_storage",
            "generation",
            "total_born",
            "total_died",
            "efficiency",
            "status",
            "has_queen",
            "queen_phase",
            "nuptial_flight_active",
            "ant_states",
            "ant_roles",
            "reproduction_stages",
        ):
            assert key in stats
        assert stats["queen_phase"] == "idle"
        assert stats["reproduction_stages"] == {"eggs": 0, "larvae": 0, "pupae": 0, "adults": 0}

    def test_efficiency(self, ctx) -> None:
        colony = ctx.colony
        assert colony.efficiency == 1.0

        colony.seed_population(4)
        colony.ants[0].die(DeathCause.STARVATION)
        colony.sweep_dead()

        assert colony.efficiency == pytest.approx(0.75)

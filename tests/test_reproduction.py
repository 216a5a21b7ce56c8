"""Tests for the queen nuptial-flight cycle and brood development."""

import random

from antsim.config import ColonyConfig
from antsim.entities.ant_state import AntRole
from antsim.events import EggsLaidEvent, EventBus, NuptialFlightEndedEvent, NuptialFlightStartedEvent
from antsim.state_machine import QueenFlightState
from antsim.systems.reproduction import BroodCounts, BroodPipeline, QueenCycle


def always_pay(cost: float) -> bool:
    return True


def never_pay(cost: float) -> bool:
    return False


class TestBroodPipeline:
    def test_counts_total(self) -> None:
        counts = BroodCounts(eggs=3, larvae=2, pupae=1, adults=4)
        assert counts.total == 10
        assert counts.as_dict() == {"eggs": 3, "larvae": 2, "pupae": 1, "adults": 4}

    def test_single_egg_can_reach_adulthood_in_one_long_tick(self) -> None:
        brood = BroodPipeline(ColonyConfig(), random.Random(1))
        brood.lay_eggs(1)

        moved = brood.advance(45_000.0, always_pay)

        assert moved == 3
        assert brood.counts.as_dict() == {"eggs": 0, "larvae": 0, "pupae": 0, "adults": 1}

    def test_individuals_are_never_lost(self) -> None:
        """Stage moves conserve the brood total until adults are taken."""
        brood = BroodPipeline(ColonyConfig(), random.Random(7))
        brood.lay_eggs(40)

        for _ in range(2000):
            moved = brood.advance(100.0, always_pay)
            assert 0 <= moved <= 3
            assert brood.counts.total == 40

        assert brood.counts.adults > 0

    def test_unpaid_larvae_stay_larvae(self) -> None:
        brood = BroodPipeline(ColonyConfig(), random.Random(3))
        brood.lay_eggs(5)

        for _ in range(500):
            brood.advance(1000.0, never_pay)

        assert brood.counts.eggs == 0
        assert brood.counts.larvae == 5
        assert brood.counts.pupae == 0

    def test_take_adult(self) -> None:
        brood = BroodPipeline(ColonyConfig(), random.Random(3))
        assert not brood.take_adult()
        brood.counts.adults = 1
        assert brood.take_adult()
        assert brood.counts.adults == 0

    def test_empty_pipeline_never_moves(self) -> None:
        brood = BroodPipeline(ColonyConfig(), random.Random(3))
        assert brood.advance(100_000.0, always_pay) == 0

    def test_negative_clutch_is_ignored(self) -> None:
        brood = BroodPipeline(ColonyConfig(), random.Random(3))
        brood.lay_eggs(-4)
        assert brood.counts.eggs == 0


class TestQueenCycle:
    def _cycle(self):
        events = EventBus(record_history=True)
        return QueenCycle(ColonyConfig(), random.Random(5), events), events

    def test_full_cycle_lays_a_clutch(self) -> None:
        cycle, events = self._cycle()
        brood = BroodPipeline(ColonyConfig(), random.Random(5))

        cycle.update(59_000.0, 59_000.0, 500.0, always_pay, brood)
        assert cycle.state is QueenFlightState.IDLE

        cycle.update(1_000.0, 60_000.0, 500.0, always_pay, brood)
        assert cycle.in_flight
        assert cycle.idle_ms == 0.0

        cycle.update(10_000.0, 70_000.0, 500.0, always_pay, brood)
        assert cycle.state is QueenFlightState.POST_FLIGHT

        cycle.update(5_000.0, 75_000.0, 500.0, always_pay, brood)
        assert cycle.state is QueenFlightState.IDLE
        assert cycle.flights_completed == 1
        assert 20 <= brood.counts.eggs <= 50

        assert len(events.events_of_type(NuptialFlightStartedEvent)) == 1
        assert len(events.events_of_type(NuptialFlightEndedEvent)) == 1
        laid = events.events_of_type(EggsLaidEvent)
        assert laid[0].count == brood.counts.eggs

    def test_flight_is_postponed_when_storage_is_low(self) -> None:
        cycle, events = self._cycle()
        brood = BroodPipeline(ColonyConfig(), random.Random(5))

        cycle.update(60_000.0, 60_000.0, 299.0, always_pay, brood)

        assert cycle.state is QueenFlightState.IDLE
        assert cycle.idle_ms == 0.0
        assert events.events_of_type(NuptialFlightStartedEvent) == []

    def test_flight_is_postponed_when_payment_fails(self) -> None:
        cycle, _ = self._cycle()
        brood = BroodPipeline(ColonyConfig(), random.Random(5))

        cycle.update(60_000.0, 60_000.0, 500.0, never_pay, brood)

        assert cycle.state is QueenFlightState.IDLE

    def test_reset_returns_to_idle(self) -> None:
        cycle, _ = self._cycle()
        brood = BroodPipeline(ColonyConfig(), random.Random(5))
        cycle.update(60_000.0, 60_000.0, 500.0, always_pay, brood)
        assert cycle.in_flight

        cycle.reset()

        assert cycle.state is QueenFlightState.IDLE
        assert cycle.idle_ms == 0.0
        cycle.update(10_000.0, 70_000.0, 500.0, always_pay, brood)
        assert cycle.state is QueenFlightState.IDLE


class TestColonyReproduction:
    """Queen cycle driven through the colony update."""

    def test_queen_flight_costs_colony_food(self, ctx) -> None:
        colony = ctx.colony
        colony.spawn_ant(free=True, role=AntRole.QUEEN)
        colony.food_storage = 500.0

        colony.update(60_000.0)

        assert colony.queen_cycle.in_flight
        assert colony.food_storage <= 200.0

    def test_queenless_colony_never_flies(self, ctx) -> None:
        colony = ctx.colony
        colony.update(60_000.0)
        assert colony.queen_cycle.state is QueenFlightState.IDLE


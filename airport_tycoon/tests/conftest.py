"""Shared fixtures for engine tests."""

import pytest
from airport_tycoon.engine import GameEngine
from airport_tycoon.models.flight import Flight, FlightType
from airport_tycoon.models.game_state import RunState


@pytest.fixture
def make_flight():
    """Factory for flights with explicit passengers and type."""

    def _make(
        flight_id="F1",
        flight_type=FlightType.DOMESTIC,
        passengers=80,
        base_revenue=8000,
        processing_time=15.0,
        created_at=0.0,
    ):
        return Flight(
            id=flight_id,
            flight_number=f"LH{flight_id[-3:].rjust(3, '0')}",
            type=flight_type,
            is_emergency=False,
            is_vip=flight_type == FlightType.VIP,
            passengers=passengers,
            base_revenue=base_revenue,
            processing_time=processing_time,
            airline="SkyWings",
            created_at=created_at,
        )

    return _make


@pytest.fixture
def running_engine():
    """Engine in RUNNING with no timers armed and no random arrivals."""
    engine = GameEngine(seed=7)
    engine.state.run_state = RunState.RUNNING
    return engine

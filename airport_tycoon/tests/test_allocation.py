"""Tests for flight-to-gate allocation."""

import pytest
from airport_tycoon.allocation import (
    MatchQuality,
    assign,
    classify_match,
    processing_duration,
    weather_delay_factor,
)
from airport_tycoon.models.command import RejectReason
from airport_tycoon.models.game_state import GameState, Multipliers, Weather
from airport_tycoon.models.gate import build_gate


@pytest.fixture
def state(make_flight):
    return GameState(
        cash=80000,
        satisfaction=100.0,
        reputation=50,
        gates=[build_gate(1), build_gate(2), build_gate(3)],
        pending_flights=[make_flight("F1", passengers=120), make_flight("F2", passengers=60)],
    )


@pytest.mark.parametrize(
    "passengers,capacity,expected",
    [
        (150, 150, MatchQuality.PERFECT),
        (105, 150, MatchQuality.PERFECT),
        (104, 150, MatchQuality.GOOD),
        (151, 150, MatchQuality.POOR),
        (0, 150, MatchQuality.GOOD),
        (175, 250, MatchQuality.PERFECT),
        (245, 350, MatchQuality.PERFECT),
        (244, 350, MatchQuality.GOOD),
    ],
)
def test_classify_match(passengers, capacity, expected):
    assert classify_match(passengers, capacity) == expected


def test_weather_delay_factors():
    assert weather_delay_factor(Weather.CLEAR) == 1.0
    assert weather_delay_factor(Weather.STORM) == 1.5
    assert weather_delay_factor(Weather.FOG) == 1.4


def test_processing_duration_applies_speed_and_weather(make_flight):
    flight = make_flight(processing_time=15.0)

    assert processing_duration(flight, Multipliers(), Weather.STORM) == pytest.approx(22.5)
    assert processing_duration(flight, Multipliers(processing_speed=0.8), Weather.CLEAR) == pytest.approx(12.0)
    assert processing_duration(
        flight, Multipliers(processing_speed=0.8), Weather.RAIN
    ) == pytest.approx(15.6)


def test_assign_success_occupies_gate(state):
    state.clock = 4.0
    result = assign(state, "F1", "G1")

    assert result.success
    assert result.match == MatchQuality.PERFECT.value
    gate = state.get_gate("G1")
    assert gate.assigned_flight.id == "F1"
    assert gate.processing_start_time == 4.0
    assert gate.processing_duration == pytest.approx(15.0)
    assert state.get_flight("F1").assigned_gate_id == "G1"
    assert [f.id for f in state.unassigned_flights()] == ["F2"]


def test_assign_uses_weather_at_assignment_time(state):
    state.current_weather = Weather.STORM
    assign(state, "F2", "G2")
    state.current_weather = Weather.CLEAR

    assert state.get_gate("G2").processing_duration == pytest.approx(22.5)


def test_assign_overloaded_gate_is_accepted_as_poor(state, make_flight):
    state.pending_flights.append(make_flight("F3", passengers=200))

    result = assign(state, "F3", "G3")

    assert result.success
    assert result.match == MatchQuality.POOR.value
    assert state.get_gate("G3").assigned_flight.id == "F3"


@pytest.mark.parametrize(
    "flight_id,gate_id,reason",
    [
        ("F9", "G1", RejectReason.UNKNOWN_FLIGHT),
        ("F2", "G9", RejectReason.UNKNOWN_GATE),
        ("F2", "G1", RejectReason.GATE_OCCUPIED),
        ("F1", "G2", RejectReason.FLIGHT_ALREADY_ASSIGNED),
    ],
)
def test_assign_rejections_leave_state_untouched(state, flight_id, gate_id, reason):
    assign(state, "F1", "G1")
    before = state.model_dump()

    result = assign(state, flight_id, gate_id)

    assert not result.success
    assert result.reason == reason
    assert result.message
    assert state.model_dump() == before

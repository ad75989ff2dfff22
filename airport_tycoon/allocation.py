"""Allocation engine: validates and applies flight-to-gate assignments."""

import logging
from enum import Enum

from .config import PERFECT_MATCH_RATIO, WEATHER
from .models.command import CommandResult, RejectReason
from .models.flight import Flight
from .models.game_state import GameState, Multipliers, Weather

logger = logging.getLogger(__name__)


class MatchQuality(str, Enum):
    """How well a flight's passenger load fits a gate's capacity."""

    PERFECT = "perfect"
    GOOD = "good"
    POOR = "poor"


def classify_match(passengers: int, capacity: int) -> MatchQuality:
    """
    Classify a flight-to-gate match.

    Args:
        passengers: Passengers on the flight
        capacity: Gate capacity

    Returns:
        POOR when overloaded, PERFECT when the gate is at least 70% full, GOOD otherwise
    """
    if passengers > capacity:
        return MatchQuality.POOR
    if passengers >= capacity * PERFECT_MATCH_RATIO:
        return MatchQuality.PERFECT
    return MatchQuality.GOOD


def weather_delay_factor(weather: Weather) -> float:
    return float(WEATHER[weather.value]["delay_factor"])


def processing_duration(flight: Flight, multipliers: Multipliers, weather: Weather) -> float:
    """Seconds a gate needs for this flight under current upgrades and weather."""
    return flight.processing_time * multipliers.processing_speed * weather_delay_factor(weather)


def assign(state: GameState, flight_id: str, gate_id: str) -> CommandResult:
    """
    Assign a pending flight to a gate.

    Overloaded gates are accepted; the resulting POOR match is penalised by the economy.
    Every failure leaves the state untouched.

    Args:
        state: Current game state
        flight_id: Id of a pending, unassigned flight
        gate_id: Id of the target gate

    Returns:
        CommandResult carrying the match quality on success
    """
    flight = state.get_flight(flight_id)
    if flight is None:
        return CommandResult.rejected(RejectReason.UNKNOWN_FLIGHT, f"Flight {flight_id} is not pending")
    if flight.is_assigned:
        return CommandResult.rejected(
            RejectReason.FLIGHT_ALREADY_ASSIGNED,
            f"{flight.flight_number} is already at gate {flight.assigned_gate_id}",
        )

    gate = state.get_gate(gate_id)
    if gate is None:
        return CommandResult.rejected(RejectReason.UNKNOWN_GATE, f"Gate {gate_id} does not exist")
    if not gate.is_available():
        return CommandResult.rejected(
            RejectReason.GATE_OCCUPIED,
            f"{gate.name} is currently processing another flight",
        )

    duration = processing_duration(flight, state.multipliers, state.current_weather)
    gate.assign_flight(flight, state.clock, duration)
    match = classify_match(flight.passengers, gate.capacity)

    logger.debug(
        f"Assigned {flight.flight_number} ({flight.passengers} pax) to {gate.name} "
        f"(cap {gate.capacity}): {match.value}, {duration:.1f}s"
    )
    return CommandResult.ok(f"{flight.flight_number} assigned to {gate.name}", match=match.value)

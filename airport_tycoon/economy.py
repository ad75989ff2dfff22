"""Economy engine: revenue, satisfaction, reputation, operating costs and upgrades."""

import logging
from typing import List, Optional
from pydantic import BaseModel

from .allocation import MatchQuality, classify_match
from .config import (
    COMPLETION_SATISFACTION_GAIN,
    CONGESTION_DECAY_RATE,
    CONGESTION_THRESHOLD,
    MATCH_FACTORS,
    MAX_SATISFACTION,
    MIN_SATISFACTION,
    OPERATIONAL_COST_PER_DAY,
    POOR_MATCH_SATISFACTION_PENALTY,
    REPUTATION_GAIN_SUCCESS,
    REPUTATION_PERFECT_BONUS,
    REPUTATION_VIP_BONUS,
    SATISFACTION_DECAY_RATE,
    VIP_REVENUE_FACTOR,
    WAITING_GRACE_PERIOD,
)
from .models.command import CommandResult, RejectReason
from .models.flight import Flight
from .models.game_state import GameState
from .models.gate import Gate, GateType, build_gate
from .models.upgrade import Upgrade, UpgradeEffect
from .utils import clamp, format_currency, round_half_up

logger = logging.getLogger(__name__)


class CompletionRecord(BaseModel):
    """What a finished flight earned."""

    flight: Flight
    gate_id: str
    match: MatchQuality
    revenue: int
    reputation_delta: int


def calculate_revenue(
    flight: Flight,
    match: MatchQuality,
    satisfaction: float,
    revenue_multiplier: float = 1.0,
) -> int:
    """
    Calculate revenue for a completed flight.

    The flight's own revenue is rounded first, then the upgrade multiplier is applied
    and rounded again.

    Args:
        flight: Completed flight
        match: Match quality at its gate
        satisfaction: Current satisfaction in [0, 100]
        revenue_multiplier: Global revenue multiplier from upgrades

    Returns:
        Revenue in whole dollars
    """
    vip_factor = VIP_REVENUE_FACTOR if flight.is_vip else 1.0
    flight_revenue = round_half_up(
        flight.base_revenue * MATCH_FACTORS[match.value] * vip_factor * (satisfaction / 100.0)
    )
    return round_half_up(flight_revenue * revenue_multiplier)


def calculate_reputation_delta(flight: Flight, match: MatchQuality) -> int:
    delta = REPUTATION_GAIN_SUCCESS
    if flight.is_vip:
        delta += REPUTATION_VIP_BONUS
    if match == MatchQuality.PERFECT:
        delta += REPUTATION_PERFECT_BONUS
    return delta


def calculate_daily_cost(operating_cost_multiplier: float = 1.0) -> int:
    return round_half_up(OPERATIONAL_COST_PER_DAY * operating_cost_multiplier)


def adjust_satisfaction(state: GameState, delta: float) -> float:
    """Add delta to satisfaction, clamped to [0, 100]. Returns the new value."""
    state.satisfaction = clamp(state.satisfaction + delta, MIN_SATISFACTION, MAX_SATISFACTION)
    return state.satisfaction


def complete_flight(state: GameState, gate: Gate) -> Optional[CompletionRecord]:
    """
    Settle the flight a gate has finished processing.

    Awards revenue and reputation, lifts satisfaction, removes the flight from the pending
    list and frees the gate. A gate without a flight is left alone.

    Args:
        state: Current game state
        gate: Gate whose processing finished

    Returns:
        CompletionRecord, or None when the gate held no flight
    """
    flight = gate.assigned_flight
    if flight is None:
        return None

    match = classify_match(flight.passengers, gate.capacity)
    revenue = calculate_revenue(flight, match, state.satisfaction, state.multipliers.revenue)
    reputation_delta = calculate_reputation_delta(flight, match)

    state.cash += revenue
    state.reputation += reputation_delta
    adjust_satisfaction(state, COMPLETION_SATISFACTION_GAIN)
    state.flights_completed += 1
    state.pending_flights = [f for f in state.pending_flights if f.id != flight.id]
    gate.complete_flight()
    flight.assigned_gate_id = None

    logger.info(
        f"Flight {flight.flight_number} completed at {gate.name}: "
        f"{format_currency(revenue)} ({match.value}), reputation +{reputation_delta}"
    )
    return CompletionRecord(
        flight=flight,
        gate_id=gate.id,
        match=match,
        revenue=revenue,
        reputation_delta=reputation_delta,
    )


def apply_assignment_penalty(state: GameState, match: MatchQuality) -> float:
    """Charge satisfaction for an overloaded gate. Returns the amount removed."""
    if match != MatchQuality.POOR:
        return 0.0
    before = state.satisfaction
    adjust_satisfaction(state, -POOR_MATCH_SATISFACTION_PENALTY)
    return before - state.satisfaction


def accrue_waiting(state: GameState, delta_time: float) -> None:
    """
    Age every unassigned flight and decay satisfaction for each one past the grace period.

    A flight that arrived during this tick only waits from its arrival time. Call after the
    clock has been advanced.

    Args:
        state: Current game state
        delta_time: Seconds since the previous tick
    """
    for flight in state.unassigned_flights():
        flight.accrue_waiting(min(delta_time, max(0.0, state.clock - flight.created_at)))
        if flight.waiting_time > WAITING_GRACE_PERIOD:
            adjust_satisfaction(state, -SATISFACTION_DECAY_RATE * delta_time)


def apply_congestion_decay(state: GameState, delta_time: float) -> None:
    if len(state.unassigned_flights()) > CONGESTION_THRESHOLD:
        adjust_satisfaction(state, -CONGESTION_DECAY_RATE * delta_time)


def charge_operating_cost(state: GameState) -> int:
    """Deduct the daily operating cost. Returns the amount charged."""
    cost = calculate_daily_cost(state.multipliers.operating_cost)
    state.cash -= cost
    return cost


def apply_upgrade(state: GameState, upgrade: Upgrade) -> List[Gate]:
    """
    Apply an upgrade's effect.

    Args:
        state: Current game state
        upgrade: Purchased upgrade

    Returns:
        Gates created by the upgrade (empty for multiplier upgrades)
    """
    new_gates = []

    if upgrade.effect == UpgradeEffect.ADD_GATES:
        for _ in range(int(upgrade.value)):
            gate = build_gate(len(state.gates) + 1, GateType.MEDIUM)
            state.gates.append(gate)
            new_gates.append(gate)
    elif upgrade.effect == UpgradeEffect.PROCESSING_SPEED:
        state.multipliers.processing_speed *= upgrade.value
    elif upgrade.effect == UpgradeEffect.REVENUE:
        state.multipliers.revenue *= upgrade.value
    elif upgrade.effect == UpgradeEffect.SATISFACTION:
        state.multipliers.satisfaction *= upgrade.value
    elif upgrade.effect == UpgradeEffect.OPERATING_COST:
        state.multipliers.operating_cost *= upgrade.value

    return new_gates


def purchase_upgrade(state: GameState, upgrade_id: str) -> CommandResult:
    """
    Buy an upgrade if it is new and affordable.

    Args:
        state: Current game state
        upgrade_id: Upgrade catalogue id

    Returns:
        CommandResult; failures leave cash and the purchased flag untouched
    """
    upgrade = state.get_upgrade(upgrade_id)
    if upgrade is None:
        return CommandResult.rejected(RejectReason.UNKNOWN_UPGRADE, f"Upgrade {upgrade_id} does not exist")
    if upgrade.purchased:
        return CommandResult.rejected(RejectReason.ALREADY_PURCHASED, f"{upgrade.name} is already purchased")
    if state.cash < upgrade.cost:
        return CommandResult.rejected(
            RejectReason.INSUFFICIENT_FUNDS,
            f"{upgrade.name} costs {format_currency(upgrade.cost)}, cash is {format_currency(state.cash)}",
        )

    state.cash -= upgrade.cost
    upgrade.purchase()
    state.purchased_upgrade_ids.add(upgrade.id)
    new_gates = apply_upgrade(state, upgrade)

    logger.info(
        f"Upgrade {upgrade.id} purchased for {format_currency(upgrade.cost)}"
        + (f", {len(new_gates)} gates added" if new_gates else "")
    )
    return CommandResult.ok(f"{upgrade.name} - Cost: -{format_currency(upgrade.cost)}")

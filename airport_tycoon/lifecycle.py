"""Session lifecycle: run-state transitions, hysteresis warnings, game over and scoring."""

import logging
from enum import Enum
from typing import Dict, List, Optional, Set

from .config import (
    LOW_CASH_RELEASE,
    LOW_CASH_WARNING,
    LOW_REPUTATION_RELEASE,
    LOW_REPUTATION_WARNING,
    MIN_CASH_GAME_OVER,
    MIN_REPUTATION_GAME_OVER,
    SCORE_WEIGHTS,
)
from .models.game_state import GameState, RunState
from .utils import format_currency, round_half_up

logger = logging.getLogger(__name__)


TRANSITIONS: Dict[RunState, Set[RunState]] = {
    RunState.SETUP: {RunState.RUNNING},
    RunState.RUNNING: {RunState.PAUSED, RunState.ENDED},
    RunState.PAUSED: {RunState.RUNNING, RunState.ENDED},
    RunState.ENDED: set(),
}


class WarningKind(str, Enum):
    LOW_CASH = "low_cash"
    LOW_REPUTATION = "low_reputation"


def can_transition(current: RunState, target: RunState) -> bool:
    return target in TRANSITIONS[current]


def transition(state: GameState, target: RunState) -> bool:
    """
    Move the session to a new run state.

    Args:
        state: Current game state
        target: Desired run state

    Returns:
        False (and no change) when the transition is not allowed
    """
    if not can_transition(state.run_state, target):
        logger.debug(f"Ignoring transition {state.run_state.value} -> {target.value}")
        return False
    logger.info(f"Run state {state.run_state.value} -> {target.value}")
    state.run_state = target
    return True


def evaluate_warnings(state: GameState) -> List[WarningKind]:
    """
    Update the low-cash and low-reputation warning flags.

    A warning arms when its metric enters the warning band and only disarms once the metric
    recovers past the release threshold, so a value hovering at the boundary warns once.

    Returns:
        Warnings that armed on this call
    """
    armed = []

    if MIN_CASH_GAME_OVER < state.cash < LOW_CASH_WARNING:
        if not state.low_cash_warned:
            state.low_cash_warned = True
            armed.append(WarningKind.LOW_CASH)
    elif state.cash > LOW_CASH_RELEASE:
        state.low_cash_warned = False

    if MIN_REPUTATION_GAME_OVER < state.reputation <= LOW_REPUTATION_WARNING:
        if not state.low_reputation_warned:
            state.low_reputation_warned = True
            armed.append(WarningKind.LOW_REPUTATION)
    elif state.reputation > LOW_REPUTATION_RELEASE:
        state.low_reputation_warned = False

    return armed


def check_game_over(state: GameState) -> Optional[str]:
    """Return a human-readable reason if the session has lost, else None."""
    if state.cash < MIN_CASH_GAME_OVER:
        return (
            f"BANKRUPTCY! Your cash dropped to {format_currency(state.cash)}. "
            "You couldn't cover operational costs."
        )
    if state.reputation <= MIN_REPUTATION_GAME_OVER:
        return "REPUTATION DESTROYED! Your airport lost all credibility with passengers and airlines."
    return None


def calculate_score(state: GameState) -> int:
    """Final score: cash*0.1 + reputation*100 + flights_completed*50 + day*500, rounded."""
    return round_half_up(
        state.cash * SCORE_WEIGHTS["cash"]
        + state.reputation * SCORE_WEIGHTS["reputation"]
        + state.flights_completed * SCORE_WEIGHTS["flights_completed"]
        + state.day * SCORE_WEIGHTS["day"]
    )

"""Game entity models package."""

from .flight import Flight, FlightType
from .gate import Gate, GateType, build_gate
from .upgrade import Upgrade, UpgradeEffect
from .alert import Alert, Severity
from .game_state import GameState, Multipliers, RunState, Weather
from .command import CommandResult, RejectReason
from .snapshot import FlightView, GameSnapshot, GateView, StatsView

__all__ = [
    "Flight",
    "FlightType",
    "Gate",
    "GateType",
    "build_gate",
    "Upgrade",
    "UpgradeEffect",
    "Alert",
    "Severity",
    "GameState",
    "Multipliers",
    "RunState",
    "Weather",
    "CommandResult",
    "RejectReason",
    "FlightView",
    "GameSnapshot",
    "GateView",
    "StatsView",
]

"""Game state model (aggregate root of one play-through)."""

from enum import Enum
from typing import Dict, List, Optional, Set
from pydantic import BaseModel, Field

from .alert import Alert
from .flight import Flight
from .gate import Gate
from .upgrade import Upgrade


class RunState(str, Enum):
    """Session lifecycle: SETUP -> RUNNING <-> PAUSED -> ENDED."""

    SETUP = "SETUP"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    ENDED = "ENDED"


class Weather(str, Enum):
    CLEAR = "CLEAR"
    CLOUDY = "CLOUDY"
    RAIN = "RAIN"
    STORM = "STORM"
    FOG = "FOG"


class Multipliers(BaseModel):
    """Global modifiers folded in multiplicatively by upgrades."""

    processing_speed: float = 1.0
    revenue: float = 1.0
    satisfaction: float = 1.0
    operating_cost: float = 1.0


class GameState(BaseModel):
    """Represents the current state of one session.

    Every entity inside is owned by the state; a reset replaces the whole object.
    ``pending_flights`` holds every flight not yet completed, assigned or not.
    """

    cash: int
    satisfaction: float
    reputation: int
    day: int = 1
    flights_completed: int = 0
    gates: List[Gate] = Field(default_factory=list)
    pending_flights: List[Flight] = Field(default_factory=list)
    active_alerts: List[Alert] = Field(default_factory=list)
    upgrades: List[Upgrade] = Field(default_factory=list)
    purchased_upgrade_ids: Set[str] = Field(default_factory=set)
    multipliers: Multipliers = Field(default_factory=Multipliers)
    current_weather: Weather = Weather.CLEAR
    run_state: RunState = RunState.SETUP
    low_cash_warned: bool = False
    low_reputation_warned: bool = False
    clock: float = 0.0  # logical seconds since session creation
    generation: int = 0
    end_reason: Optional[str] = None
    final_score: Optional[int] = None
    is_high_score: bool = False

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        for flight in self.pending_flights:
            if flight.id == flight_id:
                return flight
        return None

    def get_gate(self, gate_id: str) -> Optional[Gate]:
        for gate in self.gates:
            if gate.id == gate_id:
                return gate
        return None

    def get_upgrade(self, upgrade_id: str) -> Optional[Upgrade]:
        for upgrade in self.upgrades:
            if upgrade.id == upgrade_id:
                return upgrade
        return None

    def unassigned_flights(self) -> List[Flight]:
        """Pending flights still waiting for a gate."""
        return [f for f in self.pending_flights if not f.is_assigned]

    def stats(self) -> Dict[str, float]:
        return {
            "cash": self.cash,
            "satisfaction": self.satisfaction,
            "reputation": self.reputation,
            "day": self.day,
            "flights_completed": self.flights_completed,
        }

    @property
    def is_running(self) -> bool:
        return self.run_state == RunState.RUNNING

    @property
    def is_ended(self) -> bool:
        return self.run_state == RunState.ENDED

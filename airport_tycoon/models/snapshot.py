"""Read-only views handed to rendering, UI and API collaborators."""

from typing import List, Optional
from pydantic import BaseModel

from .alert import Alert
from .game_state import Multipliers, RunState, Weather
from .upgrade import Upgrade


class GateView(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    available: bool
    occupant: Optional[str] = None  # flight number
    occupant_id: Optional[str] = None
    progress: float = 0.0


class FlightView(BaseModel):
    id: str
    flight_number: str
    type: str
    airline: str
    passengers: int
    is_emergency: bool
    is_vip: bool
    waiting_time: float


class StatsView(BaseModel):
    cash: int
    satisfaction: float
    reputation: int
    day: int
    flights_completed: int


class GameSnapshot(BaseModel):
    """Everything a presentation layer needs to draw one frame."""

    run_state: RunState
    clock: float
    weather: Weather
    weather_delay_factor: float
    stats: StatsView
    gates: List[GateView]
    waiting_flights: List[FlightView]
    alerts: List[Alert]
    upgrades: List[Upgrade]
    multipliers: Multipliers
    end_reason: Optional[str] = None
    final_score: Optional[int] = None
    is_high_score: bool = False

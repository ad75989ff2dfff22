"""Configuration module for game balance constants and runtime settings."""

from typing import Dict, List, Optional
from pydantic_settings import BaseSettings


class GameConfigError(ValueError):
    """Raised when a catalogue or setting holds a value the engine cannot use."""


# Game balance
STARTING_CASH = 80000
STARTING_SATISFACTION = 100.0
STARTING_REPUTATION = 50
STARTING_GATES = 3


# Flight generation - intervals are in milliseconds
MIN_FLIGHT_INTERVAL = 8000
MAX_FLIGHT_INTERVAL = 20000
DIFFICULTY_STEP_PER_DAY = 1000
INITIAL_SECOND_ARRIVAL_DELAY = 3.0  # seconds after start

EMERGENCY_CHANCE = 0.05
VIP_THRESHOLD = 0.15
DOMESTIC_THRESHOLD = 0.70
INTERNATIONAL_THRESHOLD = 0.90


# Flight types - processing times in seconds
FLIGHT_TYPES: Dict[str, Dict[str, float]] = {
    "DOMESTIC": {
        "min_passengers": 50,
        "max_passengers": 120,
        "base_revenue": 8000,
        "processing_time": 15.0,
    },
    "INTERNATIONAL": {
        "min_passengers": 120,
        "max_passengers": 250,
        "base_revenue": 18000,
        "processing_time": 25.0,
    },
    "CARGO": {
        "min_passengers": 0,
        "max_passengers": 0,
        "base_revenue": 12000,
        "processing_time": 10.0,
    },
    "VIP": {
        "min_passengers": 10,
        "max_passengers": 50,
        "base_revenue": 30000,
        "processing_time": 20.0,
    },
}


GATE_TYPES: Dict[str, Dict[str, int]] = {
    "SMALL": {"capacity": 150, "cost": 0},
    "MEDIUM": {"capacity": 250, "cost": 25000},
    "LARGE": {"capacity": 350, "cost": 50000},
}
GATES_PER_TERMINAL = 3


WEATHER: Dict[str, Dict[str, object]] = {
    "CLEAR": {"name": "Clear", "delay_factor": 1.0},
    "CLOUDY": {"name": "Cloudy", "delay_factor": 1.1},
    "RAIN": {"name": "Rain", "delay_factor": 1.3},
    "STORM": {"name": "Storm", "delay_factor": 1.5},
    "FOG": {"name": "Fog", "delay_factor": 1.4},
}


# Upgrade catalogue
# Format: id, name, description, cost, effect, value
UPGRADES: List[Dict[str, object]] = [
    {
        "id": "terminal2",
        "name": "Terminal 2",
        "description": "Unlock 2 additional gates",
        "cost": 50000,
        "effect": "addGates",
        "value": 2,
    },
    {
        "id": "lounge",
        "name": "VIP Lounge",
        "description": "Increase passenger satisfaction by 10%",
        "cost": 35000,
        "effect": "satisfaction",
        "value": 1.1,
    },
    {
        "id": "fuelStation",
        "name": "Fuel Station",
        "description": "Reduce operational costs by 15%",
        "cost": 40000,
        "effect": "operatingCost",
        "value": 0.85,
    },
    {
        "id": "runway2",
        "name": "Second Runway",
        "description": "Reduce processing time by 20%",
        "cost": 70000,
        "effect": "processingSpeed",
        "value": 0.8,
    },
    {
        "id": "controlTower",
        "name": "Advanced Control Tower",
        "description": "Increase revenue by 25%",
        "cost": 85000,
        "effect": "revenue",
        "value": 1.25,
    },
    {
        "id": "terminal3",
        "name": "Terminal 3",
        "description": "Unlock 3 additional gates",
        "cost": 120000,
        "effect": "addGates",
        "value": 3,
    },
]


# Economy
MIN_SATISFACTION = 0.0
MAX_SATISFACTION = 100.0
SATISFACTION_DECAY_RATE = 0.3  # per second, per waiting flight
WAITING_GRACE_PERIOD = 5.0  # seconds before a waiting flight starts to hurt
CONGESTION_DECAY_RATE = 0.5  # per second
CONGESTION_THRESHOLD = 5  # unassigned flights
COMPLETION_SATISFACTION_GAIN = 5.0
POOR_MATCH_SATISFACTION_PENALTY = 10.0

PERFECT_MATCH_RATIO = 0.7
MATCH_FACTORS = {"perfect": 1.2, "good": 1.0, "poor": 0.7}
VIP_REVENUE_FACTOR = 1.5

REPUTATION_GAIN_SUCCESS = 2
REPUTATION_VIP_BONUS = 10
REPUTATION_PERFECT_BONUS = 2

OPERATIONAL_COST_PER_DAY = 3000


# Cycles - seconds
DAY_DURATION = 180.0
WEATHER_CHANGE_INTERVAL = 60.0
ALERT_TTL = 5.0


# Game over and warnings
MIN_CASH_GAME_OVER = -50000
MIN_REPUTATION_GAME_OVER = 0
LOW_CASH_WARNING = -30000
LOW_CASH_RELEASE = -20000
LOW_REPUTATION_WARNING = 10
LOW_REPUTATION_RELEASE = 15


# Score weights
SCORE_WEIGHTS = {
    "cash": 0.1,
    "reputation": 100,
    "flights_completed": 50,
    "day": 500,
}


FLIGHT_NUMBER_PREFIXES = [
    "AA", "UA", "DL", "BA", "LH", "AF", "KL", "EK", "QR", "SQ",
    "JL", "NH", "CX", "TG", "QF", "VS", "IB", "AZ", "LX", "OS",
]

AIRLINES = [
    "SkyWings", "CloudJet", "AeroLine", "GlobalAir", "PremiumFly",
    "SwiftAir", "OceanicAir", "MountainAir", "CoastalAir", "StarLine",
]


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    # Driver loop
    AUTO_TICK: bool = True  # run the background tick driver after /api/game/start
    TICK_INTERVAL: float = 1.0 / 30.0  # seconds between ticks
    RANDOM_SEED: Optional[int] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "airport_tycoon.log"
    EVENT_LOG_FILE: str = "airport_tycoon_events.jsonl"

    # High score storage
    HIGH_SCORE_FILE: str = "airport_tycoon_save.json"
    LEADERBOARD_URL: Optional[str] = None
    LEADERBOARD_TIMEOUT: int = 5

    # Session report written when a game ends (empty disables)
    REPORT_FILE: str = "airport_tycoon_report"

    # Optional upgrade catalogue override
    UPGRADES_CSV: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TYCOON_",
    }

"""API schemas for request/response models."""

from .game_schemas import (
    AssignFlightRequest,
    CommandResponse,
    GameStatusResponse,
    PauseResponse,
    SaveResponse,
)
from .status_schemas import DaySummary, EventsResponse, HighScoreResponse, ReportResponse

__all__ = [
    "AssignFlightRequest",
    "CommandResponse",
    "GameStatusResponse",
    "PauseResponse",
    "SaveResponse",
    "DaySummary",
    "EventsResponse",
    "HighScoreResponse",
    "ReportResponse",
]

"""Schemas for status, event and report endpoints."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class HighScoreResponse(BaseModel):
    high_score: int


class EventsResponse(BaseModel):
    """Response model for recent notifications."""

    events: List[Dict[str, Any]]


class DaySummary(BaseModel):
    day: int
    flights: int
    revenue: int
    operating_cost: int


class ReportResponse(BaseModel):
    """Response model for the session summary."""

    total_events: int
    event_counts: Dict[str, int]
    total_revenue: int
    total_operating_cost: int
    flights_completed: int
    per_day: List[DaySummary] = Field(default_factory=list)
    final_score: Optional[int] = None

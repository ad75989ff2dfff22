"""Routes for snapshot, high score, events and report endpoints."""

import logging
from typing import Optional
from fastapi import APIRouter
from ..models.snapshot import GameSnapshot
from ..schemas.status_schemas import EventsResponse, HighScoreResponse, ReportResponse
from ..services.singleton import get_game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/snapshot", response_model=GameSnapshot)
async def get_snapshot():
    """
    Get the current game snapshot.

    Returns:
        Gates, waiting flights, alerts, stats and weather
    """
    game_service = get_game_service()
    return game_service.snapshot()


@router.get("/highscore", response_model=HighScoreResponse)
async def get_high_score():
    game_service = get_game_service()
    return HighScoreResponse(high_score=game_service.high_score())


@router.get("/events", response_model=EventsResponse)
async def get_events(limit: Optional[int] = 50):
    """
    Get recent notifications.

    Args:
        limit: Number of recent entries to return (default: 50, use 0 for all)
    """
    game_service = get_game_service()
    events = game_service.recent_events(limit=limit if limit and limit > 0 else None)
    return EventsResponse(events=events)


@router.get("/report", response_model=ReportResponse)
async def get_report():
    """Summary of this process's notifications: revenue, costs and flights per day."""
    game_service = get_game_service()
    return ReportResponse(**game_service.report())

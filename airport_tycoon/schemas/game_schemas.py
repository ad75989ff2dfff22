"""Schemas for game control and command endpoints."""

from pydantic import BaseModel, Field
from typing import Optional


class GameStatusResponse(BaseModel):
    """Response model for lifecycle commands."""

    message: str
    run_state: str
    generation: Optional[int] = None


class PauseResponse(BaseModel):
    paused: bool
    run_state: str


class AssignFlightRequest(BaseModel):
    """Request model for assigning a waiting flight to a gate."""

    flight_id: str = Field(..., description="Id of a waiting flight")
    gate_id: str = Field(..., description="Id of the target gate")


class CommandResponse(BaseModel):
    """Outcome of a player command; rejections are not HTTP errors."""

    success: bool
    reason: Optional[str] = None
    message: str = ""
    match: Optional[str] = None


class SaveResponse(BaseModel):
    saved: bool

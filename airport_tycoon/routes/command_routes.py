"""Routes for player commands (assign flights, buy upgrades)."""

import logging
from fastapi import APIRouter
from ..schemas.game_schemas import AssignFlightRequest, CommandResponse
from ..services.singleton import get_game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["commands"])


@router.post("/flights/assign", response_model=CommandResponse)
async def assign_flight(request: AssignFlightRequest):
    """
    Assign a waiting flight to a gate.

    A refused assignment (occupied gate, stale id) is a normal response with success=false.
    """
    game_service = get_game_service()
    result = game_service.assign_flight_to_gate(request.flight_id, request.gate_id)
    return CommandResponse(**result.model_dump(mode="json"))


@router.post("/upgrades/{upgrade_id}/purchase", response_model=CommandResponse)
async def purchase_upgrade(upgrade_id: str):
    """Buy an upgrade if it is affordable and not already owned."""
    game_service = get_game_service()
    result = game_service.purchase_upgrade(upgrade_id)
    return CommandResponse(**result.model_dump(mode="json"))

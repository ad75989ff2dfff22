"""Routes for session control (start, pause, reset, save)."""

import logging
from fastapi import APIRouter, BackgroundTasks
from ..schemas.game_schemas import GameStatusResponse, PauseResponse, SaveResponse
from ..services.singleton import get_game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/game", tags=["game"])


@router.post("/start", response_model=GameStatusResponse)
async def start_new_game(background_tasks: BackgroundTasks):
    """
    Start a new game (the tick driver runs in the background).

    Any session in progress is discarded; its driver loop stops on its own.

    Args:
        background_tasks: FastAPI background tasks

    Returns:
        Confirmation with the new session generation
    """
    game_service = get_game_service()
    generation = game_service.start_new_game()

    if game_service.config.AUTO_TICK:
        background_tasks.add_task(game_service.run_game_loop, generation)

    return GameStatusResponse(
        message="Game started",
        run_state=game_service.snapshot().run_state.value,
        generation=generation,
    )


@router.post("/pause", response_model=PauseResponse)
async def toggle_pause():
    """Pause a running game or resume a paused one."""
    game_service = get_game_service()
    paused = game_service.toggle_pause()
    return PauseResponse(paused=paused, run_state=game_service.snapshot().run_state.value)


@router.post("/reset", response_model=GameStatusResponse)
async def reset_game():
    """Discard the current game and go back to setup."""
    game_service = get_game_service()
    game_service.reset()
    return GameStatusResponse(message="Game reset", run_state=game_service.snapshot().run_state.value)


@router.post("/save", response_model=SaveResponse)
async def save_game():
    """Hand a save snapshot to the storage collaborator."""
    game_service = get_game_service()
    return SaveResponse(saved=game_service.save_game())

"""Routes package for API endpoints."""

from .game_routes import router as game_router
from .command_routes import router as command_router
from .status_routes import router as status_router

__all__ = ["game_router", "command_router", "status_router"]

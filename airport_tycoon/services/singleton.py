"""Singleton pattern for shared service instances."""

from typing import Optional

from .game_service import GameService

# Global service instance (singleton pattern)
_game_service: Optional[GameService] = None


def get_game_service() -> GameService:
    """
    Get or create the singleton game service instance.

    Returns:
        GameService instance
    """
    global _game_service
    if _game_service is None:
        _game_service = GameService()
    return _game_service


def set_game_service(service: Optional[GameService]) -> None:
    """Replace the shared instance (used by tests and app shutdown)."""
    global _game_service
    _game_service = service

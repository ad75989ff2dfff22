"""Airport tycoon game-state simulation engine."""

__version__ = "1.0.0"

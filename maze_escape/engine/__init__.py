"""Engine layer: the per-session tick controller."""

from maze_escape.engine.session import GameSession

__all__ = ["GameSession"]

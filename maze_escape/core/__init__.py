"""Core data models and session representation."""

from maze_escape.core.enums import CellType, Domain, MessageReason, PowerupKind, TransitionKind
from maze_escape.core.models import Cell, Enemy, PathCursor, Player, Powerup, Vector2
from maze_escape.core.grid import Grid
from maze_escape.core.session_state import MovementHistory, PendingTransition, SessionState
from maze_escape.core.snapshot import Snapshot

__all__ = [
    "Cell",
    "CellType",
    "Domain",
    "Enemy",
    "Grid",
    "MessageReason",
    "MovementHistory",
    "PathCursor",
    "PendingTransition",
    "Player",
    "Powerup",
    "PowerupKind",
    "SessionState",
    "Snapshot",
    "TransitionKind",
    "Vector2",
]

"""AI layer: pathfinding and enemy pursuit."""

from maze_escape.ai.pathfinding import Pathfinder
from maze_escape.ai.pursuit import PursuitAI

__all__ = ["Pathfinder", "PursuitAI"]

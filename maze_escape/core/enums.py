"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class CellType(IntEnum):
    """Maze cell contents."""

    EMPTY = 0
    WALL = 1


@unique
class PowerupKind(IntEnum):
    """Collectible powerup kinds."""

    HEALTH = 0
    SCORE_BOOST = 1


@unique
class Axis(IntEnum):
    """Dominant axis of recent player movement."""

    HORIZONTAL = 0
    VERTICAL = 1


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    CARVE = 1
    SPAWN = 2
    POWERUP = 3
    AI_DECISION = 4
    AI_MOVE = 5
    ADAPTATION = 6
    PLAYER = 7


@unique
class TransitionKind(IntEnum):
    """Why a level is about to be regenerated."""

    NEXT_LEVEL = 0
    RESTART = 1


@unique
class MessageReason(IntEnum):
    """Reason codes attached to transient on-screen messages."""

    HEALTH_PICKUP = 0
    SCORE_PICKUP = 1
    LEVEL_COMPLETE = 2
    GAME_OVER = 3
    LEVEL_START = 4

"""Mutable authoritative session state: only mutated by the GameSession."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator

from maze_escape.core.enums import TransitionKind
from maze_escape.core.grid import Grid
from maze_escape.core.models import Enemy, Player, Powerup, Vector2


class MovementHistory:
    """Bounded FIFO of the player's most recent displacement vectors."""

    __slots__ = ("_moves",)

    def __init__(self, capacity: int = 20) -> None:
        self._moves: deque[Vector2] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Vector2]:
        return iter(self._moves)

    @property
    def capacity(self) -> int:
        return self._moves.maxlen or 0

    def record(self, move: Vector2) -> None:
        self._moves.append(move)

    def recent(self, count: int) -> list[Vector2]:
        """Return up to *count* of the newest moves, oldest first."""
        if count <= 0:
            return []
        return list(self._moves)[-count:]

    def clear(self) -> None:
        self._moves.clear()


@dataclass(frozen=True, slots=True)
class PendingTransition:
    """A scheduled level regeneration, due once the frame counter reaches ``due_frame``."""

    kind: TransitionKind
    due_frame: int


class SessionState:
    """The single source of truth for one game."""

    __slots__ = (
        "tick", "frame", "generation", "level", "difficulty",
        "grid", "start", "exit", "player", "enemies", "powerups",
        "history", "won", "lost", "pending",
    )

    def __init__(
        self,
        grid: Grid,
        player: Player,
        exit_pos: Vector2,
        history_capacity: int = 20,
    ) -> None:
        self.tick: int = 0
        self.frame: int = 0
        self.generation: int = 0
        self.level: int = 1
        self.difficulty: float = 1.0
        self.grid: Grid = grid
        self.start: Vector2 = player.pos
        self.exit: Vector2 = exit_pos
        self.player: Player = player
        self.enemies: list[Enemy] = []
        self.powerups: dict[Vector2, Powerup] = {}
        self.history = MovementHistory(history_capacity)
        self.won: bool = False
        self.lost: bool = False
        self.pending: PendingTransition | None = None

    @property
    def terminal(self) -> bool:
        return self.won or self.lost

    # -- powerups (at most one per cell) --

    def powerup_at(self, pos: Vector2) -> Powerup | None:
        return self.powerups.get(pos)

    def add_powerup(self, powerup: Powerup) -> bool:
        if powerup.pos in self.powerups:
            return False
        self.powerups[powerup.pos] = powerup
        return True

    def take_powerup(self, pos: Vector2) -> Powerup | None:
        """Remove and return the powerup at *pos*."""
        return self.powerups.pop(pos, None)

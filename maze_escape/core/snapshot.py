"""Immutable snapshot of the session state for readers on other threads."""

from __future__ import annotations

from dataclasses import dataclass

from maze_escape.core.grid import Grid
from maze_escape.core.models import Enemy, Player, Powerup, Vector2
from maze_escape.core.session_state import PendingTransition, SessionState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only copy of everything presentation needs to draw one frame."""

    tick: int
    frame: int
    level: int
    difficulty: float
    grid: Grid
    start: Vector2
    exit: Vector2
    player: Player
    enemies: tuple[Enemy, ...]
    powerups: tuple[Powerup, ...]
    history: tuple[Vector2, ...]
    won: bool
    lost: bool
    pending: PendingTransition | None

    @classmethod
    def from_state(cls, state: SessionState) -> Snapshot:
        return cls(
            tick=state.tick,
            frame=state.frame,
            level=state.level,
            difficulty=state.difficulty,
            grid=state.grid.copy(),
            start=state.start,
            exit=state.exit,
            player=state.player.copy(),
            enemies=tuple(e.copy() for e in state.enemies),
            powerups=tuple(sorted(state.powerups.values(), key=lambda p: (p.pos.y, p.pos.x))),
            history=tuple(state.history),
            won=state.won,
            lost=state.lost,
            pending=state.pending,
        )

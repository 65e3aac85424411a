"""POST /api/v1/move/{direction}: player input."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from maze_escape.api.dependencies import get_game_manager
from maze_escape.api.engine_manager import GameManager
from maze_escape.api.routes.state import serialize_player
from maze_escape.api.schemas import MoveResponse

router = APIRouter()


class MoveDirection(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


_DELTAS: dict[MoveDirection, tuple[int, int]] = {
    MoveDirection.up: (0, -1),
    MoveDirection.down: (0, 1),
    MoveDirection.left: (-1, 0),
    MoveDirection.right: (1, 0),
}


@router.post("/move/{direction}", response_model=MoveResponse)
def move(
    direction: MoveDirection,
    manager: GameManager = Depends(get_game_manager),
) -> MoveResponse:
    dx, dy = _DELTAS[direction]
    moved = manager.move_player(dx, dy)
    snap = manager.get_snapshot()
    assert snap is not None
    return MoveResponse(moved=moved, tick=snap.tick, player=serialize_player(snap.player), won=snap.won)

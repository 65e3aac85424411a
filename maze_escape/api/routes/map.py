"""GET /api/v1/map: current maze layout (changes as the maze adapts)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from maze_escape.api.dependencies import get_game_manager
from maze_escape.api.engine_manager import GameManager
from maze_escape.api.schemas import MapResponse

router = APIRouter()


def rle_encode(values: list[int]) -> list[int]:
    """Run-length encode as [value, count, value, count, ...]."""
    rle: list[int] = []
    if not values:
        return rle
    cur_val = values[0]
    cur_count = 1
    for v in values[1:]:
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: GameManager = Depends(get_game_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")

    grid = snapshot.grid
    return MapResponse(size=grid.size, tick=snapshot.tick, grid=rle_encode(grid.types()))

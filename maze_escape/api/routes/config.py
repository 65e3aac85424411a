"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from maze_escape.api.dependencies import get_game_manager
from maze_escape.api.engine_manager import GameManager
from maze_escape.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        seed=cfg.seed,
        grid_size=cfg.grid_size,
        wall_chance=cfg.wall_chance,
        enemy_count=cfg.enemy_count,
        powerup_chance=cfg.powerup_chance,
        adaptation_rate=cfg.adaptation_rate,
        adaptation_interval=cfg.adaptation_interval,
        history_capacity=cfg.history_capacity,
        tick_rate=manager.tick_rate,
    )

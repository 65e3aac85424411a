"""GET /api/v1/state: dynamic game data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from maze_escape.api.dependencies import get_game_manager
from maze_escape.api.engine_manager import GameManager
from maze_escape.api.schemas import (
    EnemySchema,
    GameStateResponse,
    MessageSchema,
    PlayerSchema,
    PositionSchema,
    PowerupSchema,
    TransitionSchema,
)
from maze_escape.core.models import Player, Vector2
from maze_escape.core.snapshot import Snapshot
from maze_escape.utils.event_log import GameMessage

router = APIRouter()


def _pos(v: Vector2) -> PositionSchema:
    return PositionSchema(x=v.x, y=v.y)


def serialize_player(p: Player) -> PlayerSchema:
    return PlayerSchema(x=p.pos.x, y=p.pos.y, health=p.health, max_health=p.max_health, score=p.score)


def _serialize_message(m: GameMessage) -> MessageSchema:
    return MessageSchema(frame=m.frame, level=m.level, reason=m.reason.name.lower(), text=m.text)


def _serialize_pending(snap: Snapshot) -> TransitionSchema | None:
    if snap.pending is None:
        return None
    return TransitionSchema(
        kind=snap.pending.kind.name.lower(),
        due_frame=snap.pending.due_frame,
        frames_left=max(0, snap.pending.due_frame - snap.frame),
    )


@router.get("/state", response_model=GameStateResponse)
def get_state(
    messages: int = Query(10, ge=0, le=200, description="Number of recent messages to include"),
    manager: GameManager = Depends(get_game_manager),
) -> GameStateResponse:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")

    return GameStateResponse(
        tick=snap.tick,
        frame=snap.frame,
        level=snap.level,
        difficulty=snap.difficulty,
        won=snap.won,
        lost=snap.lost,
        running=manager.running,
        paused=manager.paused,
        player=serialize_player(snap.player),
        exit=_pos(snap.exit),
        enemies=[
            EnemySchema(
                id=e.id, x=e.pos.x, y=e.pos.y,
                intelligence=round(e.intelligence, 4),
                last_move=_pos(e.last_move),
                path_remaining=len(e.path),
            )
            for e in snap.enemies
        ],
        powerups=[PowerupSchema(x=p.pos.x, y=p.pos.y, kind=p.kind.name.lower()) for p in snap.powerups],
        history=[_pos(m) for m in snap.history],
        pending=_serialize_pending(snap),
        messages=[_serialize_message(m) for m in manager.event_log.latest(messages)] if messages else [],
    )


@router.get("/messages", response_model=list[MessageSchema])
def get_messages(
    since_frame: int = Query(0, ge=0, description="Only messages emitted at or after this frame"),
    manager: GameManager = Depends(get_game_manager),
) -> list[MessageSchema]:
    return [_serialize_message(m) for m in manager.event_log.since_frame(since_frame)]

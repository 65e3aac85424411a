"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PositionSchema(BaseModel):
    x: int
    y: int


# --- Entities ---

class PlayerSchema(BaseModel):
    x: int
    y: int
    health: int
    max_health: int
    score: int


class EnemySchema(BaseModel):
    id: int
    x: int
    y: int
    intelligence: float
    last_move: PositionSchema
    path_remaining: int = 0


class PowerupSchema(BaseModel):
    x: int
    y: int
    kind: str


class MessageSchema(BaseModel):
    frame: int
    level: int
    reason: str
    text: str


class TransitionSchema(BaseModel):
    kind: str
    due_frame: int
    frames_left: int


# --- State ---

class GameStateResponse(BaseModel):
    tick: int
    frame: int
    level: int
    difficulty: float
    won: bool
    lost: bool
    running: bool
    paused: bool
    player: PlayerSchema
    exit: PositionSchema
    enemies: list[EnemySchema] = Field(default_factory=list)
    powerups: list[PowerupSchema] = Field(default_factory=list)
    history: list[PositionSchema] = Field(default_factory=list)
    pending: TransitionSchema | None = None
    messages: list[MessageSchema] = Field(default_factory=list)


# --- Map ---

class MapResponse(BaseModel):
    size: int
    tick: int
    grid: list[int] = Field(
        default_factory=list,
        description="Row-major cell types, RLE encoded as [value, count, value, count, ...]",
    )


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int


class MoveResponse(BaseModel):
    moved: bool
    tick: int
    player: PlayerSchema
    won: bool


# --- Config ---

class GameConfigResponse(BaseModel):
    seed: int
    grid_size: int
    wall_chance: float
    enemy_count: int
    powerup_chance: float
    adaptation_rate: float
    adaptation_interval: int
    history_capacity: int
    tick_rate: float

"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from maze_escape.api.dependencies import set_game_manager
from maze_escape.api.engine_manager import GameManager
from maze_escape.api.routes import api_router
from maze_escape.config import GameConfig
from maze_escape.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config)
        set_game_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started: game running.")
        yield
        manager.stop()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Adaptive Maze Escape",
        description=(
            "Adaptive maze game core: presentation and input API.\n\n"
            "## API Groups\n\n"
            "- **State**: Live game state: player, enemies, powerups, messages\n"
            "- **Map**: Current maze layout (walls move as the maze adapts)\n"
            "- **Input**: Player movement\n"
            "- **Control**: Game loop lifecycle: start, pause, resume, step, reset\n"
            "- **Config**: Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live game state polled by the frontend every frame."},
            {"name": "Map", "description": "Maze cell types, RLE encoded. Re-fetch after adaptation ticks."},
            {"name": "Input", "description": "Player movement requests, applied atomically between ticks."},
            {"name": "Control", "description": "Game loop controls: start, pause, resume, single-step, and reset."},
            {"name": "Config", "description": "Read-only game configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app

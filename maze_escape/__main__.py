"""Entry point: ``python -m maze_escape``.

Supports two modes:
  - ``python -m maze_escape``        → Launch FastAPI server for the browser front end
  - ``python -m maze_escape cli``    → Headless run with a scripted wandering player
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Adaptive Maze Escape")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--size", type=int, default=15)
    srv.add_argument("--enemies", type=int, default=2)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless session")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--size", type=int, default=15)
    cli.add_argument("--enemies", type=int, default=2)
    cli.add_argument("--ticks", type=int, default=1000)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from maze_escape.api.app import create_app
    from maze_escape.config import GameConfig

    config = GameConfig(
        seed=args.seed,
        grid_size=args.size,
        enemy_count=args.enemies,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from maze_escape.ai.pathfinding import Pathfinder
    from maze_escape.config import GameConfig
    from maze_escape.core.enums import Domain
    from maze_escape.engine.session import GameSession
    from maze_escape.systems.rng import DeterministicRNG
    from maze_escape.utils.logging import setup_logging

    config = GameConfig(
        seed=args.seed,
        grid_size=args.size,
        enemy_count=args.enemies,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    session = GameSession(config)
    session.subscribe(lambda m: logger.info("[frame %d] %s", m.frame, m.text))
    player_rng = DeterministicRNG(config.seed).fork(0xC11)

    # The scripted player heads for the exit most of the time and wanders otherwise
    for frame in range(args.ticks):
        state = session.state
        if not state.terminal:
            if player_rng.next_bool(Domain.PLAYER, 0, frame, 0.6):
                step = Pathfinder(state.grid).next_step(state.player.pos, state.exit)
            else:
                step = None
            if step is None:
                options = state.grid.walkable_neighbors(state.player.pos)
                if options:
                    step = options[player_rng.next_int(Domain.PLAYER, 1, frame, 0, len(options) - 1)]
            if step is not None:
                delta = step - state.player.pos
                session.move_player(delta.x, delta.y)
        session.tick()

        if frame % 100 == 0:
            s = session.state
            logger.info(
                "Frame %d: level=%d tick=%d health=%d score=%d powerups=%d",
                frame, s.level, s.tick, s.player.health, s.player.score, len(s.powerups),
            )

    final = session.state
    logger.info(
        "Done after %d frames: level=%d difficulty=%.1f score=%d",
        args.ticks, final.level, final.difficulty, final.player.score,
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()

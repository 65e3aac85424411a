"""GameManager: runs a GameSession on a fixed-period background thread.

The API reads from an atomically-swapped immutable Snapshot.  Ticks, player
moves and resets all take the same session lock, so an input is never
interleaved with a half-processed tick and a level rebuild always finishes
before the next tick or move is applied.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from maze_escape.core.snapshot import Snapshot
from maze_escape.engine.session import GameSession
from maze_escape.utils.event_log import EventLog

if TYPE_CHECKING:
    from maze_escape.config import GameConfig
    from maze_escape.core.grid import Grid

logger = logging.getLogger(__name__)


class GameManager:
    """Manages the game lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - message log (lock-guarded ring buffer)
      - player input (serialized with ticks)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._tick_rate: float = config.tick_seconds

        self._session: GameSession | None = None
        self._session_lock = threading.Lock()

        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def get_grid(self) -> Grid | None:
        snap = self.get_snapshot()
        return snap.grid if snap else None

    # -- input --

    def move_player(self, dx: int, dy: int) -> bool:
        """Apply a player move atomically with respect to ticks."""
        assert self._session is not None
        with self._session_lock:
            moved = self._session.move_player(dx, dy)
            if moved:
                self._publish_snapshot()
        return moved

    def tick_once(self) -> None:
        assert self._session is not None
        with self._session_lock:
            self._session.tick()
            self._publish_snapshot()

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="game-loop", daemon=True)
        self._thread.start()
        logger.info("GameManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("GameManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("GameManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("GameManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild a fresh session, and leave it ready to start."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("GameManager reset.")

    # -- internals --

    def _build(self) -> None:
        with self._session_lock:
            self._session = GameSession(self._config, event_log=self._event_log)
            self._publish_snapshot()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Game thread started.")

        while not self._stop_requested.is_set():
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            self.tick_once()

            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Game thread exited.")

    def _publish_snapshot(self) -> None:
        assert self._session is not None
        snap = self._session.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _current_tick(self) -> int:
        snap = self.get_snapshot()
        return snap.tick if snap else 0

"""Thread-safe log of transient game messages exposed to the presentation shell."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable

from maze_escape.core.enums import MessageReason


@dataclass(frozen=True, slots=True)
class GameMessage:
    """A single on-screen notification ("+20 Health!", "Game Over!", ...)."""

    frame: int
    level: int
    reason: MessageReason
    text: str


MessageListener = Callable[[GameMessage], None]


class EventLog:
    """Bounded message log. Writers append; readers snapshot a slice.

    Listeners are called synchronously on append, outside the lock.
    """

    __slots__ = ("_buffer", "_lock", "_listeners")

    def __init__(self, capacity: int = 200) -> None:
        self._buffer: deque[GameMessage] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._listeners: list[MessageListener] = []

    def subscribe(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    def append(self, message: GameMessage) -> None:
        with self._lock:
            self._buffer.append(message)
        for listener in list(self._listeners):
            listener(message)

    def since_frame(self, frame: int) -> list[GameMessage]:
        """Return all messages with frame >= *frame*."""
        with self._lock:
            return [m for m in self._buffer if m.frame >= frame]

    def latest(self, count: int = 10) -> list[GameMessage]:
        """Return the *count* most recent messages."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

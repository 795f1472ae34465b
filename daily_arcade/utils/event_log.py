"""Thread-safe buffer of game events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single gameplay event for the API event feed."""

    frame: int
    category: str
    message: str

    def to_dict(self) -> dict:
        return {"frame": self.frame, "category": self.category, "message": self.message}


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Thread-safe via a simple lock — the frame thread writes, API handlers
    read copies.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 2000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append(self, event: GameEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def since_frame(self, frame: int) -> list[GameEvent]:
        """Return all events with frame >= *frame*."""
        with self._lock:
            return [e for e in self._buffer if e.frame >= frame]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

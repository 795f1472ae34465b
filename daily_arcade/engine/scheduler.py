"""Frame schedulers — who calls the frame loop, and when.

A scheduler hands out one opaque handle per requested frame and runs the
callback later; cancelling a handle guarantees the callback never runs.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class ManualScheduler:
    """Frames run only when the caller pumps. Used by tests and headless runs."""

    __slots__ = ("_pending", "_handles")

    def __init__(self) -> None:
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def pump(self) -> int:
        """Run the callbacks pending right now (not ones they request). Returns how many ran."""
        batch = list(self._pending.items())
        self._pending.clear()
        for _handle, callback in batch:
            callback()
        return len(batch)

    def run(self, frames: int) -> int:
        """Pump until *frames* frames ran or nothing is pending."""
        ran = 0
        while ran < frames and self._pending:
            ran += self.pump()
        return ran


class ThreadedScheduler:
    """Runs requested frames on a background thread at a fixed interval."""

    def __init__(self, frame_interval: float = 1.0 / 60.0) -> None:
        self.frame_interval = frame_interval
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)
        self._lock = threading.Lock()
        self._wakeup = threading.Event()
        self._stop_requested = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_frame_at = 0.0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def request_frame(self, callback: FrameCallback) -> int:
        with self._lock:
            handle = next(self._handles)
            self._pending[handle] = callback
        self._ensure_thread()
        self._wakeup.set()
        return handle

    def cancel_frame(self, handle: int) -> None:
        with self._lock:
            self._pending.pop(handle, None)

    def stop(self) -> None:
        self._stop_requested.set()
        self._wakeup.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5.0)
        with self._lock:
            self._pending.clear()
        self._thread = None
        logger.info("Frame scheduler stopped.")

    # -- internals --

    def _ensure_thread(self) -> None:
        if self.running:
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(target=self._run, name="frame-loop", daemon=True)
        self._thread.start()
        logger.info("Frame scheduler started (interval=%.4fs)", self.frame_interval)

    def _run(self) -> None:
        while not self._stop_requested.is_set():
            self._wakeup.wait(timeout=0.1)
            self._wakeup.clear()

            # Pace to the fixed interval measured from the previous frame
            delay = self._last_frame_at + self.frame_interval - time.monotonic()
            if delay > 0:
                time.sleep(delay)

            with self._lock:
                batch = list(self._pending.values())
                self._pending.clear()
            if not batch:
                continue

            self._last_frame_at = time.monotonic()
            for callback in batch:
                try:
                    callback()
                except Exception:
                    logger.exception("Frame callback raised; the loop that requested it is no longer driven.")

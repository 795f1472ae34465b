"""SessionManager — owns the single server-side play session.

The frame loop runs on the scheduler's background thread; API handlers
only issue lifecycle commands and read the atomically-swapped
``FrameSnapshot`` the loop publishes after every frame.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from daily_arcade.core.enums import GameOutcome, GameType
from daily_arcade.engine.factory import create_engine
from daily_arcade.engine.frame_loop import FrameLoop
from daily_arcade.engine.scheduler import ThreadedScheduler
from daily_arcade.utils.event_log import EventLog

if TYPE_CHECKING:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.core.snapshot import FrameSnapshot
    from daily_arcade.engine.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class NoSessionError(RuntimeError):
    """No game has been loaded into the play session yet."""


@dataclass(frozen=True, slots=True)
class SessionInfo:
    game_type: GameType
    parameters: GameParameters
    game_id: int | None = None


class SessionManager:
    """Manages the play-session lifecycle.

    Provides thread-safe access to:
      - the active frame loop (swapped on load)
      - latest frame snapshot (atomic reference swap inside the loop)
      - event log (lock-guarded buffer shared across sessions)
    """

    def __init__(self, config: ArcadeConfig, scheduler: FrameScheduler | None = None) -> None:
        self._config = config
        self._scheduler = scheduler if scheduler is not None else ThreadedScheduler(config.frame_interval)
        self._lock = threading.Lock()
        self._loop: FrameLoop | None = None
        self._info: SessionInfo | None = None
        self._event_log = EventLog()
        # Separate lock: the game-over callback runs under the loop lock
        self._completed_lock = threading.Lock()
        self._completed: deque[tuple[int, GameOutcome]] = deque(maxlen=config.completed_history)

    # -- public properties --

    @property
    def config(self) -> ArcadeConfig:
        return self._config

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def info(self) -> SessionInfo:
        with self._lock:
            if self._info is None:
                raise NoSessionError("no game loaded")
            return self._info

    @property
    def completed(self) -> list[tuple[int, GameOutcome]]:
        """(score, outcome) of the most recent finished episodes, oldest first."""
        with self._completed_lock:
            return list(self._completed)

    def get_loop(self) -> FrameLoop:
        with self._lock:
            if self._loop is None:
                raise NoSessionError("no game loaded")
            return self._loop

    def get_snapshot(self) -> FrameSnapshot:
        snap = self.get_loop().get_snapshot()
        if snap is None:
            raise NoSessionError("session has not rendered yet")
        return snap

    # -- lifecycle --

    def load(self, game_type: GameType, parameters: GameParameters, game_id: int | None = None) -> FrameLoop:
        """Tear down the current session and start a new one."""
        engine = create_engine(game_type, parameters, self._config)
        with self._lock:
            if self._loop is not None:
                self._loop.cleanup()
            self._event_log.clear()
            self._loop = FrameLoop(
                engine,
                self._scheduler,
                self._config,
                on_game_over=self._record_game_over,
                event_log=self._event_log,
            )
            self._info = SessionInfo(game_type=game_type, parameters=parameters, game_id=game_id)
            loop = self._loop
        logger.info("Loaded %s session (game=%s, seed=%d)", game_type.value, game_id, parameters.layout_seed)
        if self._config.autostart:
            loop.start()
        return loop

    def stop(self) -> None:
        with self._lock:
            if self._loop is not None:
                self._loop.cleanup()
        if isinstance(self._scheduler, ThreadedScheduler):
            self._scheduler.stop()
        logger.info("SessionManager stopped.")

    # -- internals --

    def _record_game_over(self, score: int, outcome: GameOutcome) -> None:
        with self._completed_lock:
            self._completed.append((score, outcome))
        logger.info("Episode finished: %s with score %d", outcome.name, score)

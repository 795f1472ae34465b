"""FrameLoop — drives one GameEngine through its lifecycle.

State machine::

    CONSTRUCTED ──start──▶ RUNNING ◀──resume── PAUSED
                              │  └────pause────▶  │
                          game_over               │
                              ▼                   │
                          GAME_OVER ◀─────────────┘ (step may end the episode)

    reset(): any live state → RUNNING (new episode)
    cleanup(): any state → DISPOSED (terminal, idempotent)

Per frame: due deferred tasks → input snapshot → ``engine.update`` →
time-limit check → ``engine.render`` → publish snapshot → request next frame.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable

from daily_arcade.core.enums import EngineStatus, GameOutcome
from daily_arcade.core.snapshot import FrameSnapshot
from daily_arcade.engine.base import DeferredTask
from daily_arcade.engine.input import InputAdapter, InputState
from daily_arcade.rendering.surface import DrawList
from daily_arcade.utils.event_log import EventLog, GameEvent

if TYPE_CHECKING:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.engine.base import GameEngine
    from daily_arcade.engine.scheduler import FrameScheduler
    from daily_arcade.rendering.surface import Surface
    from daily_arcade.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)

ScoreCallback = Callable[[int], None]
GameOverCallback = Callable[[int, GameOutcome], None]

SCORE_MILESTONE = 1000


class LoopStateError(RuntimeError):
    """A lifecycle command is not valid in the loop's current state."""


class FrameLoop:
    """Generic frame driver implementing ``EngineHost`` for the engine it owns.

    Thread-safe: every public method and every frame run under one re-entrant
    lock, so host commands never interleave with an ``update``.
    """

    def __init__(
        self,
        engine: GameEngine,
        scheduler: FrameScheduler,
        config: ArcadeConfig,
        *,
        surface: Surface | None = None,
        on_score: ScoreCallback | None = None,
        on_game_over: GameOverCallback | None = None,
        event_log: EventLog | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._engine = engine
        self._scheduler = scheduler
        self._config = config
        self._surface: Surface = surface if surface is not None else DrawList(
            config.canvas_width, config.canvas_height,
        )
        self._on_score = on_score
        self._on_game_over = on_game_over
        self._event_log = event_log if event_log is not None else EventLog()
        self._recorder = recorder

        self._input = InputState()
        self._adapter = InputAdapter()
        self._adapter.bind(self._input)

        self._lock = threading.RLock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: FrameSnapshot | None = None

        self._status = EngineStatus.CONSTRUCTED
        self._frame = 0
        self._score = 0
        self._outcome: GameOutcome | None = None
        self._episode = 1
        self._tasks: list[DeferredTask] = []

        # Outstanding frame request; the token invalidates callbacks that
        # were already dequeued by the scheduler when the handle was cancelled.
        self._handle: int | None = None
        self._token = 0

        self._render()

    # -- public properties --

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def score(self) -> int:
        return self._score

    @property
    def outcome(self) -> GameOutcome | None:
        return self._outcome

    @property
    def episode(self) -> int:
        return self._episode

    @property
    def input_state(self) -> InputState:
        return self._input

    @property
    def adapter(self) -> InputAdapter:
        return self._adapter

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def frame_pending(self) -> bool:
        return self._handle is not None

    @property
    def pending_tasks(self) -> list[DeferredTask]:
        with self._lock:
            return [t for t in self._tasks if t.pending]

    @property
    def frame_limit(self) -> int | None:
        """Frame on which a timed episode ends, or None when untimed."""
        limit = self._engine.parameters.time_limit
        if limit is None:
            return None
        return limit * self._config.frames_per_second

    def get_snapshot(self) -> FrameSnapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self) -> None:
        with self._lock:
            match self._status:
                case EngineStatus.RUNNING:
                    return
                case EngineStatus.CONSTRUCTED | EngineStatus.PAUSED:
                    self._status = EngineStatus.RUNNING
                    self._request_frame()
                    logger.info("%s started at frame %d", self._name, self._frame)
                case _:
                    raise LoopStateError(f"cannot start from {self._status.name}")
            self._publish()

    def pause(self) -> None:
        with self._lock:
            match self._status:
                case EngineStatus.PAUSED:
                    return
                case EngineStatus.RUNNING:
                    self._status = EngineStatus.PAUSED
                    self._cancel_frame()
                    logger.info("%s paused at frame %d", self._name, self._frame)
                case _:
                    raise LoopStateError(f"cannot pause from {self._status.name}")
            self._publish()

    def resume(self) -> None:
        with self._lock:
            match self._status:
                case EngineStatus.RUNNING:
                    return
                case EngineStatus.PAUSED:
                    self._status = EngineStatus.RUNNING
                    self._request_frame()
                    logger.info("%s resumed at frame %d", self._name, self._frame)
                case _:
                    raise LoopStateError(f"cannot resume from {self._status.name}")
            self._publish()

    def step(self) -> None:
        """Execute exactly one frame and leave the loop paused (unless it ended)."""
        with self._lock:
            match self._status:
                case EngineStatus.CONSTRUCTED | EngineStatus.RUNNING:
                    self._cancel_frame()
                    self._status = EngineStatus.PAUSED
                case EngineStatus.PAUSED:
                    pass
                case _:
                    raise LoopStateError(f"cannot step from {self._status.name}")
            self._run_frame()

    def reset(self) -> None:
        """Fresh entities, score 0, new episode, running."""
        with self._lock:
            if self._status == EngineStatus.DISPOSED:
                raise LoopStateError("cannot reset a disposed loop")
            self._cancel_frame()
            self._cancel_tasks()
            self._engine.reset()
            self._input.clear()
            self._event_log.clear()
            if self._recorder is not None:
                self._recorder.clear()
            self._frame = 0
            self._score = 0
            self._outcome = None
            self._episode += 1
            if self._on_score is not None:
                self._on_score(self._score)
            self._status = EngineStatus.RUNNING
            self._render()
            self._request_frame()
            logger.info("%s reset (episode %d)", self._name, self._episode)

    def cleanup(self) -> None:
        """Release the scheduler slot, deferred tasks and input bindings. Idempotent."""
        with self._lock:
            if self._status == EngineStatus.DISPOSED:
                return
            self._cancel_frame()
            self._cancel_tasks()
            self._adapter.unbind()
            self._status = EngineStatus.DISPOSED
            self._publish()
            logger.info("%s disposed at frame %d", self._name, self._frame)

    # -- EngineHost --

    def update_score(self, delta: int) -> None:
        with self._lock:
            before = self._score
            self._score += delta
            if self._score // SCORE_MILESTONE > before // SCORE_MILESTONE:
                self.emit("score", f"Score passed {self._score // SCORE_MILESTONE * SCORE_MILESTONE}")
            if self._on_score is not None:
                self._on_score(self._score)

    def game_over(self, outcome: GameOutcome) -> None:
        with self._lock:
            if self._status not in (EngineStatus.RUNNING, EngineStatus.PAUSED):
                return
            self._status = EngineStatus.GAME_OVER
            self._outcome = outcome
            self._cancel_frame()
            self._cancel_tasks()
            self.emit("game_over", f"Game over ({outcome.name.lower()}) with score {self._score}")
            logger.info("%s game over at frame %d: %s, score %d",
                        self._name, self._frame, outcome.name, self._score)
            if self._on_game_over is not None:
                self._on_game_over(self._score, outcome)

    def schedule(self, delay_frames: int, callback: Callable[[], None], name: str = "") -> DeferredTask:
        with self._lock:
            task = DeferredTask(name=name or callback.__name__, due_frame=self._frame + max(1, delay_frames),
                                callback=callback)
            self._tasks.append(task)
            logger.debug("%s scheduled '%s' for frame %d", self._name, task.name, task.due_frame)
            return task

    def emit(self, category: str, message: str) -> None:
        self._event_log.append(GameEvent(frame=self._frame, category=category, message=message))

    # -- internals --

    @property
    def _name(self) -> str:
        return f"FrameLoop[{self._engine.game_type.value}]"

    def _request_frame(self) -> None:
        if self._handle is not None:
            return
        self._token += 1
        token = self._token
        self._handle = self._scheduler.request_frame(lambda: self._on_frame(token))

    def _cancel_frame(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
        self._handle = None
        self._token += 1

    def _cancel_tasks(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def _on_frame(self, token: int) -> None:
        with self._lock:
            if token != self._token or self._status != EngineStatus.RUNNING:
                return
            self._handle = None
            self._run_frame()
            if self._status == EngineStatus.RUNNING:
                self._request_frame()

    def _run_frame(self) -> None:
        self._frame += 1
        self._run_due_tasks()

        inputs = self._input.snapshot()
        if self._status in (EngineStatus.RUNNING, EngineStatus.PAUSED):
            self._engine.update(inputs, self)
        if self._recorder is not None:
            self._recorder.record_frame(self._frame, inputs, self._score)

        limit = self.frame_limit
        if limit is not None and self._frame >= limit:
            self.game_over(GameOutcome.TIMEOUT)

        self._render()

    def _run_due_tasks(self) -> None:
        due = [t for t in self._tasks if t.pending and t.due_frame <= self._frame]
        for task in due:
            # An earlier task in this batch may have ended the episode
            if task.cancelled:
                continue
            task.done = True
            if task in self._tasks:
                self._tasks.remove(task)
            logger.debug("%s running deferred '%s' at frame %d", self._name, task.name, self._frame)
            task.callback()

    def _render(self) -> None:
        self._engine.render(self._surface)
        self._publish()

    def _publish(self) -> None:
        commands: tuple = ()
        if isinstance(self._surface, DrawList):
            commands = tuple(self._surface.to_list())
        snap = FrameSnapshot(
            game_type=self._engine.game_type,
            status=self._status,
            frame=self._frame,
            score=self._score,
            outcome=self._outcome,
            episode=self._episode,
            stats=dict(self._engine.stats()),
            commands=commands,
        )
        with self._snapshot_lock:
            self._latest_snapshot = snap

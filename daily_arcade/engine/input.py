"""Input state owned by one frame loop, and the adapter the host wires into it.

Host events arrive on arbitrary threads (HTTP handlers, a pygame event pump)
and are sampled once per frame via ``InputState.snapshot()``.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass

from daily_arcade.core.enums import Action, GestureKind

logger = logging.getLogger(__name__)

# Host key codes (DOM ``KeyboardEvent.code`` names) → logical action
KEY_BINDINGS: dict[str, Action] = {
    "ArrowUp": Action.UP,
    "KeyW": Action.UP,
    "ArrowDown": Action.DOWN,
    "KeyS": Action.DOWN,
    "ArrowLeft": Action.LEFT,
    "KeyA": Action.LEFT,
    "ArrowRight": Action.RIGHT,
    "KeyD": Action.RIGHT,
    "Space": Action.FIRE,
}


@dataclass(frozen=True, slots=True)
class Gesture:
    """A touch gesture. Which fields matter depends on ``kind``."""

    kind: GestureKind
    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0


@dataclass(frozen=True, slots=True)
class InputSnapshot:
    """Immutable per-frame view of the input state."""

    held: frozenset[Action] = frozenset()
    gestures: tuple[Gesture, ...] = ()

    def is_held(self, action: Action) -> bool:
        return action in self.held


EMPTY_INPUT = InputSnapshot()


class InputState:
    """Held actions plus a queue of gestures not yet seen by a frame."""

    __slots__ = ("_held", "_gestures", "_lock")

    def __init__(self) -> None:
        self._held: set[Action] = set()
        self._gestures: deque[Gesture] = deque()
        self._lock = threading.Lock()

    def press(self, action: Action) -> None:
        with self._lock:
            self._held.add(action)

    def release(self, action: Action) -> None:
        with self._lock:
            self._held.discard(action)

    def set_held(self, actions: set[Action] | frozenset[Action]) -> None:
        with self._lock:
            self._held = set(actions)

    def push_gesture(self, gesture: Gesture) -> None:
        with self._lock:
            self._gestures.append(gesture)

    def snapshot(self) -> InputSnapshot:
        """Current held set plus every queued gesture; the queue is drained."""
        with self._lock:
            gestures = tuple(self._gestures)
            self._gestures.clear()
            return InputSnapshot(frozenset(self._held), gestures)

    def clear(self) -> None:
        with self._lock:
            self._held.clear()
            self._gestures.clear()


class InputAdapter:
    """Translates host key codes and gestures into an ``InputState``.

    Events received while unbound are dropped, so a torn-down engine never
    sees input meant for its replacement.
    """

    __slots__ = ("_bindings", "_state")

    def __init__(self, bindings: dict[str, Action] | None = None) -> None:
        self._bindings = dict(bindings if bindings is not None else KEY_BINDINGS)
        self._state: InputState | None = None

    @property
    def bound(self) -> bool:
        return self._state is not None

    def bind(self, state: InputState) -> None:
        self._state = state

    def unbind(self) -> None:
        if self._state is not None:
            self._state.clear()
        self._state = None

    def handle_key(self, code: str, pressed: bool) -> bool:
        """Apply a key event. Returns False for unmapped codes or when unbound."""
        action = self._bindings.get(code)
        if action is None or self._state is None:
            return False
        if pressed:
            self._state.press(action)
        else:
            self._state.release(action)
        return True

    def key_down(self, code: str) -> bool:
        return self.handle_key(code, True)

    def key_up(self, code: str) -> bool:
        return self.handle_key(code, False)

    def gesture(self, gesture: Gesture) -> bool:
        if self._state is None:
            logger.debug("Dropped %s gesture: adapter unbound", gesture.kind.value)
            return False
        self._state.push_gesture(gesture)
        return True

"""Deterministic autopilot for headless runs and soak tests."""

from __future__ import annotations

from daily_arcade.core.enums import Action, Domain
from daily_arcade.engine.input import InputState
from daily_arcade.systems.rng import DeterministicRNG

_MOVES = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


class Autopilot:
    """Holds a pseudo-random direction for a few frames at a time.

    Every choice is a hash of (seed, frame), so two runs with the same seed
    press exactly the same keys.
    """

    __slots__ = ("_rng", "hold_frames", "fire_probability")

    def __init__(self, seed: int, hold_frames: int = 12, fire_probability: float = 0.5) -> None:
        self._rng = DeterministicRNG(seed)
        self.hold_frames = max(1, hold_frames)
        self.fire_probability = fire_probability

    def choose(self, frame: int) -> frozenset[Action]:
        window = frame // self.hold_frames
        held = {self._rng.choice(Domain.AUTOPILOT, 0, window, _MOVES)}
        if self._rng.next_bool(Domain.AUTOPILOT, 1, window, self.fire_probability):
            held.add(Action.FIRE)
        return frozenset(held)

    def apply(self, state: InputState, frame: int) -> frozenset[Action]:
        held = self.choose(frame)
        state.set_held(held)
        return held

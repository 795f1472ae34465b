"""Engine contract, frame loop, schedulers and input."""

from daily_arcade.engine.base import DeferredTask, EngineHost, GameEngine
from daily_arcade.engine.factory import create_engine
from daily_arcade.engine.frame_loop import FrameLoop, LoopStateError
from daily_arcade.engine.input import (
    KEY_BINDINGS,
    Gesture,
    InputAdapter,
    InputSnapshot,
    InputState,
)
from daily_arcade.engine.scheduler import FrameScheduler, ManualScheduler, ThreadedScheduler

__all__ = [
    "DeferredTask",
    "EngineHost",
    "FrameLoop",
    "FrameScheduler",
    "GameEngine",
    "Gesture",
    "InputAdapter",
    "InputSnapshot",
    "InputState",
    "KEY_BINDINGS",
    "LoopStateError",
    "ManualScheduler",
    "ThreadedScheduler",
    "create_engine",
]

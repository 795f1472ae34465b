"""Core data models, enums and game parameters."""

from daily_arcade.core.enums import (
    Action,
    Difficulty,
    Domain,
    EngineStatus,
    GameOutcome,
    GameType,
    GestureKind,
)
from daily_arcade.core.models import Rect, Vector2
from daily_arcade.core.parameters import GameParameters, GameVariation, InvalidParametersError
from daily_arcade.core.snapshot import FrameSnapshot

__all__ = [
    "Action",
    "Difficulty",
    "Domain",
    "EngineStatus",
    "FrameSnapshot",
    "GameOutcome",
    "GameParameters",
    "GameType",
    "GameVariation",
    "GestureKind",
    "InvalidParametersError",
    "Rect",
    "Vector2",
]

"""Enumerations used throughout the arcade."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class GameType(str, Enum):
    """Game types in daily rotation order."""

    PACMAN = "pacman"
    SPACE_INVADERS = "space-invaders"
    FROGGER = "frogger"


@unique
class Difficulty(str, Enum):
    """Difficulty buckets, from easiest to hardest."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


@unique
class EngineStatus(IntEnum):
    """Lifecycle states of a frame loop."""

    CONSTRUCTED = 0
    RUNNING = 1
    PAUSED = 2
    GAME_OVER = 3
    DISPOSED = 4      # cleanup() has run; terminal


@unique
class GameOutcome(IntEnum):
    """How an episode ended."""

    WIN = 0
    LOSS = 1
    TIMEOUT = 2


@unique
class Action(IntEnum):
    """Logical input vocabulary shared by every engine."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    FIRE = 4


@unique
class GestureKind(str, Enum):
    """Touch gestures forwarded by the host."""

    TAP = "tap"        # Single touch at (x, y)
    DRAG = "drag"      # Horizontal finger movement by dx
    SWIPE = "swipe"    # Touch released after moving by (dx, dy)


@unique
class Domain(IntEnum):
    """Hash-RNG domains for deterministic randomness isolation."""

    FLAVOR = 0
    ENEMY_FIRE = 1
    STARFIELD = 2
    AUTOPILOT = 3

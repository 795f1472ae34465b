"""Immutable view of a play session, published once per frame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from daily_arcade.core.enums import EngineStatus, GameOutcome, GameType


@dataclass(frozen=True, slots=True)
class FrameSnapshot:
    """Read-only copy of a frame loop's observable state.

    Safe to hand to API threads: every field is a copy taken while the
    loop held its lock.
    """

    game_type: GameType
    status: EngineStatus
    frame: int
    score: int
    outcome: GameOutcome | None
    episode: int
    stats: dict[str, Any] = field(default_factory=dict)
    commands: tuple[dict[str, Any], ...] = ()

    @property
    def game_over(self) -> bool:
        return self.status == EngineStatus.GAME_OVER

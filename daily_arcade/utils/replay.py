"""Replay serialization — records frame-by-frame inputs for deterministic replay.

A session is a pure function of its parameters, canvas and per-frame input
snapshots, so those are all a replay needs to store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from daily_arcade.core.enums import GameType
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.input import InputSnapshot

logger = logging.getLogger(__name__)

REPLAY_VERSION = "1.0"


class ReplayRecorder:
    """Accumulates frame inputs and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_frames", "_game_type", "_parameters", "_canvas")

    def __init__(
        self,
        path: str | Path,
        game_type: GameType,
        parameters: GameParameters,
        canvas: tuple[int, int],
    ) -> None:
        self._path = Path(path)
        self._game_type = game_type
        self._parameters = parameters
        self._canvas = canvas
        self._frames: list[dict[str, Any]] = []

    @property
    def frames(self) -> list[dict[str, Any]]:
        return self._frames

    def record_frame(self, frame: int, inputs: InputSnapshot, score: int) -> None:
        self._frames.append(
            {
                "frame": frame,
                "held": sorted(action.name for action in inputs.held),
                "gestures": [
                    {"kind": g.kind.value, "x": g.x, "y": g.y, "dx": g.dx, "dy": g.dy}
                    for g in inputs.gestures
                ],
                "score": score,
            }
        )

    def clear(self) -> None:
        self._frames.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": REPLAY_VERSION,
            "gameType": self._game_type.value,
            "parameters": self._parameters.to_dict(),
            "canvas": list(self._canvas),
            "total_frames": len(self._frames),
            "frames": self._frames,
        }

    def flush(self) -> None:
        """Write accumulated data to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d frames)", self._path, len(self._frames))


def load_replay(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))

"""Drawing surface contract and the recording implementation served over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence


class Surface(Protocol):
    """Everything an engine's ``render`` may draw with. Coordinates are canvas pixels."""

    def clear(self, color: str) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None: ...

    def fill_wedge(
        self, x: float, y: float, radius: float, start: float, end: float, color: str,
    ) -> None: ...

    def fill_polygon(self, points: Sequence[tuple[float, float]], color: str) -> None: ...

    def stroke_line(
        self, x1: float, y1: float, x2: float, y2: float, color: str, width: float = 1.0,
    ) -> None: ...

    def text(
        self, x: float, y: float, text: str, color: str, size: int = 16, align: str = "left",
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class DrawCommand:
    """One recorded drawing primitive."""

    op: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, **self.args}


class DrawList:
    """Surface that records commands instead of rasterising them.

    ``clear`` drops everything recorded so far, so after a frame the list
    holds exactly that frame's picture.
    """

    __slots__ = ("width", "height", "_commands")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._commands: list[DrawCommand] = []

    @property
    def commands(self) -> tuple[DrawCommand, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def ops(self, name: str) -> list[DrawCommand]:
        return [c for c in self._commands if c.op == name]

    def to_list(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self._commands]

    # -- Surface --

    def clear(self, color: str) -> None:
        self._commands.clear()
        self._commands.append(DrawCommand("clear", {"color": color}))

    def fill_rect(self, x, y, width, height, color) -> None:
        self._commands.append(DrawCommand(
            "rect", {"x": x, "y": y, "w": width, "h": height, "color": color},
        ))

    def fill_circle(self, x, y, radius, color) -> None:
        self._commands.append(DrawCommand("circle", {"x": x, "y": y, "r": radius, "color": color}))

    def fill_wedge(self, x, y, radius, start, end, color) -> None:
        self._commands.append(DrawCommand(
            "wedge", {"x": x, "y": y, "r": radius, "start": start, "end": end, "color": color},
        ))

    def fill_polygon(self, points, color) -> None:
        self._commands.append(DrawCommand(
            "polygon", {"points": [[px, py] for px, py in points], "color": color},
        ))

    def stroke_line(self, x1, y1, x2, y2, color, width=1.0) -> None:
        self._commands.append(DrawCommand(
            "line", {"x1": x1, "y1": y1, "x2": x2, "y2": y2, "color": color, "width": width},
        ))

    def text(self, x, y, text, color, size=16, align="left") -> None:
        self._commands.append(DrawCommand(
            "text", {"x": x, "y": y, "text": text, "color": color, "size": size, "align": align},
        ))

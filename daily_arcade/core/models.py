"""Core geometry models and collision tests shared by the engines."""

from __future__ import annotations

import math
from dataclasses import dataclass

from daily_arcade.core.enums import Action


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D vector (axis-aligned directions use unit components)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def reversed(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


# Unit headings for the four movement actions
DIRECTION_VECTORS: dict[Action, Vector2] = {
    Action.UP: Vector2(0, -1),
    Action.DOWN: Vector2(0, 1),
    Action.LEFT: Vector2(-1, 0),
    Action.RIGHT: Vector2(1, 0),
}

# Order used when several direction keys are held at once
DIRECTION_PRIORITY: tuple[Action, ...] = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


@dataclass(slots=True)
class Rect:
    """Mutable axis-aligned rectangle (top-left anchored)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def overlaps(self, other: Rect) -> bool:
        return rects_overlap(self, other)

    def copy(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x1 - x2, y1 - y2)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap; touching edges do not collide."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def circles_overlap(x1: float, y1: float, r1: float, x2: float, y2: float, r2: float) -> bool:
    """Distance between centres is less than the sum of the radii."""
    return distance(x1, y1, x2, y2) < r1 + r2


def circle_hits_rect(cx: float, cy: float, radius: float, rect: Rect) -> bool:
    """Circle/AABB test via the closest point of the rectangle to the centre."""
    nearest_x = min(max(cx, rect.x), rect.x + rect.width)
    nearest_y = min(max(cy, rect.y), rect.y + rect.height)
    return distance(cx, cy, nearest_x, nearest_y) < radius


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))

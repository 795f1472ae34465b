"""Frogger engine — hop across the road, ride logs over the river, fill the homes.

Playfield bands, top to bottom (lane height 40)::

    [  0,  80)  home row with 5 slots
    [ 80, 240)  river, 4 log lanes
    [240, 280)  median (safe)
    [280, 440)  road, 4 car lanes
    [440, 480)  start strip

Lanes are generated from the layout stream, so a given seed always yields
the same traffic.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from daily_arcade.core.enums import Action, GameOutcome, GameType, GestureKind
from daily_arcade.core.models import DIRECTION_PRIORITY, Rect, clamp, rects_overlap
from daily_arcade.systems.rng import LayoutRandom

if TYPE_CHECKING:
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.base import EngineHost
    from daily_arcade.engine.input import InputSnapshot
    from daily_arcade.rendering.surface import Surface

logger = logging.getLogger(__name__)

LANE_HEIGHT = 40
HOME_BOTTOM = 80
RIVER_TOP, RIVER_BOTTOM = 80, 240
MEDIAN_TOP = 240
ROAD_TOP, ROAD_BOTTOM = 280, 440
LANES_PER_ZONE = 4

FROG_SIZE = 30
HOP_VERTICAL = 40
HOP_HORIZONTAL = 30
MOVE_COOLDOWN = 10
SWIPE_THRESHOLD = 20

HOME_COUNT = 5
HOME_WIDTH = 40
HOME_POINTS = 200
ALL_HOMES_BONUS = 1000

VEHICLE_HEIGHT = 30
CAR_COLORS = ("#FF5454", "#FFD166", "#8C3FFF", "#00FFFF")


@dataclass(slots=True)
class Frog:
    rect: Rect
    lives: int


@dataclass(slots=True)
class Mover:
    """A car or a log: wraps around the screen at a constant lane speed."""

    rect: Rect
    speed: float
    color: str = "#8B4513"


@dataclass(slots=True)
class Home:
    rect: Rect
    filled: bool = False


class FroggerEngine:
    """Frog crosses traffic and a river to fill every home slot."""

    game_type = GameType.FROGGER

    def __init__(self, parameters: GameParameters, width: int = 640, height: int = 480) -> None:
        self.parameters = parameters
        self.width = width
        self.height = height
        self._build()

    # -- construction --

    def _build(self) -> None:
        self._rng = LayoutRandom(self.parameters.layout_seed)
        self.frog = Frog(rect=self._start_rect(), lives=self.parameters.lives_count)
        self.move_cooldown = 0
        self.cars = self._create_lanes(ROAD_TOP, cars=True)
        self.logs = self._create_lanes(RIVER_TOP, cars=False)
        spacing = self.width / HOME_COUNT
        offset = (spacing - HOME_WIDTH) / 2
        self.homes = [
            Home(Rect(i * spacing + offset, (HOME_BOTTOM - HOME_WIDTH) / 2, HOME_WIDTH, HOME_WIDTH))
            for i in range(HOME_COUNT)
        ]

    def _start_rect(self) -> Rect:
        return Rect(self.width / 2 - FROG_SIZE / 2, self.height - LANE_HEIGHT + 5, FROG_SIZE, FROG_SIZE)

    def _create_lanes(self, top: int, cars: bool) -> list[Mover]:
        s = self.parameters.speed_multiplier
        movers: list[Mover] = []
        for lane in range(LANES_PER_ZONE):
            lane_y = top + lane * LANE_HEIGHT
            direction = 1 if lane % 2 == 0 else -1
            if cars:
                count = 3 + math.floor(self._rng.next() * 2)
                speed = (1 + self._rng.next() * 1.5) * direction * s
            else:
                count = 2 + math.floor(self._rng.next() * 2)
                speed = (0.5 + self._rng.next()) * direction * s
            spacing = self.width / count

            for i in range(count):
                width = 60 + self._rng.next() * 30 if cars else 80 + self._rng.next() * 60
                start_x = i * spacing + (self._rng.next() * 0.5 - 0.25) * spacing
                x = start_x if direction > 0 else self.width - start_x - width
                color = CAR_COLORS[lane % len(CAR_COLORS)] if cars else "#8B4513"
                movers.append(Mover(Rect(x, lane_y + 5, width, VEHICLE_HEIGHT), speed, color))
        return movers

    # -- GameEngine --

    def reset(self) -> None:
        self._build()

    def update(self, inputs: InputSnapshot, host: EngineHost) -> None:
        if self.move_cooldown > 0:
            self.move_cooldown -= 1
        self._handle_input(inputs)

        for car in self.cars:
            self._advance(car)
        if any(rects_overlap(self.frog.rect, car.rect) for car in self.cars):
            self._die(host, "Hit by a car")
            return

        for log in self.logs:
            self._advance(log)
        if self.in_river:
            carrier = next((log for log in self.logs if rects_overlap(self.frog.rect, log.rect)), None)
            if carrier is None:
                self._die(host, "Fell in the river")
                return
            self.frog.rect.x = clamp(self.frog.rect.x + carrier.speed, 0, self.width - FROG_SIZE)

        if self.frog.rect.y < HOME_BOTTOM:
            self._reach_home(host)

    def render(self, surface: Surface) -> None:
        params = self.parameters
        w = self.width
        surface.clear(params.color("background", "#000000"))
        surface.fill_rect(0, 0, w, HOME_BOTTOM, "#1B5E20")
        surface.fill_rect(0, RIVER_TOP, w, RIVER_BOTTOM - RIVER_TOP, "#1E4FD8")
        surface.fill_rect(0, MEDIAN_TOP, w, ROAD_TOP - MEDIAN_TOP, "#6A1B9A")
        surface.fill_rect(0, ROAD_TOP, w, ROAD_BOTTOM - ROAD_TOP, "#333333")
        surface.fill_rect(0, ROAD_BOTTOM, w, self.height - ROAD_BOTTOM, "#6A1B9A")
        for lane in range(1, LANES_PER_ZONE):
            y = ROAD_TOP + lane * LANE_HEIGHT
            surface.stroke_line(0, y, w, y, "#FFFFFF", 1)

        frog_color = params.color("player", "#50FF50")
        for home in self.homes:
            r = home.rect
            surface.fill_rect(r.x, r.y, r.width, r.height, "#0D3B10")
            if home.filled:
                surface.fill_circle(r.center_x, r.center_y, FROG_SIZE / 2, frog_color)

        for log in self.logs:
            surface.fill_rect(log.rect.x, log.rect.y, log.rect.width, log.rect.height, log.color)
        for car in self.cars:
            surface.fill_rect(car.rect.x, car.rect.y, car.rect.width, car.rect.height, car.color)

        f = self.frog.rect
        surface.fill_rect(f.x, f.y, f.width, f.height, frog_color)
        surface.text(10, self.height - 10, f"LIVES {self.frog.lives}", "#FFFFFF", 14)

    def stats(self) -> dict[str, Any]:
        return {
            "lives": self.frog.lives,
            "homesFilled": sum(1 for h in self.homes if h.filled),
            "frogX": self.frog.rect.x,
            "frogY": self.frog.rect.y,
            "moveCooldown": self.move_cooldown,
        }

    @property
    def in_river(self) -> bool:
        return RIVER_TOP <= self.frog.rect.y < RIVER_BOTTOM

    # -- update phases --

    def _handle_input(self, inputs: InputSnapshot) -> None:
        if self.move_cooldown > 0:
            return
        action: Action | None = None
        for gesture in inputs.gestures:
            if gesture.kind != GestureKind.SWIPE:
                continue
            if abs(gesture.dx) > abs(gesture.dy) and abs(gesture.dx) > SWIPE_THRESHOLD:
                action = Action.RIGHT if gesture.dx > 0 else Action.LEFT
            elif abs(gesture.dy) > SWIPE_THRESHOLD:
                action = Action.DOWN if gesture.dy > 0 else Action.UP
            if action is not None:
                break
        if action is None:
            action = next((a for a in DIRECTION_PRIORITY if inputs.is_held(a)), None)
        if action is not None:
            self.hop(action)

    def hop(self, action: Action) -> None:
        """Move one step and restart the move cooldown."""
        r = self.frog.rect
        match action:
            case Action.UP:
                r.y -= HOP_VERTICAL
            case Action.DOWN:
                r.y += HOP_VERTICAL
            case Action.LEFT:
                r.x -= HOP_HORIZONTAL
            case Action.RIGHT:
                r.x += HOP_HORIZONTAL
            case _:
                return
        r.x = clamp(r.x, 0, self.width - r.width)
        r.y = clamp(r.y, 0, self.height - r.height)
        self.move_cooldown = MOVE_COOLDOWN // 2 if self.parameters.has_feature("double_speed") else MOVE_COOLDOWN

    def _advance(self, mover: Mover) -> None:
        r = mover.rect
        r.x += mover.speed
        if mover.speed > 0 and r.x > self.width:
            r.x = -r.width
        elif mover.speed < 0 and r.right < 0:
            r.x = self.width

    def _reach_home(self, host: EngineHost) -> None:
        cx = self.frog.rect.center_x
        home = next((h for h in self.homes if h.rect.x <= cx <= h.rect.right), None)
        if home is None:
            return
        if home.filled:
            self._die(host, "Home already taken")
            return

        home.filled = True
        host.update_score(HOME_POINTS)
        host.emit("home", "Frog reached a home")
        self._respawn()
        if all(h.filled for h in self.homes):
            host.update_score(ALL_HOMES_BONUS)
            host.game_over(GameOutcome.WIN)

    def _die(self, host: EngineHost, reason: str) -> None:
        self.frog.lives -= 1
        host.emit("life", f"{reason}, {self.frog.lives} lives left")
        if self.frog.lives <= 0:
            host.game_over(GameOutcome.LOSS)
        else:
            self._respawn()

    def _respawn(self) -> None:
        self.frog.rect = self._start_rect()
        self.move_cooldown = 0

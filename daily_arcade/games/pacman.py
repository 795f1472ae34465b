"""Pacman engine — maze chase with dots, power pellets and ghosts.

Layout and ghost AI draw from one ``LayoutRandom`` built from
``parameters.layout_seed``; the draw order (dot grid, walls, dot top-up, then one
draw per ghost per frame) is part of the reproducibility contract.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from daily_arcade.core.catalog import DIFFICULTY_MULTIPLIER
from daily_arcade.core.enums import Action, Difficulty, GameOutcome, GameType, GestureKind
from daily_arcade.core.models import (
    DIRECTION_PRIORITY,
    DIRECTION_VECTORS,
    Rect,
    Vector2,
    circle_hits_rect,
    circles_overlap,
    distance,
)
from daily_arcade.systems.rng import LayoutRandom

if TYPE_CHECKING:
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.base import EngineHost
    from daily_arcade.engine.input import InputSnapshot
    from daily_arcade.rendering.surface import Surface

logger = logging.getLogger(__name__)

PLAYER_RADIUS = 12
GHOST_RADIUS = 10
DOT_RADIUS = 3
PELLET_SIZE = 6
MAX_GHOSTS = 5

GRID_STEP = 20
MIN_DOTS = 20
WALL_THICKNESS = 10
MAX_WALL_LENGTH = 60
MIN_WALLS = 5
SAFE_RADIUS = 60

DOT_POINTS = 10
PELLET_POINTS = 50
GHOST_POINTS = 200
FRIGHTENED_FRAMES = 300

REDIRECT_CHANCE = 0.01
FRENZY_REDIRECT_CHANCE = 0.03
WALL_PROBE = 5

DOT_DENSITY: dict[Difficulty, float] = {
    Difficulty.EASY: 0.7, Difficulty.MEDIUM: 0.6, Difficulty.HARD: 0.5, Difficulty.EXPERT: 0.4,
}
WALL_DENSITY: dict[Difficulty, float] = {
    Difficulty.EASY: 0.3, Difficulty.MEDIUM: 0.4, Difficulty.HARD: 0.5, Difficulty.EXPERT: 0.6,
}

GHOST_COLORS = ("#FF5454", "#FFB8FF", "#00FFFF", "#FFB851", "#50FF50")
FRIGHTENED_COLOR = "#2121FF"
WALL_COLOR = "#2121DE"


@dataclass(slots=True)
class Player:
    x: float
    y: float
    radius: float
    speed: float
    direction: Vector2 = Vector2(1, 0)
    mouth: float = 0.2
    mouth_step: float = 0.05


@dataclass(slots=True)
class Ghost:
    x: float
    y: float
    radius: float
    speed: float
    color: str
    direction: Vector2 = Vector2(-1, 0)


@dataclass(slots=True)
class Dot:
    x: float
    y: float
    eaten: bool = False


@dataclass(slots=True)
class Pellet:
    x: float
    y: float
    size: float = PELLET_SIZE
    eaten: bool = False


@dataclass(slots=True)
class _Layout:
    player: Player
    ghosts: list[Ghost] = field(default_factory=list)
    pellets: list[Pellet] = field(default_factory=list)
    dots: list[Dot] = field(default_factory=list)
    walls: list[Rect] = field(default_factory=list)


class PacmanEngine:
    """Player eats every dot and pellet while ghosts roam the maze."""

    game_type = GameType.PACMAN

    def __init__(self, parameters: GameParameters, width: int = 640, height: int = 480) -> None:
        self.parameters = parameters
        self.width = width
        self.height = height
        self._mult = DIFFICULTY_MULTIPLIER[parameters.difficulty]
        self._build()

    # -- construction --

    def _build(self) -> None:
        self._rng = LayoutRandom(self.parameters.layout_seed)
        layout = _Layout(player=self._create_player())
        layout.ghosts = self._create_ghosts()
        layout.pellets = self._create_pellets()
        layout.dots = self._create_dots(layout.pellets)
        layout.walls = self._create_walls(layout.pellets)

        # Dots buried under a wall could never be eaten
        layout.dots = [
            d for d in layout.dots
            if not any(circle_hits_rect(d.x, d.y, 1, w) for w in layout.walls)
        ]
        self._top_up_dots(layout.dots, layout.pellets, layout.walls)

        self.player = layout.player
        self.ghosts = layout.ghosts
        self.pellets = layout.pellets
        self.dots = layout.dots
        self.walls = layout.walls
        self.frightened = False
        self.frightened_timer = 0
        logger.debug("Pacman layout: %d dots, %d walls, %d ghosts (seed %d)",
                     len(self.dots), len(self.walls), len(self.ghosts), self.parameters.layout_seed)

    def _create_player(self) -> Player:
        return Player(
            x=self.width / 4,
            y=self.height / 2,
            radius=PLAYER_RADIUS,
            speed=2 * self._mult * self.parameters.speed_multiplier,
        )

    def _create_ghosts(self) -> list[Ghost]:
        count = max(1, min(self.parameters.enemy_count, MAX_GHOSTS))
        return [
            Ghost(
                x=self.width * 0.75,
                y=self.height * (i + 1) / (count + 1),
                radius=GHOST_RADIUS,
                speed=(1 + 0.1 * i) * self._mult * self.parameters.speed_multiplier,
                color=self.parameters.color("enemy", GHOST_COLORS[i % len(GHOST_COLORS)]),
            )
            for i in range(count)
        ]

    def _create_pellets(self) -> list[Pellet]:
        w, h = self.width, self.height
        return [Pellet(40, 40), Pellet(w - 40, 40), Pellet(40, h - 40), Pellet(w - 40, h - 40)]

    def _create_dots(self, pellets: list[Pellet]) -> list[Dot]:
        density = DOT_DENSITY[self.parameters.difficulty]
        dots: list[Dot] = []
        for y in range(GRID_STEP, self.height, GRID_STEP):
            for x in range(GRID_STEP, self.width, GRID_STEP):
                # Draw first so the stream advances once per cell regardless of clearance
                r = self._rng.next()
                if r > 1 - density and _clear_of_pellets(x, y, pellets):
                    dots.append(Dot(x, y))
        return dots

    def _top_up_dots(self, dots: list[Dot], pellets: list[Pellet], walls: list[Rect]) -> None:
        """Fill *dots* up to ``MIN_DOTS`` from free grid cells, one seeded draw per pick."""
        if len(dots) >= MIN_DOTS:
            return
        taken = {(d.x, d.y) for d in dots}
        free = [
            (x, y)
            for y in range(GRID_STEP, self.height - GRID_STEP + 1, GRID_STEP)
            for x in range(GRID_STEP, self.width - GRID_STEP + 1, GRID_STEP)
            if (x, y) not in taken
            and _clear_of_pellets(x, y, pellets)
            and not any(circle_hits_rect(x, y, 1, w) for w in walls)
        ]
        while len(dots) < MIN_DOTS and free:
            x, y = free.pop(self._rng.below(len(free)))
            dots.append(Dot(x, y))
        if len(dots) < MIN_DOTS:
            logger.warning("Only %d free cells for dots on a %dx%d canvas", len(dots), self.width, self.height)

    def _create_walls(self, pellets: list[Pellet]) -> list[Rect]:
        density = WALL_DENSITY[self.parameters.difficulty]
        start_x, start_y = self.width / 4, self.height / 2
        walls: list[Rect] = []

        def place(wall: Rect) -> None:
            if not any(circle_hits_rect(p.x, p.y, p.size, wall) for p in pellets):
                walls.append(wall)

        for y in range(60, self.height, 60):
            for x in range(0, self.width, 80):
                r = self._rng.next()
                if r < density and distance(x, y, start_x, start_y) > SAFE_RADIUS:
                    length = min(MAX_WALL_LENGTH, self.width - x - 20)
                    if length > WALL_THICKNESS:
                        place(Rect(x, y, length, WALL_THICKNESS))

        for x in range(60, self.width, 60):
            for y in range(0, self.height, 80):
                r = self._rng.next()
                if r < density and distance(x, y, start_x, start_y) > SAFE_RADIUS:
                    length = min(MAX_WALL_LENGTH, self.height - y - 20)
                    if length > WALL_THICKNESS:
                        place(Rect(x, y, WALL_THICKNESS, length))

        if len(walls) < MIN_WALLS:
            for i in range(MIN_WALLS):
                x = self.width * 0.1 if self._rng.next() < 0.5 else self.width * 0.8
                walls.append(Rect(x, self.height * (0.2 + 0.15 * i), MAX_WALL_LENGTH, WALL_THICKNESS))
        return walls

    # -- GameEngine --

    def reset(self) -> None:
        self._build()

    def update(self, inputs: InputSnapshot, host: EngineHost) -> None:
        self._animate_mouth()
        self._steer(inputs)
        self._move_player()
        self._eat_dots(host)

        if self.frightened:
            self.frightened_timer -= 1
            if self.frightened_timer <= 0:
                self.frightened = False
                self.frightened_timer = 0

        self._eat_pellets(host)
        if self._move_ghosts(host):
            return

        if all(d.eaten for d in self.dots) and all(p.eaten for p in self.pellets):
            host.emit("level", "Maze cleared")
            host.game_over(GameOutcome.WIN)

    def render(self, surface: Surface) -> None:
        params = self.parameters
        surface.clear(params.color("background", "#000000"))

        for wall in self.walls:
            surface.fill_rect(wall.x, wall.y, wall.width, wall.height, WALL_COLOR)

        item = params.color("item", "#FFB8AE")
        for dot in self.dots:
            if not dot.eaten:
                surface.fill_circle(dot.x, dot.y, DOT_RADIUS, item)
        for pellet in self.pellets:
            if not pellet.eaten:
                surface.fill_circle(pellet.x, pellet.y, pellet.size, item)

        p = self.player
        heading = math.atan2(p.direction.y, p.direction.x)
        half_mouth = p.mouth * math.pi / 4
        surface.fill_wedge(p.x, p.y, p.radius, heading + half_mouth,
                           heading + 2 * math.pi - half_mouth, params.color("player", "#FFFF00"))

        for ghost in self.ghosts:
            color = FRIGHTENED_COLOR if self.frightened else ghost.color
            surface.fill_circle(ghost.x, ghost.y - 2, ghost.radius, color)
            surface.fill_rect(ghost.x - ghost.radius, ghost.y - 2, ghost.radius * 2, ghost.radius, color)

    def stats(self) -> dict[str, Any]:
        return {
            "dotsRemaining": sum(1 for d in self.dots if not d.eaten),
            "pelletsRemaining": sum(1 for p in self.pellets if not p.eaten),
            "ghosts": len(self.ghosts),
            "walls": len(self.walls),
            "frightened": self.frightened,
            "frightenedTimer": self.frightened_timer,
        }

    # -- update phases --

    def _animate_mouth(self) -> None:
        p = self.player
        p.mouth += p.mouth_step
        if p.mouth >= 0.8 or p.mouth <= 0.05:
            p.mouth_step = -p.mouth_step

    def _steer(self, inputs: InputSnapshot) -> None:
        for gesture in inputs.gestures:
            if gesture.kind == GestureKind.TAP:
                dx, dy = gesture.x - self.player.x, gesture.y - self.player.y
                if abs(dx) > abs(dy):
                    action = Action.RIGHT if dx > 0 else Action.LEFT
                else:
                    action = Action.DOWN if dy > 0 else Action.UP
                self.player.direction = DIRECTION_VECTORS[action]

        for action in DIRECTION_PRIORITY:
            if inputs.is_held(action):
                self.player.direction = DIRECTION_VECTORS[action]
                break

    def _move_player(self) -> None:
        p = self.player
        nx = p.x + p.direction.x * p.speed
        ny = p.y + p.direction.y * p.speed
        if not any(circle_hits_rect(nx, ny, p.radius, wall) for wall in self.walls):
            p.x, p.y = nx, ny
        p.x, p.y = self._wrap(p.x, p.y, p.radius)

    def _eat_dots(self, host: EngineHost) -> None:
        points = DOT_POINTS * 2 if self.parameters.has_feature("double_dots") else DOT_POINTS
        for dot in self.dots:
            if not dot.eaten and circles_overlap(self.player.x, self.player.y, self.player.radius,
                                                 dot.x, dot.y, DOT_RADIUS):
                dot.eaten = True
                host.update_score(points)

    def _eat_pellets(self, host: EngineHost) -> None:
        for pellet in self.pellets:
            if pellet.eaten:
                continue
            if circles_overlap(self.player.x, self.player.y, self.player.radius,
                               pellet.x, pellet.y, pellet.size):
                pellet.eaten = True
                self.frightened = True
                self.frightened_timer = FRIGHTENED_FRAMES * (
                    2 if self.parameters.has_feature("super_pellets") else 1
                )
                host.update_score(PELLET_POINTS)
                host.emit("power", "Power pellet eaten, ghosts are frightened")

    def _move_ghosts(self, host: EngineHost) -> bool:
        """Move every ghost and resolve contacts. Returns True when the episode ended."""
        chance = FRENZY_REDIRECT_CHANCE if self.parameters.has_feature("ghost_frenzy") else REDIRECT_CHANCE
        for ghost in self.ghosts:
            speed = ghost.speed * (0.5 if self.frightened else 1.0)
            ghost.x += ghost.direction.x * speed
            ghost.y += ghost.direction.y * speed

            r = self._rng.next()
            if r < chance or self._ghost_at_wall(ghost):
                self._redirect(ghost)
            ghost.x, ghost.y = self._wrap(ghost.x, ghost.y, ghost.radius)

            if not circles_overlap(ghost.x, ghost.y, ghost.radius,
                                   self.player.x, self.player.y, self.player.radius):
                continue
            if self.frightened:
                ghost.x = self.width * self._rng.next()
                ghost.y = self.height * self._rng.next()
                host.update_score(GHOST_POINTS)
                host.emit("ghost", "Ghost eaten")
            else:
                host.emit("death", "Caught by a ghost")
                host.game_over(GameOutcome.LOSS)
                return True
        return False

    def _ghost_at_wall(self, ghost: Ghost) -> bool:
        px = ghost.x + ghost.direction.x * WALL_PROBE
        py = ghost.y + ghost.direction.y * WALL_PROBE
        return any(circle_hits_rect(px, py, ghost.radius, wall) for wall in self.walls)

    def _redirect(self, ghost: Ghost) -> None:
        current, reverse = ghost.direction, ghost.direction.reversed()
        options = [v for v in DIRECTION_VECTORS.values() if v != current and v != reverse]
        ghost.direction = options[self._rng.below(len(options))]

    def _wrap(self, x: float, y: float, radius: float) -> tuple[float, float]:
        if x < -radius:
            x = self.width + radius
        elif x > self.width + radius:
            x = -radius
        if y < -radius:
            y = self.height + radius
        elif y > self.height + radius:
            y = -radius
        return x, y


def _clear_of_pellets(x: float, y: float, pellets: list[Pellet]) -> bool:
    return not any(abs(x - p.x) < GRID_STEP and abs(y - p.y) < GRID_STEP for p in pellets)

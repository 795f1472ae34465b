"""Space Invaders engine — a descending formation, player cannon and waves.

Formation layout (jitter, extra invaders) draws from the layout stream;
enemy fire draws from the hash stream keyed by frame number, so it never
disturbs the formation of the next wave.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from daily_arcade.core.catalog import DIFFICULTY_MULTIPLIER
from daily_arcade.core.enums import Action, Difficulty, Domain, GameOutcome, GameType, GestureKind
from daily_arcade.core.models import Rect, clamp, rects_overlap
from daily_arcade.systems.rng import DeterministicRNG, LayoutRandom

if TYPE_CHECKING:
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.base import DeferredTask, EngineHost
    from daily_arcade.engine.input import InputSnapshot
    from daily_arcade.rendering.surface import Surface

logger = logging.getLogger(__name__)

ENEMY_WIDTH, ENEMY_HEIGHT = 30, 20
ENEMY_PADDING = 10
FORMATION_TOP = 40
DROP_DISTANCE = 20
LARGE_FORMATION = 50
LARGE_ROWS, LARGE_COLS = 6, 12
WAVE_SPEEDUP = 0.2

PLAYER_WIDTH, PLAYER_HEIGHT = 30, 20
BULLET_WIDTH, BULLET_HEIGHT = 4, 10
DRAG_THRESHOLD = 10
INVULNERABLE_FRAMES = 60
INITIAL_ENEMY_COOLDOWN = 60
STAR_COUNT = 50

FIRE_COOLDOWN: dict[Difficulty, int] = {
    Difficulty.EASY: 20, Difficulty.MEDIUM: 15, Difficulty.HARD: 12, Difficulty.EXPERT: 10,
}
POINT_MULTIPLIER: dict[Difficulty, float] = {
    Difficulty.EASY: 1.0, Difficulty.MEDIUM: 1.5, Difficulty.HARD: 2.0, Difficulty.EXPERT: 3.0,
}
SHOOTERS: dict[Difficulty, int] = {
    Difficulty.EASY: 1, Difficulty.MEDIUM: 1, Difficulty.HARD: 2, Difficulty.EXPERT: 3,
}
ENEMY_BULLET_FACTOR: dict[Difficulty, float] = {
    Difficulty.EASY: 0.8, Difficulty.MEDIUM: 1.0, Difficulty.HARD: 1.3, Difficulty.EXPERT: 1.6,
}

ROW_COLORS = ("#FF5454", "#FFB851", "#FFFF54", "#50FF50", "#54C8FF", "#B854FF")
EXTRA_COLOR = "#FF54FF"

# Entity slot for cooldown jitter inside Domain.ENEMY_FIRE (shooter picks use 0..n)
_JITTER_SLOT = 1000


@dataclass(slots=True)
class Cannon:
    rect: Rect
    speed: float
    lives: int
    invulnerable: int = 0


@dataclass(slots=True)
class Invader:
    rect: Rect
    points: int
    row: int = -1         # -1 for extra invaders outside the grid
    alive: bool = True


@dataclass(slots=True)
class Bullet:
    rect: Rect
    speed: float


class SpaceInvadersEngine:
    """Player cannon against a block-moving invader formation."""

    game_type = GameType.SPACE_INVADERS

    def __init__(
        self,
        parameters: GameParameters,
        width: int = 640,
        height: int = 480,
        wave_delay_frames: int = 60,
    ) -> None:
        self.parameters = parameters
        self.width = width
        self.height = height
        self.wave_delay_frames = wave_delay_frames
        self._mult = DIFFICULTY_MULTIPLIER[parameters.difficulty]
        self._fire_rng = DeterministicRNG(parameters.layout_seed)
        self._wave_token = 0
        self._build()

    # -- construction --

    def _build(self) -> None:
        params = self.parameters
        self._rng = LayoutRandom(params.layout_seed)
        self._wave_token += 1
        self._wave_task: DeferredTask | None = None

        self.level = 1
        self.frames_elapsed = 0
        self.direction = 1
        self.move_speed = 1.0 * params.speed_multiplier * self._mult
        self.player = Cannon(
            rect=Rect(self.width / 2 - PLAYER_WIDTH / 2, self.height - 30, PLAYER_WIDTH, PLAYER_HEIGHT),
            speed=5 * params.speed_multiplier * self._mult,
            lives=params.lives_count,
        )
        self.bullets: list[Bullet] = []
        self.enemy_bullets: list[Bullet] = []
        self.fire_cooldown = 0
        self.enemy_fire_cooldown = INITIAL_ENEMY_COOLDOWN
        self.enemies = self._create_enemies()

    @staticmethod
    def formation_shape(enemy_count: int) -> tuple[int, int]:
        """Rows and columns of the grid for a given enemy count."""
        total = max(1, enemy_count * 10)
        if total >= LARGE_FORMATION:
            return LARGE_ROWS, LARGE_COLS
        rows = max(1, math.floor(math.sqrt(total / 2)))
        cols = max(1, math.ceil(total / rows))
        return rows, cols

    def _create_enemies(self) -> list[Invader]:
        difficulty = self.parameters.difficulty
        point_mult = POINT_MULTIPLIER[difficulty]
        rows, cols = self.formation_shape(self.parameters.enemy_count)

        enemies: list[Invader] = []
        for row in range(rows):
            for col in range(cols):
                x = col * (ENEMY_WIDTH + ENEMY_PADDING) + ENEMY_PADDING
                y = row * (ENEMY_HEIGHT + ENEMY_PADDING) + ENEMY_PADDING + FORMATION_TOP
                if difficulty == Difficulty.EXPERT:
                    x += (self._rng.next() - 0.5) * 10
                    y += (self._rng.next() - 0.5) * 5
                enemies.append(Invader(
                    rect=Rect(x, y, ENEMY_WIDTH, ENEMY_HEIGHT),
                    points=math.floor((rows - row) * 10 * point_mult),
                    row=row,
                ))

        if difficulty in (Difficulty.HARD, Difficulty.EXPERT):
            extra = math.floor(self._rng.next() * 5) + 3
            for _ in range(extra):
                x = self._rng.next() * (self.width - 60) + 30
                y = self._rng.next() * (self.height / 3) + FORMATION_TOP
                enemies.append(Invader(
                    rect=Rect(x, y, ENEMY_WIDTH, ENEMY_HEIGHT),
                    points=math.floor(50 * point_mult),
                ))
        return enemies

    # -- GameEngine --

    def reset(self) -> None:
        self._build()

    def update(self, inputs: InputSnapshot, host: EngineHost) -> None:
        self.frames_elapsed += 1
        if self.fire_cooldown > 0:
            self.fire_cooldown -= 1
        if self.player.invulnerable > 0:
            self.player.invulnerable -= 1

        self._handle_input(inputs)
        self._move_bullets(host)
        if self._move_enemy_bullets(host):
            return
        if self._move_formation(host):
            return

        if self.enemy_fire_cooldown > 0:
            self.enemy_fire_cooldown -= 1
        else:
            self._enemy_volley(host.frame)

    def render(self, surface: Surface) -> None:
        params = self.parameters
        surface.clear(params.color("background", "#000000"))

        for i in range(STAR_COUNT):
            sx = self._fire_rng.next_float(Domain.STARFIELD, i, 0) * self.width
            sy = self._fire_rng.next_float(Domain.STARFIELD, i, 1) * self.height
            twinkle = self._fire_rng.next_float(Domain.STARFIELD, i, self.frames_elapsed // 10 + 2)
            surface.fill_rect(sx, sy, 1 if twinkle < 0.7 else 2, 1 if twinkle < 0.7 else 2, "#FFFFFF")

        enemy_color = params.custom_colors.get("enemy") if params.custom_colors else None
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            color = enemy_color or (ROW_COLORS[enemy.row % len(ROW_COLORS)] if enemy.row >= 0 else EXTRA_COLOR)
            r = enemy.rect
            surface.fill_rect(r.x, r.y, r.width, r.height, color)

        p = self.player
        blink_hidden = p.invulnerable > 0 and (p.invulnerable // 5) % 2 == 1
        if not blink_hidden:
            r = p.rect
            color = params.color("player", "#50FF50")
            surface.fill_rect(r.x, r.y + r.height / 2, r.width, r.height / 2, color)
            surface.fill_polygon(
                [(r.x + r.width / 2, r.y), (r.x + r.width * 0.7, r.y + r.height / 2),
                 (r.x + r.width * 0.3, r.y + r.height / 2)],
                color,
            )

        bullet_color = params.color("item", "#FFFFFF")
        for bullet in self.bullets:
            surface.fill_rect(bullet.rect.x, bullet.rect.y, bullet.rect.width, bullet.rect.height, bullet_color)
        for bullet in self.enemy_bullets:
            surface.fill_rect(bullet.rect.x, bullet.rect.y, bullet.rect.width, bullet.rect.height, "#FF5454")

        surface.text(10, 20, f"LEVEL {self.level}", "#FFFFFF", 16)
        surface.text(self.width - 10, 20, f"LIVES {self.player.lives}", "#FFFFFF", 16, align="right")

    def stats(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "lives": self.player.lives,
            "enemiesAlive": self.alive_count,
            "bullets": len(self.bullets),
            "enemyBullets": len(self.enemy_bullets),
            "invulnerable": self.player.invulnerable,
            "waveScheduled": self._wave_task is not None and self._wave_task.pending,
        }

    @property
    def alive_count(self) -> int:
        return sum(1 for e in self.enemies if e.alive)

    # -- player --

    def _handle_input(self, inputs: InputSnapshot) -> None:
        p = self.player
        for gesture in inputs.gestures:
            if gesture.kind == GestureKind.TAP:
                self.shoot()
            elif gesture.kind == GestureKind.DRAG and abs(gesture.dx) > DRAG_THRESHOLD:
                p.rect.x += p.speed if gesture.dx > 0 else -p.speed

        if inputs.is_held(Action.LEFT):
            p.rect.x -= p.speed
        if inputs.is_held(Action.RIGHT):
            p.rect.x += p.speed
        p.rect.x = clamp(p.rect.x, 0, self.width - p.rect.width)

        if inputs.is_held(Action.FIRE) and self.fire_cooldown == 0:
            self.shoot()

    def shoot(self) -> None:
        """Fire from the cannon and restart the cooldown. Ignores the current cooldown."""
        params = self.parameters
        r = self.player.rect
        speed = 7 * params.speed_multiplier * self._mult
        y = r.y - BULLET_HEIGHT
        if params.has_feature("multi_shot", "doubleShot"):
            xs = (r.x + r.width / 3 - BULLET_WIDTH / 2, r.x + r.width * 2 / 3 - BULLET_WIDTH / 2)
        else:
            xs = (r.center_x - BULLET_WIDTH / 2,)
        for x in xs:
            self.bullets.append(Bullet(Rect(x, y, BULLET_WIDTH, BULLET_HEIGHT), speed))

        cooldown = FIRE_COOLDOWN[params.difficulty]
        if params.has_feature("rapid_fire"):
            cooldown //= 2
        self.fire_cooldown = cooldown

    def _move_bullets(self, host: EngineHost) -> None:
        survivors: list[Bullet] = []
        for bullet in self.bullets:
            bullet.rect.y -= bullet.speed
            if bullet.rect.bottom < 0:
                continue
            hit = next((e for e in self.enemies if e.alive and rects_overlap(bullet.rect, e.rect)), None)
            if hit is None:
                survivors.append(bullet)
                continue
            hit.alive = False
            host.update_score(hit.points)
        self.bullets = survivors

        if self.alive_count == 0 and (self._wave_task is None or not self._wave_task.pending):
            token = self._wave_token
            self._wave_task = host.schedule(
                self.wave_delay_frames, lambda: self._next_wave(token, host), "next_wave",
            )
            host.emit("wave", f"Wave {self.level} cleared")
            logger.info("Wave %d cleared; next wave in %d frames", self.level, self.wave_delay_frames)

    def _next_wave(self, token: int, host: EngineHost) -> None:
        if token != self._wave_token:
            logger.debug("Dropped stale next-wave task")
            return
        self._wave_task = None
        self.level += 1
        self.move_speed += WAVE_SPEEDUP
        self.direction = 1
        self.bullets.clear()
        self.enemy_bullets.clear()
        self.enemies = self._create_enemies()
        host.emit("wave", f"Wave {self.level} incoming")
        logger.info("Wave %d started (formation speed %.2f)", self.level, self.move_speed)

    # -- enemies --

    def _move_enemy_bullets(self, host: EngineHost) -> bool:
        p = self.player
        survivors: list[Bullet] = []
        for bullet in self.enemy_bullets:
            bullet.rect.y += bullet.speed
            if bullet.rect.y > self.height:
                continue
            if p.invulnerable == 0 and rects_overlap(bullet.rect, p.rect):
                p.lives -= 1
                host.emit("life", f"Cannon hit, {p.lives} lives left")
                if p.lives <= 0:
                    self.enemy_bullets = survivors
                    host.game_over(GameOutcome.LOSS)
                    return True
                p.invulnerable = INVULNERABLE_FRAMES * (
                    2 if self.parameters.has_feature("shield_boost") else 1
                )
                continue
            survivors.append(bullet)
        self.enemy_bullets = survivors
        return False

    def _move_formation(self, host: EngineHost) -> bool:
        living = [e for e in self.enemies if e.alive]
        if not living:
            return False

        at_edge = any(
            (self.direction > 0 and e.rect.right >= self.width) or (self.direction < 0 and e.rect.x <= 0)
            for e in living
        )
        if at_edge:
            self.direction = -self.direction
            for enemy in living:
                enemy.rect.y += DROP_DISTANCE
        else:
            for enemy in living:
                enemy.rect.x += self.move_speed * self.direction

        if any(e.rect.bottom >= self.player.rect.y for e in living):
            host.emit("death", "Invaders reached the cannon")
            host.game_over(GameOutcome.LOSS)
            return True
        return False

    def _enemy_volley(self, frame: int) -> None:
        living = [e for e in self.enemies if e.alive]
        if living:
            difficulty = self.parameters.difficulty
            speed = (3 * ENEMY_BULLET_FACTOR[difficulty] * self.parameters.speed_multiplier
                     + min(self.level, 3))
            pool = list(living)
            for i in range(min(SHOOTERS[difficulty], len(pool))):
                shooter = pool.pop(self._fire_rng.next_int(Domain.ENEMY_FIRE, i, frame, 0, len(pool) - 1))
                self.enemy_bullets.append(Bullet(
                    Rect(shooter.rect.center_x - BULLET_WIDTH / 2, shooter.rect.bottom, BULLET_WIDTH, BULLET_HEIGHT),
                    speed,
                ))

        density = clamp(len(living) / 10, 0.5, 1.5)
        jitter = self._fire_rng.next_int(Domain.ENEMY_FIRE, _JITTER_SLOT, frame, 0, 29)
        self.enemy_fire_cooldown = jitter + math.floor(50 / density)

"""Desktop window for local play (``python -m daily_arcade play``).

Requires the optional ``play`` extra (pygame). The frame loop renders
straight into a ``PygameSurface``; keyboard events go through the loop's
``InputAdapter`` and mouse drags become gestures.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Sequence

import pygame

from daily_arcade.core.enums import EngineStatus, GestureKind
from daily_arcade.engine.input import Gesture

if TYPE_CHECKING:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.engine.frame_loop import FrameLoop
    from daily_arcade.engine.scheduler import ManualScheduler

logger = logging.getLogger(__name__)

WEDGE_SEGMENTS = 24
TAP_RADIUS = 8

# pygame key constants → host key codes understood by KEY_BINDINGS
PYGAME_KEY_CODES: dict[int, str] = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_w: "KeyW",
    pygame.K_s: "KeyS",
    pygame.K_a: "KeyA",
    pygame.K_d: "KeyD",
    pygame.K_SPACE: "Space",
}


class PygameSurface:
    """``Surface`` implementation drawing into a pygame surface."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self._fonts: dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size + 6)
        return self._fonts[size]

    def clear(self, color: str) -> None:
        self.screen.fill(pygame.Color(color))

    def fill_rect(self, x, y, width, height, color) -> None:
        pygame.draw.rect(self.screen, pygame.Color(color), pygame.Rect(int(x), int(y), int(width), int(height)))

    def fill_circle(self, x, y, radius, color) -> None:
        pygame.draw.circle(self.screen, pygame.Color(color), (int(x), int(y)), int(radius))

    def fill_wedge(self, x, y, radius, start, end, color) -> None:
        points = [(x, y)]
        for i in range(WEDGE_SEGMENTS + 1):
            angle = start + (end - start) * i / WEDGE_SEGMENTS
            points.append((x + math.cos(angle) * radius, y + math.sin(angle) * radius))
        pygame.draw.polygon(self.screen, pygame.Color(color), points)

    def fill_polygon(self, points: Sequence[tuple[float, float]], color: str) -> None:
        pygame.draw.polygon(self.screen, pygame.Color(color), list(points))

    def stroke_line(self, x1, y1, x2, y2, color, width=1.0) -> None:
        pygame.draw.line(self.screen, pygame.Color(color), (x1, y1), (x2, y2), max(1, int(width)))

    def text(self, x, y, text, color, size=16, align="left") -> None:
        image = self._font(size).render(text, True, pygame.Color(color))
        rect = image.get_rect()
        if align == "right":
            rect.bottomright = (int(x), int(y))
        elif align == "center":
            rect.midbottom = (int(x), int(y))
        else:
            rect.bottomleft = (int(x), int(y))
        self.screen.blit(image, rect)


def open_window(config: ArcadeConfig, title: str) -> PygameSurface:
    pygame.init()
    screen = pygame.display.set_mode((config.canvas_width, config.canvas_height))
    pygame.display.set_caption(title)
    return PygameSurface(screen)


def run_window(loop: FrameLoop, scheduler: ManualScheduler, surface: PygameSurface, config: ArcadeConfig) -> None:
    """Pump frames at the configured rate until the window is closed.

    P pauses/resumes, R resets, ESC quits.
    """
    clock = pygame.time.Clock()
    drag_origin: list[tuple[int, int] | None] = [None]
    loop.start()
    try:
        while _handle_events(loop, drag_origin):
            scheduler.pump()
            surface.text(10, config.canvas_height - 10, f"SCORE {loop.score}", "#FFFFFF", 16)
            if loop.status == EngineStatus.GAME_OVER:
                surface.text(config.canvas_width / 2, config.canvas_height / 2,
                             "GAME OVER - press R", "#FFFFFF", 28, align="center")
            pygame.display.flip()
            clock.tick(config.frames_per_second)
    finally:
        loop.cleanup()
        pygame.quit()
        logger.info("Window closed with score %d", loop.score)


def _handle_events(loop: FrameLoop, drag_origin: list[tuple[int, int] | None]) -> bool:
    adapter = loop.adapter
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            pressed = event.type == pygame.KEYDOWN
            if pressed and event.key == pygame.K_ESCAPE:
                return False
            if pressed and event.key == pygame.K_p:
                if loop.status == EngineStatus.RUNNING:
                    loop.pause()
                elif loop.status == EngineStatus.PAUSED:
                    loop.resume()
            elif pressed and event.key == pygame.K_r:
                loop.reset()
            elif event.key in PYGAME_KEY_CODES:
                adapter.handle_key(PYGAME_KEY_CODES[event.key], pressed)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            drag_origin[0] = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and drag_origin[0] is not None:
            ox, oy = drag_origin[0]
            dx, dy = event.pos[0] - ox, event.pos[1] - oy
            drag_origin[0] = None
            if math.hypot(dx, dy) <= TAP_RADIUS:
                adapter.gesture(Gesture(GestureKind.TAP, x=event.pos[0], y=event.pos[1]))
            else:
                adapter.gesture(Gesture(GestureKind.SWIPE, dx=dx, dy=dy))
                adapter.gesture(Gesture(GestureKind.DRAG, dx=dx))
    return True

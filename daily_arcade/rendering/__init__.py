"""Drawing surfaces. ``pygame_surface`` is imported lazily (optional ``play`` extra)."""

from daily_arcade.rendering.surface import DrawCommand, DrawList, Surface

__all__ = ["DrawCommand", "DrawList", "Surface"]

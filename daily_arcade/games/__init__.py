"""Concrete game engines."""

from daily_arcade.games.frogger import FroggerEngine
from daily_arcade.games.pacman import PacmanEngine
from daily_arcade.games.space_invaders import SpaceInvadersEngine

__all__ = ["FroggerEngine", "PacmanEngine", "SpaceInvadersEngine"]

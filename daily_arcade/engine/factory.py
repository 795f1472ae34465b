"""Engine construction by game type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from daily_arcade.core.enums import GameType
from daily_arcade.games.frogger import FroggerEngine
from daily_arcade.games.pacman import PacmanEngine
from daily_arcade.games.space_invaders import SpaceInvadersEngine

if TYPE_CHECKING:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.base import GameEngine

logger = logging.getLogger(__name__)


def create_engine(game_type: GameType, parameters: GameParameters, config: ArcadeConfig) -> GameEngine:
    """Build the engine for *game_type* on the configured canvas."""
    width, height = config.canvas_width, config.canvas_height
    match game_type:
        case GameType.PACMAN:
            engine: GameEngine = PacmanEngine(parameters, width, height)
        case GameType.SPACE_INVADERS:
            engine = SpaceInvadersEngine(parameters, width, height, config.wave_delay_frames)
        case GameType.FROGGER:
            engine = FroggerEngine(parameters, width, height)
        case _:
            raise ValueError(f"unknown game type {game_type!r}")
    logger.info("Created %s engine (%s, seed %d)",
                game_type.value, parameters.difficulty.value, parameters.layout_seed)
    return engine

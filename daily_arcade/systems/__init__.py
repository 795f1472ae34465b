"""Arcade systems: random sources and variation generation."""

from daily_arcade.systems.rng import DeterministicRNG, LayoutRandom, lcg_next
from daily_arcade.systems.variation_generator import (
    generate_daily_game,
    generate_game_variation,
    generate_multiple_variations,
    generate_random_parameters,
)

__all__ = [
    "DeterministicRNG",
    "LayoutRandom",
    "generate_daily_game",
    "generate_game_variation",
    "generate_multiple_variations",
    "generate_random_parameters",
    "lcg_next",
]

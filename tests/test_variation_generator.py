"""Tests for seeded and daily variation generation."""

import sys
import os
import datetime as dt
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.core.catalog import SPECIAL_FEATURES, THEME_COLORS
from daily_arcade.core.enums import Difficulty, GameType
from daily_arcade.systems.variation_generator import (
    date_seed,
    generate_daily_game,
    generate_game_variation,
    generate_multiple_variations,
    generate_random_parameters,
)


class TestRandomParameters:
    def test_same_seed_same_parameters(self):
        assert generate_random_parameters(GameType.PACMAN, 42) == generate_random_parameters(GameType.PACMAN, 42)

    def test_seed_42_draws(self):
        params = generate_random_parameters(GameType.PACMAN, 42)
        assert params.difficulty == Difficulty.EXPERT
        assert params.enemy_count == 8
        assert params.lives_count == 2
        assert params.time_limit is not None and 60 <= params.time_limit < 120
        assert len(params.special_features) == 3

    @pytest.mark.parametrize("game_type", list(GameType))
    def test_parameter_ranges(self, game_type):
        for seed in range(0, 300, 7):
            p = generate_random_parameters(game_type, seed)
            assert 0.55 <= p.speed_multiplier <= 1.75
            assert 3 <= p.enemy_count <= 8
            assert 0.1 <= p.bonus_frequency <= 0.4
            assert 1 <= p.theme_id <= 5
            assert p.custom_colors == THEME_COLORS[p.theme_id]
            assert set(p.special_features) <= set(SPECIAL_FEATURES[game_type])
            assert len(set(p.special_features)) == len(p.special_features)
            if p.difficulty in (Difficulty.EASY, Difficulty.MEDIUM):
                assert p.time_limit is None
            else:
                assert 60 <= p.time_limit < 120

    def test_layout_seed_differs_from_input(self):
        assert generate_random_parameters(GameType.FROGGER, 42).layout_seed != 42


class TestVariation:
    def test_scenario_pacman_seed_42(self):
        v = generate_game_variation(1, GameType.PACMAN, "2024-01-01", 42)
        assert v.id == 1
        assert v.game_type == GameType.PACMAN
        assert v.date_created == "2024-01-01"
        assert v.name.endswith("Challenge")
        assert "Speed:" in v.description
        assert v == generate_game_variation(1, GameType.PACMAN, "2024-01-01", 42)

    def test_to_dict_is_camel_case(self):
        data = generate_game_variation(3, GameType.FROGGER, "2024-02-02", 5).to_dict()
        assert data["gameType"] == "frogger"
        assert data["dateCreated"] == "2024-02-02"
        assert "layoutSeed" in data["parameters"]

    def test_random_seed_when_omitted(self):
        v = generate_game_variation(9, GameType.SPACE_INVADERS, "2024-01-01")
        assert v.parameters == generate_random_parameters(GameType.SPACE_INVADERS, v.seed)


class TestDailyGame:
    def test_date_seed(self):
        assert date_seed("2024-01-01") == 484

    def test_daily_rotation_and_id(self):
        v = generate_daily_game("2024-01-01")
        assert v.game_type == GameType.SPACE_INVADERS
        assert v.id == 484

    def test_same_date_same_game(self):
        assert generate_daily_game("2025-06-30") == generate_daily_game(dt.date(2025, 6, 30))

    def test_multiple_variations(self):
        start = dt.date(2024, 1, 1)
        variations = generate_multiple_variations(6, start)
        assert [v.id for v in variations] == [1, 2, 3, 4, 5, 6]
        assert [v.game_type for v in variations[:3]] == [GameType.PACMAN, GameType.SPACE_INVADERS, GameType.FROGGER]
        assert variations[2].date_created == "2024-01-03"
        assert generate_multiple_variations(0) == []

"""Tests for the Frogger engine: hopping, traffic, the river and homes."""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.core.enums import Action, GameOutcome, GameType, GestureKind
from daily_arcade.core.models import Rect
from daily_arcade.core.parameters import GameParameters
from daily_arcade.engine.input import Gesture, InputSnapshot
from daily_arcade.games.frogger import (
    ALL_HOMES_BONUS,
    HOME_POINTS,
    MOVE_COOLDOWN,
    FroggerEngine,
    Mover,
)
from daily_arcade.systems.variation_generator import generate_random_parameters
from tests.helpers.recording_host import RecordingHost

IDLE = InputSnapshot()


def _empty(lives=3, features=()):
    """Engine with no traffic so only the frog's own position matters."""
    engine = FroggerEngine(GameParameters(lives_count=lives, special_features=features))
    engine.cars = []
    engine.logs = []
    return engine


def _place(engine, x, y):
    engine.frog.rect = Rect(x, y, 30, 30)


class TestHopping:
    def test_hop_up_and_cooldown(self):
        engine = _empty()
        y = engine.frog.rect.y
        engine.update(InputSnapshot(frozenset({Action.UP})), RecordingHost())
        assert engine.frog.rect.y == y - 40
        assert engine.move_cooldown == MOVE_COOLDOWN
        engine.update(InputSnapshot(frozenset({Action.UP})), RecordingHost())
        assert engine.frog.rect.y == y - 40

    def test_double_speed_halves_cooldown(self):
        engine = _empty(features=("double_speed",))
        engine.hop(Action.LEFT)
        assert engine.move_cooldown == MOVE_COOLDOWN // 2

    def test_swipe_hops(self):
        engine = _empty()
        x = engine.frog.rect.x
        swipe = Gesture(GestureKind.SWIPE, dx=60, dy=5)
        engine.update(InputSnapshot(gestures=(swipe,)), RecordingHost())
        assert engine.frog.rect.x == x + 30

    def test_short_swipe_ignored(self):
        engine = _empty()
        y = engine.frog.rect.y
        engine.update(InputSnapshot(gestures=(Gesture(GestureKind.SWIPE, dy=-10),)), RecordingHost())
        assert engine.frog.rect.y == y

    def test_hop_clamped_to_canvas(self):
        engine = _empty()
        engine.hop(Action.DOWN)
        assert engine.frog.rect.bottom <= engine.height


class TestHazards:
    def test_car_hit_costs_life_and_respawns(self):
        engine = _empty()
        _place(engine, 100, 285)
        engine.cars = [Mover(Rect(90, 285, 60, 30), 0.0)]
        host = RecordingHost()
        engine.update(IDLE, host)
        assert engine.frog.lives == 2
        assert engine.frog.rect.y == engine.height - 35

    def test_water_without_log_kills(self):
        engine = _empty(lives=1)
        _place(engine, 100, 125)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert engine.frog.lives == 0
        assert host.outcome == GameOutcome.LOSS

    def test_log_carries_frog(self):
        engine = _empty()
        _place(engine, 100, 125)
        engine.logs = [Mover(Rect(80, 125, 120, 30), 2.0)]
        engine.update(IDLE, RecordingHost())
        assert engine.frog.lives == 3
        assert engine.frog.rect.x == 102

    def test_median_is_safe(self):
        engine = FroggerEngine(generate_random_parameters(GameType.FROGGER, 11))
        _place(engine, 300, 245)
        host = RecordingHost()
        for _ in range(50):
            engine.update(IDLE, host)
        assert engine.frog.lives == engine.parameters.lives_count
        assert not engine.in_river


class TestHomes:
    def test_reaching_home_scores_and_respawns(self):
        engine = _empty()
        _place(engine, 49, 45)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert engine.homes[0].filled
        assert host.score == HOME_POINTS
        assert engine.frog.rect.y == engine.height - 35

    def test_filled_home_kills(self):
        engine = _empty()
        engine.homes[0].filled = True
        _place(engine, 49, 45)
        engine.update(IDLE, RecordingHost())
        assert engine.frog.lives == 2

    def test_between_slots_stays_on_bank(self):
        engine = _empty()
        _place(engine, 113, 45)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert host.score == 0
        assert engine.frog.lives == 3
        assert engine.frog.rect.y == 45

    def test_all_homes_win(self):
        engine = _empty()
        for home in engine.homes[1:]:
            home.filled = True
        _place(engine, 49, 45)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert host.score == HOME_POINTS + ALL_HOMES_BONUS
        assert host.outcome == GameOutcome.WIN


class TestLanes:
    @pytest.mark.parametrize("seed", [3, 42, 2024])
    def test_lane_counts_and_speeds(self, seed):
        engine = FroggerEngine(generate_random_parameters(GameType.FROGGER, seed))
        car_lanes, log_lanes = {}, {}
        for car in engine.cars:
            car_lanes.setdefault(car.rect.y, set()).add(car.speed)
        for log in engine.logs:
            log_lanes.setdefault(log.rect.y, set()).add(log.speed)
        assert len(car_lanes) == 4 and len(log_lanes) == 4
        assert all(len(speeds) == 1 for speeds in car_lanes.values())
        assert 12 <= len(engine.cars) <= 16
        assert 8 <= len(engine.logs) <= 12

    def test_lanes_alternate_direction(self):
        engine = FroggerEngine(GameParameters(layout_seed=8))
        speeds = sorted({(c.rect.y, c.speed) for c in engine.cars})
        assert [s > 0 for _, s in speeds] == [True, False, True, False]

    def test_reset_restores_traffic(self):
        engine = FroggerEngine(GameParameters(layout_seed=8))
        before = [c.rect.copy() for c in engine.cars]
        for _ in range(20):
            engine.update(IDLE, RecordingHost())
        engine.reset()
        assert [c.rect for c in engine.cars] == before

"""Tests for the Space Invaders engine: formation, shooting, waves and lives."""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.core.enums import Action, Difficulty, GameOutcome, GestureKind
from daily_arcade.core.models import Rect
from daily_arcade.core.parameters import GameParameters
from daily_arcade.engine.input import Gesture, InputSnapshot
from daily_arcade.games.space_invaders import (
    FIRE_COOLDOWN,
    INVULNERABLE_FRAMES,
    Bullet,
    SpaceInvadersEngine,
)
from tests.helpers.recording_host import RecordingHost

IDLE = InputSnapshot()
FIRE = InputSnapshot(frozenset({Action.FIRE}))


def _easy(**overrides):
    params = GameParameters(difficulty=Difficulty.EASY, enemy_count=4, lives_count=5, **overrides)
    return SpaceInvadersEngine(params, wave_delay_frames=60)


def _bullet_under(engine, enemy):
    r = enemy.rect
    return Bullet(Rect(r.center_x - 2, r.bottom + 2, 4, 10), 7.0)


class TestFormation:
    def test_easy_four_gives_forty_invaders(self):
        engine = _easy()
        assert SpaceInvadersEngine.formation_shape(4) == (4, 10)
        assert len(engine.enemies) == 40
        assert engine.player.lives == 5

    def test_large_formation_capped(self):
        assert SpaceInvadersEngine.formation_shape(8) == (6, 12)

    def test_top_row_worth_most(self):
        engine = _easy()
        assert engine.enemies[0].points == 40
        assert engine.enemies[-1].points == 10

    def test_hard_adds_extra_invaders(self):
        engine = SpaceInvadersEngine(GameParameters(difficulty=Difficulty.HARD, enemy_count=4, layout_seed=9))
        extras = [e for e in engine.enemies if e.row == -1]
        assert 3 <= len(extras) <= 7

    def test_expert_jitter_is_seeded(self):
        params = GameParameters(difficulty=Difficulty.EXPERT, enemy_count=4, layout_seed=31)
        a, b = SpaceInvadersEngine(params), SpaceInvadersEngine(params)
        assert [e.rect for e in a.enemies] == [e.rect for e in b.enemies]

    def test_formation_reaching_cannon_loses(self):
        engine = _easy()
        engine.enemies[0].rect.y = engine.player.rect.y - 10
        host = RecordingHost()
        engine.update(IDLE, host)
        assert host.outcome == GameOutcome.LOSS


class TestShooting:
    def test_fire_respects_cooldown(self):
        engine = _easy()
        host = RecordingHost()
        engine.update(FIRE, host)
        assert len(engine.bullets) == 1
        assert engine.fire_cooldown == FIRE_COOLDOWN[Difficulty.EASY]
        engine.update(FIRE, host)
        assert len(engine.bullets) == 1

    def test_multi_shot_fires_two(self):
        engine = _easy(special_features=("multi_shot",))
        engine.shoot()
        assert len(engine.bullets) == 2

    def test_rapid_fire_halves_cooldown(self):
        engine = _easy(special_features=("rapid_fire",))
        engine.shoot()
        assert engine.fire_cooldown == FIRE_COOLDOWN[Difficulty.EASY] // 2

    def test_tap_fires(self):
        engine = _easy()
        engine.update(InputSnapshot(gestures=(Gesture(GestureKind.TAP),)), RecordingHost())
        assert len(engine.bullets) == 1

    def test_kill_awards_points(self):
        engine = _easy()
        target = engine.enemies[-1]
        engine.bullets = [_bullet_under(engine, target)]
        host = RecordingHost()
        engine.update(IDLE, host)
        assert not target.alive
        assert host.score == target.points
        assert engine.bullets == []

    def test_cannon_clamped_to_canvas(self):
        engine = _easy()
        left = InputSnapshot(frozenset({Action.LEFT}))
        for _ in range(200):
            engine.update(left, RecordingHost())
        assert engine.player.rect.x == 0


class TestWaves:
    def _clear_all_but_last(self, engine):
        for enemy in engine.enemies[:-1]:
            enemy.alive = False
        engine.bullets = [_bullet_under(engine, engine.enemies[-1])]

    def test_next_wave_after_delay(self):
        engine = _easy()
        host = RecordingHost()
        self._clear_all_but_last(engine)
        engine.update(IDLE, host)
        assert engine.alive_count == 0
        assert len(host.tasks) == 1
        assert host.tasks[0].due_frame == host.frame + 60
        assert engine.stats()["waveScheduled"]

        engine.update(IDLE, host)
        assert len(host.tasks) == 1

        host.advance(59)
        assert engine.level == 1
        host.advance(1)
        assert engine.level == 2
        assert engine.alive_count == 40
        assert engine.move_speed == pytest.approx(0.8 + 0.2)

    def test_stale_wave_dropped_after_reset(self):
        engine = _easy()
        host = RecordingHost()
        self._clear_all_but_last(engine)
        engine.update(IDLE, host)
        engine.reset()
        engine.enemies[0].alive = False
        host.advance(60)
        assert engine.level == 1
        assert engine.alive_count == 39


class TestLives:
    def _hit(self, engine):
        p = engine.player.rect
        engine.enemy_bullets = [Bullet(Rect(p.center_x - 2, p.y - 5, 4, 10), 3.0)]

    def test_hit_costs_life_and_grants_invulnerability(self):
        engine = _easy()
        self._hit(engine)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert engine.player.lives == 4
        assert engine.player.invulnerable == INVULNERABLE_FRAMES
        self._hit(engine)
        engine.update(IDLE, host)
        assert engine.player.lives == 4

    def test_shield_boost_doubles_invulnerability(self):
        engine = _easy(special_features=("shield_boost",))
        self._hit(engine)
        engine.update(IDLE, RecordingHost())
        assert engine.player.invulnerable == 2 * INVULNERABLE_FRAMES

    def test_last_life_loses(self):
        engine = SpaceInvadersEngine(GameParameters(difficulty=Difficulty.EASY, lives_count=1))
        self._hit(engine)
        host = RecordingHost()
        engine.update(IDLE, host)
        assert host.outcome == GameOutcome.LOSS


class TestEnemyFire:
    def test_enemy_fire_is_deterministic(self):
        params = GameParameters(difficulty=Difficulty.HARD, enemy_count=4, layout_seed=555)
        runs = []
        for _ in range(2):
            engine = SpaceInvadersEngine(params)
            host = RecordingHost()
            shots = []
            for _ in range(240):
                engine.update(IDLE, host)
                host.advance()
                shots.append(tuple((b.rect.x, b.rect.y) for b in engine.enemy_bullets))
            runs.append(shots)
        assert runs[0] == runs[1]
        assert any(runs[0])

    def test_initial_cooldown(self):
        engine = _easy()
        host = RecordingHost()
        for _ in range(60):
            engine.update(IDLE, host)
        assert engine.enemy_bullets == []
        engine.update(IDLE, host)
        assert len(engine.enemy_bullets) == 1

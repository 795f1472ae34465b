"""Tests for the two deterministic random sources."""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.core.enums import Domain
from daily_arcade.systems.rng import LCG_MODULUS, DeterministicRNG, LayoutRandom, lcg_next


class TestLayoutRandom:
    def test_lcg_is_bit_exact(self):
        value, state = lcg_next(12345)
        assert state == 96382
        assert value == 96382 / 233280
        _, state = lcg_next(state)
        assert state == 3239

    def test_handle_writes_state_back(self):
        rng = LayoutRandom(12345)
        rng.next()
        assert rng.state == 96382
        rng.next()
        assert rng.state == 3239
        assert rng.draws == 2

    def test_values_in_unit_interval(self):
        rng = LayoutRandom(987)
        for _ in range(2000):
            v = rng.next()
            assert 0.0 <= v < 1.0

    def test_same_seed_same_sequence(self):
        a, b = LayoutRandom(42), LayoutRandom(42)
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_restart_replays_sequence(self):
        rng = LayoutRandom(777)
        first = [rng.next() for _ in range(20)]
        rng.restart()
        assert [rng.next() for _ in range(20)] == first

    def test_seed_zero_is_valid(self):
        rng = LayoutRandom(0)
        assert rng.next() == 49297 / LCG_MODULUS

    def test_below_stays_in_range(self):
        rng = LayoutRandom(5)
        assert all(0 <= rng.below(7) < 7 for _ in range(500))


class TestDeterministicRNG:
    def test_pure_function_of_inputs(self):
        rng = DeterministicRNG(42)
        assert rng.next_float(Domain.ENEMY_FIRE, 1, 10) == rng.next_float(Domain.ENEMY_FIRE, 1, 10)
        assert DeterministicRNG(42).next_float(Domain.FLAVOR, 0, 0) == rng.next_float(Domain.FLAVOR, 0, 0)

    def test_domains_are_separated(self):
        rng = DeterministicRNG(42)
        values = {rng.next_float(d, 0, 0) for d in Domain}
        assert len(values) == len(Domain)

    @pytest.mark.parametrize("low,high", [(0, 0), (0, 4), (-3, 3), (10, 99)])
    def test_next_int_inclusive_bounds(self, low, high):
        rng = DeterministicRNG(9)
        seen = {rng.next_int(Domain.AUTOPILOT, 0, t, low, high) for t in range(400)}
        assert min(seen) >= low and max(seen) <= high

    def test_choice_covers_options(self):
        rng = DeterministicRNG(3)
        options = ("a", "b", "c")
        picks = {rng.choice(Domain.FLAVOR, 0, t, options) for t in range(200)}
        assert picks == set(options)

"""Tests for the shared geometry and collision helpers."""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.core.models import (
    Rect,
    Vector2,
    circle_hits_rect,
    circles_overlap,
    clamp,
    distance,
    rects_overlap,
)


class TestRects:
    def test_overlap(self):
        assert rects_overlap(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_touching_edges_do_not_collide(self):
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))

    def test_containment(self):
        assert Rect(0, 0, 100, 100).overlaps(Rect(40, 40, 5, 5))

    def test_edges_and_centre(self):
        r = Rect(10, 20, 30, 40)
        assert (r.right, r.bottom, r.center_x, r.center_y) == (40, 60, 25, 40)

    def test_copy_is_independent(self):
        r = Rect(1, 2, 3, 4)
        c = r.copy()
        c.x = 99
        assert r.x == 1


class TestCircles:
    @pytest.mark.parametrize("dx,expected", [(19.9, True), (20.0, False), (25, False)])
    def test_circles_strict(self, dx, expected):
        assert circles_overlap(0, 0, 10, dx, 0, 10) is expected

    def test_circle_rect_nearest_point(self):
        wall = Rect(10, -5, 10, 10)
        assert circle_hits_rect(0, 0, 11, wall)
        assert not circle_hits_rect(0, 0, 10, wall)

    def test_circle_inside_rect(self):
        assert circle_hits_rect(5, 5, 1, Rect(0, 0, 10, 10))


class TestVectors:
    def test_arithmetic(self):
        assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)
        assert Vector2(1, 2) - Vector2(1, 1) == Vector2(0, 1)
        assert Vector2(1, -1).scaled(3) == Vector2(3, -3)
        assert Vector2(1, 0).reversed() == Vector2(-1, 0)

    def test_distance_and_clamp(self):
        assert distance(0, 0, 3, 4) == 5
        assert clamp(-5, 0, 10) == 0
        assert clamp(15, 0, 10) == 10
        assert clamp(5, 0, 10) == 5

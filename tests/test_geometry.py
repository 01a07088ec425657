"""
Unit tests for the vector helpers.
"""

import math

import pytest

from models import Point2D
from perimeter.entities import Player, Projectile
from perimeter.geometry import (
    angle_between,
    circle_outside,
    circles_touch,
    distance,
    unit_velocity,
)


class TestVectors:
    """Tests for angles, unit vectors and distance."""

    def test_angle_between_axes(self):
        origin = Point2D(x=400, y=300)
        assert angle_between(origin, Point2D(x=800, y=300)) == 0.0
        assert angle_between(origin, Point2D(x=400, y=600)) == pytest.approx(math.pi / 2)
        assert angle_between(origin, Point2D(x=0, y=300)) == pytest.approx(math.pi)

    def test_unit_velocity_has_length_one(self):
        for angle in (0.0, 0.3, 1.0, 2.5, -2.0):
            v = unit_velocity(angle)
            assert math.hypot(v.x, v.y) == pytest.approx(1.0)

    def test_unit_velocity_along_x(self):
        v = unit_velocity(0.0)
        assert (v.x, v.y) == (1.0, 0.0)

    def test_distance(self):
        assert distance(Point2D(x=0, y=0), Point2D(x=3, y=4)) == 5.0


class TestCirclesTouch:
    """The collision test treats a gap under the tolerance as contact."""

    def make(self, x, radius):
        return Player(x=x, y=0, radius=radius)

    def test_overlap(self):
        assert circles_touch(self.make(0, 10), self.make(5, 10), 1.0)

    def test_gap_below_tolerance(self):
        assert circles_touch(self.make(0, 10), self.make(20.5, 10), 1.0)

    def test_gap_equal_to_tolerance(self):
        assert not circles_touch(self.make(0, 10), self.make(21, 10), 1.0)

    def test_far_apart(self):
        assert not circles_touch(self.make(0, 10), self.make(100, 10), 1.0)


class TestCircleOutside:
    """A circle is outside once any part crosses an edge."""

    @pytest.mark.parametrize("x, y", [(4, 300), (796, 300), (400, 4), (400, 596)])
    def test_crossing_each_edge(self, x, y):
        assert circle_outside(x, y, 5, 800, 600)

    @pytest.mark.parametrize("x, y", [(5, 300), (795, 300), (400, 5), (400, 595), (400, 300)])
    def test_touching_edge_is_inside(self, x, y):
        assert not circle_outside(x, y, 5, 800, 600)

    def test_projectile_update(self):
        projectile = Projectile(x=0, y=0, velocity=Point2D(x=1.5, y=-2.0))
        projectile.update()
        assert (projectile.x, projectile.y) == (1.5, -2.0)

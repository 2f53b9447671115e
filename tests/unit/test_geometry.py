"""Unit tests for vector helpers.

Tests cover:
- Distance and direction helpers
- Polar conversion and interpolation
- Wrapped modulo arithmetic
- Collinearity and convexity predicates
"""

import math

import pytest

from shapemorph.domain import Point
from shapemorph.domain.geometry import (
    collinear_ish,
    convex,
    direction_vector,
    direction_vector_angle,
    distance,
    distance_squared,
    interpolate,
    interpolate_point,
    positive_modulo,
    radial_to_cartesian,
)


class TestDistance:
    """Tests for scalar distance helpers."""

    def test_distance(self):
        """3-4-5 triangle."""
        assert distance(3.0, 4.0) == pytest.approx(5.0)
        assert distance_squared(3.0, 4.0) == pytest.approx(25.0)

    def test_direction_vector(self):
        """Normalized vector has unit length."""
        d = direction_vector(0.0, -2.0)
        assert d == Point(0.0, -1.0)

    def test_direction_vector_angle(self):
        """Angle zero points along +X, pi/2 along +Y."""
        d0 = direction_vector_angle(0.0)
        d90 = direction_vector_angle(math.pi / 2)
        assert (d0.x, d0.y) == pytest.approx((1.0, 0.0))
        assert (d90.x, d90.y) == pytest.approx((0.0, 1.0))


class TestPolarAndInterpolation:
    """Tests for polar conversion and linear interpolation."""

    def test_radial_to_cartesian_default_center(self):
        """Default center is the origin."""
        p = radial_to_cartesian(2.0, math.pi)
        assert (p.x, p.y) == pytest.approx((-2.0, 0.0))

    def test_radial_to_cartesian_offset_center(self):
        """Points are offset by the center."""
        p = radial_to_cartesian(1.0, math.pi / 2, Point(5.0, 5.0))
        assert (p.x, p.y) == pytest.approx((5.0, 6.0))

    def test_interpolate(self):
        """Interpolation hits both ends and the midpoint."""
        assert interpolate(2.0, 4.0, 0.0) == 2.0
        assert interpolate(2.0, 4.0, 1.0) == 4.0
        assert interpolate(2.0, 4.0, 0.5) == 3.0

    def test_interpolate_extrapolates(self):
        """Fractions outside [0, 1] are not clamped."""
        assert interpolate(0.0, 1.0, 1.5) == pytest.approx(1.5)
        assert interpolate(0.0, 1.0, -0.5) == pytest.approx(-0.5)

    def test_interpolate_point(self):
        """Component-wise interpolation."""
        p = interpolate_point(Point(0.0, 0.0), Point(2.0, 4.0), 0.25)
        assert (p.x, p.y) == pytest.approx((0.5, 1.0))


class TestPositiveModulo:
    """Tests for wrapped modulo."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.25, 0.25),
            (-0.25, 0.75),
            (1.25, 0.25),
            (-1.75, 0.25),
            (0.0, 0.0),
        ],
    )
    def test_wraps_into_unit_range(self, value, expected):
        """Results always land in [0, 1)."""
        assert positive_modulo(value, 1.0) == pytest.approx(expected)


class TestPredicates:
    """Tests for collinear_ish and convex."""

    def test_collinear_points(self):
        """Point on the line through A and B."""
        assert collinear_ish(0, 0, 2, 2, 1, 1)

    def test_collinear_point_beyond_segment(self):
        """The line is unbounded."""
        assert collinear_ish(0, 0, 1, 0, 5, 0)

    def test_not_collinear(self):
        """Clearly off the line."""
        assert not collinear_ish(0, 0, 1, 0, 0.5, 0.5)

    def test_relaxed_tolerance(self):
        """A looser tolerance accepts small deviations."""
        assert not collinear_ish(0, 0, 1, 0, 0.5, 0.003)
        assert collinear_ish(0, 0, 1, 0, 0.5, 0.003, tolerance=5e-3)

    def test_convex_counter_clockwise_turn(self):
        """A left turn is convex."""
        assert convex(Point(0, 0), Point(1, 0), Point(1, 1))

    def test_concave_clockwise_turn(self):
        """A right turn is concave."""
        assert not convex(Point(0, 0), Point(1, 0), Point(1, -1))

    def test_straight_is_not_convex(self):
        """No turn is not convex."""
        assert not convex(Point(0, 0), Point(1, 0), Point(2, 0))

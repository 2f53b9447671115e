"""Cubic Bezier segment type.

A Cubic is the unit every outline in shapemorph is made of: start anchor,
two control points, end anchor. Cubics are immutable; splitting, reversing
and transforming all return new instances.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from shapemorph.domain.geometry import (
    DISTANCE_EPSILON,
    Point,
    convex,
    direction_vector,
    distance,
    interpolate,
)

# Maps (x, y) to a new point; may return a Point or any (x, y) pair.
PointTransformer = Callable[[float, float], Iterable[float]]


def _axis_extrema_ts(a: float, b: float, c: float) -> list[float]:
    """Roots in [0, 1] of the per-axis derivative a*t^2 + b*t + c."""
    if abs(a) < DISTANCE_EPSILON:
        if b != 0:
            t = (2 * c) / (-2 * b)
            if 0 <= t <= 1:
                return [t]
        return []

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return []

    sqrt_d = math.sqrt(discriminant)
    return [t for t in ((-b + sqrt_d) / (2 * a), (-b - sqrt_d) / (2 * a)) if 0 <= t <= 1]


@dataclass(frozen=True, slots=True)
class Cubic:
    """A single cubic Bezier segment over t in [0, 1].

    Attributes:
        anchor0_x: X of the start anchor
        anchor0_y: Y of the start anchor
        control0_x: X of the first control point
        control0_y: Y of the first control point
        control1_x: X of the second control point
        control1_y: Y of the second control point
        anchor1_x: X of the end anchor
        anchor1_y: Y of the end anchor
    """

    anchor0_x: float
    anchor0_y: float
    control0_x: float
    control0_y: float
    control1_x: float
    control1_y: float
    anchor1_x: float
    anchor1_y: float

    @classmethod
    def from_points(cls, points: Iterable[float]) -> "Cubic":
        """Build a cubic from a flat sequence of 8 coordinates.

        Raises:
            ValueError: If the sequence does not hold exactly 8 values
        """
        values = tuple(float(v) for v in points)
        if len(values) != 8:
            raise ValueError(f"Expected 8 coordinates for a cubic, got {len(values)}")
        return cls(*values)

    @property
    def points(self) -> tuple[float, ...]:
        """All 8 coordinates in anchor0, control0, control1, anchor1 order."""
        return (
            self.anchor0_x,
            self.anchor0_y,
            self.control0_x,
            self.control0_y,
            self.control1_x,
            self.control1_y,
            self.anchor1_x,
            self.anchor1_y,
        )

    @property
    def anchor0(self) -> Point:
        return Point(self.anchor0_x, self.anchor0_y)

    @property
    def control0(self) -> Point:
        return Point(self.control0_x, self.control0_y)

    @property
    def control1(self) -> Point:
        return Point(self.control1_x, self.control1_y)

    @property
    def anchor1(self) -> Point:
        return Point(self.anchor1_x, self.anchor1_y)

    def point_on_curve(self, t: float) -> Point:
        """Evaluate the curve at parameter t.

        No clamping is applied; callers keep t within [0, 1] when needed.
        """
        u = 1 - t
        return Point(
            self.anchor0_x * (u * u * u)
            + self.control0_x * (3 * t * u * u)
            + self.control1_x * (3 * t * t * u)
            + self.anchor1_x * (t * t * t),
            self.anchor0_y * (u * u * u)
            + self.control0_y * (3 * t * u * u)
            + self.control1_y * (3 * t * t * u)
            + self.anchor1_y * (t * t * t),
        )

    def zero_length(self) -> bool:
        """True when both anchors coincide within DISTANCE_EPSILON."""
        return (
            abs(self.anchor0_x - self.anchor1_x) < DISTANCE_EPSILON
            and abs(self.anchor0_y - self.anchor1_y) < DISTANCE_EPSILON
        )

    def convex_to(self, next_cubic: "Cubic") -> bool:
        """Whether the corner formed with the following cubic turns convexly.

        Uses this cubic's anchors and the end anchor of ``next_cubic``.
        """
        return convex(self.anchor0, self.anchor1, next_cubic.anchor1)

    def split(self, t: float) -> tuple["Cubic", "Cubic"]:
        """Split into two cubics at t using de Casteljau subdivision.

        Valid for any t in [0, 1]; t at either end yields a zero-length half.

        Args:
            t: Curve parameter to split at

        Returns:
            Tuple of (first half, second half)
        """
        u = 1 - t
        poc = self.point_on_curve(t)
        first = Cubic(
            self.anchor0_x,
            self.anchor0_y,
            self.anchor0_x * u + self.control0_x * t,
            self.anchor0_y * u + self.control0_y * t,
            self.anchor0_x * (u * u) + self.control0_x * (2 * u * t) + self.control1_x * (t * t),
            self.anchor0_y * (u * u) + self.control0_y * (2 * u * t) + self.control1_y * (t * t),
            poc.x,
            poc.y,
        )
        second = Cubic(
            poc.x,
            poc.y,
            self.control0_x * (u * u) + self.control1_x * (2 * u * t) + self.anchor1_x * (t * t),
            self.control0_y * (u * u) + self.control1_y * (2 * u * t) + self.anchor1_y * (t * t),
            self.control1_x * u + self.anchor1_x * t,
            self.control1_y * u + self.anchor1_y * t,
            self.anchor1_x,
            self.anchor1_y,
        )
        return first, second

    def reverse(self) -> "Cubic":
        """The same curve traversed from end to start."""
        return Cubic(
            self.anchor1_x,
            self.anchor1_y,
            self.control1_x,
            self.control1_y,
            self.control0_x,
            self.control0_y,
            self.anchor0_x,
            self.anchor0_y,
        )

    def transformed(self, f: PointTransformer) -> "Cubic":
        """Apply a coordinate mapping to all four points.

        Args:
            f: Function taking (x, y) and returning the mapped point

        Returns:
            New cubic with every point mapped
        """
        coords: list[float] = []
        for x, y in (self.anchor0, self.control0, self.control1, self.anchor1):
            nx, ny = f(x, y)
            coords.extend((nx, ny))
        return Cubic(*coords)

    def calculate_bounds(self, approximate: bool = True) -> tuple[float, float, float, float]:
        """Axis-aligned bounding box of the curve.

        The approximate path includes the control points and so may
        over-estimate; the exact path solves the derivative per axis for
        interior extrema.

        Args:
            approximate: Use the fast control-point hull

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self.zero_length():
            return (self.anchor0_x, self.anchor0_y, self.anchor0_x, self.anchor0_y)

        min_x = min(self.anchor0_x, self.anchor1_x)
        min_y = min(self.anchor0_y, self.anchor1_y)
        max_x = max(self.anchor0_x, self.anchor1_x)
        max_y = max(self.anchor0_y, self.anchor1_y)

        if approximate:
            return (
                min(min_x, self.control0_x, self.control1_x),
                min(min_y, self.control0_y, self.control1_y),
                max(max_x, self.control0_x, self.control1_x),
                max(max_y, self.control0_y, self.control1_y),
            )

        x_coeffs = (
            -self.anchor0_x + 3 * self.control0_x - 3 * self.control1_x + self.anchor1_x,
            2 * self.anchor0_x - 4 * self.control0_x + 2 * self.control1_x,
            -self.anchor0_x + self.control0_x,
        )
        for t in _axis_extrema_ts(*x_coeffs):
            value = self.point_on_curve(t).x
            min_x = min(min_x, value)
            max_x = max(max_x, value)

        y_coeffs = (
            -self.anchor0_y + 3 * self.control0_y - 3 * self.control1_y + self.anchor1_y,
            2 * self.anchor0_y - 4 * self.control0_y + 2 * self.control1_y,
            -self.anchor0_y + self.control0_y,
        )
        for t in _axis_extrema_ts(*y_coeffs):
            value = self.point_on_curve(t).y
            min_y = min(min_y, value)
            max_y = max(max_y, value)

        return (min_x, min_y, max_x, max_y)

    @classmethod
    def straight_line(cls, x0: float, y0: float, x1: float, y1: float) -> "Cubic":
        """A cubic that is geometrically the segment (x0, y0) -> (x1, y1)."""
        return cls(
            x0,
            y0,
            interpolate(x0, x1, 1 / 3),
            interpolate(y0, y1, 1 / 3),
            interpolate(x0, x1, 2 / 3),
            interpolate(y0, y1, 2 / 3),
            x1,
            y1,
        )

    @classmethod
    def circular_arc(
        cls,
        center_x: float,
        center_y: float,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
    ) -> "Cubic":
        """Approximate the circular arc from (x0, y0) to (x1, y1) around a center.

        The arc goes the short way round. Control points sit on the tangents
        at a distance chosen so the curve's midpoint lies on the circle. Arcs
        whose half-angle cosine exceeds 0.999 fall back to a straight line.

        Args:
            center_x: X of the circle center
            center_y: Y of the circle center
            x0: X of the arc start
            y0: Y of the arc start
            x1: X of the arc end
            y1: Y of the arc end

        Returns:
            Cubic approximating the arc
        """
        p0d = direction_vector(x0 - center_x, y0 - center_y)
        p1d = direction_vector(x1 - center_x, y1 - center_y)
        rotated_p0 = p0d.rotate90()
        rotated_p1 = p1d.rotate90()
        clockwise = rotated_p0.x * (x1 - center_x) + rotated_p0.y * (y1 - center_y) >= 0
        cosa = p0d.dot(p1d)
        if cosa > 0.999:
            return cls.straight_line(x0, y0, x1, y1)

        k = (
            distance(x0 - center_x, y0 - center_y)
            * 4
            * (math.sqrt(2 * (1 - cosa)) - math.sqrt(max(0.0, 1 - cosa * cosa)))
            / (3 * (1 - cosa))
            * (1 if clockwise else -1)
        )
        return cls(
            x0,
            y0,
            x0 + rotated_p0.x * k,
            y0 + rotated_p0.y * k,
            x1 - rotated_p1.x * k,
            y1 - rotated_p1.y * k,
            x1,
            y1,
        )

    @classmethod
    def empty(cls, x0: float, y0: float) -> "Cubic":
        """A degenerate cubic collapsed onto one point."""
        return cls(x0, y0, x0, y0, x0, y0, x0, y0)

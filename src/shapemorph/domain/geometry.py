"""Point type and 2D vector helpers.

This module defines the fundamental geometric building blocks used throughout
shapemorph:
- Point: An immutable 2D point with vector arithmetic
- Tolerance constants shared by curve, builder and matcher code
- Pure scalar/vector helpers (distance, interpolation, predicates)

Nothing here holds state; every function returns a new value.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

DISTANCE_EPSILON = 1e-4
ANGLE_EPSILON = 1e-6
RELAXED_DISTANCE_EPSILON = 5e-3


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable. Iterating a point yields ``x`` then ``y``, so
    ``x, y = point`` works and coordinate mappings may return either a Point
    or a plain ``(x, y)`` tuple.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def get_distance(self) -> float:
        """Length of this point seen as a vector from the origin."""
        return math.hypot(self.x, self.y)

    def get_distance_squared(self) -> float:
        """Squared length, avoids the square root for comparisons."""
        return self.x * self.x + self.y * self.y

    def get_direction(self) -> "Point":
        """Unit vector pointing the same way.

        Raises:
            ZeroDivisionError: If this is the zero vector
        """
        d = self.get_distance()
        return self / d

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def clockwise(self, other: "Point") -> bool:
        """True when ``other`` lies clockwise of this vector (positive cross product)."""
        return self.x * other.y - self.y * other.x > 0

    def rotate90(self) -> "Point":
        """Rotate 90 degrees: (x, y) -> (-y, x)."""
        return Point(-self.y, self.x)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


def distance(x: float, y: float) -> float:
    """Euclidean length of the vector (x, y)."""
    return math.sqrt(x * x + y * y)


def distance_squared(x: float, y: float) -> float:
    """Squared Euclidean length of the vector (x, y)."""
    return x * x + y * y


def direction_vector(x: float, y: float) -> Point:
    """Normalize (x, y) into a unit vector."""
    d = distance(x, y)
    return Point(x / d, y / d)


def direction_vector_angle(angle_radians: float) -> Point:
    """Unit vector at the given angle from the positive X axis."""
    return Point(math.cos(angle_radians), math.sin(angle_radians))


def radial_to_cartesian(
    radius: float,
    angle_radians: float,
    center: Point = Point(0.0, 0.0),
) -> Point:
    """Convert polar coordinates around ``center`` to a cartesian point.

    Examples:
        >>> radial_to_cartesian(2.0, 0.0)
        Point(x=2.0, y=0.0)
    """
    return direction_vector_angle(angle_radians) * radius + center


def interpolate(start: float, stop: float, fraction: float) -> float:
    """Linear interpolation; fractions outside [0, 1] extrapolate."""
    return (1 - fraction) * start + fraction * stop


def interpolate_point(start: Point, stop: Point, fraction: float) -> Point:
    """Component-wise linear interpolation between two points."""
    return Point(
        interpolate(start.x, stop.x, fraction),
        interpolate(start.y, stop.y, fraction),
    )


def positive_modulo(num: float, mod: float) -> float:
    """Modulo whose result always has the sign of ``mod``.

    Examples:
        >>> positive_modulo(-0.25, 1.0)
        0.75
    """
    return ((num % mod) + mod) % mod


def collinear_ish(
    a_x: float,
    a_y: float,
    b_x: float,
    b_y: float,
    c_x: float,
    c_y: float,
    tolerance: float = DISTANCE_EPSILON,
) -> bool:
    """Check whether point C lies (nearly) on the line through A and B.

    The test projects AC onto the normal of AB. It passes when the projection
    is small in absolute terms or relative to the lengths of AB and AC.

    Args:
        a_x: X of the first point on the line
        a_y: Y of the first point on the line
        b_x: X of the second point on the line
        b_y: Y of the second point on the line
        c_x: X of the point to test
        c_y: Y of the point to test
        tolerance: Absolute and relative tolerance

    Returns:
        True if the three points are collinear within tolerance
    """
    ab = Point(b_x - a_x, b_y - a_y).rotate90()
    ac = Point(c_x - a_x, c_y - a_y)
    dot_product = abs(ab.dot(ac))
    relative_tolerance = tolerance * ab.get_distance() * ac.get_distance()
    return dot_product < tolerance or dot_product < relative_tolerance


def convex(previous: Point, current: Point, next_point: Point) -> bool:
    """Whether the turn previous -> current -> next is convex.

    Convex means a counter-clockwise turn in a Y-up frame (positive cross
    product of the incoming and outgoing directions).
    """
    return (current - previous).clockwise(next_point - current)


def square(x: float) -> float:
    return x * x

"""Rounded polygon construction from vertex data.

This module turns a flat vertex list plus optional corner rounding into a
RoundedPolygon. The work happens in three passes:

1. Compute the ideal rounding geometry at every vertex (RoundedCorner)
2. Resolve conflicts where the cuts of two corners sharing a side would
   overlap: radius is shrunk only when the pure round cuts already exceed
   the side; otherwise only smoothing is reduced
3. Materialize each corner into 1-3 cubics and join consecutive corners
   with straight edges
"""

import logging
import math
from collections.abc import Sequence

from shapemorph.domain import (
    DISTANCE_EPSILON,
    UNROUNDED,
    Corner,
    CornerRounding,
    Cubic,
    Edge,
    Feature,
    Point,
    RoundedPolygon,
)
from shapemorph.domain.geometry import convex, direction_vector, distance, interpolate_point, square
from shapemorph.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class RoundedCorner:
    """Rounding geometry for a single vertex.

    Computed from the vertex, its two neighbours and the requested rounding.
    If either adjoining side has zero length, rounding is disabled.

    Attributes:
        p0: Previous vertex
        p1: The vertex being rounded
        p2: Next vertex
        d1: Unit vector from p1 towards p0
        d2: Unit vector from p1 towards p2
        corner_radius: Requested rounding radius
        smoothing: Requested smoothing
        cos_angle: Cosine of the angle between d1 and d2
        sin_angle: Sine of the angle between d1 and d2
        expected_round_cut: Distance from p1 along each side where an
            unsmoothed circular rounding would touch the side
    """

    def __init__(self, p0: Point, p1: Point, p2: Point, rounding: CornerRounding = UNROUNDED) -> None:
        self.p0 = p0
        self.p1 = p1
        self.p2 = p2

        v01 = p0 - p1
        v21 = p2 - p1
        d01 = v01.get_distance()
        d21 = v21.get_distance()

        if d01 > 0 and d21 > 0:
            self.d1 = v01 / d01
            self.d2 = v21 / d21
            self.corner_radius = rounding.radius
            self.smoothing = rounding.smoothing
            self.cos_angle = self.d1.dot(self.d2)
            self.sin_angle = math.sqrt(max(0.0, 1 - square(self.cos_angle)))
            # cot(angle / 2) * radius
            self.expected_round_cut = (
                self.corner_radius * (self.cos_angle + 1) / self.sin_angle
                if self.sin_angle > 1e-3
                else 0.0
            )
        else:
            self.d1 = Point(0.0, 0.0)
            self.d2 = Point(0.0, 0.0)
            self.corner_radius = 0.0
            self.smoothing = 0.0
            self.cos_angle = 0.0
            self.sin_angle = 0.0
            self.expected_round_cut = 0.0

    @property
    def expected_cut(self) -> float:
        """Full cut along each side, including smoothing."""
        return (1 + self.smoothing) * self.expected_round_cut

    def _actual_smoothing(self, allowed_cut: float) -> float:
        if allowed_cut > self.expected_cut:
            return self.smoothing
        if allowed_cut > self.expected_round_cut:
            return (
                self.smoothing
                * (allowed_cut - self.expected_round_cut)
                / (self.expected_cut - self.expected_round_cut)
            )
        return 0.0

    @staticmethod
    def _line_intersection(p0: Point, d0: Point, p1: Point, d1: Point) -> Point | None:
        """Intersection of the lines p0 + k*d0 and p1 + m*d1, None if near-parallel."""
        rotated_d1 = d1.rotate90()
        den = d0.dot(rotated_d1)
        if abs(den) < DISTANCE_EPSILON:
            return None
        num = (p1 - p0).dot(rotated_d1)
        if abs(den) < DISTANCE_EPSILON * abs(num):
            return None
        return p0 + d0 * (num / den)

    def _flanking_curve(
        self,
        actual_round_cut: float,
        actual_smoothing: float,
        side_start: Point,
        circle_segment_intersection: Point,
        other_circle_segment_intersection: Point,
        circle_center: Point,
        actual_radius: float,
    ) -> Cubic:
        """Curve leading from the side into the rounding circle.

        Starts on the side at the smoothed cut distance and ends on the
        circle, at a point pulled from the circle/side intersection towards
        the middle of the arc by the smoothing factor.
        """
        corner = self.p1
        side_direction = (side_start - corner).get_direction()
        curve_start = corner + side_direction * (actual_round_cut * (1 + actual_smoothing))
        p = interpolate_point(
            circle_segment_intersection,
            (circle_segment_intersection + other_circle_segment_intersection) / 2,
            actual_smoothing,
        )
        curve_end = circle_center + direction_vector(p.x - circle_center.x, p.y - circle_center.y) * actual_radius
        circle_tangent = (curve_end - circle_center).rotate90()
        anchor_end = self._line_intersection(side_start, side_direction, curve_end, circle_tangent)
        if anchor_end is None:
            anchor_end = circle_segment_intersection
        anchor_start = (curve_start + anchor_end * 2) / 3
        return Cubic(
            curve_start.x,
            curve_start.y,
            anchor_start.x,
            anchor_start.y,
            anchor_end.x,
            anchor_end.y,
            curve_end.x,
            curve_end.y,
        )

    def get_cubics(self, allowed_cut0: float, allowed_cut1: float | None = None) -> list[Cubic]:
        """Materialize the corner within the cut each side allows.

        Args:
            allowed_cut0: Maximum cut along the side towards p0
            allowed_cut1: Maximum cut along the side towards p2
                (defaults to allowed_cut0)

        Returns:
            A single zero-length cubic at the vertex for an unrounded corner,
            otherwise [incoming flank, arc, outgoing flank]
        """
        if allowed_cut1 is None:
            allowed_cut1 = allowed_cut0
        allowed_cut = min(allowed_cut0, allowed_cut1)

        if (
            self.expected_round_cut < DISTANCE_EPSILON
            or allowed_cut < DISTANCE_EPSILON
            or self.corner_radius < DISTANCE_EPSILON
        ):
            return [Cubic.straight_line(self.p1.x, self.p1.y, self.p1.x, self.p1.y)]

        actual_round_cut = min(allowed_cut, self.expected_round_cut)
        actual_smoothing0 = self._actual_smoothing(allowed_cut0)
        actual_smoothing1 = self._actual_smoothing(allowed_cut1)
        actual_radius = self.corner_radius * actual_round_cut / self.expected_round_cut
        center_distance = math.sqrt(square(actual_radius) + square(actual_round_cut))
        half_direction = ((self.d1 + self.d2) / 2).get_direction()
        center = self.p1 + half_direction * center_distance
        circle_intersection0 = self.p1 + self.d1 * actual_round_cut
        circle_intersection2 = self.p1 + self.d2 * actual_round_cut

        flanking0 = self._flanking_curve(
            actual_round_cut,
            actual_smoothing0,
            self.p0,
            circle_intersection0,
            circle_intersection2,
            center,
            actual_radius,
        )
        flanking2 = self._flanking_curve(
            actual_round_cut,
            actual_smoothing1,
            self.p2,
            circle_intersection2,
            circle_intersection0,
            center,
            actual_radius,
        ).reverse()

        arc = Cubic.circular_arc(
            center.x,
            center.y,
            flanking0.anchor1_x,
            flanking0.anchor1_y,
            flanking2.anchor0_x,
            flanking2.anchor0_y,
        )
        return [flanking0, arc, flanking2]


def _validate_vertices(
    vertices: Sequence[float],
    per_vertex_rounding: Sequence[CornerRounding] | None,
) -> int:
    if len(vertices) % 2 != 0:
        raise InvalidInputError(f"vertex list must hold x, y pairs, got {len(vertices)} values")
    n = len(vertices) // 2
    if n < 3:
        raise InvalidInputError(f"a polygon needs at least 3 vertices, got {n}")
    if not all(math.isfinite(v) for v in vertices):
        raise InvalidInputError("vertex coordinates must be finite")
    if per_vertex_rounding is not None and len(per_vertex_rounding) != n:
        raise InvalidInputError(
            f"per-vertex rounding has {len(per_vertex_rounding)} entries for {n} vertices"
        )
    return n


def _validate_center(center_x: float | None, center_y: float | None) -> None:
    if (center_x is None) != (center_y is None):
        raise InvalidInputError("center_x and center_y must be given together")


def calculate_center(vertices: Sequence[float]) -> Point:
    """Arithmetic mean of the vertices in a flat x, y list."""
    n = len(vertices) // 2
    cx = sum(vertices[0::2])
    cy = sum(vertices[1::2])
    return Point(cx / n, cy / n)


def _side_cut_ratios(corners: list[RoundedCorner], vertices: Sequence[float]) -> list[tuple[float, float]]:
    """Per-side (round cut ratio, smoothing cut ratio) keeping corner cuts apart.

    Side i runs from vertex i to vertex i + 1.
    """
    n = len(corners)
    ratios: list[tuple[float, float]] = []
    for i in range(n):
        j = (i + 1) % n
        expected_round_cut = corners[i].expected_round_cut + corners[j].expected_round_cut
        expected_cut = corners[i].expected_cut + corners[j].expected_cut
        side_size = distance(vertices[i * 2] - vertices[j * 2], vertices[i * 2 + 1] - vertices[j * 2 + 1])

        if expected_round_cut > side_size:
            ratios.append((side_size / expected_round_cut, 0.0))
        elif expected_cut > side_size:
            ratios.append((1.0, (side_size - expected_round_cut) / (expected_cut - expected_round_cut)))
        else:
            ratios.append((1.0, 1.0))
    return ratios


def create_polygon_from_vertices(
    vertices: Sequence[float],
    rounding: CornerRounding = UNROUNDED,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    center_x: float | None = None,
    center_y: float | None = None,
) -> RoundedPolygon:
    """Build a rounded polygon from a flat vertex list.

    Args:
        vertices: Flat [x0, y0, x1, y1, ...] list of at least 3 vertices
        rounding: Rounding applied to every vertex without a per-vertex value
        per_vertex_rounding: Optional rounding for each vertex, in order
        center_x: Explicit center X (default: mean of the vertices)
        center_y: Explicit center Y (default: mean of the vertices)

    Returns:
        RoundedPolygon alternating corner and edge features

    Raises:
        InvalidInputError: If the vertex list is malformed or too short, or only one
            center coordinate is given

    Examples:
        >>> square = create_polygon_from_vertices([1, 1, -1, 1, -1, -1, 1, -1])
        >>> len(square.features)
        8
    """
    n = _validate_vertices(vertices, per_vertex_rounding)
    _validate_center(center_x, center_y)
    points = [Point(float(vertices[i * 2]), float(vertices[i * 2 + 1])) for i in range(n)]

    rounded_corners: list[RoundedCorner] = []
    for i in range(n):
        vertex_rounding = per_vertex_rounding[i] if per_vertex_rounding is not None else rounding
        rounded_corners.append(
            RoundedCorner(points[(i + n - 1) % n], points[i], points[(i + 1) % n], vertex_rounding)
        )

    ratios = _side_cut_ratios(rounded_corners, vertices)

    corner_cubics: list[list[Cubic]] = []
    for i, corner in enumerate(rounded_corners):
        allowed_cuts = []
        # Side ending at this vertex, then side starting at it
        for side in ((i + n - 1) % n, i):
            round_cut_ratio, cut_ratio = ratios[side]
            allowed_cuts.append(
                corner.expected_round_cut * round_cut_ratio
                + (corner.expected_cut - corner.expected_round_cut) * cut_ratio
            )
        corner_cubics.append(corner.get_cubics(allowed_cuts[0], allowed_cuts[1]))

    features: list[Feature] = []
    for i in range(n):
        next_index = (i + 1) % n
        features.append(
            Corner(
                tuple(corner_cubics[i]),
                convex=convex(points[(i + n - 1) % n], points[i], points[next_index]),
            )
        )
        end_of_corner = corner_cubics[i][-1]
        start_of_next = corner_cubics[next_index][0]
        features.append(
            Edge(
                (
                    Cubic.straight_line(
                        end_of_corner.anchor1_x,
                        end_of_corner.anchor1_y,
                        start_of_next.anchor0_x,
                        start_of_next.anchor0_y,
                    ),
                )
            )
        )

    if center_x is None or center_y is None:
        center = calculate_center(vertices)
    else:
        center = Point(center_x, center_y)

    logger.debug("Built polygon with %d vertices and %d features", n, len(features))
    return RoundedPolygon(features=tuple(features), center=center)

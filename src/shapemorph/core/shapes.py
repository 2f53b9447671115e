"""Convenience constructors for common outlines.

Every helper here generates a vertex list and delegates to
create_polygon_from_vertices.
"""

import math
from collections.abc import Sequence

from shapemorph.core.builder import create_polygon_from_vertices
from shapemorph.domain import UNROUNDED, CornerRounding, Point, RoundedPolygon
from shapemorph.domain.geometry import radial_to_cartesian
from shapemorph.exceptions import InvalidInputError


def _check_count(count: int, minimum: int, name: str) -> None:
    if count < minimum:
        raise InvalidInputError(f"{name} must be at least {minimum}, got {count}")


def _regular_vertices(num_vertices: int, radius: float, center_x: float, center_y: float) -> list[float]:
    center = Point(center_x, center_y)
    result: list[float] = []
    for i in range(num_vertices):
        result.extend(radial_to_cartesian(radius, math.pi / num_vertices * 2 * i, center))
    return result


def _star_vertices(
    num_vertices_per_radius: int,
    radius: float,
    inner_radius: float,
    center_x: float,
    center_y: float,
) -> list[float]:
    center = Point(center_x, center_y)
    result: list[float] = []
    for i in range(num_vertices_per_radius):
        result.extend(radial_to_cartesian(radius, math.pi / num_vertices_per_radius * 2 * i, center))
        result.extend(radial_to_cartesian(inner_radius, math.pi / num_vertices_per_radius * (2 * i + 1), center))
    return result


def create_polygon(
    num_vertices: int,
    radius: float = 1.0,
    center_x: float = 0.0,
    center_y: float = 0.0,
    rounding: CornerRounding = UNROUNDED,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
) -> RoundedPolygon:
    """Regular polygon with vertices on a circle, the first one on the +X axis.

    Args:
        num_vertices: Number of vertices (at least 3)
        radius: Circumscribed radius
        center_x: Center X
        center_y: Center Y
        rounding: Rounding for every vertex
        per_vertex_rounding: Optional rounding per vertex

    Returns:
        RoundedPolygon centered on (center_x, center_y)

    Raises:
        InvalidInputError: If num_vertices is below 3
    """
    _check_count(num_vertices, 3, "num_vertices")
    vertices = _regular_vertices(num_vertices, radius, center_x, center_y)
    return create_polygon_from_vertices(vertices, rounding, per_vertex_rounding, center_x, center_y)


def create_circle(
    num_vertices: int = 8,
    radius: float = 1.0,
    center_x: float = 0.0,
    center_y: float = 0.0,
) -> RoundedPolygon:
    """Circle approximated by a fully rounded regular polygon.

    The polygon is enlarged so that its inscribed circle, which the rounding
    follows, has the requested radius.
    """
    _check_count(num_vertices, 3, "num_vertices")
    theta = math.pi / num_vertices
    polygon_radius = radius / math.cos(theta)
    return create_polygon(
        num_vertices,
        polygon_radius,
        center_x,
        center_y,
        CornerRounding(radius),
    )


def create_rectangle(
    width: float = 2.0,
    height: float = 2.0,
    rounding: CornerRounding = UNROUNDED,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    center_x: float = 0.0,
    center_y: float = 0.0,
) -> RoundedPolygon:
    """Axis-aligned rectangle, vertices starting at (right, bottom)."""
    left = center_x - width / 2
    top = center_y - height / 2
    right = center_x + width / 2
    bottom = center_y + height / 2
    return create_polygon_from_vertices(
        [right, bottom, left, bottom, left, top, right, top],
        rounding,
        per_vertex_rounding,
        center_x,
        center_y,
    )


def create_star(
    num_vertices_per_radius: int,
    radius: float = 1.0,
    inner_radius: float = 0.5,
    rounding: CornerRounding = UNROUNDED,
    inner_rounding: CornerRounding | None = None,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    center_x: float = 0.0,
    center_y: float = 0.0,
) -> RoundedPolygon:
    """Star alternating outer and inner vertices.

    Args:
        num_vertices_per_radius: Number of points (outer vertices)
        radius: Outer radius
        inner_radius: Inner radius
        rounding: Rounding for outer vertices (and inner ones unless
            inner_rounding is given)
        inner_rounding: Optional distinct rounding for inner vertices
        per_vertex_rounding: Explicit rounding per vertex; overrides both
        center_x: Center X
        center_y: Center Y

    Returns:
        RoundedPolygon with 2 * num_vertices_per_radius vertices

    Raises:
        InvalidInputError: If num_vertices_per_radius is below 2
    """
    _check_count(num_vertices_per_radius, 2, "num_vertices_per_radius")
    if per_vertex_rounding is None and inner_rounding is not None:
        per_vertex_rounding = [rounding, inner_rounding] * num_vertices_per_radius
    vertices = _star_vertices(num_vertices_per_radius, radius, inner_radius, center_x, center_y)
    return create_polygon_from_vertices(vertices, rounding, per_vertex_rounding, center_x, center_y)

"""End-to-end properties of building and morphing shapes.

Tests cover:
- Closure of every built outline
- Split consistency of cubics taken from real shapes
- Morph end points reproducing their shapes
- Self-morphs staying put
- Morphs between every preset and a circle
- Morph end frames lying on their source outlines
"""

import itertools
import math

import pytest

from shapemorph.core import (
    Morph,
    ShapeCache,
    create_circle,
    create_polygon,
    create_polygon_from_vertices,
    create_rectangle,
    create_star,
    detect_features,
)
from shapemorph.domain import DISTANCE_EPSILON, Corner, CornerRounding, Cubic, Edge, RoundedPolygon

SQUARE = [1.0, 1.0, -1.0, 1.0, -1.0, -1.0, 1.0, -1.0]
PRESETS = ShapeCache()


def _shapes() -> dict[str, RoundedPolygon]:
    return {
        "sharp_square": create_polygon_from_vertices(SQUARE),
        "rounded_square": create_polygon_from_vertices(SQUARE, CornerRounding(0.3)),
        "smoothed_square": create_polygon_from_vertices(SQUARE, CornerRounding(0.4, 0.6)),
        "circle": create_circle(),
        "hexagon": create_polygon(6, rounding=CornerRounding(0.2)),
        "star": create_star(5, inner_radius=0.5, rounding=CornerRounding(0.1)),
        "rect": create_rectangle(width=3.0, height=1.0, rounding=CornerRounding(0.5)),
    }


def _exact_bounds(cubics) -> tuple[float, float, float, float]:
    boxes = [c.calculate_bounds(approximate=False) for c in cubics]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def _assert_closed_loop(cubics: list[Cubic], tolerance: float = DISTANCE_EPSILON) -> None:
    for i, cubic in enumerate(cubics):
        nxt = cubics[(i + 1) % len(cubics)]
        assert abs(cubic.anchor1_x - nxt.anchor0_x) < tolerance
        assert abs(cubic.anchor1_y - nxt.anchor0_y) < tolerance


@pytest.mark.parametrize("name", sorted(_shapes()))
def test_built_outline_is_closed(name):
    """Every built polygon's cubics form a closed loop."""
    _assert_closed_loop(list(_shapes()[name].cubics))


@pytest.mark.parametrize("name", sorted(_shapes()))
def test_split_matches_curve(name):
    """Splitting any cubic keeps both halves on the original curve."""
    for cubic in _shapes()[name].cubics:
        for t in (0.25, 0.5, 0.8):
            a, b = cubic.split(t)
            for s in (0.0, 0.5, 1.0):
                pa = a.point_on_curve(s)
                pb = b.point_on_curve(s)
                qa = cubic.point_on_curve(s * t)
                qb = cubic.point_on_curve(t + s * (1 - t))
                assert (pa - qa).get_distance() < 1e-9
                assert (pb - qb).get_distance() < 1e-9


@pytest.mark.parametrize(
    "start,end",
    [
        ("sharp_square", "circle"),
        ("rounded_square", "star"),
        ("hexagon", "smoothed_square"),
        ("star", "circle"),
        ("rect", "hexagon"),
    ],
)
def test_morph_endpoints(start, end):
    """Progress 0 and 1 trace the start and end outlines."""
    shapes = _shapes()
    morph = Morph(shapes[start], shapes[end])

    at_start = morph.as_cubics(0.0)
    at_end = morph.as_cubics(1.0)
    assert _exact_bounds(at_start) == pytest.approx(shapes[start].calculate_bounds(False), abs=1e-3)
    assert _exact_bounds(at_end) == pytest.approx(shapes[end].calculate_bounds(False), abs=1e-3)

    for progress in (0.0, 0.33, 0.5, 1.0):
        cubics = morph.as_cubics(progress)
        assert len(cubics) == len(morph)
        assert cubics[-1].anchor1 == cubics[0].anchor0
        _assert_closed_loop(cubics, tolerance=1e-3)


def test_self_morph_is_static():
    """Morphing a shape into itself leaves it unchanged."""
    hexagon = create_polygon(6)
    morph = Morph(hexagon, hexagon)
    at_start = morph.as_cubics(0.0)
    at_end = morph.as_cubics(1.0)
    assert len(at_start) == len(at_end)
    for a, b in zip(at_start, at_end):
        assert a.points == pytest.approx(b.points, abs=1e-5)


def test_circle_self_morph_stays_round():
    """Every frame of a circle morphing into itself lies on the circle."""
    circle = create_circle()
    morph = Morph(circle, circle)
    for step in range(101):
        for cubic in morph.as_cubics(step / 100):
            for t in (0.0, 0.5, 1.0):
                assert cubic.point_on_curve(t).get_distance() == pytest.approx(1.0, abs=1e-4)


def test_square_to_circle_pair_count():
    """The rounded square to circle morph keeps one cubic count."""
    morph = Morph(create_polygon_from_vertices(SQUARE, CornerRounding(0.3)), create_circle())
    counts = {len(morph.as_cubics(p)) for p in (0.0, 0.25, 0.5, 0.75, 1.0)}
    assert counts == {len(morph)}


def test_rectangle_features_from_cubics():
    """Re-detecting a sharp rectangle yields four convex corners and four edges."""
    rect = create_rectangle(width=4.0, height=2.0)
    features = detect_features(list(rect.cubics))
    corners = [f for f in features if isinstance(f, Corner)]
    edges = [f for f in features if isinstance(f, Edge)]
    assert len(corners) == 4
    assert len(edges) == 4
    assert all(c.convex for c in corners)


def test_overlapping_per_vertex_rounding():
    """Rounding larger than the sides still builds a closed outline."""
    rounding = [CornerRounding(2.0), CornerRounding(0.1), CornerRounding(2.0, 1.0), CornerRounding(0.1)]
    square = create_polygon_from_vertices(SQUARE, per_vertex_rounding=rounding)
    _assert_closed_loop(list(square.cubics))
    morph = Morph(square, create_circle())
    _assert_closed_loop(morph.as_cubics(0.5), tolerance=1e-3)


@pytest.mark.parametrize("name", ShapeCache().names())
def test_every_preset_morphs_to_circle(name):
    """All presets can be matched against the circle."""
    cache = ShapeCache()
    morph = Morph(cache.get(name), cache.get("circle"))
    cubics = morph.as_cubics(0.5)
    assert len(cubics) == len(morph)
    _assert_closed_loop(cubics, tolerance=1e-3)


def _outline_segments(cubics, steps: int = 24) -> list[tuple[float, float, float, float]]:
    segments = []
    for cubic in cubics:
        points = [cubic.point_on_curve(i / steps) for i in range(steps + 1)]
        segments.extend((a.x, a.y, b.x, b.y) for a, b in zip(points, points[1:]))
    return segments


def _distance_to_outline(x: float, y: float, segments) -> float:
    best = math.inf
    for ax, ay, bx, by in segments:
        dx, dy = bx - ax, by - ay
        length_squared = dx * dx + dy * dy
        t = 0.0 if length_squared == 0 else ((x - ax) * dx + (y - ay) * dy) / length_squared
        t = min(max(t, 0.0), 1.0)
        best = min(best, math.hypot(x - ax - t * dx, y - ay - t * dy))
    return best


def _max_deviation(cubics, shape: RoundedPolygon) -> float:
    segments = _outline_segments(shape.cubics)
    deviation = 0.0
    for cubic in cubics:
        for t in (0.0, 0.25, 0.5, 0.75, 1.0):
            p = cubic.point_on_curve(t)
            deviation = max(deviation, _distance_to_outline(p.x, p.y, segments))
    return deviation


@pytest.mark.parametrize("start,end", list(itertools.permutations(PRESETS.names(), 2)))
def test_preset_end_frames_trace_sources(start, end):
    """Every point of the first and last frames lies on the matching preset outline."""
    start_shape = PRESETS.get(start)
    end_shape = PRESETS.get(end)
    morph = Morph(start_shape, end_shape)
    assert _max_deviation(morph.as_cubics(0.0), start_shape) < 2e-2
    assert _max_deviation(morph.as_cubics(1.0), end_shape) < 2e-2


@pytest.mark.parametrize("start,end", [("star", "hexagon"), ("rect", "smoothed_star")])
def test_end_frames_trace_sources(start, end):
    """End frames follow the outlines of shapes built with custom rounding."""
    shapes = _shapes()
    shapes["smoothed_star"] = create_star(5, inner_radius=0.5, rounding=CornerRounding(0.2, 0.8))
    morph = Morph(shapes[start], shapes[end])
    assert _max_deviation(morph.as_cubics(0.0), shapes[start]) < 2e-2
    assert _max_deviation(morph.as_cubics(1.0), shapes[end]) < 2e-2

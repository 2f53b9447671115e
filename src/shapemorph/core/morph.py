"""Shape matching and interpolation between two rounded polygons.

Morph construction does the expensive, one-time alignment:

1. Measure both outlines (arc-length outline progress per cubic)
2. Map corners of the first outline onto corners of the second
3. Rotate the second outline so both start at corresponding points
4. Walk both cubic lists in lock-step, cutting whichever cubic ends later,
   so the two outlines end up as the same number of paired cubics

Queries (``as_cubics``) then interpolate each pair coordinate by coordinate.
"""

import logging

from shapemorph.core.mapper import feature_mapper
from shapemorph.core.measure import LengthMeasurer, MeasuredCubic, MeasuredPolygon
from shapemorph.domain import ANGLE_EPSILON, Cubic, RoundedPolygon
from shapemorph.domain.geometry import interpolate, positive_modulo

logger = logging.getLogger(__name__)


def match_polygons(
    p1: RoundedPolygon,
    p2: RoundedPolygon,
    measurer: LengthMeasurer | None = None,
) -> list[tuple[Cubic, Cubic]]:
    """Decompose two outlines into pairwise-aligned cubics.

    Args:
        p1: Start polygon
        p2: End polygon
        measurer: Arc length measurer (default: 3 chords per cubic)

    Returns:
        List of (cubic from p1, cubic from p2) covering both outlines in order
    """
    if measurer is None:
        measurer = LengthMeasurer()

    measured1 = MeasuredPolygon.measure(p1, measurer)
    measured2 = MeasuredPolygon.measure(p2, measurer)

    double_mapper = feature_mapper(measured1.features, measured2.features)
    polygon2_cut_point = double_mapper.map(0)

    bs1 = measured1
    bs2 = measured2.cut_and_shift(polygon2_cut_point)

    result: list[tuple[Cubic, Cubic]] = []
    i1 = 0
    i2 = 0
    b1: MeasuredCubic | None = bs1.cubics[0] if bs1.cubics else None
    b2: MeasuredCubic | None = bs2.cubics[0] if bs2.cubics else None
    i1 += 1
    i2 += 1

    while b1 is not None and b2 is not None:
        # End progress of both current cubics, in the first outline's terms
        b1a = 1.0 if i1 == len(bs1.cubics) else b1.end_outline_progress
        if i2 == len(bs2.cubics):
            b2a = 1.0
        else:
            b2a = double_mapper.map_back(positive_modulo(b2.end_outline_progress + polygon2_cut_point, 1))
        minb = min(b1a, b2a)

        if b1a > minb + ANGLE_EPSILON:
            seg1, new_b1 = b1.cut_at_progress(minb, measurer)
        else:
            seg1 = b1
            new_b1 = bs1.cubics[i1] if i1 < len(bs1.cubics) else None
            i1 += 1

        if b2a > minb + ANGLE_EPSILON:
            seg2, new_b2 = b2.cut_at_progress(
                positive_modulo(double_mapper.map(minb) - polygon2_cut_point, 1),
                measurer,
            )
        else:
            seg2 = b2
            new_b2 = bs2.cubics[i2] if i2 < len(bs2.cubics) else None
            i2 += 1

        result.append((seg1.cubic, seg2.cubic))
        b1 = new_b1
        b2 = new_b2

    logger.debug(
        "Matched outlines: %d + %d cubics into %d pairs",
        len(bs1.cubics),
        len(bs2.cubics),
        len(result),
    )
    return result


def _union_bounds(
    bounds: list[tuple[float, float, float, float]],
) -> tuple[float, float, float, float]:
    return (
        min(b[0] for b in bounds),
        min(b[1] for b in bounds),
        max(b[2] for b in bounds),
        max(b[3] for b in bounds),
    )


class Morph:
    """Precomputed pairing of two shapes for interpolation.

    A Morph holds no progress state: every query takes the progress
    explicitly, so one instance can serve any number of callers.

    Example:
        morph = Morph(create_rectangle(), create_circle())
        frame = morph.as_cubics(0.5)
    """

    def __init__(
        self,
        start: RoundedPolygon,
        end: RoundedPolygon,
        measurer: LengthMeasurer | None = None,
    ) -> None:
        """Match two polygons.

        Args:
            start: Shape at progress 0
            end: Shape at progress 1
            measurer: Arc length measurer (default: 3 chords per cubic)
        """
        self._start = start
        self._end = end
        self._morph_match: tuple[tuple[Cubic, Cubic], ...] = tuple(match_polygons(start, end, measurer))

    @property
    def start(self) -> RoundedPolygon:
        return self._start

    @property
    def end(self) -> RoundedPolygon:
        return self._end

    @property
    def pairs(self) -> tuple[tuple[Cubic, Cubic], ...]:
        """Aligned (start cubic, end cubic) pairs."""
        return self._morph_match

    def __len__(self) -> int:
        return len(self._morph_match)

    def as_cubics(self, progress: float) -> list[Cubic]:
        """Interpolated outline at ``progress``.

        0 gives the start shape, 1 the end shape; values outside [0, 1]
        extrapolate linearly. The final cubic is closed onto the first one.

        Args:
            progress: Interpolation fraction

        Returns:
            One cubic per stored pair
        """
        result: list[Cubic] = []
        first_cubic: Cubic | None = None
        last_cubic: Cubic | None = None

        for a, b in self._morph_match:
            cubic = Cubic(*(interpolate(pa, pb, progress) for pa, pb in zip(a.points, b.points)))
            if first_cubic is None:
                first_cubic = cubic
            if last_cubic is not None:
                result.append(last_cubic)
            last_cubic = cubic

        if last_cubic is not None and first_cubic is not None:
            result.append(Cubic(*last_cubic.points[:6], first_cubic.anchor0_x, first_cubic.anchor0_y))

        return result

    def calculate_bounds(self, approximate: bool = True) -> tuple[float, float, float, float]:
        """Bounds enclosing both end shapes.

        Intermediate frames of a linear morph stay within this box.
        """
        return _union_bounds(
            [self._start.calculate_bounds(approximate), self._end.calculate_bounds(approximate)]
        )

    def calculate_max_bounds(self) -> tuple[float, float, float, float]:
        """Rotation-safe bounds enclosing both end shapes."""
        return _union_bounds([self._start.calculate_max_bounds(), self._end.calculate_max_bounds()])

"""Rounded polygon outline and corner rounding parameters.

A RoundedPolygon is a cyclic sequence of features plus a center. Its flat
cubic list is derived once, at construction, and is always a closed loop in
which every cubic starts exactly where the previous one ends.
"""

import math
from dataclasses import dataclass, field

from shapemorph.domain.cubic import Cubic, PointTransformer
from shapemorph.domain.feature import Feature
from shapemorph.domain.geometry import Point, distance_squared
from shapemorph.exceptions import InvalidInputError


@dataclass(frozen=True, slots=True)
class CornerRounding:
    """How a polygon vertex is rounded.

    Attributes:
        radius: Radius of the rounding circle; 0 keeps the corner sharp
        smoothing: 0 gives a pure circular arc, up to 1 widens the flattened
            flanking curves on each side of the arc
    """

    radius: float = 0.0
    smoothing: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius < 0:
            raise InvalidInputError(f"corner radius must be a finite value >= 0, got {self.radius}")
        if not 0 <= self.smoothing <= 1:
            raise InvalidInputError(f"corner smoothing must be within [0, 1], got {self.smoothing}")


UNROUNDED = CornerRounding()


def _build_cubic_list(features: tuple[Feature, ...], center: Point) -> tuple[Cubic, ...]:
    """Flatten features into one closed loop of cubics.

    When the first feature is a rounded corner (flank, arc, flank) its arc is
    split in half so the loop starts and ends at the arc midpoint. Zero-length
    cubics are folded into the preceding cubic by moving its end anchor.
    """
    split_start: list[Cubic] | None = None
    split_end: list[Cubic] | None = None

    if features and len(features[0].cubics) == 3:
        flank0, arc, flank1 = features[0].cubics
        start, end = arc.split(0.5)
        split_start = [flank0, start]
        split_end = [end, flank1]

    first: Cubic | None = None
    last: Cubic | None = None
    result: list[Cubic] = []

    for i in range(len(features) + 1):
        if i == 0 and split_end is not None:
            feature_cubics = split_end
        elif i == len(features):
            if split_start is None:
                break
            feature_cubics = split_start
        else:
            feature_cubics = list(features[i].cubics)

        for cubic in feature_cubics:
            if cubic.zero_length():
                if last is not None:
                    last = Cubic(*last.points[:6], cubic.anchor1_x, cubic.anchor1_y)
                continue
            if last is not None:
                result.append(last)
            last = cubic
            if first is None:
                first = cubic

    if last is not None and first is not None:
        result.append(Cubic(*last.points[:6], first.anchor0_x, first.anchor0_y))
    else:
        result.append(Cubic.empty(center.x, center.y))

    return tuple(result)


@dataclass(frozen=True)
class RoundedPolygon:
    """An immutable closed outline made of edge and corner features.

    Attributes:
        features: Features in outline order
        center: Reference center (centroid of the source vertices by default)
        cubics: Closed cubic loop derived from the features
    """

    features: tuple[Feature, ...]
    center: Point
    cubics: tuple[Cubic, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(self.features))
        object.__setattr__(self, "cubics", _build_cubic_list(self.features, self.center))

    @property
    def center_x(self) -> float:
        return self.center.x

    @property
    def center_y(self) -> float:
        return self.center.y

    def transformed(self, f: PointTransformer) -> "RoundedPolygon":
        """Apply a coordinate mapping to the center and every feature.

        Args:
            f: Function taking (x, y) and returning the mapped point

        Returns:
            New polygon; this one is left untouched
        """
        cx, cy = f(self.center.x, self.center.y)
        return RoundedPolygon(
            features=tuple(feature.transformed(f) for feature in self.features),
            center=Point(cx, cy),
        )

    def translated(self, dx: float, dy: float) -> "RoundedPolygon":
        return self.transformed(lambda x, y: Point(x + dx, y + dy))

    def scaled(self, sx: float, sy: float | None = None) -> "RoundedPolygon":
        """Scale about the origin; ``sy`` defaults to ``sx``."""
        factor_y = sx if sy is None else sy
        return self.transformed(lambda x, y: Point(x * sx, y * factor_y))

    def rotated(self, degrees: float, pivot: Point | None = None) -> "RoundedPolygon":
        """Rotate counter-clockwise (Y-up) around ``pivot``, default the center."""
        origin = self.center if pivot is None else pivot
        angle = math.radians(degrees)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)

        def rotate(x: float, y: float) -> Point:
            ox = x - origin.x
            oy = y - origin.y
            return Point(ox * cos_a - oy * sin_a + origin.x, ox * sin_a + oy * cos_a + origin.y)

        return self.transformed(rotate)

    def normalized(self) -> "RoundedPolygon":
        """Fit the shape into the unit square.

        The longer bounding-box side is scaled to 1 and the shape is centered
        along the shorter axis.
        """
        min_x, min_y, max_x, max_y = self.calculate_bounds()
        width = max_x - min_x
        height = max_y - min_y
        side = max(width, height)
        offset_x = (side - width) / 2 - min_x
        offset_y = (side - height) / 2 - min_y
        return self.transformed(lambda x, y: Point((x + offset_x) / side, (y + offset_y) / side))

    def calculate_bounds(self, approximate: bool = True) -> tuple[float, float, float, float]:
        """Bounding box of the outline.

        Args:
            approximate: Use control-point hulls instead of exact extrema

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for cubic in self.cubics:
            b = cubic.calculate_bounds(approximate)
            min_x = min(min_x, b[0])
            min_y = min(min_y, b[1])
            max_x = max(max_x, b[2])
            max_y = max(max_y, b[3])
        return (min_x, min_y, max_x, max_y)

    def calculate_max_bounds(self) -> tuple[float, float, float, float]:
        """Square around the center that contains the shape at any rotation.

        Uses the farthest anchor or cubic midpoint from the center.
        """
        max_dist_sq = 0.0
        for cubic in self.cubics:
            anchor_dist = distance_squared(cubic.anchor0_x - self.center_x, cubic.anchor0_y - self.center_y)
            mid = cubic.point_on_curve(0.5)
            mid_dist = distance_squared(mid.x - self.center_x, mid.y - self.center_y)
            max_dist_sq = max(max_dist_sq, anchor_dist, mid_dist)
        d = math.sqrt(max_dist_sq)
        return (self.center_x - d, self.center_y - d, self.center_x + d, self.center_y + d)

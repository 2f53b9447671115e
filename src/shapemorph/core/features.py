"""Feature detection for arbitrary closed cubic outlines.

Groups a closed sequence of cubics into edges (near-straight runs) and
corners (direction changes). Runs of straight-ish cubics that continue one
another are merged into a single edge; every visible kink between two
accepted cubics gets a zero-length corner so the feature count follows the
visual structure of the outline rather than its raw cubic count.
"""

import logging
from collections.abc import Sequence

from shapemorph.domain import (
    RELAXED_DISTANCE_EPSILON,
    Corner,
    Cubic,
    Edge,
    Feature,
    Point,
    RoundedPolygon,
)
from shapemorph.domain.geometry import collinear_ish
from shapemorph.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def straight_ish(cubic: Cubic) -> bool:
    """Whether a cubic is (nearly) a straight segment.

    Both control points must lie close to the anchor-to-anchor chord. The
    relaxed tolerance accepts the flanking curves of rounded corners, which
    are only approximately straight.
    """
    return (
        not cubic.zero_length()
        and collinear_ish(
            cubic.anchor0_x,
            cubic.anchor0_y,
            cubic.anchor1_x,
            cubic.anchor1_y,
            cubic.control0_x,
            cubic.control0_y,
            RELAXED_DISTANCE_EPSILON,
        )
        and collinear_ish(
            cubic.anchor0_x,
            cubic.anchor0_y,
            cubic.anchor1_x,
            cubic.anchor1_y,
            cubic.control1_x,
            cubic.control1_y,
            RELAXED_DISTANCE_EPSILON,
        )
    )


def smoothes_into_ish(cubic: Cubic, next_cubic: Cubic) -> bool:
    """Whether two consecutive cubics join without a visible corner.

    True when the outgoing control point, the shared anchor and the incoming
    control point of the next cubic are collinear.
    """
    return collinear_ish(
        cubic.control1_x,
        cubic.control1_y,
        next_cubic.control0_x,
        next_cubic.control0_y,
        cubic.anchor1_x,
        cubic.anchor1_y,
        RELAXED_DISTANCE_EPSILON,
    )


def aligns_ish_with(cubic: Cubic, next_cubic: Cubic) -> bool:
    """Whether two consecutive cubics can be merged into one feature."""
    return (
        (straight_ish(cubic) and straight_ish(next_cubic) and smoothes_into_ish(cubic, next_cubic))
        or cubic.zero_length()
        or next_cubic.zero_length()
    )


def _extend_cubic(cubic: Cubic, next_cubic: Cubic) -> Cubic:
    """Merge two aligned cubics into one spanning both.

    Control points come from the first cubic, unless it is zero-length, in
    which case the second cubic's shape is kept.
    """
    if cubic.zero_length():
        return Cubic(cubic.anchor0_x, cubic.anchor0_y, *next_cubic.points[2:])
    return Cubic(*cubic.points[:6], next_cubic.anchor1_x, next_cubic.anchor1_y)


def _cubic_as_feature(cubic: Cubic, next_cubic: Cubic) -> Feature:
    if straight_ish(cubic):
        return Edge((cubic,))
    return Corner((cubic,), convex=cubic.convex_to(next_cubic))


def detect_features(cubics: Sequence[Cubic]) -> list[Feature]:
    """Classify a closed cubic loop into edge and corner features.

    Args:
        cubics: Closed loop of cubics, each ending where the next starts

    Returns:
        Features in outline order; empty for an empty input
    """
    if not cubics:
        return []

    result: list[Feature] = []
    current = cubics[0]
    count = len(cubics)

    for i in range(count):
        next_cubic = cubics[(i + 1) % count]
        if i < count - 1 and aligns_ish_with(current, next_cubic):
            current = _extend_cubic(current, next_cubic)
            continue

        result.append(_cubic_as_feature(current, next_cubic))
        if not smoothes_into_ish(current, next_cubic):
            # Zero-length corner marking the kink; its turn is the one between the two cubics
            result.append(
                Corner(
                    (Cubic.empty(current.anchor1_x, current.anchor1_y),),
                    convex=current.convex_to(next_cubic),
                )
            )
        current = next_cubic

    logger.debug("Detected %d features from %d cubics", len(result), count)
    return result


def polygon_from_cubics(
    cubics: Sequence[Cubic],
    center_x: float | None = None,
    center_y: float | None = None,
) -> RoundedPolygon:
    """Wrap a closed cubic loop into a RoundedPolygon.

    Args:
        cubics: Closed loop of cubics
        center_x: Explicit center X (default: mean of start anchors)
        center_y: Explicit center Y (default: mean of start anchors)

    Returns:
        RoundedPolygon whose features come from detect_features

    Raises:
        InvalidInputError: If only one center coordinate is given
    """
    if (center_x is None) != (center_y is None):
        raise InvalidInputError("center_x and center_y must be given together")
    if center_x is None or center_y is None:
        if cubics:
            center_x = sum(c.anchor0_x for c in cubics) / len(cubics)
            center_y = sum(c.anchor0_y for c in cubics) / len(cubics)
        else:
            center_x = center_y = 0.0
    return RoundedPolygon(features=tuple(detect_features(cubics)), center=Point(center_x, center_y))

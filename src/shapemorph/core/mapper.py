"""Progress-to-progress correspondence between two outlines.

Corners of the two shapes are paired greedily, nearest first, keeping the
pairs in the same cyclic order on both outlines. The accepted pairs define a
piecewise-linear, wrapping mapping from the first outline's progress to the
second's (and back).
"""

import logging
from collections.abc import Sequence

from shapemorph.core.measure import ProgressableFeature
from shapemorph.domain import DISTANCE_EPSILON, Corner, Feature, Point
from shapemorph.domain.geometry import positive_modulo

logger = logging.getLogger(__name__)

_IDENTITY_MAPPING = [(0.0, 0.0), (0.5, 0.5)]


def progress_in_range(progress: float, progress_from: float, progress_to: float) -> bool:
    """Whether ``progress`` lies in the cyclic range [from, to]."""
    if progress_to >= progress_from:
        return progress_from <= progress <= progress_to
    return progress >= progress_from or progress <= progress_to


def progress_distance(p1: float, p2: float) -> float:
    """Shortest distance between two progress values on the unit circle."""
    d = abs(p1 - p2)
    return min(d, 1 - d)


def linear_map(x_values: Sequence[float], y_values: Sequence[float], x: float) -> float:
    """Piecewise-linear cyclic interpolation of ``x`` through paired values.

    Finds the segment [x_i, x_i+1] (wrapping) holding ``x`` and maps it
    proportionally onto [y_i, y_i+1].

    Args:
        x_values: Source progress anchors in cyclic order
        y_values: Target progress anchors, same length
        x: Source progress to map

    Returns:
        Mapped progress in [0, 1)
    """
    count = len(x_values)
    seg_start_index = 0
    for i in range(count):
        if progress_in_range(x, x_values[i], x_values[(i + 1) % count]):
            seg_start_index = i
            break
    seg_end_index = (seg_start_index + 1) % count
    seg_size_x = positive_modulo(x_values[seg_end_index] - x_values[seg_start_index], 1)
    seg_size_y = positive_modulo(y_values[seg_end_index] - y_values[seg_start_index], 1)
    if seg_size_x < 0.001:
        position_in_segment = 0.5
    else:
        position_in_segment = positive_modulo(x - x_values[seg_start_index], 1) / seg_size_x
    return positive_modulo(y_values[seg_start_index] + seg_size_y * position_in_segment, 1)


class DoubleMapper:
    """Bidirectional progress mapping built from (source, target) anchors.

    Example:
        mapper = DoubleMapper([(0.0, 0.1), (0.5, 0.6)])
        mapper.map(0.25)      # ~0.35
        mapper.map_back(0.35)  # ~0.25
    """

    def __init__(self, mappings: Sequence[tuple[float, float]]) -> None:
        self.source_values = [m[0] for m in mappings]
        self.target_values = [m[1] for m in mappings]

    def map(self, x: float) -> float:
        """Source progress to target progress."""
        return linear_map(self.source_values, self.target_values, x)

    def map_back(self, x: float) -> float:
        """Target progress to source progress."""
        return linear_map(self.target_values, self.source_values, x)

    def __len__(self) -> int:
        return len(self.source_values)

    @classmethod
    def identity(cls) -> "DoubleMapper":
        """Mapper that leaves progress unchanged."""
        return cls(_IDENTITY_MAPPING)


def _representative_point(feature: Feature) -> Point:
    """Midpoint between the feature's first and last anchors."""
    first = feature.cubics[0]
    last = feature.cubics[-1]
    return Point((first.anchor0_x + last.anchor1_x) / 2, (first.anchor0_y + last.anchor1_y) / 2)


def feature_dist_squared(f1: Feature, f2: Feature) -> float:
    """Squared distance used to rank corner pairs; inf for mismatched convexity."""
    if isinstance(f1, Corner) and isinstance(f2, Corner) and f1.convex != f2.convex:
        return float("inf")
    return (_representative_point(f1) - _representative_point(f2)).get_distance_squared()


def _can_insert_mapping(mapping: list[tuple[float, float]], insertion_index: int, p1: float, p2: float) -> bool:
    """Whether a new pair keeps the mapping strictly ordered on both sides."""
    n = len(mapping)
    if n == 0:
        return True
    before1, before2 = mapping[(insertion_index + n - 1) % n]
    after1, after2 = mapping[insertion_index % n]

    if (
        progress_distance(p1, before1) < DISTANCE_EPSILON
        or progress_distance(p1, after1) < DISTANCE_EPSILON
        or progress_distance(p2, before2) < DISTANCE_EPSILON
        or progress_distance(p2, after2) < DISTANCE_EPSILON
    ):
        return False

    return n <= 1 or progress_in_range(p2, before2, after2)


def _antipodal_pair(p1: float, p2: float) -> list[tuple[float, float]]:
    return [(p1, p2), ((p1 + 0.5) % 1, (p2 + 0.5) % 1)]


def do_mapping(
    features1: Sequence[ProgressableFeature],
    features2: Sequence[ProgressableFeature],
) -> list[tuple[float, float]]:
    """Greedy nearest-first corner correspondence.

    Args:
        features1: Corners of the first outline
        features2: Corners of the second outline

    Returns:
        At least two (progress1, progress2) anchors in cyclic progress1 order
    """
    candidates: list[tuple[float, int, int]] = []
    for i1, f1 in enumerate(features1):
        for i2, f2 in enumerate(features2):
            d = feature_dist_squared(f1.feature, f2.feature)
            if d != float("inf"):
                candidates.append((d, i1, i2))
    candidates.sort(key=lambda c: c[0])

    if not candidates:
        return list(_IDENTITY_MAPPING)

    if len(candidates) == 1:
        _, i1, i2 = candidates[0]
        return _antipodal_pair(features1[i1].progress, features2[i2].progress)

    mapping: list[tuple[float, float]] = []
    used1: set[int] = set()
    used2: set[int] = set()

    for _, i1, i2 in candidates:
        if i1 in used1 or i2 in used2:
            continue
        p1 = features1[i1].progress
        p2 = features2[i2].progress

        insertion_index = 0
        for i, (source, _target) in enumerate(mapping):
            if source < p1:
                insertion_index = i + 1

        if not _can_insert_mapping(mapping, insertion_index, p1, p2):
            continue

        mapping.insert(insertion_index, (p1, p2))
        used1.add(i1)
        used2.add(i2)

    if len(mapping) == 1:
        return _antipodal_pair(*mapping[0])
    return mapping


def feature_mapper(
    features1: Sequence[ProgressableFeature],
    features2: Sequence[ProgressableFeature],
) -> DoubleMapper:
    """Build the progress mapper from two outlines' corner features."""
    corners1 = [f for f in features1 if isinstance(f.feature, Corner)]
    corners2 = [f for f in features2 if isinstance(f.feature, Corner)]
    mapping = do_mapping(corners1, corners2)
    logger.debug(
        "Corner correspondence: %d anchors from %d x %d corners",
        len(mapping),
        len(corners1),
        len(corners2),
    )
    return DoubleMapper(mapping)

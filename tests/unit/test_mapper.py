"""Unit tests for corner correspondence and progress mapping.

Tests cover:
- Cyclic range and distance helpers
- Piecewise-linear wrapping maps and their inverse
- Feature distance with convexity mismatch
- Greedy mapping, including degenerate candidate counts
"""

import math

import pytest

from shapemorph.core.mapper import (
    DoubleMapper,
    do_mapping,
    feature_dist_squared,
    feature_mapper,
    linear_map,
    progress_distance,
    progress_in_range,
)
from shapemorph.core.measure import ProgressableFeature
from shapemorph.domain import Corner, Cubic, Edge


def _flat(pairs: list[tuple[float, float]]) -> list[float]:
    return [value for pair in pairs for value in pair]


def _corner(x: float, y: float, convex: bool = True) -> Corner:
    return Corner((Cubic.empty(x, y),), convex=convex)


def _pf(progress: float, x: float, y: float, convex: bool = True) -> ProgressableFeature:
    return ProgressableFeature(progress, _corner(x, y, convex))


class TestProgressHelpers:
    """Tests for progress_in_range and progress_distance."""

    def test_plain_range(self):
        """Non-wrapping range."""
        assert progress_in_range(0.3, 0.2, 0.4)
        assert not progress_in_range(0.5, 0.2, 0.4)

    def test_wrapping_range(self):
        """Range crossing zero."""
        assert progress_in_range(0.95, 0.9, 0.1)
        assert progress_in_range(0.05, 0.9, 0.1)
        assert not progress_in_range(0.5, 0.9, 0.1)

    def test_progress_distance_wraps(self):
        """Distance goes the short way round."""
        assert progress_distance(0.1, 0.9) == pytest.approx(0.2)
        assert progress_distance(0.2, 0.4) == pytest.approx(0.2)


class TestLinearMap:
    """Tests for linear_map and DoubleMapper."""

    def test_linear_map_within_segment(self):
        """Proportional mapping inside a segment."""
        assert linear_map([0.0, 0.5], [0.1, 0.6], 0.25) == pytest.approx(0.35)

    def test_linear_map_wrapping_segment(self):
        """The last segment wraps back to the first anchor."""
        assert linear_map([0.0, 0.5], [0.1, 0.6], 0.75) == pytest.approx(0.85)

    def test_linear_map_uneven_segments(self):
        """Segments stretch independently."""
        x = [0.0, 0.25, 0.5]
        y = [0.0, 0.5, 0.75]
        assert linear_map(x, y, 0.125) == pytest.approx(0.25)
        assert linear_map(x, y, 0.375) == pytest.approx(0.625)
        assert linear_map(x, y, 0.75) == pytest.approx(0.875)

    def test_double_mapper_round_trip(self):
        """map_back undoes map."""
        mapper = DoubleMapper([(0.0, 0.1), (0.3, 0.5), (0.6, 0.7)])
        for x in (0.0, 0.1, 0.45, 0.8, 0.99):
            assert mapper.map_back(mapper.map(x)) == pytest.approx(x, abs=1e-9)

    def test_identity(self):
        """The identity mapper leaves values unchanged."""
        mapper = DoubleMapper.identity()
        assert len(mapper) == 2
        assert mapper.map(0.3) == pytest.approx(0.3)
        assert mapper.map_back(0.8) == pytest.approx(0.8)


class TestFeatureDistance:
    """Tests for feature_dist_squared."""

    def test_distance_between_corners(self):
        """Squared distance between representative points."""
        assert feature_dist_squared(_corner(0, 0), _corner(3, 4)) == pytest.approx(25.0)

    def test_convexity_mismatch_is_infinite(self):
        """Convex and concave corners never match."""
        assert feature_dist_squared(_corner(0, 0, True), _corner(0, 0, False)) == math.inf

    def test_representative_point_spans_feature(self):
        """Midpoint of first and last anchors."""
        corner = Corner((Cubic.straight_line(0, 0, 1, 0), Cubic.straight_line(1, 0, 2, 2)))
        assert feature_dist_squared(corner, _corner(1, 1)) == pytest.approx(0.0)


class TestDoMapping:
    """Tests for the greedy correspondence."""

    def test_no_candidates_gives_identity(self):
        """Without matchable corners the mapping is the identity."""
        assert do_mapping([], []) == [(0.0, 0.0), (0.5, 0.5)]
        concave = [_pf(0.2, 0, 0, convex=False)]
        convex = [_pf(0.4, 0, 0, convex=True)]
        assert do_mapping(concave, convex) == [(0.0, 0.0), (0.5, 0.5)]

    def test_single_candidate_adds_antipodal_pair(self):
        """One candidate is mirrored half an outline away."""
        mapping = do_mapping([_pf(0.2, 1, 0)], [_pf(0.3, 1, 0)])
        assert _flat(mapping) == pytest.approx([0.2, 0.3, 0.7, 0.8])

    def test_nearest_pairs_win(self):
        """Each corner is paired with its closest counterpart."""
        features1 = [_pf(0.0, 1, 0), _pf(0.5, -1, 0)]
        features2 = [_pf(0.1, 1, 0.1), _pf(0.6, -1, 0.1)]
        assert _flat(do_mapping(features1, features2)) == pytest.approx([0.0, 0.1, 0.5, 0.6])

    def test_mapping_sorted_by_source_progress(self):
        """Accepted pairs are kept in source order."""
        features1 = [_pf(0.75, 0, -1), _pf(0.25, 0, 1), _pf(0.5, -1, 0), _pf(0.0, 1, 0)]
        features2 = [_pf(0.0, 1, 0), _pf(0.25, 0, 1), _pf(0.5, -1, 0), _pf(0.75, 0, -1)]
        mapping = do_mapping(features1, features2)
        assert [m[0] for m in mapping] == [0.0, 0.25, 0.5, 0.75]
        assert _flat(mapping) == pytest.approx([0.0, 0.0, 0.25, 0.25, 0.5, 0.5, 0.75, 0.75])

    def test_crossing_pair_rejected(self):
        """A pair that would reverse the cyclic order is skipped."""
        features1 = [_pf(0.0, 0, 0), _pf(0.3, 10, 0), _pf(0.6, 20, 0)]
        # Second outline visits the last two corners in the opposite order
        features2 = [_pf(0.0, 0, 0), _pf(0.3, 20, 0.1), _pf(0.6, 10, 0.1)]
        mapping = do_mapping(features1, features2)
        assert len(mapping) == 2
        assert mapping[0] == pytest.approx((0.0, 0.0))

    def test_feature_mapper_ignores_edges(self):
        """Only corners take part."""
        edge = ProgressableFeature(0.4, Edge((Cubic.straight_line(0, 0, 1, 0),)))
        mapper = feature_mapper([_pf(0.2, 1, 0), edge], [_pf(0.3, 1, 0), edge])
        assert len(mapper) == 2
        assert mapper.map(0.2) == pytest.approx(0.3)

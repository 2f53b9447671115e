"""Domain models for shapemorph.

This module contains the core value types describing outlines: points, cubic
Bezier segments, edge/corner features and rounded polygons. All models are:

- Immutable (frozen dataclasses); transforms return new instances
- Free of any matching or rendering logic

Key classes:
- Point: A 2D point with vector arithmetic
- Cubic: One cubic Bezier segment
- Feature / Edge / Corner: Classified runs of an outline
- CornerRounding: Radius and smoothing applied at a vertex
- RoundedPolygon: A closed outline of features with a derived cubic loop
"""

from shapemorph.domain.cubic import Cubic, PointTransformer
from shapemorph.domain.feature import Corner, Edge, Feature
from shapemorph.domain.geometry import (
    ANGLE_EPSILON,
    DISTANCE_EPSILON,
    RELAXED_DISTANCE_EPSILON,
    Point,
)
from shapemorph.domain.polygon import UNROUNDED, CornerRounding, RoundedPolygon

__all__: list[str] = [
    # Tolerances
    "ANGLE_EPSILON",
    "DISTANCE_EPSILON",
    "RELAXED_DISTANCE_EPSILON",
    # Core types
    "Point",
    "PointTransformer",
    "Cubic",
    "Feature",
    "Edge",
    "Corner",
    "CornerRounding",
    "UNROUNDED",
    "RoundedPolygon",
]

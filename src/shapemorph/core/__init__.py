"""Core shape algorithms for shapemorph.

This module contains the algorithms for:

- Outline construction (rounded corners, regular polygons, stars, rectangles)
- Feature detection on raw cubic loops
- Arc-length measurement and outline progress
- Corner correspondence between two outlines
- Morph matching and interpolation

All functions are synchronous and free of shared mutable state, except for
ShapeCache which guards its cache with a lock.

Key functions:
- create_polygon_from_vertices: Build a rounded polygon from a vertex list
- create_polygon / create_circle / create_rectangle / create_star: Shape helpers
- detect_features: Classify a closed cubic loop into edges and corners
- polygon_from_cubics: Build a polygon from a raw cubic loop
- feature_mapper: Build the progress mapper between two outlines
- match_polygons: Pair up the cubics of two outlines

Key classes:
- RoundedCorner: Geometry of a single rounded vertex
- LengthMeasurer: Chord-sum arc length approximation
- MeasuredPolygon: Outline annotated with progress
- DoubleMapper: Bidirectional progress mapping
- Morph: Precomputed interpolation between two shapes
- ShapeCache: Lazily built named presets
"""

from shapemorph.core.builder import (
    RoundedCorner,
    calculate_center,
    create_polygon_from_vertices,
)
from shapemorph.core.features import detect_features, polygon_from_cubics
from shapemorph.core.mapper import DoubleMapper, feature_mapper
from shapemorph.core.measure import (
    LengthMeasurer,
    MeasuredCubic,
    MeasuredPolygon,
    ProgressableFeature,
)
from shapemorph.core.morph import Morph, match_polygons
from shapemorph.core.presets import ShapeCache, corner_count, default_shape_factories
from shapemorph.core.shapes import create_circle, create_polygon, create_rectangle, create_star

__all__ = [
    # Mapping
    "DoubleMapper",
    # Measurement
    "LengthMeasurer",
    "MeasuredCubic",
    "MeasuredPolygon",
    # Morph
    "Morph",
    "ProgressableFeature",
    # Builder
    "RoundedCorner",
    # Presets
    "ShapeCache",
    "calculate_center",
    "corner_count",
    "create_circle",
    "create_polygon",
    "create_polygon_from_vertices",
    "create_rectangle",
    "create_star",
    "default_shape_factories",
    # Features
    "detect_features",
    "feature_mapper",
    "match_polygons",
    "polygon_from_cubics",
]

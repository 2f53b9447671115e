"""Shapemorph - Rounded polygons and smooth shape morphing.

Shapemorph builds closed outlines of cubic Bezier curves from vertex lists
with per-vertex corner rounding, and interpolates between any two such
outlines by matching their corners and cutting both into the same number of
aligned cubics.

Example:
    $ shapemorph morph square circle --steps 5
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

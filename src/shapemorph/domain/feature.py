"""Outline features: edges and corners.

A Feature is one semantically meaningful run of a polygon outline. Edges are
near-straight runs between corners; corners hold the rounding geometry at one
vertex. The two variants share the ``cubics`` field and differ only in the
corner's ``convex`` flag.
"""

from dataclasses import dataclass, replace

from shapemorph.domain.cubic import Cubic, PointTransformer


@dataclass(frozen=True, slots=True)
class Feature:
    """Base type for a run of cubics along an outline.

    Attributes:
        cubics: Cubics making up the feature, in traversal order
    """

    cubics: tuple[Cubic, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cubics", tuple(self.cubics))

    def transformed(self, f: PointTransformer) -> "Feature":
        """Apply a coordinate mapping to every cubic, keeping the variant."""
        return replace(self, cubics=tuple(c.transformed(f) for c in self.cubics))

    def reversed(self) -> "Feature":
        """Same feature traversed backwards."""
        return replace(self, cubics=tuple(c.reverse() for c in reversed(self.cubics)))


@dataclass(frozen=True, slots=True)
class Edge(Feature):
    """A straight-ish run between two corners."""


@dataclass(frozen=True, slots=True)
class Corner(Feature):
    """Rounding geometry at one vertex.

    Attributes:
        convex: True when the outline turns counter-clockwise here
    """

    convex: bool = True

    def reversed(self) -> "Corner":
        """Reverse traversal; a convex corner becomes concave and vice versa."""
        return Corner(
            cubics=tuple(c.reverse() for c in reversed(self.cubics)),
            convex=not self.convex,
        )

"""Named shape presets with lazy, thread-safe construction.

Shapes are built on first request and cached. All presets are normalized
into the unit square so any two of them can be morphed without rescaling.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping

from shapemorph.core.builder import create_polygon_from_vertices
from shapemorph.core.shapes import create_circle, create_polygon, create_rectangle, create_star
from shapemorph.domain import Corner, CornerRounding, RoundedPolygon
from shapemorph.exceptions import ShapeNotFoundError

logger = logging.getLogger(__name__)

ShapeFactory = Callable[[], RoundedPolygon]


def _pill() -> RoundedPolygon:
    return create_rectangle(width=2.0, height=1.0, rounding=CornerRounding(0.5)).normalized()


def _diamond() -> RoundedPolygon:
    vertices = [1.0, 0.0, 0.0, 1.0, -1.0, 0.0, 0.0, -1.0]
    return create_polygon_from_vertices(vertices, CornerRounding(0.1)).normalized()


def _triangle() -> RoundedPolygon:
    # Point up in a y-down frame
    return create_polygon(3, rounding=CornerRounding(0.2)).rotated(-90).normalized()


def default_shape_factories() -> dict[str, ShapeFactory]:
    """Factories for the built-in shape names."""
    return {
        "circle": lambda: create_circle().normalized(),
        "square": lambda: create_rectangle().normalized(),
        "rounded_square": lambda: create_rectangle(rounding=CornerRounding(0.3)).normalized(),
        "pill": _pill,
        "triangle": _triangle,
        "diamond": _diamond,
        "pentagon": lambda: create_polygon(5, rounding=CornerRounding(0.15)).rotated(-90).normalized(),
        "hexagon": lambda: create_polygon(6, rounding=CornerRounding(0.1)).normalized(),
        "star": lambda: create_star(5, inner_radius=0.45, rounding=CornerRounding(0.05)).rotated(-90).normalized(),
        "soft_star": lambda: create_star(
            8,
            inner_radius=0.75,
            rounding=CornerRounding(0.15, smoothing=0.5),
        ).rotated(360 / 32).normalized(),
    }


class ShapeCache:
    """Lazily built, shared collection of named shapes.

    Example:
        cache = ShapeCache()
        circle = cache.get("circle")
        assert cache.get("circle") is circle
    """

    def __init__(self, factories: Mapping[str, ShapeFactory] | None = None) -> None:
        self._factories: dict[str, ShapeFactory] = dict(
            factories if factories is not None else default_shape_factories()
        )
        self._shapes: dict[str, RoundedPolygon] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> RoundedPolygon:
        """Return the named shape, building it on first use.

        Raises:
            ShapeNotFoundError: If no factory is registered under ``name``
        """
        with self._lock:
            shape = self._shapes.get(name)
            if shape is not None:
                return shape
            factory = self._factories.get(name)
            if factory is None:
                raise ShapeNotFoundError(name)
            shape = factory()
            self._shapes[name] = shape
            logger.debug("Built preset shape %s with %d cubics", name, len(shape.cubics))
            return shape

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)


def corner_count(polygon: RoundedPolygon) -> int:
    """Number of corner features on an outline."""
    return sum(1 for f in polygon.features if isinstance(f, Corner))


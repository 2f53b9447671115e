"""Unit tests for the named shape cache.

Tests cover:
- Lazy construction and instance reuse
- Unknown names
- Custom factory tables
- Concurrent first access
- Normalization of the built-in presets
"""

import threading
from unittest.mock import Mock

import pytest

from shapemorph.core.presets import ShapeCache, corner_count, default_shape_factories
from shapemorph.core.shapes import create_rectangle
from shapemorph.domain import Corner
from shapemorph.exceptions import ShapeError, ShapeNotFoundError

DEFAULT_NAMES = [
    "circle",
    "square",
    "rounded_square",
    "pill",
    "triangle",
    "diamond",
    "pentagon",
    "hexagon",
    "star",
    "soft_star",
]


class TestShapeCache:
    """Tests for ShapeCache."""

    def test_default_names(self):
        """All built-in presets are registered in order."""
        cache = ShapeCache()
        assert cache.names() == DEFAULT_NAMES
        assert len(cache) == 10
        assert "circle" in cache
        assert "blob" not in cache
        assert list(cache) == DEFAULT_NAMES

    def test_get_returns_same_instance(self):
        """A shape is built once and then reused."""
        cache = ShapeCache()
        assert cache.get("square") is cache.get("square")

    def test_unknown_name(self):
        """Unknown names raise ShapeNotFoundError."""
        cache = ShapeCache()
        with pytest.raises(ShapeNotFoundError) as exc_info:
            cache.get("blob")
        assert exc_info.value.shape_name == "blob"
        assert isinstance(exc_info.value, ShapeError)
        assert "not found" in str(exc_info.value)

    def test_custom_factories(self):
        """Only the given factories are available."""
        factory = Mock(return_value=create_rectangle())
        cache = ShapeCache({"box": factory})
        assert cache.names() == ["box"]
        cache.get("box")
        cache.get("box")
        factory.assert_called_once_with()
        with pytest.raises(ShapeNotFoundError):
            cache.get("circle")

    def test_concurrent_first_access(self):
        """Threads racing on the first get still build the shape once."""
        factory = Mock(return_value=create_rectangle())
        cache = ShapeCache({"box": factory})
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(cache.get("box"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        factory.assert_called_once_with()
        assert len(results) == 8
        assert all(r is results[0] for r in results)


class TestPresets:
    """Tests for the built-in preset shapes."""

    @pytest.mark.parametrize("name", DEFAULT_NAMES)
    def test_preset_fits_unit_square(self, name):
        """Presets are normalized into [0, 1]."""
        shape = default_shape_factories()[name]()
        min_x, min_y, max_x, max_y = shape.calculate_bounds()
        assert min_x >= -1e-9
        assert min_y >= -1e-9
        assert max_x <= 1.0 + 1e-9
        assert max_y <= 1.0 + 1e-9
        assert max(max_x - min_x, max_y - min_y) == pytest.approx(1.0)

    def test_corner_counts(self):
        """Corner counts follow the vertex counts."""
        cache = ShapeCache()
        assert corner_count(cache.get("square")) == 4
        assert corner_count(cache.get("triangle")) == 3
        assert corner_count(cache.get("hexagon")) == 6
        assert corner_count(cache.get("star")) == 10
        assert corner_count(cache.get("soft_star")) == 16

    def test_star_has_concave_corners(self):
        """Inner star vertices are concave."""
        star = ShapeCache().get("star")
        convexity = [f.convex for f in star.features if isinstance(f, Corner)]
        assert convexity.count(False) == 5

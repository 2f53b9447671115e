"""Exception hierarchy for shapemorph."""


class ShapeMorphError(Exception):
    """Base exception for all shapemorph errors."""

    pass


class InvalidInputError(ShapeMorphError):
    """Input that cannot describe a closed shape (bad vertex list, bad rounding)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid input: {reason}")


class ShapeError(ShapeMorphError):
    """Errors related to named shapes."""

    pass


class ShapeNotFoundError(ShapeError):
    """Requested shape is not registered."""

    def __init__(self, shape_name: str) -> None:
        self.shape_name = shape_name
        super().__init__(f"Shape '{shape_name}' not found")

"""Errors raised by the grid engine."""


class GridError(Exception):
    """Base class for grid errors."""


class CellOutOfBoundsError(GridError, IndexError):
    """Raised when a coordinate has no cell in the grid's rectangle."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(f"Coordinates ({x}, {y}) out of bounds for {width}x{height} grid")

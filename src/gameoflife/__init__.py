"""Conway's Game of Life on a bounded grid."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.errors import CellOutOfBoundsError, GridError
from .core.grid import Grid
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Cell", "CellOutOfBoundsError", "GridError", "Grid", "GameOfLife", "Pattern", "PatternLibrary"]

"""Core grid engine and simulation driver."""

from .cell import Cell
from .errors import CellOutOfBoundsError, GridError
from .grid import Grid
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary
from .render import render_frame

__all__ = [
    "Cell",
    "CellOutOfBoundsError",
    "GridError",
    "Grid",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "render_frame",
]

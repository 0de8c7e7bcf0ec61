"""Grid data structure and generation engine for the Game of Life."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell
from .errors import CellOutOfBoundsError

LOG = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

# 3x3 Moore kernel, centre excluded so a cell never counts itself
_NEIGHBOUR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class Grid:
    """A bounded rectangular grid of cells.

    Every coordinate in ``[0, width) x [0, height)`` holds exactly one
    Cell. Edges are closed: coordinates outside the rectangle have no
    cell and contribute nothing to neighbour counts.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize an all-dead grid.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is negative
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells: Dict[Coordinate, Cell] = {
            (x, y): Cell(x, y, False) for y in range(height) for x in range(width)
        }

    @classmethod
    def new(cls, width: int, height: int) -> "Grid":
        """Create a grid with every cell dead."""
        return cls(width, height)

    @classmethod
    def random(
        cls, width: int, height: int, probability: float = 0.5, seed: Optional[int] = None
    ) -> "Grid":
        """Create a randomly populated grid.

        Args:
            width: Number of columns
            height: Number of rows
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for reproducible grids

        Returns:
            New Grid instance
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")

        grid = cls(width, height)
        rng = np.random.default_rng(seed)
        mask = rng.random((width, height)) < probability
        for x, y in zip(*np.nonzero(mask)):
            x, y = int(x), int(y)
            grid._cells[(x, y)] = Cell(x, y, True)

        LOG.debug("Created random %dx%d grid with %d live cells", width, height, grid.population)
        return grid

    @classmethod
    def from_seed(cls, width: int, height: int, live_coordinates: Iterable[Coordinate]) -> "Grid":
        """Create a grid with the given coordinates alive and all others dead.

        Args:
            width: Number of columns
            height: Number of rows
            live_coordinates: (x, y) pairs to bring to life

        Returns:
            New Grid instance

        Raises:
            CellOutOfBoundsError: If any coordinate lies outside the grid
        """
        grid = cls(width, height)
        for x, y in live_coordinates:
            cell = grid._cells.get((x, y))
            if cell is None:
                raise CellOutOfBoundsError(x, y, width, height)
            grid._cells[cell.position] = Cell(cell.x, cell.y, True)
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def cells(self) -> Mapping[Coordinate, Cell]:
        """Read-only view of the cell map."""
        return MappingProxyType(self._cells)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return sum(1 for cell in self._cells.values() if cell.is_alive)

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at a coordinate, or None if it is outside the grid."""
        return self._cells.get((x, y))

    def cell_neighbors(self, x: int, y: int) -> Optional[List[Cell]]:
        """Get the neighbouring cells of (x, y), or None if it is outside the grid."""
        cell = self.cell(x, y)
        if cell is None:
            return None
        return cell.neighbours(self)

    def live_neighbours_count(self, x: int, y: int) -> Optional[int]:
        """Count living neighbours of (x, y), or None if it is outside the grid."""
        cell = self.cell(x, y)
        if cell is None:
            return None
        return cell.live_neighbours_count(self)

    def toggle_cell(self, x: int, y: int) -> "Grid":
        """Flip the state of a cell.

        Returns:
            This grid, for chaining

        Raises:
            CellOutOfBoundsError: If (x, y) is outside the grid
        """
        cell = self.cell(x, y)
        if cell is None:
            raise CellOutOfBoundsError(x, y, self.width, self.height)

        self._cells[cell.position] = cell.toggled()
        return self

    def to_array(self) -> np.ndarray:
        """Get cell states as an int8 array indexed ``[x, y]``."""
        return self._as_array(self._cells)

    def neighbour_counts(self) -> np.ndarray:
        """Count neighbours for all cells using a zero-padded convolution.

        Returns:
            int8 array indexed ``[x, y]`` with live neighbour counts
        """
        return self._count_neighbours(self._cells)

    def advance(self) -> "Grid":
        """Advance the grid by one generation.

        Every cell's next state is computed from one frozen view of the
        current generation; the new generation replaces the cell map only
        once it is complete.

        Returns:
            This grid, for chaining
        """
        current = dict(self._cells)
        counts = self._count_neighbours(current)

        self._cells = {key: cell.next_state(int(counts[key])) for key, cell in current.items()}

        LOG.debug("Advanced %dx%d grid, population now %d", self.width, self.height, self.population)
        return self

    next_state = advance

    def snapshot(self) -> Iterator[Tuple[int, int, bool]]:
        """Yield (x, y, is_alive) for every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y, self._cells[(x, y)].is_alive)

    def live_cells(self) -> List[Coordinate]:
        """Get coordinates of living cells in row-major order."""
        return [(x, y) for x, y, alive in self.snapshot() if alive]

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living = self.live_cells()
        if not living:
            return None

        xs, ys = zip(*living)
        return (min(xs), min(ys), max(xs), max(ys))

    def copy(self) -> "Grid":
        """Return an independent grid with the same cell states."""
        other = Grid(self.width, self.height)
        other._cells = dict(self._cells)
        return other

    def _as_array(self, cells: Mapping[Coordinate, Cell]) -> np.ndarray:
        array = np.zeros((self.width, self.height), dtype=np.int8)
        for (x, y), cell in cells.items():
            if cell.is_alive:
                array[x, y] = 1
        return array

    def _count_neighbours(self, cells: Mapping[Coordinate, Cell]) -> np.ndarray:
        if self.width == 0 or self.height == 0:
            return np.zeros((self.width, self.height), dtype=np.int8)

        # Grid is indexed (width, height) but conv2d expects (height, width)
        states = np.ascontiguousarray(self._as_array(cells).T, dtype=np.float32)
        torch_input = torch.from_numpy(states).unsqueeze(0).unsqueeze(0)
        neighbours = F.conv2d(torch_input, _NEIGHBOUR_KERNEL, padding=1)

        return neighbours[0, 0].round().numpy().astype(np.int8).T

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same size and cell states."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        rows = []
        for y in range(self.height):
            rows.append("".join("*" if self._cells[(x, y)].is_alive else "." for x in range(self.width)))
        return "\n".join(rows)

"""Cell value type and the per-cell Game of Life rule."""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from .grid import Grid

# Moore neighbourhood, row above, own row, row below
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass(frozen=True)
class Cell:
    """A single grid cell.

    Cells are immutable values; the grid replaces them rather than
    mutating them, so a Cell read from a grid is a stable snapshot.
    """

    x: int
    y: int
    is_alive: bool = False

    @property
    def position(self) -> Tuple[int, int]:
        """Coordinate pair this cell is stored under."""
        return (self.x, self.y)

    def neighbour_coordinates(self) -> List[Tuple[int, int]]:
        """Get the eight Moore-neighbourhood coordinates, which may lie outside any grid."""
        return [(self.x + dx, self.y + dy) for dx, dy in NEIGHBOUR_OFFSETS]

    def neighbours(self, grid: "Grid") -> List["Cell"]:
        """Get the neighbouring cells that exist in the grid.

        Args:
            grid: Grid to look neighbours up in

        Returns:
            Up to eight cells; coordinates outside the grid are skipped
        """
        neighbours = []
        for x, y in self.neighbour_coordinates():
            cell = grid.cell(x, y)
            if cell is not None:
                neighbours.append(cell)
        return neighbours

    def live_neighbours_count(self, grid: "Grid") -> int:
        """Count living neighbours of this cell in the grid."""
        return sum(1 for cell in self.neighbours(grid) if cell.is_alive)

    def toggled(self) -> "Cell":
        """Return a copy of this cell with its state flipped."""
        return replace(self, is_alive=not self.is_alive)

    def next_state(self, live_neighbour_count: int) -> "Cell":
        """Return this cell as it will be in the next generation.

        Rules:
        - Live cell with fewer than 2 live neighbours dies (underpopulation)
        - Live cell with 2 or 3 live neighbours survives
        - Live cell with more than 3 live neighbours dies (overpopulation)
        - Dead cell with exactly 3 live neighbours becomes alive (reproduction)

        Args:
            live_neighbour_count: Number of living neighbours (0-8)

        Returns:
            New Cell at the same coordinate
        """
        if self.is_alive:
            alive = live_neighbour_count in (2, 3)
        else:
            alive = live_neighbour_count == 3

        if alive == self.is_alive:
            return self
        return replace(self, is_alive=alive)

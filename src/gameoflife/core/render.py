"""Text rendering of grid generations."""

from ..config import DEFAULTS
from .grid import Grid

# Cursor to top-left, then clear the whole screen
CLEAR_SCREEN = "\x1b[1;1H\x1b[2J"


def render_frame(grid: Grid, live: str = DEFAULTS.LIVE_CELL, dead: str = DEFAULTS.DEAD_CELL) -> str:
    """Render a grid as text, one glyph per cell and one line per row.

    Args:
        grid: Grid to render
        live: Glyph for living cells
        dead: Glyph for dead cells

    Returns:
        Frame text, every row terminated by a newline
    """
    rows = [[dead] * grid.width for _ in range(grid.height)]
    for x, y, alive in grid.snapshot():
        if alive:
            rows[y][x] = live
    return "".join("".join(row) + "\n" for row in rows)

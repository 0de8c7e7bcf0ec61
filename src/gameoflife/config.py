"""Configuration constants for the Game of Life simulator."""
from dataclasses import dataclass


@dataclass
class Config:
    """Application defaults."""

    # Grid settings
    GRID_WIDTH: int = 20
    GRID_HEIGHT: int = 20
    RANDOM_PROBABILITY: float = 0.5

    # Simulation settings
    MAX_GENERATIONS: int = 100
    FRAME_DELAY_MS: int = (1000 // 60) * 6

    # Rendering
    LIVE_CELL: str = "⬜"
    DEAD_CELL: str = "⬛"

    # Largest grid printed by --show-grid
    MAX_DISPLAY_SIZE: int = 50


DEFAULTS = Config()

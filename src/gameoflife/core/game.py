"""Driver loop for Conway's Game of Life."""

import logging
import sys
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, TextIO, Tuple

import numpy as np

from ..config import DEFAULTS
from .grid import Grid
from .render import CLEAR_SCREEN, render_frame

LOG = logging.getLogger(__name__)


class GameOfLife:
    """Runs a grid through successive generations.

    The driver owns the grid exclusively: it advances it, tracks
    generation and population, detects repeating states and renders
    frames between generations.
    """

    def __init__(
        self,
        grid: Grid,
        max_generations: int = DEFAULTS.MAX_GENERATIONS,
        frame_delay: float = DEFAULTS.FRAME_DELAY_MS / 1000,
    ) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The grid to simulate
            max_generations: Number of generations run() plays
            frame_delay: Seconds to wait between rendered frames
        """
        self.grid = grid
        self.max_generations = max_generations
        self.frame_delay = frame_delay
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[bytes] = deque(maxlen=1000)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._population_history.append(self.population)

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> Grid:
        """Advance the simulation by one generation.

        Returns:
            The advanced grid
        """
        self._check_for_cycles()
        self.grid.advance()

        self._generation += 1
        self._population_history.append(self.population)
        return self.grid

    def _check_for_cycles(self) -> None:
        """Record the current state and flag a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = self.grid.to_array().tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            LOG.debug(
                "Cycle of length %d detected at generation %d", self._cycle_length, self._generation
            )
            return

        if len(self._state_history) == self._state_history.maxlen:
            oldest = self._state_history[0]
            if self._seen_states.get(oldest) == self._generation - len(self._state_history):
                del self._seen_states[oldest]

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

    def render(self) -> str:
        """Render the current generation as a full frame with status lines."""
        return (
            f"{CLEAR_SCREEN}{render_frame(self.grid)}"
            f"Generation: {self._generation}/{self.max_generations}\n"
            "\nhit ctrl-c to exit\n"
        )

    def run(self, stream: Optional[TextIO] = None, sleep: Optional[Callable[[float], None]] = None) -> int:
        """Play the simulation, rendering each generation.

        At least one frame is always written; when no generations remain
        the current one is rendered without advancing.

        Args:
            stream: Output stream for frames (defaults to stdout)
            sleep: Delay function called between frames (defaults to time.sleep)

        Returns:
            Final generation number
        """
        stream = stream or sys.stdout
        sleep = sleep or time.sleep

        # Nothing left to play: show the current generation once
        if self._generation >= self.max_generations:
            stream.write(self.render())
            stream.flush()
            return self._generation

        while self._generation < self.max_generations:
            self.step()
            stream.write(self.render())
            stream.flush()

            if self._generation < self.max_generations:
                sleep(self.frame_delay)

        return self._generation

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Reset counters and cycle detection, optionally swapping in a new grid."""
        if grid is not None:
            self.grid = grid

        self._generation = 0
        self._population_history.clear()
        self._state_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._population_history.append(self.population)

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over a recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.grid.get_bounding_box()
        area = self.grid.width * self.grid.height

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
            "population_density": self.population / area if area else 0.0,
            "bounding_box": bbox,
        }

        if bbox:
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box_size"] = (0, 0)

        return stats

"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import List, Optional, Tuple

from ..config import DEFAULTS
from ..core.errors import GridError
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary

LOG = logging.getLogger(__name__)


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        self.pattern_library = PatternLibrary()

    def build_grid(
        self,
        width: int,
        height: int,
        population_rate: float = DEFAULTS.RANDOM_PROBABILITY,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
        cells: Optional[List[Tuple[int, int]]] = None,
        seed: Optional[int] = None,
    ) -> Grid:
        """Create the starting grid.

        Explicit cells take precedence over a named pattern, which takes
        precedence over random population.

        Raises:
            ValueError: If the named pattern does not exist
            CellOutOfBoundsError: If seeded cells fall outside the grid
        """
        if cells is not None:
            LOG.debug("Seeding %dx%d grid with %d cells", width, height, len(cells))
            return Grid.from_seed(width, height, cells)

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            LOG.debug("Loading pattern '%s' at (%d, %d)", pattern, pattern_x, pattern_y)
            return loaded_pattern.to_grid(width, height, pattern_x, pattern_y)

        LOG.debug("Generating random population (rate: %.2f)", population_rate)
        return Grid.random(width, height, population_rate, seed)

    def run_simulation(self, grid: Grid, max_generations: int, show_grid: bool = False) -> Tuple[int, str, dict]:
        """Run a simulation without animation until it stabilises.

        Args:
            grid: Starting grid
            max_generations: Maximum generations to run
            show_grid: Print initial and final grid states

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        game = GameOfLife(grid, max_generations=max_generations)
        initial_population = game.population

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(grid))

        start_time = time.time()
        final_generation, reason = game.run_until_stable(max_generations)
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(game.grid))

        return final_generation, reason, stats

    def animate(self, grid: Grid, max_generations: int, frame_delay_ms: int) -> int:
        """Play the simulation in the terminal.

        Returns:
            Final generation number
        """
        game = GameOfLife(grid, max_generations=max_generations, frame_delay=frame_delay_ms / 1000)
        return game.run()

    def _format_grid(self, grid: Grid, max_size: int = DEFAULTS.MAX_DISPLAY_SIZE) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        print("Available patterns:")
        for category, patterns in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def parse_cells(cells_str: str) -> List[Tuple[int, int]]:
    """Parse a cell list of the form "x,y;x,y".

    Raises:
        ValueError: If the string is malformed
    """
    cells = []
    for item in cells_str.split(";"):
        item = item.strip()
        if not item:
            continue
        parts = item.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid cell '{item}', expected 'x,y'")
        cells.append((int(parts[0].strip()), int(parts[1].strip())))
    return cells


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Animate a random 20x20 grid for 100 generations
  gameoflife

  # Animate a glider, one frame every 200ms
  gameoflife --pattern Glider --frame-delay 200

  # Seed explicit cells (a blinker)
  gameoflife -W 5 -H 5 --cells "1,2;2,2;3,2"

  # Run a reproducible random grid without animation
  gameoflife --headless --seed 42 --population 0.3 --show-grid

  # List available patterns
  gameoflife --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument(
        "-W", "--width", type=int, default=DEFAULTS.GRID_WIDTH, help=f"Grid width (default: {DEFAULTS.GRID_WIDTH})"
    )

    parser.add_argument(
        "-H",
        "--height",
        type=int,
        default=DEFAULTS.GRID_HEIGHT,
        help=f"Grid height (default: {DEFAULTS.GRID_HEIGHT})",
    )

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=DEFAULTS.RANDOM_PROBABILITY,
        help=f"Initial random population rate 0.0-1.0 (default: {DEFAULTS.RANDOM_PROBABILITY})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible grids",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Load a specific pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: centred)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: centred)",
    )

    parser.add_argument(
        "--cells",
        type=str,
        help='Explicit live cells as "x,y;x,y;..."',
    )

    # Simulation configuration
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=DEFAULTS.MAX_GENERATIONS,
        help=f"Maximum generations to simulate (default: {DEFAULTS.MAX_GENERATIONS})",
    )

    parser.add_argument(
        "-d",
        "--frame-delay",
        type=int,
        default=DEFAULTS.FRAME_DELAY_MS,
        help=f"Delay between frames in milliseconds (default: {DEFAULTS.FRAME_DELAY_MS})",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run until stable without animation and print results",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states in headless mode (small grids only)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Describe why a headless simulation stopped."""
    if reason == "cycle":
        cycle_length = stats.get("cycle_length", 0)
        if cycle_length == 1:
            return "Still life (stable pattern)"
        return f"Oscillator (cycle length {cycle_length})"
    elif reason == "extinction":
        return "Extinction (all cells died)"
    elif reason == "max_generations":
        return "Reached maximum generations"
    return reason


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.frame_delay < 0:
        errors.append("Frame delay must be non-negative")

    if args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    cells = None
    if args.cells is not None:
        try:
            cells = parse_cells(args.cells)
        except ValueError as e:
            print(f"Error: {e}")
            return 1

    if args.pattern and cells is None:
        pattern = cli.pattern_library.get_pattern(args.pattern)
        if not pattern:
            available = cli.pattern_library.list_patterns()
            print(f"Error: Pattern '{args.pattern}' not found")
            print(f"Available patterns: {', '.join(available)}")
            print("Use --list-patterns to see detailed information")
            return 1

        # Auto-center pattern if no offset specified
        if args.pattern_x == 0 and args.pattern_y == 0:
            pattern_size = pattern.get_size()
            args.pattern_x = max(0, (args.width - pattern_size[0]) // 2)
            args.pattern_y = max(0, (args.height - pattern_size[1]) // 2)
            LOG.debug("Auto-centering pattern at (%d, %d)", args.pattern_x, args.pattern_y)

    try:
        grid = cli.build_grid(
            width=args.width,
            height=args.height,
            population_rate=args.population,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            cells=cells,
            seed=args.seed,
        )

        if args.headless:
            final_generation, reason, stats = cli.run_simulation(grid, args.max_generations, args.show_grid)
            print_results(final_generation, reason, stats, args.verbose)
        else:
            cli.animate(grid, args.max_generations, args.frame_delay)

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (GridError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

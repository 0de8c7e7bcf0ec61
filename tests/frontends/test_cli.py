"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import Mock, patch

import pytest
from gameoflife.core.errors import CellOutOfBoundsError
from gameoflife.core.grid import Grid
from gameoflife.frontends.cli import (
    CLIGameOfLife,
    create_parser,
    format_finish_reason,
    main,
    parse_cells,
    print_results,
    validate_args,
)


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGameOfLife()
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_build_grid_cells(self):
        """Test explicit cells seed the grid."""
        cli = CLIGameOfLife()
        grid = cli.build_grid(5, 5, cells=[(1, 1), (2, 2)], pattern="Glider")

        assert grid.live_cells() == [(1, 1), (2, 2)]

    def test_build_grid_cells_out_of_bounds(self):
        """Test explicit cells outside the grid raise."""
        cli = CLIGameOfLife()
        with pytest.raises(CellOutOfBoundsError):
            cli.build_grid(5, 5, cells=[(5, 5)])

    def test_build_grid_pattern(self):
        """Test a named pattern seeds the grid at an offset."""
        cli = CLIGameOfLife()
        grid = cli.build_grid(10, 10, pattern="Blinker", pattern_x=3, pattern_y=4)

        assert grid.live_cells() == [(3, 4), (4, 4), (5, 4)]

    def test_build_grid_unknown_pattern(self):
        """Test an unknown pattern name raises."""
        cli = CLIGameOfLife()
        with pytest.raises(ValueError):
            cli.build_grid(10, 10, pattern="NonExistentPattern")

    def test_build_grid_random_seeded(self):
        """Test random grids are reproducible with a seed."""
        cli = CLIGameOfLife()
        first = cli.build_grid(10, 10, population_rate=0.3, seed=5)
        second = cli.build_grid(10, 10, population_rate=0.3, seed=5)

        assert first == second
        assert len(first.cells) == 100

    def test_run_simulation(self):
        """Test a headless run of a still life."""
        cli = CLIGameOfLife()
        grid = Grid.from_seed(4, 4, [(1, 1), (2, 1), (1, 2), (2, 2)])

        final_gen, reason, stats = cli.run_simulation(grid, max_generations=100)

        assert final_gen == 2
        assert reason == "cycle"
        assert stats["initial_population"] == 4
        assert stats["cycle_length"] == 1
        assert "duration_seconds" in stats
        assert "generations_per_second" in stats

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_show_grid(self, mock_stdout):
        """Test initial and final grids are printed."""
        cli = CLIGameOfLife()
        grid = Grid.from_seed(5, 5, [(1, 2), (2, 2), (3, 2)])

        cli.run_simulation(grid, max_generations=10, show_grid=True)

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert "Final grid" in output
        assert ".***." in output

    def test_animate(self):
        """Test animation plays the requested generations."""
        cli = CLIGameOfLife()
        grid = Grid.from_seed(5, 5, [(1, 2), (2, 2), (3, 2)])

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            final_gen = cli.animate(grid, max_generations=2, frame_delay_ms=0)

        assert final_gen == 2
        assert "Generation: 2/2" in mock_stdout.getvalue()

    def test_format_grid_small(self):
        """Test grid formatting for small grids."""
        cli = CLIGameOfLife()
        grid = Grid.from_seed(5, 5, [(2, 2)])

        formatted = cli._format_grid(grid)
        assert "*" in formatted
        assert "....." in formatted

    def test_format_grid_large(self):
        """Test grid formatting for large grids."""
        cli = CLIGameOfLife()
        formatted = cli._format_grid(Grid(100, 100), max_size=50)
        assert "too large to display" in formatted

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test pattern listing."""
        CLIGameOfLife().list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Block" in output
        assert "Still Life:" in output
        assert "Oscillators:" in output


class TestParseCells:
    """Test the explicit cell list parser."""

    def test_parse(self):
        """Test a well-formed list."""
        assert parse_cells("1,2; 2,2;3,2") == [(1, 2), (2, 2), (3, 2)]

    def test_trailing_separator(self):
        """Test empty entries are skipped."""
        assert parse_cells("0,0;") == [(0, 0)]

    @pytest.mark.parametrize("value", ["1,2,3", "1", "a,b"])
    def test_invalid(self, value):
        """Test malformed entries raise."""
        with pytest.raises(ValueError):
            parse_cells(value)


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_defaults(self):
        """Test default values."""
        args = create_parser().parse_args([])

        assert args.width == 20
        assert args.height == 20
        assert args.population == 0.5
        assert args.max_generations == 100
        assert args.frame_delay == 96
        assert args.headless is False
        assert args.seed is None
        assert args.cells is None

    def test_parse_short_args(self):
        """Test parsing short argument forms."""
        args = create_parser().parse_args(["-W", "25", "-H", "35", "-p", "0.15", "-m", "10", "-d", "0", "-v", "-g"])

        assert args.width == 25
        assert args.height == 35
        assert args.population == 0.15
        assert args.max_generations == 10
        assert args.frame_delay == 0
        assert args.verbose is True
        assert args.show_grid is True

    def test_parse_seed_args(self):
        """Test parsing seeding arguments."""
        args = create_parser().parse_args(
            ["--pattern", "Glider", "--pattern-x", "10", "--pattern-y", "15", "--cells", "1,1", "--seed", "3"]
        )

        assert args.pattern == "Glider"
        assert args.pattern_x == 10
        assert args.pattern_y == 15
        assert args.cells == "1,1"
        assert args.seed == 3


class TestValidation:
    """Test argument validation."""

    def _args(self, **overrides):
        values = dict(
            width=20,
            height=20,
            population=0.5,
            max_generations=100,
            frame_delay=96,
            pattern_x=0,
            pattern_y=0,
        )
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_valid(self):
        """Test validation with valid arguments."""
        assert validate_args(self._args()) is True

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": 0},
            {"height": -1},
            {"population": 1.5},
            {"max_generations": 0},
            {"frame_delay": -1},
            {"pattern_x": -1},
        ],
    )
    @patch("sys.stdout", new_callable=StringIO)
    def test_invalid(self, mock_stdout, overrides):
        """Test validation rejects bad values."""
        assert validate_args(self._args(**overrides)) is False
        assert "Error: Invalid arguments:" in mock_stdout.getvalue()


class TestOutputFormatting:
    """Test result formatting."""

    def test_format_finish_reason(self):
        """Test finish reason descriptions."""
        assert "Still life" in format_finish_reason("cycle", {"cycle_length": 1})
        assert "cycle length 2" in format_finish_reason("cycle", {"cycle_length": 2})
        assert "Extinction" in format_finish_reason("extinction", {})
        assert "maximum generations" in format_finish_reason("max_generations", {})

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_compact(self, mock_stdout):
        """Test compact result output."""
        stats = {"initial_population": 10, "population": 4, "duration_seconds": 0.5, "generations_per_second": 20}
        print_results(10, "extinction", stats, verbose=False)

        output = mock_stdout.getvalue()
        assert "Simulation completed after 10 generations" in output
        assert "Population: 10 -> 4" in output


class TestMain:
    """Test the main entry point."""

    @patch("gameoflife.frontends.cli.CLIGameOfLife")
    def test_main_list_patterns(self, mock_cli_class):
        """Test main function with --list-patterns."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["gameoflife", "--list-patterns"]):
            result = main()

        assert result == 0
        mock_cli.list_patterns.assert_called_once()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        """Test main function with invalid arguments."""
        with patch("sys.argv", ["gameoflife", "--width", "-5"]):
            assert main() == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_pattern(self, mock_stdout):
        """Test main function with an unknown pattern."""
        with patch("sys.argv", ["gameoflife", "--pattern", "InvalidPattern"]):
            assert main() == 1

        assert "Pattern 'InvalidPattern' not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_cells(self, mock_stdout):
        """Test main function with a malformed cell list."""
        with patch("sys.argv", ["gameoflife", "--cells", "1;2"]):
            assert main() == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_cells_out_of_bounds(self, mock_stdout):
        """Test out-of-range seed cells are reported, not fatal."""
        with patch("sys.argv", ["gameoflife", "-W", "4", "-H", "4", "--cells", "1,1;9,9", "--headless"]):
            assert main() == 1

        assert "out of bounds" in mock_stdout.getvalue()

    @patch("gameoflife.frontends.cli.CLIGameOfLife.animate")
    def test_main_empty_cells(self, mock_animate):
        """Test an explicit empty cell list seeds an empty grid, not a random one."""
        with patch("sys.argv", ["gameoflife", "-W", "6", "-H", "6", "--cells", ""]):
            assert main() == 0

        grid = mock_animate.call_args.args[0]
        assert grid.shape == (6, 6)
        assert grid.population == 0

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_headless(self, mock_stdout):
        """Test a headless run of a seeded block."""
        argv = ["gameoflife", "-W", "4", "-H", "4", "--cells", "1,1;2,1;1,2;2,2", "--headless"]
        with patch("sys.argv", argv):
            assert main() == 0

        assert "Still life" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_animate(self, mock_stdout):
        """Test an animated run writes every generation."""
        argv = ["gameoflife", "-W", "5", "-H", "5", "--cells", "1,2;2,2;3,2", "-m", "2", "-d", "0"]
        with patch("sys.argv", argv):
            assert main() == 0

        output = mock_stdout.getvalue()
        assert "Generation: 1/2" in output
        assert "Generation: 2/2" in output

    @patch("gameoflife.frontends.cli.CLIGameOfLife")
    def test_main_pattern_auto_center(self, mock_cli_class):
        """Test automatic pattern centering."""
        mock_cli = Mock()
        mock_pattern = Mock()
        mock_pattern.get_size.return_value = (5, 3)
        mock_cli.pattern_library.get_pattern.return_value = mock_pattern
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["gameoflife", "-W", "20", "-H", "20", "--pattern", "Test"]):
            result = main()

        assert result == 0
        kwargs = mock_cli.build_grid.call_args.kwargs
        assert kwargs["pattern_x"] == 7
        assert kwargs["pattern_y"] == 8
        mock_cli.animate.assert_called_once()

    @patch("gameoflife.frontends.cli.CLIGameOfLife")
    def test_main_keyboard_interrupt(self, mock_cli_class):
        """Test interruption exits cleanly with an error status."""
        mock_cli = Mock()
        mock_cli.animate.side_effect = KeyboardInterrupt
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["gameoflife"]), patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main() == 1

        assert "interrupted" in mock_stdout.getvalue()

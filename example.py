#!/usr/bin/env python3
"""
Example usage of the gameoflife package.
"""

from gameoflife import GameOfLife, Grid, PatternLibrary


def main():
    """Demonstrate programmatic usage of the gameoflife package."""
    # Seed a glider near the top-left corner
    glider = PatternLibrary().get_pattern("Glider")
    grid = glider.to_grid(12, 12, offset_x=1, offset_y=1)
    game = GameOfLife(grid)

    print("Initial state:")
    print(grid)
    print()

    for _ in range(4):
        game.step()
        print(f"Generation {game.generation}:")
        print(grid)
        print()

    # Individual cells can be edited between generations
    grid.toggle_cell(0, 0).toggle_cell(11, 11)
    print(f"Population after edits: {game.population}")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")

    # Animate a random grid in the terminal
    GameOfLife(Grid.random(20, 20), max_generations=100).run()


if __name__ == "__main__":
    main()

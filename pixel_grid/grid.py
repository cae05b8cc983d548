"""The 2D colour grid shared by the converter, renderer and editor."""

from __future__ import annotations

import numpy as np

from pixel_grid.color_utils import TRANSPARENT, hex_to_rgb

# grid[row][col] -> "#RRGGBB" or "transparent"
Grid = list[list[str]]


def empty_grid(width: int, height: int) -> Grid:
    """A ``height`` x ``width`` grid with every cell transparent."""
    return [[TRANSPARENT] * width for _ in range(height)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def grid_size(grid: Grid) -> tuple[int, int]:
    """Return ``(width, height)``."""
    if not grid:
        return 0, 0
    return len(grid[0]), len(grid)


def grid_to_array(grid: Grid) -> np.ndarray:
    """Grid as an (H, W, 4) uint8 RGBA array, one pixel per cell."""
    w, h = grid_size(grid)
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    for j, row in enumerate(grid):
        for i, color in enumerate(row):
            if color != TRANSPARENT:
                arr[j, i] = (*hex_to_rgb(color), 255)
    return arr

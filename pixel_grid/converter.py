"""Image -> colour grid conversion."""

from __future__ import annotations

import logging
import time

import numpy as np

from pixel_grid.color_utils import TRANSPARENT
from pixel_grid.config import ConversionOptions
from pixel_grid.grid import Grid, empty_grid
from pixel_grid.mapper import cell_rect
from pixel_grid.reducer import reduce_cell
from pixel_grid.sampler import as_rgba, sample_cell

logger = logging.getLogger(__name__)


def convert(
    source: np.ndarray,
    image_size: tuple[int, int],
    options: ConversionOptions,
) -> Grid:
    """Reduce every grid cell of *source* to a single colour.

    Args:
        source:     (H, W, 4) or (H, W, 3) uint8 image.
        image_size: ``(width, height)`` the cell mapper clamps against.
        options:    Grid geometry and reduction method.

    Returns:
        A fresh ``grid_height`` x ``grid_width`` grid.  Cells that cover no
        opaque pixel are ``"transparent"``; a degenerate *image_size*
        yields an all-transparent grid.
    """
    width, height = image_size
    grid = empty_grid(options.grid_width, options.grid_height)
    if width <= 0 or height <= 0:
        logger.debug("Degenerate image size %sx%s, grid left transparent", width, height)
        return grid

    rgba = as_rgba(source)
    width = min(width, rgba.shape[1])
    height = min(height, rgba.shape[0])

    logger.info(
        "Converting %dx%d image -> %dx%d grid (%s) ...",
        width, height, options.grid_width, options.grid_height, options.method.value,
    )
    t0 = time.perf_counter()

    for j in range(options.grid_height):
        row = grid[j]
        for i in range(options.grid_width):
            rect = cell_rect(i, j, options, width, height)
            if rect is None:
                continue
            pixels = sample_cell(rgba, rect)
            row[i] = reduce_cell(pixels, options.method) if len(pixels) else TRANSPARENT

    logger.info("Conversion done  (%.2f s)", time.perf_counter() - t0)
    return grid

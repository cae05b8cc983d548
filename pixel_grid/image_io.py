"""Image loading and PNG export."""

from __future__ import annotations

from pathlib import Path
from typing import IO

import numpy as np
from PIL import Image

from pixel_grid.color_utils import round_half_up
from pixel_grid.grid import Grid, grid_size
from pixel_grid.renderer import render_image


def compute_downscale_size(
    original_width: int,
    original_height: int,
    max_side: int = 1024,
) -> tuple[int, int]:
    """Compute (w, h) so that neither side exceeds *max_side*.

    Images already within bounds are returned unchanged; larger ones are
    scaled uniformly (aspect ratio preserved, rounded, minimum 1).
    """
    if original_width <= max_side and original_height <= max_side:
        return original_width, original_height
    factor = min(max_side / original_width, max_side / original_height)
    w = max(1, round_half_up(original_width * factor))
    h = max(1, round_half_up(original_height * factor))
    return w, h


def load_image(path: str | Path | IO[bytes], max_side: int = 1024) -> np.ndarray:
    """Decode an image and downscale it to fit *max_side*.

    Raises:
        PIL.UnidentifiedImageError: the file is not a readable image.
        OSError: the file cannot be read.

    Returns:
        (H, W, 4) uint8 RGBA array.
    """
    with Image.open(path) as src:
        img = src.convert("RGBA")
    w, h = compute_downscale_size(img.width, img.height, max_side)
    if (w, h) != img.size:
        img = img.resize((w, h), Image.LANCZOS)
    return np.array(img, dtype=np.uint8)


def grid_image(grid: Grid, scale: int = 1) -> Image.Image:
    """Grid rendered with every cell as a *scale* x *scale* block."""
    if scale < 1:
        msg = f"Export scale must be at least 1, got {scale}"
        raise ValueError(msg)
    w, h = grid_size(grid)
    return render_image(grid, w * scale, h * scale)


def save_grid_png(grid: Grid, path: str | Path, scale: int = 1) -> None:
    """Write the grid as a PNG (transparent cells stay transparent)."""
    grid_image(grid, scale).save(path, format="PNG")

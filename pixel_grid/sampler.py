"""Reading opaque pixels out of a source-image rectangle."""

from __future__ import annotations

import numpy as np

from pixel_grid.mapper import Rect


def as_rgba(source: np.ndarray) -> np.ndarray:
    """View an (H, W, 3) or (H, W, 4) array as RGBA (RGB is fully opaque)."""
    if source.ndim != 3 or source.shape[2] not in (3, 4):
        msg = f"Expected an (H, W, 3|4) array, got shape {source.shape}"
        raise ValueError(msg)
    if source.shape[2] == 4:
        return source
    alpha = np.full(source.shape[:2] + (1,), 255, dtype=source.dtype)
    return np.concatenate([source, alpha], axis=2)


def sample_cell(source: np.ndarray, rect: Rect) -> np.ndarray:
    """Opaque pixels inside *rect*, in row-major scan order.

    Args:
        source: (H, W, 4) uint8 RGBA image.
        rect:   Half-open ``(x0, y0, x1, y1)`` in image coordinates.

    Returns:
        (N, 3) uint8 - RGB of every pixel whose alpha is non-zero.
    """
    x0, y0, x1, y1 = rect
    region = source[y0:y1, x0:x1].reshape(-1, 4)
    return region[region[:, 3] > 0, :3]

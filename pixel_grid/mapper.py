"""Canvas-space grid cells to source-image sampling rectangles."""

from __future__ import annotations

import math

from pixel_grid.config import ConversionOptions, Method

# Fraction of a cell added on every side for the "neighbor" method
NEIGHBOR_MARGIN = 0.25

Rect = tuple[int, int, int, int]


def cell_rect(
    col: int,
    row: int,
    options: ConversionOptions,
    image_width: int,
    image_height: int,
) -> Rect | None:
    """Source-image rectangle ``(x0, y0, x1, y1)`` sampled for one cell.

    The cell's canvas rectangle is mapped through the inverse of the
    pan / zoom transform (``image = (canvas - offset) / scale``).  Lower
    bounds are floored, upper bounds ceiled, and both clamped to the image.

    Returns:
        The half-open rectangle, or ``None`` when nothing of the image
        falls inside the cell.
    """
    cell_w = options.canvas_width / options.grid_width
    cell_h = options.canvas_height / options.grid_height

    cx0 = col * cell_w
    cy0 = row * cell_h

    if options.method == Method.neighbor:
        margin_x = cell_w * NEIGHBOR_MARGIN
        margin_y = cell_h * NEIGHBOR_MARGIN
        cx1 = (col + 1) * cell_w + margin_x
        cy1 = (row + 1) * cell_h + margin_y
        cx0 -= margin_x
        cy0 -= margin_y
    else:
        cx1 = cx0 + cell_w
        cy1 = cy0 + cell_h

    scale = options.image_scale
    x0 = max(0, math.floor((cx0 - options.offset_x) / scale))
    y0 = max(0, math.floor((cy0 - options.offset_y) / scale))
    x1 = min(image_width, math.ceil((cx1 - options.offset_x) / scale))
    y1 = min(image_height, math.ceil((cy1 - options.offset_y) / scale))

    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def fit_to_canvas(
    image_width: int,
    image_height: int,
    canvas_width: float,
    canvas_height: float,
) -> tuple[float, float, float]:
    """Scale and offsets that fit the whole image centred on the canvas.

    Returns:
        ``(image_scale, offset_x, offset_y)``.
    """
    scale = min(canvas_width / image_width, canvas_height / image_height)
    offset_x = (canvas_width - image_width * scale) / 2
    offset_y = (canvas_height - image_height * scale) / 2
    return scale, offset_x, offset_y


def zoom_about_center(
    image_scale: float,
    offset_x: float,
    offset_y: float,
    new_scale: float,
    canvas_width: float,
    canvas_height: float,
) -> tuple[float, float]:
    """Offsets after zooming to *new_scale* around the canvas centre.

    The source point under the centre of the canvas stays put.
    """
    center_x = canvas_width / 2
    center_y = canvas_height / 2
    src_x = (center_x - offset_x) / image_scale
    src_y = (center_y - offset_y) / image_scale
    return center_x - src_x * new_scale, center_y - src_y * new_scale


def pan_range(
    canvas_extent: float,
    image_extent: int,
    image_scale: float,
    offset: float = 0.0,
) -> tuple[float, float]:
    """Offset bounds along one axis that let any part of the image be shown.

    The lower bound brings the far edge of the scaled image to the canvas
    edge; the range always includes ``[-canvas, canvas]`` and *offset*.
    """
    low = min(-canvas_extent, canvas_extent - image_extent * image_scale, offset)
    high = max(canvas_extent, offset)
    return float(low), float(high)

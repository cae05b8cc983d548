"""Drawing a colour grid (and the positioning preview) onto pixel surfaces."""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from pixel_grid.color_utils import TRANSPARENT, hex_to_rgb, round_half_up
from pixel_grid.config import ConversionOptions
from pixel_grid.grid import Grid, grid_size

PREVIEW_BACKGROUND = (51, 51, 51)


def _edges(cells: int, cell_size: float) -> list[int]:
    """Whole-pixel boundaries of *cells* consecutive cells."""
    return [round_half_up(k * cell_size) for k in range(cells + 1)]


def render(grid: Grid, surface: np.ndarray) -> None:
    """Fill each opaque cell's rectangle on *surface* in place.

    Cells are hard-edged blocks of ``W / grid_width`` by ``H / grid_height``
    pixels.  Transparent cells leave the surface untouched and nothing is
    cleared beforehand.

    Args:
        grid:    Colour grid to draw.
        surface: (H, W, 4) uint8 RGBA array.
    """
    gw, gh = grid_size(grid)
    if gw == 0 or gh == 0:
        return
    height, width = surface.shape[:2]
    xs = _edges(gw, width / gw)
    ys = _edges(gh, height / gh)

    for j, row in enumerate(grid):
        y0, y1 = ys[j], ys[j + 1]
        for i, color in enumerate(row):
            if color == TRANSPARENT:
                continue
            surface[y0:y1, xs[i]:xs[i + 1]] = (*hex_to_rgb(color), 255)


def render_image(grid: Grid, width: int, height: int) -> Image.Image:
    """Render onto a fresh, fully transparent RGBA image."""
    surface = np.zeros((height, width, 4), dtype=np.uint8)
    render(grid, surface)
    return Image.fromarray(surface)


def render_preview(
    source: np.ndarray,
    options: ConversionOptions,
    grid_line_color: tuple[int, int, int, int] = (255, 255, 255, 60),
) -> Image.Image:
    """The positioning view: source image panned / zoomed under the grid.

    Args:
        source:          (H, W, 4) uint8 RGBA image.
        options:         Canvas size, grid size, offsets and scale.
        grid_line_color: RGBA of the cell boundary lines.

    Returns:
        RGBA image of ``canvas_width`` x ``canvas_height`` pixels.
    """
    cw = round_half_up(options.canvas_width)
    ch = round_half_up(options.canvas_height)
    canvas = Image.new("RGBA", (cw, ch), (*PREVIEW_BACKGROUND, 255))

    h, w = source.shape[:2]
    sw = max(1, round_half_up(w * options.image_scale))
    sh = max(1, round_half_up(h * options.image_scale))
    img = Image.fromarray(source).convert("RGBA").resize((sw, sh), Image.LANCZOS)
    # paste() clips negative / overflowing offsets; alpha is the mask
    offset = (round_half_up(options.offset_x), round_half_up(options.offset_y))
    canvas.paste(img, offset, img)

    overlay = Image.new("RGBA", (cw, ch), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    cell_w = cw / options.grid_width
    cell_h = ch / options.grid_height
    for i in range(1, options.grid_width):
        x = round_half_up(i * cell_w)
        draw.line([(x, 0), (x, ch)], fill=grid_line_color, width=1)
    for j in range(1, options.grid_height):
        y = round_half_up(j * cell_h)
        draw.line([(0, y), (cw, y)], fill=grid_line_color, width=1)
    return Image.alpha_composite(canvas, overlay)

"""
Pixel Grid
==========

Turn any image into low-resolution pixel art: each grid cell is sampled
from the source and reduced to a single colour by one of five methods:

- **average** / **neighbor** (mean colour, plain or with a 25 % margin)
- **most** (frequency-mode clustering)
- **most_light** / **most_dark** (brightness-weighted clustering)

The resulting grid can be rendered, exported, or edited interactively.
"""

__version__ = "1.0.0"

from pixel_grid.config import ConversionOptions, Method, PixelGridConfig
from pixel_grid.converter import convert
from pixel_grid.editor import EditorSession, Tool
from pixel_grid.image_io import (
    compute_downscale_size,
    grid_image,
    load_image,
    save_grid_png,
)
from pixel_grid.renderer import render, render_image, render_preview

__all__ = [
    "ConversionOptions",
    "EditorSession",
    "Method",
    "PixelGridConfig",
    "Tool",
    "compute_downscale_size",
    "convert",
    "grid_image",
    "load_image",
    "render",
    "render_image",
    "render_preview",
    "save_grid_png",
]

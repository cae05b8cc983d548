"""Centralised configuration via frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Method(str, Enum):
    """Colour reduction strategy applied to every cell of a conversion."""

    most = "most"
    average = "average"
    neighbor = "neighbor"
    most_light = "most_light"
    most_dark = "most_dark"


# Euclidean RGB distance under which two colours share a cluster
SIMILARITY_THRESHOLD = 30


@dataclass(frozen=True)
class ConversionOptions:
    """How canvas-space grid cells map onto the source image.

    Attributes:
        grid_width:    Number of cells per row.
        grid_height:   Number of rows.
        method:        Reduction method (see :class:`Method`).
        offset_x:      Canvas x position of the image's left edge (may be negative).
        offset_y:      Canvas y position of the image's top edge (may be negative).
        image_scale:   Canvas pixels per source pixel (> 0).
        canvas_width:  Width of the canvas the grid is laid over.
        canvas_height: Height of the canvas the grid is laid over.
    """

    grid_width: int = 32
    grid_height: int = 32
    method: Method = Method.most
    offset_x: float = 0.0
    offset_y: float = 0.0
    image_scale: float = 1.0
    canvas_width: float = 128.0
    canvas_height: float = 128.0

    def __post_init__(self) -> None:
        try:
            method = Method(self.method)
        except ValueError:
            available = ", ".join(m.value for m in Method)
            msg = f"Unknown method '{self.method}'. Available: {available}"
            raise ValueError(msg) from None
        object.__setattr__(self, "method", method)

        if self.grid_width < 1 or self.grid_height < 1:
            msg = f"Grid must be at least 1x1, got {self.grid_width}x{self.grid_height}"
            raise ValueError(msg)
        if self.image_scale <= 0:
            msg = f"Image scale must be positive, got {self.image_scale}"
            raise ValueError(msg)

    def cli_command(self, input_path: str = "./input") -> str:
        """Equivalent ``pixel-grid`` invocation reproducing these options."""
        return (
            f'pixel-grid --input "{input_path}"'
            f" --gridWidth {self.grid_width} --gridHeight {self.grid_height}"
            f" --method {self.method.value} --scale {self.image_scale:g}"
            f" --offsetX {self.offset_x:g} --offsetY {self.offset_y:g}"
            f" --canvasWidth {self.canvas_width:g} --canvasHeight {self.canvas_height:g}"
        )


@dataclass(frozen=True)
class PixelGridConfig:
    """Defaults shared by the CLI and the interactive editor.

    Attributes:
        grid_width:         Default cells per row.
        grid_height:        Default rows.
        method:             Default reduction method.
        image_scale:        Default source zoom for the CLI.
        offset_x:           Default horizontal pan.
        offset_y:           Default vertical pan.
        export_scale:       Output pixels per cell for the CLI.
        canvas_cell_size:   Canvas pixels per cell when no canvas size is given.
        max_side:           Sources are downscaled to fit this longest side.
        preview_cell_size:  Editor preview pixels per cell.
        wand_threshold:     Magic wand colour distance.
        recent_colors:      Length of the editor's recent colour list.
        export_scales:      Scales offered by the editor's export buttons.
        output:             Output file or folder.
    """

    grid_width: int = 32
    grid_height: int = 32
    method: Method = Method.most
    image_scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    export_scale: int = 1

    canvas_cell_size: int = 4
    max_side: int = 1024

    # Editor
    preview_cell_size: int = 4
    wand_threshold: float = 5.0
    recent_colors: int = 6
    export_scales: tuple[int, ...] = (1, 4, 8)

    output: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"}
    )

"""Interactive grid editing: brush, eraser, magic wand and undo history.

All state lives on an :class:`EditorSession`, so independent sessions can
coexist and every tool can be driven without a UI.  History is kept as
full grid snapshots: ``history[-1]`` always mirrors the current grid once
an action has been committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from PIL import Image

from pixel_grid.color_utils import TRANSPARENT, color_distance, normalize_color
from pixel_grid.config import PixelGridConfig
from pixel_grid.grid import Grid, copy_grid, grid_size
from pixel_grid.image_io import grid_image

logger = logging.getLogger(__name__)

_DEFAULTS = PixelGridConfig()


class Tool(str, Enum):
    brush = "brush"
    eraser = "eraser"
    magic_wand = "magic_wand"


@dataclass
class EditorSession:
    """One editing session over a converted grid.

    Attributes:
        grid:              The grid being edited (mutated in place).
        tool:              Active tool.
        draw_color:        Brush colour (``transparent`` while erasing).
        brush_size:        Side of the square block a brush stroke fills.
        wand_threshold:    Magic wand colour distance (Euclidean RGB).
        recent_limit:      Maximum length of :attr:`recent_colors`.
        history:           Committed snapshots, oldest first.
        redo_stack:        Snapshots undone since the last new action.
        recent_colors:     Recently drawn colours, newest first.
        conversion_backup: The grid as produced by the converter.
    """

    grid: Grid
    tool: Tool = Tool.brush
    draw_color: str = "#000000"
    brush_size: int = 1
    wand_threshold: float = _DEFAULTS.wand_threshold
    recent_limit: int = _DEFAULTS.recent_colors
    history: list[Grid] = field(default_factory=list)
    redo_stack: list[Grid] = field(default_factory=list)
    recent_colors: list[str] = field(default_factory=list)
    conversion_backup: Grid = field(default_factory=list)
    _stroke_painted: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.conversion_backup:
            self.conversion_backup = copy_grid(self.grid)
        if not self.history:
            self.save_history()

    # -- geometry ------------------------------------------------------

    @property
    def width(self) -> int:
        return grid_size(self.grid)[0]

    @property
    def height(self) -> int:
        return grid_size(self.grid)[1]

    def _clamp(self, row: int, col: int) -> tuple[int, int]:
        return (
            max(0, min(self.height - 1, row)),
            max(0, min(self.width - 1, col)),
        )

    # -- tool selection ------------------------------------------------

    def select_tool(self, tool: Tool | str) -> None:
        self.tool = Tool(tool)
        if self.tool == Tool.eraser:
            self.draw_color = TRANSPARENT
        elif self.tool == Tool.brush and self.draw_color == TRANSPARENT:
            self.draw_color = "#000000"

    def set_color(self, color: str) -> None:
        """Pick a drawing colour; switches to the brush."""
        self.draw_color = normalize_color(color)
        self.tool = Tool.eraser if self.draw_color == TRANSPARENT else Tool.brush

    def pick_recent(self, color: str) -> None:
        if color not in self.recent_colors:
            msg = f"'{color}' is not a recent colour"
            raise ValueError(msg)
        self.set_color(color)

    def add_recent_color(self, color: str) -> None:
        if color == TRANSPARENT:
            return
        self.recent_colors = [c for c in self.recent_colors if c != color]
        self.recent_colors.insert(0, color)
        del self.recent_colors[self.recent_limit:]

    # -- history -------------------------------------------------------

    def save_history(self) -> None:
        """Commit the current grid as a snapshot; clears the redo stack."""
        self.history.append(copy_grid(self.grid))
        self.redo_stack = []

    def undo(self) -> bool:
        """Step back one snapshot.  Returns ``False`` if nothing to undo."""
        if len(self.history) <= 1:
            return False
        self.redo_stack.append(self.history.pop())
        self.grid = copy_grid(self.history[-1])
        return True

    def redo(self) -> bool:
        """Re-apply the last undone snapshot.  Returns ``False`` if none."""
        if not self.redo_stack:
            return False
        state = self.redo_stack.pop()
        self.history.append(copy_grid(state))
        self.grid = copy_grid(state)
        return True

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def reset_to_conversion(self) -> None:
        """Discard all edits and restart history from the converted grid."""
        self.grid = copy_grid(self.conversion_backup)
        self.history = []
        self.redo_stack = []
        self.save_history()

    # -- brush / eraser ------------------------------------------------

    def paint(self, row: int, col: int) -> None:
        """Fill the brush block anchored at (*row*, *col*) with the draw colour.

        Block indices past the right / bottom edge are clamped onto the
        last column / row.
        """
        row, col = self._clamp(row, col)
        color = TRANSPARENT if self.tool == Tool.eraser else self.draw_color
        for dj in range(self.brush_size):
            nj = min(row + dj, self.height - 1)
            for di in range(self.brush_size):
                ni = min(col + di, self.width - 1)
                self.grid[nj][ni] = color
        self._stroke_painted = True

    def begin_stroke(self, row: int, col: int) -> None:
        if self.tool == Tool.magic_wand:
            self.magic_wand(row, col)
            return
        if self.tool == Tool.brush:
            self.add_recent_color(self.draw_color)
        self.paint(row, col)

    def continue_stroke(self, row: int, col: int) -> None:
        if self.tool != Tool.magic_wand:
            self.paint(row, col)

    def end_stroke(self) -> None:
        """Commit the stroke to history if it changed anything."""
        if self._stroke_painted:
            self.save_history()
            self._stroke_painted = False

    # -- magic wand ----------------------------------------------------

    def flood_fill(
        self,
        row: int,
        col: int,
        target: str,
        replacement: str,
    ) -> int:
        """Replace the 4-connected region of colours near *target*.

        A cell joins the region when it is opaque and within
        :attr:`wand_threshold` of *target*.  Uses an explicit stack.

        Returns:
            Number of cells replaced.
        """
        if target == replacement or target == TRANSPARENT:
            return 0

        filled = 0
        seen: set[tuple[int, int]] = set()
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            if r < 0 or r >= self.height or c < 0 or c >= self.width:
                continue
            if (r, c) in seen:
                continue
            seen.add((r, c))
            current = self.grid[r][c]
            if current == TRANSPARENT:
                continue
            if color_distance(current, target) > self.wand_threshold:
                continue
            self.grid[r][c] = replacement
            filled += 1
            stack.append((r - 1, c))
            stack.append((r + 1, c))
            stack.append((r, c - 1))
            stack.append((r, c + 1))
        return filled

    def magic_wand(self, row: int, col: int) -> int:
        """Erase every region touching the brush area at (*row*, *col*).

        Each distinct opaque colour in the area is flood-filled to
        transparent from the first cell holding it.  Always commits a
        snapshot.

        Returns:
            Number of cells erased.
        """
        row, col = self._clamp(row, col)
        end_row = min(self.height - 1, row + self.brush_size - 1)
        end_col = min(self.width - 1, col + self.brush_size - 1)

        area = [
            (m, n)
            for m in range(row, end_row + 1)
            for n in range(col, end_col + 1)
        ]
        colors = dict.fromkeys(
            self.grid[m][n] for m, n in area if self.grid[m][n] != TRANSPARENT
        )

        erased = 0
        for color in colors:
            # first cell still holding the colour; earlier fills may have cleared some
            start = next(((m, n) for m, n in area if self.grid[m][n] == color), None)
            if start is not None:
                erased += self.flood_fill(*start, color, TRANSPARENT)

        logger.debug("Magic wand at (%d, %d) erased %d cells", row, col, erased)
        self.save_history()
        return erased

    # -- export --------------------------------------------------------

    def export(self, scale: int = 1) -> Image.Image:
        """Current grid as an RGBA image, each cell *scale* x *scale*."""
        return grid_image(self.grid, scale)

    def export_filename(self, scale: int = 1) -> str:
        return f"pixel_art_{self.width}x{self.height}_x{scale}.png"

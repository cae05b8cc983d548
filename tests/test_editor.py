"""Tests for pixel_grid.editor."""

from __future__ import annotations

import pytest

from pixel_grid.color_utils import TRANSPARENT
from pixel_grid.editor import EditorSession, Tool
from pixel_grid.grid import copy_grid

R, G, B, K, W = "#FF0000", "#00FF00", "#0000FF", "#000000", "#FFFFFF"
T = TRANSPARENT

# -- Fixtures ----------------------------------------------------------


@pytest.fixture
def grid() -> list[list[str]]:
    return [
        [R, R, G, G],
        [R, R, G, G],
        [B, B, T, K],
    ]


@pytest.fixture
def session(grid: list[list[str]]) -> EditorSession:
    return EditorSession(grid=copy_grid(grid))


# -- Session state -----------------------------------------------------

class TestSession:
    def test_initial_state(self, session: EditorSession, grid: list[list[str]]) -> None:
        assert session.width == 4
        assert session.height == 3
        assert session.tool == Tool.brush
        assert session.wand_threshold == 5
        assert len(session.history) == 1
        assert session.history[0] == grid
        assert session.conversion_backup == grid
        assert not session.can_undo
        assert not session.can_redo

    def test_sessions_independent(self, grid: list[list[str]]) -> None:
        a = EditorSession(grid=copy_grid(grid))
        b = EditorSession(grid=copy_grid(grid))
        a.set_color(W)
        a.begin_stroke(0, 0)
        a.end_stroke()
        assert b.grid == grid
        assert len(b.history) == 1
        assert b.recent_colors == []

    def test_set_color_normalises(self, session: EditorSession) -> None:
        session.select_tool("magic_wand")
        session.set_color("#abcdef")
        assert session.draw_color == "#ABCDEF"
        assert session.tool == Tool.brush

    def test_eraser_tool(self, session: EditorSession) -> None:
        session.select_tool(Tool.eraser)
        assert session.draw_color == T
        session.select_tool(Tool.brush)
        assert session.draw_color != T

    def test_unknown_tool(self, session: EditorSession) -> None:
        with pytest.raises(ValueError):
            session.select_tool("lasso")


# -- Brush / eraser ----------------------------------------------------

class TestBrush:
    def test_block_fill(self, session: EditorSession) -> None:
        session.set_color(W)
        session.brush_size = 2
        session.paint(1, 1)
        assert session.grid[1][1:3] == [W, W]
        assert session.grid[2][1:3] == [W, W]
        assert session.grid[0] == [R, R, G, G]

    def test_block_clamped_at_edge(self, session: EditorSession) -> None:
        session.set_color(W)
        session.brush_size = 3
        session.paint(2, 3)
        assert session.grid[2][3] == W
        assert session.grid[2][2] == T
        assert session.grid[1][3] == G

    def test_out_of_range_anchor_clamped(self, session: EditorSession) -> None:
        session.set_color(W)
        session.paint(10, -5)
        assert session.grid[2][0] == W

    def test_eraser(self, session: EditorSession) -> None:
        session.select_tool(Tool.eraser)
        session.begin_stroke(0, 0)
        session.end_stroke()
        assert session.grid[0][0] == T
        assert session.recent_colors == []

    def test_stroke_is_one_history_step(self, session: EditorSession) -> None:
        session.set_color(W)
        session.begin_stroke(0, 0)
        session.continue_stroke(0, 1)
        session.continue_stroke(0, 2)
        session.end_stroke()
        assert len(session.history) == 2
        assert session.grid[0][:3] == [W, W, W]

    def test_end_without_paint(self, session: EditorSession) -> None:
        session.end_stroke()
        assert len(session.history) == 1


# -- Recent colours ----------------------------------------------------

class TestRecentColors:
    def test_move_to_front(self, session: EditorSession) -> None:
        for c in [R, G, R]:
            session.add_recent_color(c)
        assert session.recent_colors == [R, G]

    def test_limit(self, session: EditorSession) -> None:
        colors = [f"#0000{i:02X}" for i in range(8)]
        for c in colors:
            session.add_recent_color(c)
        assert len(session.recent_colors) == 6
        assert session.recent_colors[0] == colors[-1]

    def test_transparent_ignored(self, session: EditorSession) -> None:
        session.add_recent_color(T)
        assert session.recent_colors == []

    def test_brush_stroke_records_color(self, session: EditorSession) -> None:
        session.set_color(W)
        session.begin_stroke(0, 0)
        session.end_stroke()
        assert session.recent_colors == [W]

    def test_pick_recent(self, session: EditorSession) -> None:
        session.add_recent_color(B)
        session.select_tool(Tool.eraser)
        session.pick_recent(B)
        assert session.draw_color == B
        assert session.tool == Tool.brush
        with pytest.raises(ValueError):
            session.pick_recent(W)


# -- Undo / redo -------------------------------------------------------

class TestHistory:
    def test_undo_redo(self, session: EditorSession, grid: list[list[str]]) -> None:
        session.set_color(W)
        session.begin_stroke(0, 0)
        session.end_stroke()
        painted = copy_grid(session.grid)

        assert session.undo()
        assert session.grid == grid
        assert session.can_redo

        assert session.redo()
        assert session.grid == painted
        assert not session.can_redo

    def test_undo_at_start(self, session: EditorSession) -> None:
        assert not session.undo()
        assert len(session.history) == 1

    def test_redo_empty(self, session: EditorSession) -> None:
        assert not session.redo()

    def test_new_action_clears_redo(self, session: EditorSession) -> None:
        session.set_color(W)
        session.begin_stroke(0, 0)
        session.end_stroke()
        session.undo()
        session.begin_stroke(1, 1)
        session.end_stroke()
        assert not session.can_redo

    def test_snapshots_are_copies(self, session: EditorSession) -> None:
        session.set_color(W)
        session.paint(0, 0)
        assert session.history[0][0][0] == R

    def test_reset_to_conversion(self, session: EditorSession, grid: list[list[str]]) -> None:
        session.set_color(W)
        session.begin_stroke(0, 0)
        session.end_stroke()
        session.reset_to_conversion()
        assert session.grid == grid
        assert len(session.history) == 1
        assert not session.can_redo


# -- Flood fill / magic wand -------------------------------------------

class TestMagicWand:
    def test_threshold(self) -> None:
        s = EditorSession(grid=[["#000000", "#030000", "#0A0000", "#000000"]])
        filled = s.flood_fill(0, 0, "#000000", W)
        assert filled == 2
        assert s.grid == [[W, W, "#0A0000", "#000000"]]

    def test_adjustable_threshold(self) -> None:
        s = EditorSession(grid=[["#000000", "#030000", "#0A0000", "#000000"]])
        s.wand_threshold = 10
        assert s.flood_fill(0, 0, "#000000", W) == 4

    def test_transparent_blocks_fill(self) -> None:
        s = EditorSession(grid=[[R, T, R]])
        s.flood_fill(0, 0, R, G)
        assert s.grid == [[G, T, R]]

    def test_four_connected_only(self) -> None:
        s = EditorSession(grid=[[R, B], [B, R]])
        s.flood_fill(0, 0, R, G)
        assert s.grid == [[G, B], [B, R]]

    def test_same_color_noop(self, session: EditorSession) -> None:
        assert session.flood_fill(0, 0, R, R) == 0

    def test_replacement_within_threshold_terminates(self) -> None:
        s = EditorSession(grid=[[K] * 5 for _ in range(5)])
        assert s.flood_fill(2, 2, K, "#010000") == 25

    def test_large_grid_no_recursion_limit(self) -> None:
        s = EditorSession(grid=[[K] * 200 for _ in range(200)])
        assert s.flood_fill(0, 0, K, T) == 200 * 200

    def test_magic_wand_erases_region(self, session: EditorSession) -> None:
        session.select_tool(Tool.magic_wand)
        session.begin_stroke(0, 0)
        assert session.grid[0][:2] == [T, T]
        assert session.grid[1][:2] == [T, T]
        assert session.grid[0][2] == G
        assert len(session.history) == 2

    def test_magic_wand_brush_area_colors(self, session: EditorSession) -> None:
        session.brush_size = 2
        erased = session.magic_wand(1, 1)
        # area covers R, G, B and a transparent cell
        assert erased == 10
        assert session.grid == [[T] * 4, [T] * 4, [T, T, T, K]]

    def test_magic_wand_undo(self, session: EditorSession, grid: list[list[str]]) -> None:
        session.magic_wand(2, 3)
        assert session.grid[2][3] == T
        session.undo()
        assert session.grid == grid


# -- Export ------------------------------------------------------------

class TestExport:
    @pytest.mark.parametrize("scale", [1, 4, 8])
    def test_export_size(self, session: EditorSession, scale: int) -> None:
        img = session.export(scale)
        assert img.size == (4 * scale, 3 * scale)
        assert img.getpixel((0, 0)) == (255, 0, 0, 255)
        assert img.getpixel((2 * scale, 2 * scale))[3] == 0

    def test_export_filename(self, session: EditorSession) -> None:
        assert session.export_filename(4) == "pixel_art_4x3_x4.png"

"""
Pixel Grid — Editor

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io

import streamlit as st
from PIL import Image, ImageDraw

from pixel_grid.config import ConversionOptions, Method, PixelGridConfig
from pixel_grid.converter import convert
from pixel_grid.editor import EditorSession, Tool
from pixel_grid.image_io import load_image
from pixel_grid.mapper import fit_to_canvas, pan_range, zoom_about_center
from pixel_grid.renderer import render_preview

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Pixel Grid",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = PixelGridConfig()
_GRID_SIZES = [8, 16, 24, 32, 48, 64, 96, 128]

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp {
        background-color: #1e1e1e;
        color: #e6e6e6;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .block-container {
        max-width: 1100px;
        padding-top: 2.5rem;
    }
    .step-title {
        font-size: 0.8rem;
        letter-spacing: 0.10em;
        text-transform: uppercase;
        color: #a0a09a;
        margin: 1.5rem 0 0.6rem;
    }
    .swatch {
        display: inline-block;
        width: 22px;
        height: 22px;
        border: 1px solid #555;
        margin-right: 4px;
    }
    [data-testid="stImage"] img {
        image-rendering: pixelated;
    }
    #MainMenu, footer { visibility: hidden; }
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _add_passepartout(img: Image.Image, border: int = 12) -> Image.Image:
    """Checkerboard-backed frame so transparent cells stay visible."""
    w, h = img.size
    board = Image.new("RGBA", (w, h), (200, 200, 200, 255))
    draw = ImageDraw.Draw(board)
    tile = 8
    for y in range(0, h, tile):
        for x in range((y // tile) % 2 * tile, w, tile * 2):
            draw.rectangle([x, y, x + tile - 1, y + tile - 1], fill=(160, 160, 160, 255))
    board.alpha_composite(img.convert("RGBA"))

    framed = Image.new("RGBA", (w + 2 * border, h + 2 * border), (40, 40, 40, 255))
    framed.paste(board, (border, border))
    return framed


def _step(title: str) -> None:
    st.markdown(f'<div class="step-title">{title}</div>', unsafe_allow_html=True)


def _reset_view(image_w: int, image_h: int, canvas_w: int, canvas_h: int) -> None:
    st.session_state.view = fit_to_canvas(image_w, image_h, canvas_w, canvas_h)


# -- Step 1: setup -----------------------------------------------------
st.title("Pixel Grid")

_step("1 · Image and grid")
c1, c2, c3 = st.columns(3)
with c1:
    grid_w = st.selectbox(
        "Grid width", _GRID_SIZES, index=_GRID_SIZES.index(_DEFAULTS.grid_width),
    )
with c2:
    grid_h = st.selectbox(
        "Grid height", _GRID_SIZES, index=_GRID_SIZES.index(_DEFAULTS.grid_height),
    )
with c3:
    cell_px = st.slider("Preview cell size", 1, 16, _DEFAULTS.preview_cell_size)

uploaded = st.file_uploader(
    "Select image", type=["png", "jpg", "jpeg", "gif", "bmp", "webp"],
)

# Persist upload in session state so reruns don't lose it
if uploaded is not None:
    if st.session_state.get("uploaded_name") != uploaded.name:
        st.session_state.uploaded_name = uploaded.name
        st.session_state.source = load_image(
            io.BytesIO(uploaded.getvalue()), _DEFAULTS.max_side,
        )
        st.session_state.pop("view", None)
        st.session_state.pop("session", None)

if "source" not in st.session_state:
    st.stop()

source = st.session_state.source
img_h, img_w = source.shape[:2]
canvas_w = grid_w * cell_px
canvas_h = grid_h * cell_px

if st.session_state.get("canvas") != (canvas_w, canvas_h) or "view" not in st.session_state:
    st.session_state.canvas = (canvas_w, canvas_h)
    _reset_view(img_w, img_h, canvas_w, canvas_h)

# -- Step 2: position & convert ----------------------------------------
_step("2 · Position and convert")
scale, off_x, off_y = st.session_state.view

p1, p2 = st.columns([1, 2])
with p1:
    seed_pct = min(800.0, max(1.0, round(scale * 100, 2)))
    zoom_pct = st.slider("Zoom (%)", 1.0, 800.0, seed_pct, step=0.5)
    if zoom_pct != seed_pct:
        new_scale = zoom_pct / 100
        off_x, off_y = zoom_about_center(scale, off_x, off_y, new_scale, canvas_w, canvas_h)
        scale = new_scale
    off_x = st.slider("Offset X", *pan_range(canvas_w, img_w, scale, off_x), float(off_x))
    off_y = st.slider("Offset Y", *pan_range(canvas_h, img_h, scale, off_y), float(off_y))
    st.session_state.view = (scale, off_x, off_y)

    if st.button("Fit image"):
        _reset_view(img_w, img_h, canvas_w, canvas_h)
        st.rerun()

    method = st.selectbox(
        "Method", [m.value for m in Method],
        index=[m.value for m in Method].index(_DEFAULTS.method.value),
    )

options = ConversionOptions(
    grid_width=grid_w,
    grid_height=grid_h,
    method=method,
    offset_x=off_x,
    offset_y=off_y,
    image_scale=scale,
    canvas_width=canvas_w,
    canvas_height=canvas_h,
)

with p2:
    st.image(render_preview(source, options), use_container_width=True)

if st.button("CONVERT", type="primary"):
    with st.spinner("Converting ..."):
        grid = convert(source, (img_w, img_h), options)
    st.session_state.session = EditorSession(grid=grid)
    st.session_state.options = options

if "session" not in st.session_state:
    st.stop()

session: EditorSession = st.session_state.session

# -- Step 3: edit & export ---------------------------------------------
st.markdown("---")
_step("3 · Edit and export")

t1, t2 = st.columns([1, 2])
with t1:
    tool = st.radio(
        "Tool", [t.value for t in Tool],
        index=[t.value for t in Tool].index(session.tool.value),
        horizontal=True,
    )
    if tool != session.tool.value:
        session.select_tool(tool)

    color = st.color_picker("Colour", "#000000")
    if session.tool == Tool.brush and color.upper() != session.draw_color:
        session.set_color(color)

    if session.recent_colors:
        st.markdown(
            "".join(
                f'<span class="swatch" style="background:{c}" title="{c}"></span>'
                for c in session.recent_colors
            ),
            unsafe_allow_html=True,
        )
        recent = st.selectbox("Recent colours", ["—", *session.recent_colors])
        if recent != "—" and recent != session.draw_color:
            session.pick_recent(recent)

    session.brush_size = st.select_slider("Brush size", [1, 2, 3, 4, 5, 8], value=1)
    session.wand_threshold = st.slider(
        "Magic wand threshold", 0, 100, int(_DEFAULTS.wand_threshold),
    )

    r1, r2 = st.columns(2)
    with r1:
        row = st.number_input("Row", 0, session.height - 1, 0)
    with r2:
        col = st.number_input("Column", 0, session.width - 1, 0)
    if st.button("APPLY", use_container_width=True):
        session.begin_stroke(int(row), int(col))
        session.end_stroke()

    u1, u2, u3 = st.columns(3)
    with u1:
        if st.button("Undo", disabled=not session.can_undo, use_container_width=True):
            session.undo()
            st.rerun()
    with u2:
        if st.button("Redo", disabled=not session.can_redo, use_container_width=True):
            session.redo()
            st.rerun()
    with u3:
        if st.button("Reset", use_container_width=True):
            session.reset_to_conversion()
            st.rerun()

with t2:
    zoom = st.slider("Canvas zoom", 1, 32, max(1, 512 // max(session.width, session.height)))
    st.image(_add_passepartout(session.export(zoom)), use_container_width=False)

e_cols = st.columns(len(_DEFAULTS.export_scales))
for e_col, export_scale in zip(e_cols, _DEFAULTS.export_scales, strict=False):
    buf = io.BytesIO()
    session.export(export_scale).save(buf, format="PNG")
    with e_col:
        st.download_button(
            f"EXPORT x{export_scale}",
            data=buf.getvalue(),
            file_name=session.export_filename(export_scale),
            mime="image/png",
            use_container_width=True,
        )

_step("Equivalent CLI command")
st.code(st.session_state.options.cli_command(), language="bash")

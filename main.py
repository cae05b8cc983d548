#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py --input photo.png --gridWidth 32 --method most

Or use the module directly:

    python -m pixel_grid.cli --input images/ --output output/

Interactive editor:

    streamlit run streamlit_app.py
"""

from pixel_grid.cli import app

if __name__ == "__main__":
    app()

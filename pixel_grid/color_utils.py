"""Hex colour conversion, rounding and RGB distance helpers."""

from __future__ import annotations

import math
import re

TRANSPARENT = "transparent"

_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (0.5 -> 1, 2.5 -> 3)."""
    return math.floor(value + 0.5)


def to_hex(r: int, g: int, b: int) -> str:
    """Format channels as ``#RRGGBB`` (uppercase)."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#RRGGBB`` (case-insensitive, ``#`` optional)."""
    h = color.lstrip("#")
    if not _HEX6.fullmatch(h):
        msg = f"Expected a '#RRGGBB' colour, got '{color}'"
        raise ValueError(msg)
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def normalize_color(color: str) -> str:
    """Canonical form of a colour: uppercase ``#RRGGBB`` or ``transparent``."""
    if color == TRANSPARENT:
        return color
    return to_hex(*hex_to_rgb(color))


def color_distance_sq(
    c1: tuple[int, int, int],
    c2: tuple[int, int, int],
) -> int:
    """Squared Euclidean distance between two RGB triples."""
    dr = int(c1[0]) - int(c2[0])
    dg = int(c1[1]) - int(c2[1])
    db = int(c1[2]) - int(c2[2])
    return dr * dr + dg * dg + db * db


def color_distance(hex1: str, hex2: str) -> float:
    """Euclidean RGB distance between two hex colours."""
    return math.sqrt(color_distance_sq(hex_to_rgb(hex1), hex_to_rgb(hex2)))


def luma(r: float, g: float, b: float) -> float:
    """Perceived brightness (ITU-R BT.601 weights), 0-255."""
    return 0.299 * r + 0.587 * g + 0.114 * b

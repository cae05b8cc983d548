"""One representative colour per cell.

Three families of reduction:

- **average** / **neighbor** - per-channel mean of every sampled pixel.
- **most** - frequency-mode clustering: distinct colours are grouped
  greedily in descending frequency order and the most common original
  colour of the largest group wins.
- **most_light** / **most_dark** - brightness-weighted clustering of
  individual pixels; the blended colour of the heaviest group wins.

Clusters live in plain lists scanned front to back, so the first matching
(or first dominant) cluster always wins a tie.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from pixel_grid.color_utils import (
    TRANSPARENT,
    color_distance_sq,
    luma,
    round_half_up,
    to_hex,
)
from pixel_grid.config import SIMILARITY_THRESHOLD, Method

RGB = tuple[int, int, int]


@dataclass
class _Cluster:
    rep: RGB
    total: float
    members: list[tuple[RGB, float]] = field(default_factory=list)
    # Weighted channel sums, accumulated in member order
    sums: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])


def _find_cluster(
    clusters: list[_Cluster],
    color: RGB,
    max_dist_sq: int,
) -> _Cluster | None:
    for cluster in clusters:
        if color_distance_sq(cluster.rep, color) <= max_dist_sq:
            return cluster
    return None


def _dominant(clusters: list[_Cluster]) -> _Cluster:
    best = clusters[0]
    for cluster in clusters:
        if cluster.total > best.total:
            best = cluster
    return best


def _unpack(key: int) -> RGB:
    return (key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF


def average_color(pixels: np.ndarray) -> RGB | None:
    """Per-channel arithmetic mean, rounded half-up."""
    n = len(pixels)
    if n == 0:
        return None
    sums = pixels.astype(np.int64).sum(axis=0)
    return (
        round_half_up(int(sums[0]) / n),
        round_half_up(int(sums[1]) / n),
        round_half_up(int(sums[2]) / n),
    )


def most_frequent_color(
    pixels: np.ndarray,
    threshold: int = SIMILARITY_THRESHOLD,
) -> RGB | None:
    """Most common colour of the largest group of similar colours.

    Distinct colours are visited in descending frequency (ties keep their
    first-seen order) and each joins the first cluster whose running
    representative lies within *threshold*.  The representative is a
    count-weighted average; the returned colour is never blended.

    Args:
        pixels:    (N, 3) uint8 RGB.
        threshold: Euclidean RGB distance for two colours to merge.

    Returns:
        ``(r, g, b)`` or ``None`` for an empty cell.
    """
    if len(pixels) == 0:
        return None

    p = pixels.astype(np.int64)
    packed = (p[:, 0] << 16) | (p[:, 1] << 8) | p[:, 2]
    counts = Counter(packed.tolist())

    if len(counts) == 1:
        return _unpack(next(iter(counts)))

    entries = sorted(counts.items(), key=lambda kv: -kv[1])
    max_dist_sq = threshold * threshold

    clusters: list[_Cluster] = []
    for key, count in entries:
        color = _unpack(key)
        cluster = _find_cluster(clusters, color, max_dist_sq)
        if cluster is None:
            clusters.append(_Cluster(rep=color, total=count, members=[(color, count)]))
            continue

        cluster.total += count
        cluster.members.append((color, count))
        t = cluster.total
        cluster.rep = (
            round_half_up((cluster.rep[0] * (t - count) + color[0] * count) / t),
            round_half_up((cluster.rep[1] * (t - count) + color[1] * count) / t),
            round_half_up((cluster.rep[2] * (t - count) + color[2] * count) / t),
        )

    dominant = _dominant(clusters)
    best_color, best_count = dominant.members[0]
    for color, count in dominant.members:
        if count > best_count:
            best_color, best_count = color, count
    return best_color


def brightness_weight(r: int, g: int, b: int, prefer_light: bool) -> float:
    """Pixel weight in ``[0.25, 0.75]``, growing towards the preferred end."""
    y = luma(r, g, b)
    raw = y / 255 if prefer_light else (255 - y) / 255
    return 0.25 + 0.50 * raw


def weighted_cluster_color(
    pixels: np.ndarray,
    prefer_light: bool,
    threshold: int = SIMILARITY_THRESHOLD,
) -> RGB | None:
    """Blended colour of the heaviest brightness-weighted cluster.

    Pixels are clustered one by one in scan order.  A cluster's
    representative is the weight-averaged colour of all its members,
    refreshed on every merge.

    Args:
        pixels:       (N, 3) uint8 RGB.
        prefer_light: ``True`` for most_light, ``False`` for most_dark.
        threshold:    Euclidean RGB distance for a pixel to join a cluster.

    Returns:
        ``(r, g, b)`` or ``None`` for an empty cell.
    """
    if len(pixels) == 0:
        return None

    max_dist_sq = threshold * threshold
    clusters: list[_Cluster] = []

    for r, g, b in pixels.tolist():
        color = (r, g, b)
        weight = brightness_weight(r, g, b, prefer_light)
        cluster = _find_cluster(clusters, color, max_dist_sq)
        if cluster is None:
            clusters.append(_Cluster(
                rep=color,
                total=weight,
                members=[(color, weight)],
                sums=[r * weight, g * weight, b * weight],
            ))
            continue

        cluster.total += weight
        cluster.members.append((color, weight))
        cluster.sums[0] += r * weight
        cluster.sums[1] += g * weight
        cluster.sums[2] += b * weight
        cluster.rep = (
            round_half_up(cluster.sums[0] / cluster.total),
            round_half_up(cluster.sums[1] / cluster.total),
            round_half_up(cluster.sums[2] / cluster.total),
        )

    return _dominant(clusters).rep


def reduce_cell(pixels: np.ndarray, method: Method | str) -> str:
    """Reduce a cell's opaque pixels to ``#RRGGBB`` or ``transparent``."""
    method = Method(method)
    if method in (Method.average, Method.neighbor):
        rgb = average_color(pixels)
    elif method == Method.most:
        rgb = most_frequent_color(pixels)
    else:
        rgb = weighted_cluster_color(pixels, prefer_light=method == Method.most_light)

    if rgb is None:
        return TRANSPARENT
    return to_hex(*rgb)

"""
Label overlap removal.

Each node is treated as a box: its label's extent when it has a visible
label, otherwise its circle. Pairs of overlapping boxes are pushed apart
along the line between their centres until no overlaps remain, the time
budget runs out or the iteration ceiling is reached.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .force_atlas import Positions


# Approximate glyph width as a fraction of the label size
CHAR_WIDTH = 0.6
MAX_ITERATIONS = 10_000


@dataclass
class LabelAdjustResult:
    positions: Positions
    iterations: int
    overlaps_remaining: int
    elapsed: float


def _half_extents(
    nodes,
    labels: Mapping[Any, str],
    label_sizes: Mapping[Any, float],
    node_sizes: Mapping[Any, float],
) -> np.ndarray:
    out = np.zeros((len(nodes), 2), dtype=float)
    for i, n in enumerate(nodes):
        r = float(node_sizes.get(n, 0.0))
        text = labels.get(n, "")
        if text:
            size = float(label_sizes.get(n, 0.0))
            w = 0.5 * CHAR_WIDTH * size * len(text)
            h = 0.5 * size
            out[i] = (max(w, r), max(h, r))
        else:
            out[i] = (r, r)
    return out


def adjust_labels(
    pos: Mapping[Any, Tuple[float, float]],
    labels: Mapping[Any, str],
    label_sizes: Mapping[Any, float],
    node_sizes: Optional[Mapping[Any, float]] = None,
    duration: float = 20.0,
    *,
    speed: float = 1.0,
    max_iterations: int = MAX_ITERATIONS,
) -> LabelAdjustResult:
    """Return positions with overlapping label boxes pushed apart."""
    start = time.monotonic()
    deadline = start + max(0.0, float(duration))

    nodes = list(pos)
    xy = np.array([pos[n] for n in nodes], dtype=float).reshape(-1, 2)
    half = _half_extents(nodes, labels, label_sizes, node_sizes or {})

    iterations = 0
    overlaps = _count_overlaps(xy, half)
    while overlaps and iterations < max_iterations and time.monotonic() < deadline:
        xy += speed * _push(xy, half)
        iterations += 1
        overlaps = _count_overlaps(xy, half)

    return LabelAdjustResult(
        positions={n: (float(xy[i, 0]), float(xy[i, 1])) for i, n in enumerate(nodes)},
        iterations=iterations,
        overlaps_remaining=overlaps,
        elapsed=time.monotonic() - start,
    )


def _overlap_matrix(xy: np.ndarray, half: np.ndarray):
    delta = xy[:, None, :] - xy[None, :, :]
    reach = half[:, None, :] + half[None, :, :]
    overlap = (np.abs(delta) < reach).all(axis=-1)
    np.fill_diagonal(overlap, False)
    return delta, reach, overlap


def _count_overlaps(xy: np.ndarray, half: np.ndarray) -> int:
    if len(xy) < 2:
        return 0
    _, _, overlap = _overlap_matrix(xy, half)
    return int(overlap.sum() // 2)


def _push(xy: np.ndarray, half: np.ndarray) -> np.ndarray:
    delta, reach, overlap = _overlap_matrix(xy, half)
    depth = np.min(reach - np.abs(delta), axis=-1)
    depth = np.where(overlap, np.maximum(depth, 0.0) + 1e-6, 0.0)
    dist = np.sqrt((delta ** 2).sum(axis=-1))

    # Coincident centres are separated along an index-dependent direction
    coincident = overlap & (dist < 1e-9)
    if coincident.any():
        i, j = np.nonzero(coincident)
        angle = 0.618 * np.minimum(i, j) + 0.1 * np.maximum(i, j)
        sign = np.where(i > j, 1.0, -1.0)
        delta[i, j, 0] = sign * np.cos(angle)
        delta[i, j, 1] = sign * np.sin(angle)
        dist = np.where(coincident, 1.0, dist)

    unit = delta / np.maximum(dist, 1e-9)[..., None]
    return 0.5 * (unit * depth[..., None]).sum(axis=1)

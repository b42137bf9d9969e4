# render2d.py

"""
Static PNG export for force diagrams.

Draws, back to front:
    - edges as a single line collection at the configured opacity
    - nodes as circles whose radius is the node size in layout units
    - visible labels, with font size proportional to label size

The figure is exactly ``figure_width`` x ``figure_height`` pixels and the
layout is fitted to it with equal aspect.
"""

from __future__ import annotations

import os
from logging import getLogger
from typing import Any, Dict, Tuple

import numpy as np
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.patches import Circle

import networkx as nx

from .presets import DiagramConfig, VisualStyle
from .styling import NodeStyleMaps


logger = getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

def _frame_from_positions(
    pos: Dict[Any, Tuple[float, float]],
    radii: Dict[Any, float],
    aspect: float,
    margin: float,
) -> Tuple[float, float, float, float]:
    """Axis limits covering every circle, padded, stretched to ``aspect`` (w / h)."""
    if not pos:
        return -1.0, 1.0, -1.0, 1.0

    xs = np.array([p[0] for p in pos.values()], float)
    ys = np.array([p[1] for p in pos.values()], float)
    rs = np.array([radii.get(n, 0.0) for n in pos], float)

    x_min, x_max = float((xs - rs).min()), float((xs + rs).max())
    y_min, y_max = float((ys - rs).min()), float((ys + rs).max())

    w = max(x_max - x_min, 1e-9)
    h = max(y_max - y_min, 1e-9)
    pad = max(w, h) * margin
    w, h = w + 2 * pad, h + 2 * pad

    if w / h < aspect:
        w = h * aspect
    else:
        h = w / aspect

    cx, cy = 0.5 * (x_min + x_max), 0.5 * (y_min + y_max)
    return cx - w / 2, cx + w / 2, cy - h / 2, cy + h / 2


# =============================================================================
# Export
# =============================================================================

def export_png(
    G: nx.Graph,
    pos: Dict[Any, Tuple[float, float]],
    styles: NodeStyleMaps,
    outfile: str,
    config: DiagramConfig,
    style: VisualStyle = None,
) -> str:
    """Render the positioned, styled graph to ``outfile`` and return its path."""
    style = style or config.style or VisualStyle()
    width_px, height_px = int(config.figure_width), int(config.figure_height)
    dpi = style.dpi

    nodes = [n for n in G.nodes() if n in pos]
    radii = {n: float(styles.sizes.get(n, 0.0)) for n in nodes}

    fig = plt.figure(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    fig.patch.set_facecolor(style.background_color)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_axis_off()
    ax.set_facecolor(style.background_color)

    x0, x1, y0, y1 = _frame_from_positions(
        {n: pos[n] for n in nodes}, radii, width_px / height_px, style.margin
    )
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)
    ax.set_aspect("equal")

    # ----------------------------------------------------------
    # Edges
    # ----------------------------------------------------------
    alpha = float(config.edge_opacity) / 100.0
    segments = [
        (pos[u], pos[v]) for u, v in G.edges() if u in pos and v in pos and u != v
    ]
    if segments and alpha > 0:
        ax.add_collection(
            LineCollection(
                segments,
                colors=style.edge_color,
                linewidths=style.edge_width,
                alpha=alpha,
                zorder=1,
            )
        )

    # ----------------------------------------------------------
    # Nodes
    # ----------------------------------------------------------
    circles = [Circle(pos[n], radius=radii[n]) for n in nodes]
    if circles:
        facecolors = [
            styles.colors[n].as_float() if n in styles.colors else (0.6, 0.6, 0.6)
            for n in nodes
        ]
        ax.add_collection(
            PatchCollection(
                circles,
                facecolors=facecolors,
                edgecolors=style.node_edge_color,
                linewidths=style.node_edge_width,
                zorder=2,
            )
        )

    # ----------------------------------------------------------
    # Labels
    # ----------------------------------------------------------
    points_per_unit = (width_px / (x1 - x0)) * 72.0 / dpi
    n_labels = 0
    for n in nodes:
        text = styles.labels.get(n, "")
        if not text:
            continue
        size = styles.label_sizes.get(n, 0.0) * points_per_unit * style.label_font_scale
        if size <= 0:
            continue
        ax.text(
            pos[n][0],
            pos[n][1],
            text,
            fontsize=size,
            color=style.label_color,
            ha="center",
            va="center",
            zorder=3,
        )
        n_labels += 1

    directory = os.path.dirname(os.path.abspath(outfile))
    os.makedirs(directory, exist_ok=True)
    fig.savefig(outfile, dpi=dpi, facecolor=style.background_color)
    plt.close(fig)

    logger.info(
        "Wrote %s (%dx%d px, %d nodes, %d labels)",
        outfile, width_px, height_px, len(nodes), n_labels,
    )
    return outfile

"""
Node styling for force diagrams.

Maps data columns onto visual channels:

  - size:        linear rank of a numeric column onto [min_node_size, max_node_size]
  - label size:  same rank onto the label size range
  - label:       label-column text for nodes above the percentile cutoff
  - color:       either a ranking (linear blend between the first and last
                 palette colors) or a partition (one palette color per
                 category, cycling when categories outnumber colors)

Results are returned as a NodeStyleMaps and can be written onto the graph
under the ``viz`` node attribute.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from logging import getLogger
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
import pandas as pd

from .analytics import is_label_visible
from .palettes import Color
from .presets import ColorMode, DiagramConfig
from .table import VIZ_ATTRIBUTE, AttributeTable


logger = getLogger(__name__)

__all__ = [
    "ColorMode",
    "NodeStyleMaps",
    "rank_values",
    "size_nodes",
    "size_labels",
    "label_nodes",
    "ranking_colors",
    "partition_categories",
    "partition_colors",
    "compute_node_styles",
    "apply_node_styles",
]


# =============================================================================
# Data classes
# =============================================================================

@dataclass
class NodeStyleMaps:
    sizes: Dict[Any, float] = field(default_factory=dict)
    colors: Dict[Any, Color] = field(default_factory=dict)
    labels: Dict[Any, str] = field(default_factory=dict)
    label_sizes: Dict[Any, float] = field(default_factory=dict)
    colors_reused: bool = False
    n_categories: Optional[int] = None

    @property
    def labeled(self) -> List[Any]:
        return [n for n, text in self.labels.items() if text]


# =============================================================================
# Helpers
# =============================================================================

def _norm(a: np.ndarray) -> np.ndarray:
    """Min-max to [0, 1]; constant or all-NaN input gives zeros, NaN entries give 0."""
    out = np.zeros_like(a, dtype=float)
    if a.size == 0 or np.all(np.isnan(a)):
        return out
    lo = float(np.nanmin(a))
    hi = float(np.nanmax(a))
    if hi - lo < 1e-12:
        return out
    out = (a - lo) / (hi - lo)
    return np.nan_to_num(out, nan=0.0)


def _emit_warning(emit, message: str) -> None:
    logger.warning(message)
    if emit:
        emit("log", {"level": "warning", "message": message})


def rank_values(values: pd.Series, lo: float, hi: float) -> Dict[Any, float]:
    """Linear map of ``values`` onto [lo, hi], keyed like the series."""
    t = _norm(values.to_numpy(dtype=float))
    return {n: float(lo + ti * (hi - lo)) for n, ti in zip(values.index, t)}


# =============================================================================
# Size and labels
# =============================================================================

def size_nodes(
    table: AttributeTable,
    column: str,
    min_size: float,
    max_size: float,
) -> Dict[Any, float]:
    return rank_values(table.numeric_series(column), min_size, max_size)


def size_labels(
    table: AttributeTable,
    column: str,
    label_range: Tuple[float, float],
) -> Dict[Any, float]:
    lo, hi = label_range
    return rank_values(table.numeric_series(column), lo, hi)


def label_nodes(
    G: nx.Graph,
    table: AttributeTable,
    rank_column: str,
    label_column: str,
    cutoff: float,
) -> Dict[Any, str]:
    """Label text for every node; empty for nodes at or below the cutoff."""
    labels: Dict[Any, str] = {}
    for n in G.nodes():
        if is_label_visible(G, n, rank_column, cutoff, label_column, table=table):
            labels[n] = str(G.nodes[n][label_column])
        else:
            labels[n] = ""
    return labels


# =============================================================================
# Color
# =============================================================================

def _blend(a: Color, b: Color, t: float) -> Color:
    return Color(*(int(round(x + t * (y - x))) for x, y in zip(a, b)))


def ranking_colors(
    table: AttributeTable,
    column: str,
    palette: Sequence[Color],
) -> Dict[Any, Color]:
    """
    Interpolate in RGB between the first and last palette colors.

    Nodes without a numeric value get the first color.
    """
    values = table.numeric_series(column)
    t = _norm(values.to_numpy(dtype=float))
    first, last = palette[0], palette[-1]
    return {n: _blend(first, last, float(ti)) for n, ti in zip(values.index, t)}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _category_key(value: Any) -> Tuple[int, Any]:
    if _is_missing(value):
        return (2, "")
    if isinstance(value, Number) and not isinstance(value, bool):
        return (0, float(value))
    return (1, str(value))


def partition_categories(values: Iterable[Any]) -> List[Any]:
    """
    Distinct values in palette order: numbers ascending, then strings
    ascending, then a single missing-value category (None) if any.
    """
    seen: Dict[Tuple[int, Any], Any] = {}
    for v in values:
        key = _category_key(v)
        if key not in seen:
            seen[key] = None if key[0] == 2 else v
    return [seen[k] for k in sorted(seen)]


def partition_colors(
    table: AttributeTable,
    column: str,
    palette: Sequence[Color],
    *,
    emit=None,
) -> Tuple[Dict[Any, Color], int, bool]:
    """
    One color per category of ``column``: category i gets palette[i % len].

    Returns (colors, n_categories, reused). ``reused`` is True when there are
    more categories than colors; a warning is logged in that case.
    """
    raw = table.series(column)
    categories = partition_categories(raw.tolist())
    index = {_category_key(c): i for i, c in enumerate(categories)}

    colors = {
        n: palette[index[_category_key(v)] % len(palette)]
        for n, v in raw.items()
    }

    reused = len(categories) > len(palette)
    if reused:
        _emit_warning(
            emit,
            f"[styling] Column {column} has {len(categories)} categories but the "
            f"palette has {len(palette)} colors; colors will be reused",
        )
    return colors, len(categories), reused


# =============================================================================
# Orchestration
# =============================================================================

def compute_node_styles(
    G: nx.Graph,
    table: AttributeTable,
    config: DiagramConfig,
    palette: Sequence[Color],
    cutoff: float,
    *,
    emit=None,
) -> NodeStyleMaps:
    """
    Compute size, label, label size and color for every node of G.

    Size, labels and label sizes are all ranked on ``config.node_size_column``;
    color follows ``config.node_color_type`` on ``config.node_color_column``.
    """
    size_col = config.node_size_column
    color_col = config.node_color_column

    # Numeric views of the driver columns are created up front
    table.numeric_column(size_col)
    table.numeric_column(color_col)

    styles = NodeStyleMaps(
        sizes=size_nodes(table, size_col, config.min_node_size, config.max_node_size),
        labels=label_nodes(G, table, size_col, config.node_label_column, cutoff),
        label_sizes=size_labels(table, size_col, config.label_size_range),
    )

    mode = ColorMode.parse(config.node_color_type)
    if mode is ColorMode.RANKING:
        styles.colors = ranking_colors(table, color_col, palette)
    else:
        styles.colors, styles.n_categories, styles.colors_reused = partition_colors(
            table, color_col, palette, emit=emit
        )

    return styles


def apply_node_styles(G: nx.Graph, styles: NodeStyleMaps) -> None:
    """Write the styles onto each node's ``viz`` attribute."""
    for n in G.nodes():
        color = styles.colors.get(n)
        G.nodes[n][VIZ_ATTRIBUTE] = {
            "size": styles.sizes.get(n, 0.0),
            "color": color.hex if color is not None else None,
            "label": styles.labels.get(n, ""),
            "label_size": styles.label_sizes.get(n, 0.0),
        }

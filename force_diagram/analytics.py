"""
Ranking and summary statistics.

  - label cutoff: the percentile of a numeric column above which nodes
    get a visible label
  - label visibility per node
  - whole-graph stats reported around the degree filter
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict

import networkx as nx
import numpy as np

from .table import AttributeTable


# =========================================================================== #
# Data classes
# =========================================================================== #

@dataclass
class GraphStats:
    n_nodes: int
    n_edges: int
    density: float
    avg_degree: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =========================================================================== #
# Label cutoff
# =========================================================================== #

def compute_label_cutoff(
    G: nx.Graph,
    column: str,
    percentile: float,
    table: AttributeTable = None,
) -> float:
    """
    Value of ``column`` at ``percentile`` over all nodes of G.

    ``percentile <= 0`` returns -inf so every node passes the strict ``>``
    test. Interpolation is numpy's ``linear`` method; NaN values are ignored.
    If no node has a numeric value the cutoff is +inf.
    """
    if percentile <= 0:
        return -math.inf

    table = table if table is not None else AttributeTable.from_graph(G)
    values = table.numeric_series(column).to_numpy(dtype=float)

    if values.size == 0 or np.all(np.isnan(values)):
        return math.inf

    return float(np.nanpercentile(values, percentile, method="linear"))


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return str(value) != ""


def is_label_visible(
    G: nx.Graph,
    node: Any,
    column: str,
    cutoff: float,
    label_column: str,
    table: AttributeTable = None,
) -> bool:
    """True iff the node's ranked value is strictly above ``cutoff`` and it has a label."""
    table = table if table is not None else AttributeTable.from_graph(G)
    numeric = table.numeric_column(column).name
    data = G.nodes[node]

    try:
        value = float(data.get(numeric, math.nan))
    except (TypeError, ValueError):
        return False

    if math.isnan(value) or not value > cutoff:
        return False
    return _present(data.get(label_column))


# =========================================================================== #
# Global stats
# =========================================================================== #

def compute_graph_stats(G: nx.Graph) -> GraphStats:
    if G.number_of_nodes() == 0:
        return GraphStats(0, 0, 0.0, 0.0)

    n = G.number_of_nodes()
    e = G.number_of_edges()

    density = float(nx.density(G)) if n > 1 else 0.0
    avg_degree = float(np.mean([d for _, d in G.degree()]))

    return GraphStats(
        n_nodes=n,
        n_edges=e,
        density=density,
        avg_degree=avg_degree,
    )

"""
prep_graph.py - Degree-based pruning of force-diagram graphs.

Runs after import and column validation, before ranking and styling. Nodes
with fewer than ``min_degree`` connections (in + out) are removed in
batches: removing one batch can push neighbours below the threshold, so the
scan repeats up to a fixed number of passes or until a pass removes nothing.

Outputs:
    - nodes removed in-place from G
    - a metadata dict describing the pruning
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import networkx as nx

from .presets import DEGREE_FILTER_ITERATIONS


def _emit_log(emit, message: str) -> None:
    if emit:
        emit("log", {"message": message})


def low_degree_nodes(G: nx.Graph, min_degree: int) -> List[Any]:
    return [n for n, d in G.degree() if d < min_degree]


def degree_filter(
    G: nx.Graph,
    min_degree: int,
    max_iterations: int = DEGREE_FILTER_ITERATIONS,
    *,
    emit=None,
) -> Dict[str, Any]:
    """
    Iteratively drop nodes whose degree is below ``min_degree``.

    ``min_degree < 1`` disables filtering. Each pass collects every node
    under the threshold against the graph as it stood at the start of the
    pass, then removes them together.

    Returns metadata with node / edge counts before and after, the number
    of passes that removed something and the per-pass removal counts.
    """
    meta: Dict[str, Any] = {
        "min_degree": int(min_degree),
        "max_iterations": int(max_iterations),
        "nodes_before": G.number_of_nodes(),
        "edges_before": G.number_of_edges(),
        "passes": 0,
        "removed_per_pass": [],
        "applied": min_degree >= 1,
    }

    if min_degree >= 1:
        for _ in range(max_iterations):
            doomed = low_degree_nodes(G, min_degree)
            if not doomed:
                break
            G.remove_nodes_from(doomed)
            meta["passes"] += 1
            meta["removed_per_pass"].append(len(doomed))

    meta["nodes_after"] = G.number_of_nodes()
    meta["edges_after"] = G.number_of_edges()
    meta["nodes_removed"] = meta["nodes_before"] - meta["nodes_after"]

    if meta["applied"]:
        _emit_log(
            emit,
            f"[prep_graph] Degree filter >= {min_degree}: removed "
            f"{meta['nodes_removed']} nodes in {meta['passes']} passes "
            f"({meta['nodes_after']} nodes, {meta['edges_after']} edges remain)",
        )

    return meta

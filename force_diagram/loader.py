"""
Graph import for force diagrams.

Responsibilities:
  - Read a GML or GraphML file into a directed NetworkX graph
  - Build the same graph from node / edge DataFrames
  - Catalogue node attribute columns (numeric vs string, via pandas)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLogger
from typing import Any, Callable, Dict, Optional

import networkx as nx
import numpy as np
import pandas as pd

from .errors import GraphImportError
from .table import AttributeTable


logger = getLogger(__name__)

Emit = Callable[[str, Dict[str, Any]], None]


# ============================================================================ #
# Data structure returned by load_graph()
# ============================================================================ #

@dataclass
class LoadedGraph:
    G: nx.DiGraph
    table: AttributeTable
    path: Optional[str] = None


# ============================================================================ #
# Logging helpers
# ============================================================================ #

def _log(msg: str, emit: Optional[Emit]) -> None:
    logger.info(msg)
    if emit is None:
        return
    try:
        emit("log", {"message": msg})
    except Exception:
        logger.debug("emit callback failed", exc_info=True)


# ============================================================================ #
# 1. Directed conversion
# ============================================================================ #

def as_directed(H: nx.Graph) -> nx.DiGraph:
    """
    Return a DiGraph with one arc per input edge, oriented as read.

    ``nx.Graph.to_directed`` would add both orientations of every undirected
    edge; here an undirected edge u-v becomes the single arc u->v.
    """
    G = nx.DiGraph()
    G.graph.update(H.graph)
    G.add_nodes_from(H.nodes(data=True))
    for u, v, data in H.edges(data=True):
        G.add_edge(u, v, **data)
    return G


# ============================================================================ #
# 2. File import
# ============================================================================ #

_READERS = {
    ".gml": lambda path: nx.read_gml(path, label="id"),
    ".graphml": nx.read_graphml,
    ".xml": nx.read_graphml,
}


def read_graph_file(path: str) -> nx.DiGraph:
    """Read ``path`` with the reader chosen by its extension."""
    ext = os.path.splitext(path)[1].lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise GraphImportError(
            f"Unsupported graph file type '{ext or path}' "
            f"(expected one of: {', '.join(sorted(_READERS))})"
        )

    if not os.path.isfile(path):
        raise GraphImportError(f"Graph file not found: {path}")

    try:
        H = reader(path)
    except (OSError, nx.NetworkXError, ValueError, SyntaxError) as exc:
        raise GraphImportError(f"Could not read graph file {path}: {exc}") from exc

    return as_directed(H)


def load_graph(path: str, emit: Optional[Emit] = None) -> LoadedGraph:
    """
    Import a graph file and catalogue its node attribute columns.

    Raises GraphImportError on a missing, unreadable or unsupported file.
    """
    G = read_graph_file(path)
    table = AttributeTable.from_graph(G)

    _log(
        f"[loader] Imported {path}: {G.number_of_nodes()} nodes, "
        f"{G.number_of_edges()} edges, {len(table)} node columns",
        emit,
    )
    return LoadedGraph(G=G, table=table, path=path)


# ============================================================================ #
# 3. DataFrame import
# ============================================================================ #

def build_graph(
    nodes: pd.DataFrame,
    edges: Optional[pd.DataFrame] = None,
    *,
    id_column: str = "id",
    emit: Optional[Emit] = None,
) -> LoadedGraph:
    """
    Build a directed graph from a node table and an optional edge table.

    ``nodes`` must hold ``id_column``; every other column becomes a node
    attribute (missing cells are left unset). ``edges`` needs ``source`` and
    ``target`` columns; remaining columns become edge attributes. Edges that
    reference unknown nodes are skipped.
    """
    if id_column not in nodes.columns:
        raise GraphImportError(f"Node table has no '{id_column}' column")

    G = nx.DiGraph()
    attr_cols = [c for c in nodes.columns if c != id_column]

    for row in nodes.to_dict(orient="records"):
        attrs = {
            c: _scalar(row[c]) for c in attr_cols if not _is_missing(row[c])
        }
        G.add_node(_scalar(row[id_column]), **attrs)

    skipped = 0
    if edges is not None and not edges.empty:
        extra = [c for c in edges.columns if c not in ("source", "target")]
        for r in edges.to_dict(orient="records"):
            s, t = _scalar(r["source"]), _scalar(r["target"])
            if s in G and t in G:
                G.add_edge(s, t, **{c: _scalar(r[c]) for c in extra if not _is_missing(r[c])})
            else:
                skipped += 1

    if skipped:
        _log(f"[loader] Skipped {skipped} edges with unknown endpoints", emit)

    table = AttributeTable.from_graph(G)
    _log(
        f"[loader] Built graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges",
        emit,
    )
    return LoadedGraph(G=G, table=table)


def _is_missing(x: Any) -> bool:
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def _scalar(x: Any) -> Any:
    """Unwrap numpy scalars so node attributes stay plain Python values."""
    if isinstance(x, np.generic):
        return x.item()
    return x

"""Shared graph fixtures for force_diagram tests."""

import matplotlib

matplotlib.use("Agg")

import networkx as nx
import pandas as pd
import pytest

from force_diagram.loader import LoadedGraph, build_graph
from force_diagram.table import AttributeTable


N_CORE = 100
N_OUTLIERS = 10


def make_core_with_outliers() -> nx.DiGraph:
    """
    100 fully connected core nodes plus 10 outliers.

    Every outlier has arcs both ways to core nodes 0, 1 and 2, so its degree
    is 6. Core nodes have degree >= 198. Each node carries
    ``float_column = i`` and ``string_column = str(i)``.
    """
    n_total = N_CORE + N_OUTLIERS
    nodes = pd.DataFrame({
        "id": list(range(n_total)),
        "float_column": [float(i) for i in range(n_total)],
        "string_column": [str(i) for i in range(n_total)],
        "name": [f"node-{i}" for i in range(n_total)],
    })

    src, dst = [], []
    for i in range(N_CORE):
        for j in range(N_CORE):
            if i != j:
                src.append(i)
                dst.append(j)
    for k in range(N_CORE, n_total):
        for j in (0, 1, 2):
            src += [k, j]
            dst += [j, k]
    edges = pd.DataFrame({"source": src, "target": dst})

    return build_graph(nodes, edges).G


@pytest.fixture
def core_graph() -> nx.DiGraph:
    return make_core_with_outliers()


@pytest.fixture
def core_loaded(core_graph) -> LoadedGraph:
    return LoadedGraph(G=core_graph, table=AttributeTable.from_graph(core_graph))


@pytest.fixture
def small_graph() -> LoadedGraph:
    """Five-node chain with mixed-type attributes."""
    nodes = pd.DataFrame({
        "id": ["a", "b", "c", "d", "e"],
        "weight": [1.0, 2.0, 3.0, 4.0, 5.0],
        "group": ["x", "y", "x", "z", "y"],
        "score": ["10", "n/a", "30", "40", "50"],
        "name": ["A", "B", "", "D", "E"],
    })
    edges = pd.DataFrame({
        "source": ["a", "b", "c", "d"],
        "target": ["b", "c", "d", "e"],
    })
    return build_graph(nodes, edges)


@pytest.fixture
def gml_file(tmp_path, core_graph):
    """The core graph written as GML."""
    path = tmp_path / "core.gml"
    nx.write_gml(core_graph, str(path))
    return str(path)

"""
Node attribute table.

The graph's node attributes are the data columns that drive styling. This
module keeps the column catalogue (name + kind) next to the graph and
provides numeric coercion for string columns: ``numeric_column("x")`` on a
string column creates a derived ``x_numeric`` attribute on every node once
and returns the same Column object on later calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Dict, Iterable, Iterator, Optional

import networkx as nx
import numpy as np
import pandas as pd

from .errors import ColumnNotFoundError


logger = getLogger(__name__)

NUMERIC_SUFFIX = "_numeric"

# Node attribute holding derived visual state; never treated as a data column.
VIZ_ATTRIBUTE = "viz"


class ColumnKind(Enum):
    NUMERIC = "numeric"
    STRING = "string"


@dataclass(frozen=True)
class Column:
    name: str
    kind: ColumnKind
    source: Optional[str] = None  # column this one was derived from

    @property
    def is_numeric(self) -> bool:
        return self.kind is ColumnKind.NUMERIC


def infer_kind(values: pd.Series) -> ColumnKind:
    """Numeric when pandas sees a non-boolean numeric dtype, else string."""
    values = values.dropna()
    if values.empty:
        return ColumnKind.STRING
    inferred = pd.api.types.infer_dtype(values, skipna=True)
    if inferred in ("integer", "floating", "mixed-integer-float", "decimal"):
        return ColumnKind.NUMERIC
    return ColumnKind.STRING


class AttributeTable:
    """
    Column catalogue over a graph's node attributes.

    The table does not copy values: they stay on ``G.nodes[n]`` and are read
    through ``series()``.
    """

    def __init__(self, G: nx.Graph, columns: Optional[Iterable[Column]] = None):
        self.G = G
        self._columns: Dict[str, Column] = {}
        if columns is None:
            columns = self._infer_columns(G)
        for col in columns:
            self._columns[col.name] = col

    @classmethod
    def from_graph(cls, G: nx.Graph) -> "AttributeTable":
        return cls(G)

    @staticmethod
    def _infer_columns(G: nx.Graph) -> Iterator[Column]:
        frame = pd.DataFrame.from_dict(
            {n: dict(d) for n, d in G.nodes(data=True)}, orient="index"
        )
        for name in frame.columns:
            if name == VIZ_ATTRIBUTE:
                continue
            yield Column(str(name), infer_kind(frame[name]))

    # ------------------------------------------------------------------ #
    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns.values())

    def __len__(self) -> int:
        return len(self._columns)

    def names(self):
        return list(self._columns)

    def get(self, name: str) -> Column:
        try:
            return self._columns[name]
        except KeyError:
            raise ColumnNotFoundError(f"Could not access column {name} in graph") from None

    def add(self, column: Column) -> Column:
        self._columns[column.name] = column
        return column

    # ------------------------------------------------------------------ #
    def series(self, name: str) -> pd.Series:
        """Values of ``name`` for every node currently in the graph, NaN if unset."""
        self.get(name)
        return pd.Series(
            {n: d.get(name, np.nan) for n, d in self.G.nodes(data=True)},
            dtype=object,
        )

    def numeric_series(self, name: str) -> pd.Series:
        """Float values of the numeric view of ``name``."""
        col = self.numeric_column(name)
        return pd.to_numeric(self.series(col.name), errors="coerce").astype(float)

    def numeric_column(self, name: str) -> Column:
        """
        Return a numeric view of column ``name``.

        Numeric columns are returned as-is. For a string column a derived
        ``<name>_numeric`` column is created on first use: every node gets the
        parsed value, or NaN when the text is not a number.
        """
        col = self.get(name)
        if col.is_numeric:
            return col

        derived_name = name + NUMERIC_SUFFIX
        existing = self._columns.get(derived_name)
        if existing is not None and existing.is_numeric:
            return existing

        raw = self.series(name)
        parsed = pd.to_numeric(raw, errors="coerce")
        for node, value in parsed.items():
            self.G.nodes[node][derived_name] = float(value)

        failed = int(parsed.isna().sum() - raw.isna().sum())
        if failed > 0:
            logger.debug("Column %s: %d values could not be parsed as numbers", name, failed)

        return self.add(Column(derived_name, ColumnKind.NUMERIC, source=name))


def validate_columns(table: AttributeTable, names: Iterable[str]) -> None:
    """Raise ColumnNotFoundError for the first name the table does not hold."""
    for name in names:
        table.get(name)

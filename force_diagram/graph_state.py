"""
Per-run state for the force-diagram pipeline.

One GraphState is built for each run and handed to every stage (filter,
rank, style, layout, export, metadata). It is never shared between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import networkx as nx

from .analytics import GraphStats
from .palettes import Palette
from .presets import DiagramConfig
from .styling import NodeStyleMaps
from .table import AttributeTable


logger = logging.getLogger(__name__)

Emit = Callable[[str, Dict[str, Any]], None]


def DEFAULT_EMIT(kind: str, payload: Dict[str, Any]) -> None:
    return None


@dataclass
class GraphState:
    """
    Everything one run needs and produces:
      - config and resolved palette
      - the graph and its attribute table
      - filter / ranking metadata
      - styles and 2D positions
    """

    config: DiagramConfig
    emit: Emit = DEFAULT_EMIT

    palette: Palette = ()
    G: Optional[nx.DiGraph] = None
    table: Optional[AttributeTable] = None
    input_path: Optional[str] = None
    output_path: Optional[str] = None

    # Analytics
    stats_before: Optional[GraphStats] = None
    stats_after: Optional[GraphStats] = None
    filter_meta: Dict[str, Any] = field(default_factory=dict)
    label_cutoff: Optional[float] = None

    # Styling and layout
    node_styles: Optional[NodeStyleMaps] = None
    pos2d: Dict[Any, Tuple[float, float]] = field(default_factory=dict)

    # Stage timings and other bookkeeping
    meta: Dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------ #
    def log(self, level: int, message: str, **fields: Any) -> None:
        """Log through ``logging`` and forward to the emit callback."""
        logger.log(level, message)
        payload = {"message": message, "level": _level_name(level)}
        payload.update(fields)
        try:
            self.emit("log", payload)
        except Exception:
            logger.debug("emit callback failed", exc_info=True)

    def emit_event(self, kind: str, payload: Dict[str, Any]) -> None:
        try:
            self.emit(kind, payload)
        except Exception:
            logger.debug("emit callback failed", exc_info=True)


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()

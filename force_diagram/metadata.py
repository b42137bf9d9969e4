"""
Run metadata written next to each exported diagram.

``<output>.meta.json`` records what produced the PNG: the full config,
graph stats before and after the degree filter, the label cutoff, the
resolved palette and the layout run.
"""

from __future__ import annotations

import json
import math
import os
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Union

from .analytics import GraphStats

META_VERSION = "force_diagram.runmeta.v1"


# --------------------------------------------------------------------------- #
# Utility helpers
# --------------------------------------------------------------------------- #

def _stats_to_dict(stats: Union[GraphStats, Dict[str, Any], None]) -> Dict[str, Any]:
    if stats is None:
        return {}
    if isinstance(stats, GraphStats):
        return stats.to_dict()
    return {
        "n_nodes": stats.get("n_nodes", 0),
        "n_edges": stats.get("n_edges", 0),
        "density": stats.get("density", 0.0),
        "avg_degree": stats.get("avg_degree", 0.0),
    }


def _finite_or_none(x: Optional[float]) -> Optional[float]:
    """JSON has no infinities; unbounded cutoffs are written as null."""
    if x is None or not math.isfinite(x):
        return None
    return float(x)


def metadata_path(outfile: str) -> str:
    root, _ = os.path.splitext(outfile)
    return root + ".meta.json"


@dataclass
class RunMeta:
    version: str
    timestamp: float
    input: Optional[str]
    output: str
    config: Dict[str, Any]
    stats_before: Dict[str, Any]
    stats_after: Dict[str, Any]
    degree_filter: Dict[str, Any]
    label_cutoff: Optional[float]
    labeled_nodes: int
    palette: List[str]
    colors_reused: bool
    layout: Dict[str, Any]


# --------------------------------------------------------------------------- #
# Writer
# --------------------------------------------------------------------------- #

def write_run_metadata(state, outfile: Optional[str] = None) -> str:
    """
    Write ``<output>.meta.json`` for a finished run and return its path.

    ``state`` is the run's GraphState.
    """
    outfile = outfile or state.output_path
    styles = state.node_styles

    meta_obj = RunMeta(
        version=META_VERSION,
        timestamp=time.time(),
        input=state.input_path,
        output=outfile,
        config=state.config.to_dict(),
        stats_before=_stats_to_dict(state.stats_before),
        stats_after=_stats_to_dict(state.stats_after),
        degree_filter=dict(state.filter_meta),
        label_cutoff=_finite_or_none(state.label_cutoff),
        labeled_nodes=len(styles.labeled) if styles else 0,
        palette=[c.hex for c in state.palette],
        colors_reused=bool(styles.colors_reused) if styles else False,
        layout=dict(state.meta.get("layout", {})),
    )

    path = metadata_path(outfile)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(meta_obj), f, indent=2)

    state.emit_event("artifact", {"kind": "run-metadata", "path": path})
    return path

"""
Force-diagram pipeline.

    config -> palette -> import -> column check -> degree filter
           -> label cutoff -> node styles -> layout -> (label adjust)
           -> PNG export -> run metadata

Configuration and palette problems surface before the graph file is
touched; any later error aborts the run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .analytics import compute_graph_stats, compute_label_cutoff
from .config import RuntimeConfig, load_config
from .graph_state import DEFAULT_EMIT, GraphState
from .layout import adjust_labels, run_layout
from .loader import LoadedGraph, load_graph
from .metadata import write_run_metadata
from .palettes import resolve_palette
from .prep_graph import degree_filter
from .presets import DEFAULT_CONFIG, DiagramConfig
from .render2d import export_png
from .styling import apply_node_styles, compute_node_styles
from .table import validate_columns


Emit = Callable[[str, Dict[str, Any]], None]


# ====================================================================== #
# State construction: everything up to (not including) layout
# ====================================================================== #

def build_graph_state(
    input_path: Optional[str] = None,
    *,
    config: Optional[DiagramConfig] = None,
    graph: Optional[LoadedGraph] = None,
    emit: Emit = DEFAULT_EMIT,
) -> GraphState:
    """
    Build a filtered, ranked and styled GraphState.

    Either ``input_path`` (a GML / GraphML file) or an already built
    ``graph`` must be given.

    Steps:
      1) Resolve the palette.
      2) Import the graph and check the size, color and label columns.
      3) Apply the degree filter.
      4) Compute the label cutoff on the size column.
      5) Compute node styles and write them to the ``viz`` attribute.
    """
    cfg = config or DEFAULT_CONFIG
    state = GraphState(config=cfg, emit=emit, input_path=input_path)

    state.palette = resolve_palette(
        cfg.palette_source, cfg.palette_family, cfg.palette_number, cfg.num_colors
    )

    if graph is None:
        if input_path is None:
            raise ValueError("build_graph_state needs an input path or a graph")
        graph = load_graph(input_path, emit=state.emit_event)
    state.G, state.table = graph.G, graph.table

    validate_columns(state.table, cfg.driver_columns)

    state.stats_before = compute_graph_stats(state.G)
    state.log(
        logging.INFO,
        f"[visualizer] Graph loaded: {state.stats_before.n_nodes} nodes, "
        f"{state.stats_before.n_edges} edges.",
        stage="import",
    )

    state.filter_meta = degree_filter(
        state.G,
        cfg.degree_filter,
        cfg.degree_filter_iterations,
        emit=state.emit_event,
    )
    state.stats_after = compute_graph_stats(state.G)
    if state.filter_meta["applied"]:
        state.log(
            logging.INFO,
            f"[visualizer] After degree filter: {state.stats_after.n_nodes} nodes, "
            f"{state.stats_after.n_edges} edges.",
            stage="filter",
        )

    state.label_cutoff = compute_label_cutoff(
        state.G, cfg.node_size_column, cfg.label_percentile, table=state.table
    )

    state.node_styles = compute_node_styles(
        state.G,
        state.table,
        cfg,
        state.palette,
        state.label_cutoff,
        emit=state.emit_event,
    )
    apply_node_styles(state.G, state.node_styles)

    state.log(
        logging.INFO,
        f"[visualizer] Styled {state.G.number_of_nodes()} nodes, "
        f"{len(state.node_styles.labeled)} labeled "
        f"(cutoff {state.label_cutoff:g} on {cfg.node_size_column}).",
        stage="style",
    )
    return state


def layout_graph_state(state: GraphState) -> GraphState:
    """Run the force-directed layout and, if enabled, label adjustment."""
    cfg = state.config
    styles = state.node_styles

    result = run_layout(state.G, cfg, sizes=styles.sizes, emit=state.emit_event)
    state.pos2d = result.positions
    layout_meta: Dict[str, Any] = {
        "algorithm": result.algorithm.value,
        "iterations": result.iterations,
        "duration": result.elapsed,
        "params": result.params,
    }

    if cfg.label_adjust:
        adjusted = adjust_labels(
            state.pos2d,
            styles.labels,
            styles.label_sizes,
            styles.sizes,
            cfg.label_adjust_time,
        )
        state.pos2d = adjusted.positions
        layout_meta["label_adjust"] = {
            "iterations": adjusted.iterations,
            "duration": adjusted.elapsed,
            "overlaps_remaining": adjusted.overlaps_remaining,
        }
        state.log(
            logging.INFO,
            f"[visualizer] Label adjust: {adjusted.iterations} iterations, "
            f"{adjusted.overlaps_remaining} overlaps remaining.",
            stage="label_adjust",
        )

    state.meta["layout"] = layout_meta
    return state


# ====================================================================== #
# Orchestrator
# ====================================================================== #

class ForceDiagram:
    """
    High-level orchestrator for one diagram:
      - palette and import
      - filtering, ranking, styling
      - layout and label adjust
      - PNG export and run metadata
    """

    def __init__(
        self,
        input_path: str,
        output_path: str,
        *,
        config: Optional[DiagramConfig] = None,
        runtime: Optional[RuntimeConfig] = None,
        emit: Emit = DEFAULT_EMIT,
    ) -> None:
        self.input_path = input_path
        self.output_path = output_path
        self.config = config or DEFAULT_CONFIG
        self.runtime = runtime or load_config()
        self.emit = emit

        self.state: Optional[GraphState] = None
        self.metadata_path: Optional[str] = None

    def run(self) -> GraphState:
        """Run the whole pipeline and return the final state."""
        state = self.state = build_graph_state(
            self.input_path, config=self.config, emit=self.emit
        )
        state.output_path = self.output_path
        state.emit_event("pipeline", {"stage": "force_diagram", "event": "start"})

        layout_graph_state(state)

        export_png(
            state.G,
            state.pos2d,
            state.node_styles,
            self.output_path,
            state.config,
        )
        state.emit_event("artifact", {"kind": "png", "path": self.output_path})

        if self.runtime.write_metadata:
            self.metadata_path = write_run_metadata(state)

        state.emit_event("pipeline", {"stage": "force_diagram", "event": "end"})
        return state


def run_force_diagram(
    input_path: str,
    output_path: str,
    config: Optional[DiagramConfig] = None,
    *,
    runtime: Optional[RuntimeConfig] = None,
    emit: Emit = DEFAULT_EMIT,
) -> GraphState:
    """Convenience wrapper: build and run a ForceDiagram."""
    return ForceDiagram(
        input_path, output_path, config=config, runtime=runtime, emit=emit
    ).run()

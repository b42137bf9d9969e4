"""
Command line entry point: ``force-diagram``.

    force-diagram -gml graph.gml -png graph.png --degree_filter 2 \\
        --node_color_type ranking --color_palette_type sequential

Numeric options are parsed with the same bounds DiagramConfig enforces.
Exit status: 0 on success, 1 when the configuration or pipeline fails,
2 for command line usage errors (including out-of-range values).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .bounds import bounded_type
from .config import configure_logging, load_config
from .errors import ForceDiagramError
from .palettes import SOURCE_ALIASES, PaletteFamily, PaletteSource
from .presets import (
    DEFAULT_CONFIG,
    PARAMETER_BOUNDS,
    ColorMode,
    DiagramConfig,
    LayoutAlgorithm,
)
from .visualizer import run_force_diagram


logger = logging.getLogger(__name__)

PROG = "force-diagram"

# CLI option name -> DiagramConfig field, where they differ
_FIELD_FOR_OPTION = {
    "layout_time_seconds": "layout_time",
    "label_adjust_time_seconds": "label_adjust_time",
    "seed": "layout_seed",
    "color_palette_source": "palette_source",
    "color_palette_type": "palette_family",
    "color_palette_number": "palette_number",
}


def _numeric(option: str):
    """argparse type for a bounded option, named after the option."""
    field_name = _FIELD_FOR_OPTION.get(option, option)
    return bounded_type(PARAMETER_BOUNDS[field_name], name=f"--{option}")


def _palette_source(text: str) -> str:
    key = text.strip().lower()
    alias = SOURCE_ALIASES.get(key)
    return alias.value if alias else key


def build_parser() -> argparse.ArgumentParser:
    d = DEFAULT_CONFIG
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Create a force-directed diagram of a network",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    io = ap.add_argument_group("I/O Options")
    io.add_argument("-gml", "--gml_input_file", required=True,
                    help="Input graph in GML (or GraphML) format")
    io.add_argument("-png", "--png_output_file", required=True,
                    help="Output file in PNG format")

    lay = ap.add_argument_group("General Layout Options")
    lay.add_argument("-fight", "--figure_height", type=_numeric("figure_height"),
                     default=d.figure_height, help="Height of output figure in pixels")
    lay.add_argument("-figwd", "--figure_width", type=_numeric("figure_width"),
                     default=d.figure_width, help="Width of output figure in pixels")
    lay.add_argument("-minls", "--min_label_size", type=_numeric("min_label_size"),
                     default=d.min_label_size, help="Minimum size for labels")
    lay.add_argument("-maxls", "--max_label_size", type=_numeric("max_label_size"),
                     default=d.max_label_size, help="Maximum size for labels")
    lay.add_argument("-minns", "--min_node_size", type=_numeric("min_node_size"),
                     default=d.min_node_size, help="Minimum size for nodes")
    lay.add_argument("-maxns", "--max_node_size", type=_numeric("max_node_size"),
                     default=d.max_node_size, help="Maximum size for nodes")
    lay.add_argument("-ladj", "--label_adjust", action="store_true",
                     help="Adjust layout to prevent overlapping labels")
    lay.add_argument("-lat", "--label_adjust_time_seconds",
                     type=_numeric("label_adjust_time_seconds"),
                     default=d.label_adjust_time,
                     help="Number of seconds to spend on label adjust")
    lay.add_argument("-eo", "--edge_opacity", type=_numeric("edge_opacity"),
                     default=d.edge_opacity, help="Edge opacity (percent) for image rendering")

    fa = ap.add_argument_group("ForceAtlas Options")
    fa.add_argument("-la", "--layout_algorithm",
                    choices=[a.value for a in LayoutAlgorithm],
                    default=d.layout_algorithm.value,
                    help="Name of layout algorithm to use")
    fa.add_argument("-t", "--layout_time_seconds", type=_numeric("layout_time_seconds"),
                    default=d.layout_time,
                    help="Number of seconds to spend doing force-directed layout")
    fa.add_argument("--seed", type=_numeric("seed"), default=d.layout_seed,
                    help="Random seed for initial node positions")
    fa.add_argument("-g", "--gravity", type=_numeric("gravity"), default=d.gravity,
                    help="Gravity parameter for force_atlas/force_atlas2")
    fa.add_argument("-sr", "--scaling_ratio", type=_numeric("scaling_ratio"),
                    default=d.scaling_ratio,
                    help="Scaling ratio parameter for force_atlas/force_atlas2")
    # Algorithm-specific; None means "not given"
    fa.add_argument("-jt", "--jitter_tolerance", type=_numeric("jitter_tolerance"),
                    default=None,
                    help="Jitter tolerance parameter for force_atlas2 (algorithm default 1.0)")
    fa.add_argument("-i", "--inertia", type=_numeric("inertia"), default=None,
                    help="Inertia parameter for force_atlas (algorithm default 0.1)")
    fa.add_argument("-s", "--speed", type=_numeric("speed"), default=None,
                    help="Speed parameter for force_atlas (algorithm default 1.0)")

    data = ap.add_argument_group("Data Selection and Filtering Options")
    data.add_argument("-nscol", "--node_size_column", default=d.node_size_column,
                      help="Real-valued column of data to use for sizing nodes")
    data.add_argument("-ncc", "--node_color_column", default=d.node_color_column,
                      help="Name of column to color nodes")
    data.add_argument("-nct", "--node_color_type",
                      choices=[m.value for m in ColorMode],
                      default=d.node_color_type.value,
                      help="Choose either partition or ranking for node color type")
    data.add_argument("-nlc", "--node_label_column", default=d.node_label_column,
                      help="Name of column to label nodes")
    data.add_argument("-labpct", "--label_percentile", type=_numeric("label_percentile"),
                      default=d.label_percentile,
                      help="Percentile cutoff in ranking for nodes to be labeled")
    data.add_argument("-df", "--degree_filter", type=_numeric("degree_filter"),
                      default=d.degree_filter,
                      help="Minimum number of connections for a node not to be "
                           "filtered out of network")
    data.add_argument("--degree_filter_iterations",
                      type=_numeric("degree_filter_iterations"),
                      default=d.degree_filter_iterations,
                      help="Maximum number of degree filter passes")

    col = ap.add_argument_group("Color Palette Options")
    col.add_argument("-cps", "--color_palette_source",
                     type=_palette_source,
                     choices=[s.value for s in PaletteSource],
                     default=d.palette_source.value,
                     help="Source of color palette (gephi is accepted for builtin)")
    col.add_argument("-cpt", "--color_palette_type",
                     choices=[f.value for f in PaletteFamily],
                     default=d.palette_family.value, help="Type of color palette")
    col.add_argument("-cpn", "--color_palette_number",
                     type=_numeric("color_palette_number"),
                     default=d.palette_number, help="Number of color palette in set")
    col.add_argument("-nc", "--num_colors", type=_numeric("num_colors"),
                     default=d.num_colors, help="Number of colors in palette")

    return ap


def config_from_args(args: argparse.Namespace) -> DiagramConfig:
    """Build the validated DiagramConfig for parsed arguments."""
    return DiagramConfig(
        layout_algorithm=args.layout_algorithm,
        layout_time=args.layout_time_seconds,
        label_adjust=args.label_adjust,
        label_adjust_time=args.label_adjust_time_seconds,
        layout_seed=args.seed,
        gravity=args.gravity,
        scaling_ratio=args.scaling_ratio,
        jitter_tolerance=args.jitter_tolerance,
        inertia=args.inertia,
        speed=args.speed,
        degree_filter=args.degree_filter,
        degree_filter_iterations=args.degree_filter_iterations,
        figure_width=args.figure_width,
        figure_height=args.figure_height,
        edge_opacity=args.edge_opacity,
        min_node_size=args.min_node_size,
        max_node_size=args.max_node_size,
        min_label_size=args.min_label_size,
        max_label_size=args.max_label_size,
        label_percentile=args.label_percentile,
        node_size_column=args.node_size_column,
        node_color_column=args.node_color_column,
        node_color_type=args.node_color_type,
        node_label_column=args.node_label_column,
        palette_source=args.color_palette_source,
        palette_family=args.color_palette_type,
        palette_number=args.color_palette_number,
        num_colors=args.num_colors,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    runtime = load_config()
    configure_logging(runtime)

    try:
        config = config_from_args(args)
        run_force_diagram(
            args.gml_input_file,
            args.png_output_file,
            config,
            runtime=runtime,
        )
    except ForceDiagramError as exc:
        logger.error("%s", exc)
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

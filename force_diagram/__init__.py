"""
Force-directed network diagrams.

Graph import, degree filtering, percentile labelling, rank / partition
styling with palettes, ForceAtlas layouts and PNG export.
"""

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# High-level pipeline
# ---------------------------------------------------------------------------
from .visualizer import (
    ForceDiagram,
    run_force_diagram,
    build_graph_state,
    layout_graph_state,
)

from .graph_state import GraphState

# ---------------------------------------------------------------------------
# Configuration and presets
# ---------------------------------------------------------------------------
from .presets import (
    DiagramConfig,
    VisualStyle,
    LayoutAlgorithm,
    ColorMode,
    PARAMETER_BOUNDS,
    DEFAULT_CONFIG,
)
from .config import RuntimeConfig, load_config
from .bounds import BoundedRange, NumericKind, validate, bounded

# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------
from .palettes import (
    Color,
    PaletteSource,
    PaletteFamily,
    resolve_palette,
    parse_source,
    parse_family,
)

# ---------------------------------------------------------------------------
# Loader and attribute table
# ---------------------------------------------------------------------------
from .loader import load_graph, build_graph, LoadedGraph
from .table import AttributeTable, Column, ColumnKind, validate_columns

# ---------------------------------------------------------------------------
# Filtering, ranking and styling
# ---------------------------------------------------------------------------
from .prep_graph import degree_filter
from .analytics import (
    compute_label_cutoff,
    is_label_visible,
    compute_graph_stats,
    GraphStats,
)
from .styling import (
    NodeStyleMaps,
    compute_node_styles,
    apply_node_styles,
    partition_categories,
)

# ---------------------------------------------------------------------------
# Layout, export, metadata
# ---------------------------------------------------------------------------
from .layout import run_layout, adjust_labels, LayoutResult
from .render2d import export_png
from .metadata import write_run_metadata

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
from .errors import (
    ForceDiagramError,
    ConfigurationError,
    ParseError,
    RangeError,
    InvalidColorModeError,
    UnknownLayoutError,
    ConflictingOptionError,
    PaletteError,
    PaletteNotFoundError,
    UnsupportedSourceError,
    UnsupportedTypeError,
    TooManyColorsError,
    UnknownPaletteIdentifierError,
    ColumnNotFoundError,
    GraphImportError,
)

__all__ = [
    "ForceDiagram",
    "run_force_diagram",
    "build_graph_state",
    "layout_graph_state",
    "GraphState",
    "DiagramConfig",
    "VisualStyle",
    "LayoutAlgorithm",
    "ColorMode",
    "PARAMETER_BOUNDS",
    "DEFAULT_CONFIG",
    "RuntimeConfig",
    "load_config",
    "BoundedRange",
    "NumericKind",
    "validate",
    "bounded",
    "Color",
    "PaletteSource",
    "PaletteFamily",
    "resolve_palette",
    "parse_source",
    "parse_family",
    "load_graph",
    "build_graph",
    "LoadedGraph",
    "AttributeTable",
    "Column",
    "ColumnKind",
    "validate_columns",
    "degree_filter",
    "compute_label_cutoff",
    "is_label_visible",
    "compute_graph_stats",
    "GraphStats",
    "NodeStyleMaps",
    "compute_node_styles",
    "apply_node_styles",
    "partition_categories",
    "run_layout",
    "adjust_labels",
    "LayoutResult",
    "export_png",
    "write_run_metadata",
    "ForceDiagramError",
    "ConfigurationError",
    "ParseError",
    "RangeError",
    "InvalidColorModeError",
    "UnknownLayoutError",
    "ConflictingOptionError",
    "PaletteError",
    "PaletteNotFoundError",
    "UnsupportedSourceError",
    "UnsupportedTypeError",
    "TooManyColorsError",
    "UnknownPaletteIdentifierError",
    "ColumnNotFoundError",
    "GraphImportError",
]

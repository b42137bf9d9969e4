"""
Preset configuration for force diagrams.

DiagramConfig holds every run parameter. Numeric fields are checked against
PARAMETER_BOUNDS when the config is built, and the command line uses the same
table for its argument types, so a value is accepted or rejected identically
on both paths.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field, fields
from enum import Enum
from typing import Any, Dict, Optional

from .bounds import BoundedRange, NumericKind
from .errors import (
    ConflictingOptionError,
    InvalidColorModeError,
    UnknownLayoutError,
)
from .palettes import (
    DEFAULT_FAMILY,
    DEFAULT_SOURCE,
    PaletteFamily,
    PaletteSource,
    parse_family,
    parse_source,
)


# --------------------------------------------------------------------------- #
# Choice enums
# --------------------------------------------------------------------------- #

class LayoutAlgorithm(Enum):
    FORCE_ATLAS = "force_atlas"
    FORCE_ATLAS2 = "force_atlas2"

    @classmethod
    def parse(cls, text: Any) -> "LayoutAlgorithm":
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        for algo in cls:
            if algo.value == key:
                return algo
        raise UnknownLayoutError(
            f"Unknown layout algorithm: {text} "
            f"(expected one of: {', '.join(a.value for a in cls)})"
        )


class ColorMode(Enum):
    RANKING = "ranking"
    PARTITION = "partition"

    @classmethod
    def parse(cls, text: Any) -> "ColorMode":
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        for mode in cls:
            if mode.value == key:
                return mode
        raise InvalidColorModeError(
            f"Invalid node color type: {text} (expected 'ranking' or 'partition')"
        )


# --------------------------------------------------------------------------- #
# Parameter bounds
# --------------------------------------------------------------------------- #

_I, _F, _D = NumericKind.INTEGER, NumericKind.FLOAT, NumericKind.DOUBLE

PARAMETER_BOUNDS: Dict[str, BoundedRange] = {
    # figure
    "figure_width": BoundedRange(_I, 0, None, min_inclusive=False),
    "figure_height": BoundedRange(_I, 0, None, min_inclusive=False),
    "edge_opacity": BoundedRange(_D, 0.0, 100.0),
    # labels and nodes
    "min_label_size": BoundedRange(_F, 0.0),
    "max_label_size": BoundedRange(_F, 0.0),
    "min_node_size": BoundedRange(_I, 0),
    "max_node_size": BoundedRange(_I, 0),
    "label_percentile": BoundedRange(_D, 0.0, 100.0),
    # layout
    "layout_time": BoundedRange(_I, 0),
    "label_adjust_time": BoundedRange(_I, 0),
    "layout_seed": BoundedRange(_I, 0),
    "gravity": BoundedRange(_D, 0.0),
    "scaling_ratio": BoundedRange(_D, 0.0),
    "jitter_tolerance": BoundedRange(_D, 0.0),
    "inertia": BoundedRange(_D, 0.0),
    "speed": BoundedRange(_D, 0.0),
    # filtering
    "degree_filter": BoundedRange(_I, 0),
    "degree_filter_iterations": BoundedRange(_I, 1),
    # palette
    "palette_number": BoundedRange(_I, 0),
    "num_colors": BoundedRange(_I, 1),
}

# Algorithm-specific tuning knobs
FORCE_ATLAS_ONLY = ("inertia", "speed")
FORCE_ATLAS2_ONLY = ("jitter_tolerance",)

DEGREE_FILTER_ITERATIONS = 4


# --------------------------------------------------------------------------- #
# Visual style
# --------------------------------------------------------------------------- #

@dataclass
class VisualStyle:
    background_color: str = "#ffffff"
    edge_color: str = "#7f7f7f"
    edge_width: float = 0.6
    node_edge_color: str = "#ffffff"
    node_edge_width: float = 0.3

    label_color: str = "#000000"
    label_font_scale: float = 1.0  # points per unit of label size

    margin: float = 0.03  # fraction of the layout extent added on each side
    dpi: int = 100

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# --------------------------------------------------------------------------- #
# Diagram configuration
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class DiagramConfig:
    """
    Complete, validated parameter set for one force-diagram run.

    Strings are accepted for the enum fields and normalised in
    ``__post_init__``. Optional layout knobs left as None use the
    algorithm's own default.
    """

    # layout
    layout_algorithm: LayoutAlgorithm = LayoutAlgorithm.FORCE_ATLAS2
    layout_time: int = 60
    label_adjust: bool = False
    label_adjust_time: int = 20
    layout_seed: int = 42
    gravity: float = 1.0
    scaling_ratio: float = 5.0
    jitter_tolerance: Optional[float] = None  # force_atlas2 only
    inertia: Optional[float] = None           # force_atlas only
    speed: Optional[float] = None             # force_atlas only

    # filtering
    degree_filter: int = 0
    degree_filter_iterations: int = DEGREE_FILTER_ITERATIONS

    # figure
    figure_width: int = 4096
    figure_height: int = 4096
    edge_opacity: float = 10.0

    # nodes and labels
    min_node_size: float = 3
    max_node_size: float = 50
    min_label_size: float = 0.0
    max_label_size: float = 0.0
    label_percentile: float = 98.0

    # data columns
    node_size_column: str = "centrality"
    node_color_column: str = "community"
    node_color_type: ColorMode = ColorMode.PARTITION
    node_label_column: str = "name"

    # palette
    palette_source: PaletteSource = DEFAULT_SOURCE
    palette_family: PaletteFamily = DEFAULT_FAMILY
    palette_number: int = 0
    num_colors: int = 9

    style: VisualStyle = field(default_factory=VisualStyle, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "layout_algorithm", LayoutAlgorithm.parse(self.layout_algorithm))
        object.__setattr__(self, "node_color_type", ColorMode.parse(self.node_color_type))
        if not isinstance(self.palette_source, PaletteSource):
            object.__setattr__(self, "palette_source", parse_source(self.palette_source))
        if not isinstance(self.palette_family, PaletteFamily):
            object.__setattr__(self, "palette_family", parse_family(self.palette_family))
        if self.style is None:
            object.__setattr__(self, "style", VisualStyle())

        for name, rng in PARAMETER_BOUNDS.items():
            value = getattr(self, name)
            if value is not None:
                rng.check(value, name)

        self._check_algorithm_options()

    def _check_algorithm_options(self) -> None:
        if self.layout_algorithm is LayoutAlgorithm.FORCE_ATLAS:
            misplaced = [n for n in FORCE_ATLAS2_ONLY if getattr(self, n) is not None]
        else:
            misplaced = [n for n in FORCE_ATLAS_ONLY if getattr(self, n) is not None]

        if misplaced:
            raise ConflictingOptionError(
                f"Parameter --{misplaced[0]} may not be specified for "
                f"{self.layout_algorithm.value} algorithm"
            )

    # ------------------------------------------------------------------ #
    @property
    def label_size_range(self):
        """
        (min, max) label size.

        When neither bound is set (both <= 0) label sizes follow node sizes
        scaled down by 5.
        """
        if self.min_label_size <= 0 and self.max_label_size <= 0:
            return self.min_node_size / 5.0, self.max_node_size / 5.0
        return self.min_label_size, self.max_label_size

    @property
    def driver_columns(self):
        return (self.node_size_column, self.node_color_column, self.node_label_column)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, VisualStyle):
                value = value.to_dict()
            out[f.name] = value
        return out


DEFAULT_CONFIG = DiagramConfig()

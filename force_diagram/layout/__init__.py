"""
Layout subpackage for force diagrams.

Provides:
  - ForceAtlas / ForceAtlas2 force-directed layouts under a time budget
  - label overlap adjustment
"""

from __future__ import annotations

from .force_atlas import (
    ForceAtlas,
    LayoutResult,
    initial_positions,
    run_force_atlas,
    run_force_atlas2,
    run_layout,
)
from .label_adjust import (
    LabelAdjustResult,
    adjust_labels,
)

__all__ = [
    "ForceAtlas",
    "LayoutResult",
    "initial_positions",
    "run_force_atlas",
    "run_force_atlas2",
    "run_layout",
    "LabelAdjustResult",
    "adjust_labels",
]

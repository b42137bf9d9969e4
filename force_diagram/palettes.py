"""
Color palettes for node coloring.

Two palette sources are supported, each a closed variant with its own
lookup tables and color-count policy:

  - BUILTIN:      fixed hex tables shipped with the package. Every palette
                  has a maximum size; asking for more colors is an error,
                  asking for fewer truncates.
  - COLORBREWER:  the ColorBrewer colormaps bundled with matplotlib. The
                  generator produces exactly the requested number of colors
                  (sampled along sequential / diverging maps, listed in order
                  for qualitative maps).

Within a source, palettes are grouped by family (sequential, diverging,
qualitative) and addressed by index.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Sequence, Tuple

import numpy as np
import matplotlib
from matplotlib.colors import ListedColormap, to_rgb

from .errors import (
    PaletteError,
    PaletteNotFoundError,
    TooManyColorsError,
    UnknownPaletteIdentifierError,
    UnsupportedSourceError,
    UnsupportedTypeError,
)


# =============================================================================
# Colors and identifiers
# =============================================================================

class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, code: str) -> "Color":
        code = code.lstrip("#")
        return cls(int(code[0:2], 16), int(code[2:4], 16), int(code[4:6], 16))

    @classmethod
    def from_float(cls, rgb: Sequence[float]) -> "Color":
        r, g, b = (int(round(float(np.clip(c, 0.0, 1.0)) * 255)) for c in rgb[:3])
        return cls(r, g, b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_float(self) -> Tuple[float, float, float]:
        return self.r / 255.0, self.g / 255.0, self.b / 255.0


BLACK = Color(0, 0, 0)

Palette = Tuple[Color, ...]


class PaletteSource(Enum):
    BUILTIN = "builtin"
    COLORBREWER = "colorbrewer"


class PaletteFamily(Enum):
    SEQUENTIAL = "sequential"
    DIVERGING = "diverging"
    QUALITATIVE = "qualitative"


DEFAULT_SOURCE = PaletteSource.BUILTIN
DEFAULT_FAMILY = PaletteFamily.QUALITATIVE

# Older command lines name the bundled tables after the desktop tool
SOURCE_ALIASES = {"gephi": PaletteSource.BUILTIN}


def parse_source(text: str) -> PaletteSource:
    """Case-insensitive lookup of a palette source name."""
    key = str(text).strip().lower()
    if key in SOURCE_ALIASES:
        return SOURCE_ALIASES[key]
    for source in PaletteSource:
        if source.value == key:
            return source
    raise UnknownPaletteIdentifierError(f"Unknown palette source: {text}")


def parse_family(text: str) -> PaletteFamily:
    """Case-insensitive lookup of a palette family name."""
    key = str(text).strip().lower()
    for family in PaletteFamily:
        if family.value == key:
            return family
    raise UnknownPaletteIdentifierError(f"Unknown palette type: {text}")


# =============================================================================
# Builtin tables
# =============================================================================

_BUILTIN_TABLES: Dict[PaletteFamily, Tuple[Tuple[str, Tuple[str, ...]], ...]] = {
    PaletteFamily.QUALITATIVE: (
        ("set1", ("#e41a1c", "#377eb8", "#4daf4a", "#984ea3", "#ff7f00",
                  "#ffff33", "#a65628", "#f781bf", "#999999")),
        ("set2", ("#66c2a5", "#fc8d62", "#8da0cb", "#e78ac3", "#a6d854",
                  "#ffd92f", "#e5c494", "#b3b3b3")),
        ("dark2", ("#1b9e77", "#d95f02", "#7570b3", "#e7298a", "#66a61e",
                   "#e6ab02", "#a6761d", "#666666")),
        ("set3", ("#8dd3c7", "#ffffb3", "#bebada", "#fb8072", "#80b1d3",
                  "#fdb462", "#b3de69", "#fccde5", "#d9d9d9", "#bc80bd",
                  "#ccebc5", "#ffed6f")),
        ("paired", ("#a6cee3", "#1f78b4", "#b2df8a", "#33a02c", "#fb9a99",
                    "#e31a1c", "#fdbf6f", "#ff7f00", "#cab2d6", "#6a3d9a",
                    "#ffff99", "#b15928")),
        ("tableau10", ("#4e79a7", "#f28e2b", "#e15759", "#76b7b2", "#59a14f",
                       "#edc948", "#b07aa1", "#ff9da7", "#9c755f", "#bab0ac")),
    ),
    PaletteFamily.SEQUENTIAL: (
        ("ylorrd", ("#ffffcc", "#ffeda0", "#fed976", "#feb24c", "#fd8d3c",
                    "#fc4e2a", "#e31a1c", "#bd0026", "#800026")),
        ("ylorbr", ("#ffffe5", "#fff7bc", "#fee391", "#fec44f", "#fe9929",
                    "#ec7014", "#cc4c02", "#993404", "#662506")),
        ("blues", ("#f7fbff", "#deebf7", "#c6dbef", "#9ecae1", "#6baed6",
                   "#4292c6", "#2171b5", "#08519c", "#08306b")),
        ("greens", ("#f7fcf5", "#e5f5e0", "#c7e9c0", "#a1d99b", "#74c476",
                    "#41ab5d", "#238b45", "#006d2c", "#00441b")),
        ("purples", ("#fcfbfd", "#efedf5", "#dadaeb", "#bcbddc", "#9e9ac8",
                     "#807dba", "#6a51a3", "#54278f", "#3f007d")),
        ("greys", ("#ffffff", "#f0f0f0", "#d9d9d9", "#bdbdbd", "#969696",
                   "#737373", "#525252", "#252525", "#000000")),
    ),
    PaletteFamily.DIVERGING: (
        ("rdylbu", ("#a50026", "#d73027", "#f46d43", "#fdae61", "#fee090",
                    "#ffffbf", "#e0f3f8", "#abd9e9", "#74add1", "#4575b4",
                    "#313695")),
        ("rdbu", ("#67001f", "#b2182b", "#d6604d", "#f4a582", "#fddbc7",
                  "#f7f7f7", "#d1e5f0", "#92c5de", "#4393c3", "#2166ac",
                  "#053061")),
        ("piyg", ("#8e0152", "#c51b7d", "#de77ae", "#f1b6da", "#fde0ef",
                  "#f7f7f7", "#e6f5d0", "#b8e186", "#7fbc41", "#4d9221",
                  "#276419")),
        ("brbg", ("#543005", "#8c510a", "#bf812d", "#dfc27d", "#f6e8c3",
                  "#f5f5f5", "#c7eae5", "#80cdc1", "#35978f", "#01665e",
                  "#003c30")),
        ("spectral", ("#9e0142", "#d53e4f", "#f46d43", "#fdae61", "#fee08b",
                      "#ffffbf", "#e6f598", "#abdda4", "#66c2a5", "#3288bd",
                      "#5e4fa2")),
    ),
}


# Matplotlib colormap names (ColorBrewer schemes), by family
_BREWER_TABLES: Dict[PaletteFamily, Tuple[str, ...]] = {
    PaletteFamily.SEQUENTIAL: (
        "YlOrRd", "YlOrBr", "YlGnBu", "YlGn", "Reds", "RdPu", "Purples",
        "PuRd", "PuBuGn", "PuBu", "OrRd", "Oranges", "Greys", "Greens",
        "GnBu", "BuPu", "BuGn", "Blues",
    ),
    PaletteFamily.DIVERGING: (
        "Spectral", "RdYlGn", "RdYlBu", "RdGy", "RdBu", "PuOr", "PRGn",
        "PiYG", "BrBG",
    ),
    PaletteFamily.QUALITATIVE: (
        "Set3", "Set2", "Set1", "Pastel2", "Pastel1", "Paired", "Dark2",
        "Accent",
    ),
}


# =============================================================================
# Source variants
# =============================================================================

@dataclass(frozen=True)
class BuiltinPalettes:
    """Fixed-size palettes; colors are truncated, never resampled."""

    source = PaletteSource.BUILTIN
    tables: Dict[PaletteFamily, Tuple[Tuple[str, Tuple[str, ...]], ...]]

    def size(self, family: PaletteFamily) -> int:
        return len(self.tables[family])

    def names(self, family: PaletteFamily) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.tables[family])

    def colors(self, family: PaletteFamily, index: int, count: int) -> Palette:
        name, codes = self.tables[family][index]
        if count > len(codes):
            raise TooManyColorsError(
                f"Too many colors ({count}) requested from palette "
                f"'{name}' (with only {len(codes)} colors)"
            )
        return tuple(Color.from_hex(c) for c in codes[:count])


@dataclass(frozen=True)
class BrewerPalettes:
    """ColorBrewer palettes generated to the requested size."""

    source = PaletteSource.COLORBREWER
    tables: Dict[PaletteFamily, Tuple[str, ...]]

    def size(self, family: PaletteFamily) -> int:
        return len(self.tables[family])

    def names(self, family: PaletteFamily) -> Tuple[str, ...]:
        return self.tables[family]

    def colors(self, family: PaletteFamily, index: int, count: int) -> Palette:
        cmap = matplotlib.colormaps[self.tables[family][index]]

        if family is PaletteFamily.QUALITATIVE and isinstance(cmap, ListedColormap):
            listed = list(cmap.colors)
            rgba = [listed[i % len(listed)] for i in range(count)]
        else:
            rgba = cmap(np.linspace(0.0, 1.0, count))

        return tuple(Color.from_float(to_rgb(c)) for c in rgba)


PALETTE_SETS = {
    PaletteSource.BUILTIN: BuiltinPalettes(_BUILTIN_TABLES),
    PaletteSource.COLORBREWER: BrewerPalettes(_BREWER_TABLES),
}


# =============================================================================
# Resolution
# =============================================================================

def resolve_palette(
    source: PaletteSource,
    family: PaletteFamily,
    index: int,
    count: int,
) -> Palette:
    """
    Return exactly ``count`` colors from palette ``index`` of the given
    source and family.

    Raises
    ------
    UnsupportedSourceError, UnsupportedTypeError
        ``source`` / ``family`` missing or not a known enum member.
    PaletteNotFoundError
        ``index`` outside the family's table.
    TooManyColorsError
        BUILTIN palette holds fewer than ``count`` colors.
    """
    if not isinstance(source, PaletteSource):
        raise UnsupportedSourceError(f"Unsupported color palette source: {source}")

    palettes = PALETTE_SETS[source]

    if not isinstance(family, PaletteFamily):
        raise UnsupportedTypeError(
            f"Unsupported {source.value} color palette type: {family}"
        )

    if count < 1:
        raise PaletteError(f"At least one color must be requested (got {count})")

    if index < 0 or index >= palettes.size(family):
        raise PaletteNotFoundError(
            f"{source.value} {family.value} palette {index} not found "
            f"({palettes.size(family)} available)"
        )

    colors = palettes.colors(family, index, count)
    if len(colors) != count:
        raise PaletteError(
            f"{source.value} {family.value} palette {index} gave {len(colors)} colors, "
            f"expected {count}"
        )
    return colors


def palette_names(source: PaletteSource, family: PaletteFamily) -> Tuple[str, ...]:
    """Names of the palettes addressable by index, for help text and listings."""
    return PALETTE_SETS[source].names(family)

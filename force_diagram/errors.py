"""
Exception hierarchy for force_diagram.

Configuration errors subclass ValueError so callers that only know about
builtin exceptions still catch them. Everything raised deliberately by this
package derives from ForceDiagramError.
"""

from __future__ import annotations


class ForceDiagramError(Exception):
    """Base class for all errors raised by force_diagram."""


# --------------------------------------------------------------------------- #
# Configuration
# --------------------------------------------------------------------------- #

class ConfigurationError(ForceDiagramError, ValueError):
    """A configuration value or combination of values is invalid."""


class ParseError(ConfigurationError):
    """Raw text could not be parsed as the requested numeric kind."""


class RangeError(ConfigurationError):
    """A parsed value lies outside its configured bounds."""


class InvalidColorModeError(ConfigurationError):
    """Node color mode is neither 'ranking' nor 'partition'."""


class UnknownLayoutError(ConfigurationError):
    """Layout algorithm name is not one of the supported families."""


class ConflictingOptionError(ConfigurationError):
    """An algorithm-specific option was supplied for the other algorithm."""


# --------------------------------------------------------------------------- #
# Palettes
# --------------------------------------------------------------------------- #

class PaletteError(ConfigurationError):
    """Base class for palette resolution failures."""


class PaletteNotFoundError(PaletteError):
    pass


class UnsupportedSourceError(PaletteError):
    pass


class UnsupportedTypeError(PaletteError):
    pass


class TooManyColorsError(PaletteError):
    pass


class UnknownPaletteIdentifierError(PaletteError):
    pass


# --------------------------------------------------------------------------- #
# Graph data
# --------------------------------------------------------------------------- #

class ColumnNotFoundError(ForceDiagramError, LookupError):
    """A requested node attribute column is absent from the graph."""


class GraphImportError(ForceDiagramError):
    """The input graph file could not be found, read or parsed."""

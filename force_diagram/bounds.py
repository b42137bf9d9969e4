"""
Bounded numeric parameters.

Every numeric setting of a force diagram (figure size, node sizes, label
percentile, palette index, layout tuning...) is checked against an interval
whose ends may each be open, closed or absent. The same rules serve two
callers:

    - the command line, where raw text is parsed (``validate`` / ``bounded``)
    - DiagramConfig, where already-typed values are checked (``BoundedRange.check``)

Bound checks run in a fixed order so that a value sitting exactly on an
excluded boundary reports the exclusive message ("must be less than") rather
than the generic one ("must not be greater than").
"""

from __future__ import annotations

import argparse
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import numpy as np

from .errors import ParseError, RangeError


Number = Union[int, float]

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


# --------------------------------------------------------------------------- #
# Numeric kinds
# --------------------------------------------------------------------------- #

class NumericKind(Enum):
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def is_integral(self) -> bool:
        return self in (NumericKind.SHORT, NumericKind.INTEGER, NumericKind.LONG)

    def parse(self, raw: str) -> Number:
        """
        Parse ``raw`` as this kind.

        Integral kinds accept signed decimal digits only and must fit the
        kind's two's-complement width. Floating kinds reject NaN and
        infinities; FLOAT is rounded to single precision.
        """
        text = str(raw).strip()

        if self.is_integral:
            if not _INTEGER_RE.match(text):
                raise ValueError(f"not an integer literal: {raw!r}")
            value = int(text)
            bits = _INTEGER_BITS[self]
            lo, hi = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
            if value < lo or value > hi:
                raise ValueError(f"{raw!r} does not fit in a {self.value}")
            return value

        value = float(text)
        if not math.isfinite(value):
            raise ValueError(f"not a finite number: {raw!r}")
        if self is NumericKind.FLOAT:
            value = float(np.float32(value))
            if not math.isfinite(value):
                raise ValueError(f"{raw!r} overflows a float")
        return value


_INTEGER_BITS = {
    NumericKind.SHORT: 16,
    NumericKind.INTEGER: 32,
    NumericKind.LONG: 64,
}


# --------------------------------------------------------------------------- #
# Bounds
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class BoundedRange:
    """
    Interval constraint for one numeric parameter.

    ``minimum`` / ``maximum`` may be None (unbounded on that side).
    """

    kind: NumericKind
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    min_inclusive: bool = True
    max_inclusive: bool = True

    def parse(self, raw: str, name: str = "value") -> Number:
        """Parse raw text and enforce the bounds."""
        try:
            value = self.kind.parse(raw)
        except (TypeError, ValueError):
            raise ParseError(
                f"Could not parse value {raw} for argument {name} "
                f"as {self.kind.value}"
            ) from None
        return self.check(value, name, shown=raw)

    def check(self, value: Number, name: str = "value", *, shown: object = None) -> Number:
        """Enforce the bounds on an already-typed value and return it."""
        shown = value if shown is None else shown
        hi, lo = self.maximum, self.minimum

        if hi is not None and value >= hi and not self.max_inclusive:
            raise RangeError(
                f"Invalid value {shown} for argument {name}; must be less than {hi}"
            )
        if lo is not None and value <= lo and not self.min_inclusive:
            raise RangeError(
                f"Invalid value {shown} for argument {name}; must be greater than {lo}"
            )
        if hi is not None and value > hi:
            raise RangeError(
                f"Invalid value {shown} for argument {name}; must not be greater than {hi}"
            )
        if lo is not None and value < lo:
            raise RangeError(
                f"Invalid value {shown} for argument {name}; must not be less than {lo}"
            )
        return value

    def contains(self, value: Number) -> bool:
        try:
            self.check(value)
        except RangeError:
            return False
        return True


def validate(
    raw: str,
    kind: NumericKind,
    minimum: Optional[Number] = None,
    maximum: Optional[Number] = None,
    min_inclusive: bool = True,
    max_inclusive: bool = True,
    *,
    name: str = "value",
) -> Number:
    """
    Parse ``raw`` as ``kind`` and check it against the interval.

    Raises ParseError when the text is not a ``kind`` literal and RangeError
    when the value falls outside the interval.
    """
    rng = BoundedRange(kind, minimum, maximum, min_inclusive, max_inclusive)
    return rng.parse(raw, name)


# --------------------------------------------------------------------------- #
# argparse integration
# --------------------------------------------------------------------------- #

def bounded(
    kind: NumericKind,
    minimum: Optional[Number] = None,
    maximum: Optional[Number] = None,
    min_inclusive: bool = True,
    max_inclusive: bool = True,
    *,
    name: str = "value",
) -> Callable[[str], Number]:
    """Build an argparse ``type=`` callable for a bounded numeric option."""
    return bounded_type(
        BoundedRange(kind, minimum, maximum, min_inclusive, max_inclusive),
        name=name,
    )


def bounded_type(rng: BoundedRange, *, name: str = "value") -> Callable[[str], Number]:
    def _convert(raw: str) -> Number:
        try:
            return rng.parse(raw, name)
        except (ParseError, RangeError) as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    _convert.__name__ = rng.kind.value
    return _convert

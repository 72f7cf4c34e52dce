"""Numeric checks applied to raw activity inputs."""

import math
from numbers import Real
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    # Ints too large for a float overflow instead of reporting inf
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def all_finite(*values: Any) -> bool:
    """Return True if every value is a finite number (not inf, not NaN)."""
    return all(_is_number(v) and _is_finite(v) for v in values)


def all_positive(*values: Any) -> bool:
    """Return True if every value is a number strictly greater than zero."""
    return all(_is_number(v) and v > 0 for v in values)


def is_whole(value: Any) -> bool:
    """Return True if a finite number has no fractional part."""
    if not all_finite(value):
        return False
    if isinstance(value, int):
        return True
    return float(value).is_integer()

"""Tolerance-aware numeric comparison."""

from __future__ import annotations

import math
from numbers import Real
from typing import TYPE_CHECKING, Any

from scene_assert.report import record

if TYPE_CHECKING:
    from scene_assert.config import CompareOptions

TOLERANCE = 1e-5


def is_number(value: Any) -> bool:
    """Return whether ``value`` is a real number (booleans excluded)."""

    return isinstance(value, Real) and not isinstance(value, bool)


def effective_tolerance(options: CompareOptions | None) -> float:
    if options is not None and options.tolerance is not None:
        return options.tolerance
    return TOLERANCE


def numbers_close(actual: Any, expected: Any, tolerance: float = TOLERANCE) -> bool:
    """Return whether two numbers lie within ``tolerance`` of each other.

    NaN matches NaN and an infinity matches only an infinity of the same sign.
    Non-numeric input never matches.
    """

    if not (is_number(actual) and is_number(expected)):
        return False
    left = float(actual)
    right = float(expected)
    if math.isnan(left) or math.isnan(right):
        return math.isnan(left) and math.isnan(right)
    if math.isinf(left) or math.isinf(right):
        return left == right
    return abs(left - right) <= tolerance


def compare_numbers(
    actual: Any,
    expected: Any,
    message: str | None = None,
    options: CompareOptions | None = None,
) -> None:
    """Record whether ``actual`` is within the effective tolerance of ``expected``."""

    ok = numbers_close(actual, expected, effective_tolerance(options))
    # Report the expected value on success so float jitter does not show up as a diff.
    record(ok, expected if ok else actual, expected, message)

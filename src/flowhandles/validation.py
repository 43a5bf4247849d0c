"""
Boundary checks for the layout engines.

The engines are internal utilities: malformed geometry is a programmer error,
so it is rejected loudly instead of producing invisible or overlapping
anchors.
"""

import math
import numbers


class LayoutError(ValueError):
    """Raised when a layout call violates its preconditions."""

    pass


def check_count(name: str, value) -> int:
    """Require a non-negative integer (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise LayoutError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < 0:
        raise LayoutError(f"{name} must be non-negative, got {value}")
    return value


def check_coordinate(name: str, value) -> float:
    """Require a finite real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise LayoutError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise LayoutError(f"{name} must be finite, got {value}")
    return value


def check_dimension(name: str, value) -> float:
    """Require a finite, non-negative number. Zero is allowed."""
    value = check_coordinate(name, value)
    if value < 0:
        raise LayoutError(f"{name} must be non-negative, got {value}")
    return value


def check_parallel_group(count, index) -> None:
    """Require count >= 1 and 0 <= index < count."""
    check_count("parallel_count", count)
    check_count("index_in_group", index)
    if count < 1:
        raise LayoutError("parallel_count must be at least 1")
    if index >= count:
        raise LayoutError(
            f"index_in_group {index} out of range for a group of {count}"
        )

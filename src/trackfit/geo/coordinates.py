"""Semicircle → degree conversion and field fallback helpers."""
from typing import Any, Optional

# FIT stores lat/lon as 32-bit signed "semicircles": degrees = value / (2^32 / 360).
# Rounded to the integer that the map and chart clients were built against.
SEMICIRCLES_PER_DEGREE = 11930465


def semicircles_to_degrees(value: int) -> float:
    """Convert a semicircle-encoded coordinate to decimal degrees. No range checks."""
    return value / SEMICIRCLES_PER_DEGREE


def is_number(value: Any) -> bool:
    """True for int/float values. bool is excluded even though it subclasses int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def first_present(*values: Any) -> Optional[Any]:
    """Return the first value that is not None (0 counts as present)."""
    for value in values:
        if value is not None:
            return value
    return None

"""Timestamp unit conversion for X-Ray to Jaeger mapping.

X-Ray records epoch timestamps as fractional seconds; the Jaeger trace view
expects epoch microseconds. The two units are distinct types so the scaling
factor is applied in exactly one place.

Public Functions:
    to_micros: Convert `Seconds` to `Micros` (missing values become NaN)
    duration_micros: Span duration from optional start/end seconds
"""
from __future__ import annotations

import math
from typing import NewType, Optional

__all__ = ["Seconds", "Micros", "MICROS_PER_SECOND", "to_micros", "duration_micros"]

Seconds = NewType("Seconds", float)
Micros = NewType("Micros", float)

MICROS_PER_SECOND = 1_000_000


def to_micros(value: Optional[Seconds]) -> Micros:
    """Convert epoch seconds to epoch microseconds.

    A missing value yields NaN instead of raising so that a segment without
    `start_time` still produces a span.
    """
    if value is None:
        return Micros(math.nan)
    return Micros(value * MICROS_PER_SECOND)


def duration_micros(start: Optional[Seconds], end: Optional[Seconds]) -> Micros:
    """Return `end - start` in microseconds, or 0 when the segment has no end.

    Both sides are scaled before subtracting. No clamping: an end before the
    start gives a negative duration.
    """
    if end is None:
        return Micros(0)
    return Micros(to_micros(end) - to_micros(start))

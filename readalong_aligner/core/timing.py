"""Small numeric helpers shared by the timing stages.

A NaN that reaches min/max aggregation silently corrupts chunk timing
(every comparison with NaN is False), so every timestamp entering the
pipeline passes through finite_or_none first.
"""

from __future__ import annotations

import math
from typing import Any, Optional


def finite_or_none(value: Any) -> Optional[float]:
    """Return value as a float, or None if it is missing or not finite.

    Booleans are rejected even though they are ints in Python.
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def is_timed(start: Optional[float], end: Optional[float]) -> bool:
    """True when both timestamps are present and finite."""
    return finite_or_none(start) is not None and finite_or_none(end) is not None


def lerp(a: float, b: float, frac: float) -> float:
    return a + frac * (b - a)

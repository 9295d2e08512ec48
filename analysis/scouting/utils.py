"""Numeric helpers shared by the scouting analytics."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from contracts import PitchEvent


def percentage(count: int, total: int) -> int:
    """Integer percentage of count in total, rounded half-up.

    Each call rounds independently, so percentages of a partition may not
    sum to exactly 100.
    """
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded toward +inf."""
    return int(math.floor(value + 0.5))


def chronological(events: Iterable[PitchEvent]) -> List[PitchEvent]:
    """Sort events by timestamp.

    The sort is stable; events without a timestamp keep their relative
    order and are placed after every timestamped event. Epoch numbers,
    ISO-8601 strings and datetimes compare on the same epoch scale;
    unparseable timestamps count as missing.
    """

    def sort_key(event: PitchEvent) -> Tuple[bool, float]:
        stamp = event.valid_timestamp
        return stamp is None, stamp if stamp is not None else 0.0

    return sorted(events, key=sort_key)


def strike_percentage(events: Sequence[PitchEvent]) -> int:
    """Strike-like share of the events that carry a recognized result."""
    judged = [e for e in events if e.valid_result is not None]
    if not judged:
        return 0
    strikes = sum(1 for e in judged if e.is_strike_like)
    return percentage(strikes, len(judged))


def linear_regression(x: List[float], y: List[float]) -> Tuple[float, float]:
    """Compute simple linear regression.

    Args:
        x: Independent variable values
        y: Dependent variable values

    Returns:
        Tuple of (slope, intercept)
    """
    if not x or not y or len(x) != len(y) or len(x) < 2:
        return (0.0, 0.0)

    x_arr = np.array(x, dtype=float)
    y_arr = np.array(y, dtype=float)

    slope, intercept = np.polyfit(x_arr, y_arr, 1)

    return (float(slope), float(intercept))


__all__ = [
    "chronological",
    "linear_regression",
    "percentage",
    "round_half_up",
    "strike_percentage",
]

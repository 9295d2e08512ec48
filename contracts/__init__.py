"""Shared data contracts for pitch scouting."""

from .types import (
    CONTACT_RESULTS,
    STRIKE_LIKE_RESULTS,
    VALID_RESULTS,
    PitchEvent,
    PitchResult,
    parse_count,
    parse_timestamp,
)

__all__ = [
    "CONTACT_RESULTS",
    "STRIKE_LIKE_RESULTS",
    "VALID_RESULTS",
    "PitchEvent",
    "PitchResult",
    "parse_count",
    "parse_timestamp",
]

"""Shared pitch event factories for the scouting tests."""

from typing import List, Optional, Sequence

import pytest

from contracts import PitchEvent


def _pitch(index: int = 0, **overrides) -> PitchEvent:
    values = dict(
        pitcher_id="p1",
        game_id="g1",
        inning=1,
        is_top_half=True,
        outs=0,
        count="0-0",
        pitch_type="fastball",
        result="strike",
        batter_side="R",
        timestamp=1000.0 + index,
        event_id=f"e{index}",
    )
    values.update(overrides)
    return PitchEvent(**values)


def _sequence(
    results: Sequence[str],
    pitch_types: Optional[Sequence[str]] = None,
    start: int = 0,
    **common,
) -> List[PitchEvent]:
    """One event per result, timestamps increasing from ``start``."""
    pitch_types = pitch_types or ["fastball"] * len(results)
    return [
        _pitch(start + i, result=result, pitch_type=pitch_type, **common)
        for i, (result, pitch_type) in enumerate(zip(results, pitch_types))
    ]


@pytest.fixture
def make_pitch():
    """Factory for a single valid pitch event."""
    return _pitch


@pytest.fixture
def make_sequence():
    """Factory for a chronological run of pitch events."""
    return _sequence

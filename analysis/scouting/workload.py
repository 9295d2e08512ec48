"""Pitch count workload for one pitcher in one game."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from configs.settings import DEFAULT_CONFIG, WorkloadConfig
from contracts import PitchEvent

from analysis.scouting.aggregation import partition, partition_within
from analysis.scouting.schemas import (
    DominantPitch,
    InningBreakdown,
    InningWorkload,
    WorkloadSummary,
)
from analysis.scouting.utils import chronological, strike_percentage


def pitch_count_status(total: int, config: WorkloadConfig = DEFAULT_CONFIG.workload) -> str:
    if total < config.caution_at:
        return "fresh"
    if total < config.limit_at:
        return "caution"
    return "limit"


def estimate_pitches_per_batter(total: int, config: WorkloadConfig = DEFAULT_CONFIG.workload) -> float:
    """Pitches per batter from an estimated batter count.

    Batters are not recorded, so the batter count is derived from the
    average plate appearance length.
    """
    if total <= 0:
        return 0.0
    batters = math.ceil(total / config.pitches_per_batter)
    return round(total / batters, 1)


def _dominant_pitch(events: Sequence[PitchEvent]) -> Optional[DominantPitch]:
    part = partition(events, "pitch_type")
    dominant = part.dominant()
    if dominant is None:
        return None
    return DominantPitch(pitch_type=dominant[0], percentage=dominant[1], sample_size=part.sample_size)


def inning_breakdown(events: Sequence[PitchEvent]) -> List[InningBreakdown]:
    """Per-inning strike percentage and pitch mix, in inning order."""
    by_inning = {}
    for event in events:
        inning = event.valid_inning
        if inning is not None:
            by_inning.setdefault(inning, []).append(event)

    mixes = partition_within(events, "inning")
    breakdown = []
    for inning in sorted(by_inning):
        members = by_inning[inning]
        mix = mixes.get(inning)
        dominant = mix.dominant() if mix else None
        breakdown.append(InningBreakdown(
            inning=inning,
            pitches=len(members),
            strike_percentage=strike_percentage(members),
            dominant_pitch_type=dominant[0] if dominant else None,
            dominant_share=dominant[1] if dominant else 0,
            pitch_mix=dict(mix.percentages) if mix else {},
        ))
    return breakdown


def summarize_workload(
    events: Sequence[PitchEvent],
    config: WorkloadConfig = DEFAULT_CONFIG.workload,
) -> Optional[WorkloadSummary]:
    """Summarize pitch count workload.

    Args:
        events: Pitch events for one pitcher in one game
        config: Pitch limit and estimation constants

    Returns:
        WorkloadSummary, or None for an empty event list
    """
    if not events:
        return None

    ordered = chronological(events)
    total = len(ordered)

    half_innings = partition(ordered, "half_inning")
    per_inning = [
        InningWorkload(half_inning=label, pitches=count)
        for label, count in half_innings.counts.items()
    ]

    average = total / len(per_inning) if per_inning else 0.0
    projected = None
    if average > 0:
        projected = max(0, math.floor((config.pitch_limit - total) / average))

    split = config.first_time_through_pitches
    first_time = _dominant_pitch(ordered[:split])
    second_time = _dominant_pitch(ordered[split:]) if total > split else None

    return WorkloadSummary(
        total_pitches=total,
        pitch_limit=config.pitch_limit,
        status=pitch_count_status(total, config),
        strike_percentage=strike_percentage(ordered),
        pitches_per_inning=per_inning,
        average_per_inning=round(average, 1),
        projected_innings_remaining=projected,
        pitches_per_batter=estimate_pitches_per_batter(total, config),
        inning_breakdown=inning_breakdown(ordered),
        first_time_through=first_time,
        second_time_through=second_time,
    )


__all__ = [
    "estimate_pitches_per_batter",
    "inning_breakdown",
    "pitch_count_status",
    "summarize_workload",
]

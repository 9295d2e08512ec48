"""Pitch scouting analytics.

Turns recorded pitch events into situational tendencies, fatigue trends and
coaching advice. Every entry point is a pure function of the event list.
"""

from typing import Sequence

from contracts import PitchEvent

from .aggregation import Partition, partition
from .analyzer import ScoutingAnalyzer
from .event_store import EventSource, InMemoryEventStore, JsonEventStore
from .schemas import (
    AnalysisResult,
    CoachingAdvice,
    FatigueAssessment,
    GameAnalysis,
    TrendSegment,
)
from .trends import HeuristicProxyModel, ProxyTrendModel


def analyze(events: Sequence[PitchEvent]) -> AnalysisResult:
    """Analyze events with the default thresholds."""
    return ScoutingAnalyzer().analyze(events)


def assess_fatigue(events: Sequence[PitchEvent]) -> FatigueAssessment:
    """Assess fatigue with the default thresholds."""
    return ScoutingAnalyzer().assess_fatigue(events)


def build_advice(events: Sequence[PitchEvent]) -> CoachingAdvice:
    """Build coaching advice with the default thresholds."""
    return ScoutingAnalyzer().build_advice(events)


__all__ = [
    "AnalysisResult",
    "CoachingAdvice",
    "EventSource",
    "FatigueAssessment",
    "GameAnalysis",
    "HeuristicProxyModel",
    "InMemoryEventStore",
    "JsonEventStore",
    "Partition",
    "ProxyTrendModel",
    "ScoutingAnalyzer",
    "TrendSegment",
    "analyze",
    "assess_fatigue",
    "build_advice",
    "partition",
]

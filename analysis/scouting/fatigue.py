"""Rule-based fatigue scoring from segment trends and recent control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from configs.settings import DEFAULT_CONFIG, FatigueConfig, FatigueRuleConfig, ScoutingConfig
from contracts import PitchEvent
from log_config.logger import get_logger

from analysis.scouting.schemas import FatigueAssessment, FatigueIndicator, TrendAnalysis
from analysis.scouting.trends import ProxyTrendModel, analyze_trends
from analysis.scouting.utils import chronological, strike_percentage

logger = get_logger(__name__)

WARNING_LEVELS = ("none", "low", "medium", "high")

FATIGUE_RECOMMENDATIONS = {
    "high": "Consider removing pitcher - multiple fatigue indicators present",
    "medium": "Watch closely - signs of fatigue are emerging",
    "low": "Monitor situation - early fatigue indicators present",
    "none": "No significant fatigue detected",
}


@dataclass(frozen=True)
class FatigueSignals:
    """Trend deltas the fatigue rules are evaluated on.

    Changes are signed (negative means a drop). A change is None when there
    are fewer than two segments to compare.
    """

    strike_change: Optional[int] = None  # Last segment vs the one before it
    velocity_change: Optional[int] = None  # Last segment vs first
    consistency_change: Optional[int] = None  # Last segment vs first
    start_pitch_type: Optional[str] = None
    start_share: int = 0
    end_pitch_type: Optional[str] = None
    end_share: int = 0
    recent_strike_percentage: int = 100

    @classmethod
    def from_trends(cls, trends: TrendAnalysis, recent_strike_percentage: int) -> "FatigueSignals":
        segments = trends.segments
        if len(segments) < 2:
            return cls(recent_strike_percentage=recent_strike_percentage)

        first, previous, last = segments[0], segments[-2], segments[-1]
        return cls(
            strike_change=last.strike_percentage - previous.strike_percentage,
            velocity_change=last.velocity_proxy - first.velocity_proxy,
            consistency_change=last.consistency_proxy - first.consistency_proxy,
            start_pitch_type=first.dominant_pitch_type,
            start_share=first.dominant_share,
            end_pitch_type=last.dominant_pitch_type,
            end_share=last.dominant_share,
            recent_strike_percentage=recent_strike_percentage,
        )


def _grade_drop(change: Optional[int], rule: FatigueRuleConfig) -> Optional[Tuple[str, int, int]]:
    """(severity, points, drop) when a negative change crosses a threshold."""
    if change is None:
        return None
    drop = -change
    if drop >= rule.high_threshold:
        return "high", rule.high_points, drop
    if drop >= rule.medium_threshold:
        return "medium", rule.medium_points, drop
    return None


def score_fatigue(
    signals: FatigueSignals,
    config: FatigueConfig = DEFAULT_CONFIG.fatigue,
) -> Tuple[int, List[FatigueIndicator]]:
    """Apply the fatigue rule table.

    Each rule is independent; the score is the sum of the points of every
    rule that fires.

    Returns:
        Tuple of (score, indicators in rule order)
    """
    indicators: List[FatigueIndicator] = []

    graded = _grade_drop(signals.strike_change, config.strike_drop)
    if graded:
        severity, points, drop = graded
        indicators.append(FatigueIndicator(
            signal="Strike Percentage",
            severity=severity,
            detail=f"Dropped {drop}% in latest pitches",
            points=points,
        ))

    graded = _grade_drop(signals.velocity_change, config.velocity_drop)
    if graded:
        severity, points, drop = graded
        indicators.append(FatigueIndicator(
            signal="Velocity",
            severity=severity,
            detail=f"Estimated down {drop} mph from start (heuristic)",
            points=points,
            heuristic=True,
        ))

    graded = _grade_drop(signals.consistency_change, config.consistency_drop)
    if graded:
        severity, points, drop = graded
        indicators.append(FatigueIndicator(
            signal="Location Consistency",
            severity=severity,
            detail=f"Estimated down {drop}% from start (heuristic)",
            points=points,
            heuristic=True,
        ))

    start_type, end_type = signals.start_pitch_type, signals.end_pitch_type
    if start_type is not None and end_type is not None:
        if start_type != end_type:
            indicators.append(FatigueIndicator(
                signal="Pitch Selection",
                severity="medium",
                detail=f"Switched from {start_type} to {end_type}",
                points=config.pitch_type_change_points,
            ))
        elif signals.start_share - signals.end_share >= config.dominant_share_drop:
            indicators.append(FatigueIndicator(
                signal="Pitch Selection",
                severity="medium",
                detail=f"{start_type} usage down {signals.start_share - signals.end_share}%",
                points=config.dominant_share_drop_points,
            ))

    recent = signals.recent_strike_percentage
    rule = config.recent_strike
    if recent < rule.high_threshold or recent < rule.medium_threshold:
        severity = "high" if recent < rule.high_threshold else "medium"
        indicators.append(FatigueIndicator(
            signal="Recent Control",
            severity=severity,
            detail=f"Only {recent}% strikes in last 10 pitches",
            points=rule.high_points if severity == "high" else rule.medium_points,
        ))

    return sum(i.points for i in indicators), indicators


def warning_level(score: int, config: FatigueConfig = DEFAULT_CONFIG.fatigue) -> str:
    if score >= config.warning_high_at:
        return "high"
    if score >= config.warning_medium_at:
        return "medium"
    if score >= config.warning_low_at:
        return "low"
    return "none"


def assess_fatigue(
    events: Sequence[PitchEvent],
    config: ScoutingConfig = DEFAULT_CONFIG,
    proxy_model: Optional[ProxyTrendModel] = None,
) -> FatigueAssessment:
    """Score pitcher fatigue from a pitch sequence.

    Args:
        events: Pitch events for one pitcher, usually one game
        config: Threshold configuration
        proxy_model: Source of the velocity/consistency proxy series

    Returns:
        FatigueAssessment; "insufficient data" below the minimum pitch count
    """
    if not events:
        return FatigueAssessment.no_data()

    total = len(events)
    if total < config.segmentation.min_fatigue_events:
        logger.debug(f"Fatigue assessment skipped: {total} pitches")
        return FatigueAssessment.insufficient(total)

    trends = analyze_trends(events, config.segmentation.segment_size, proxy_model)
    recent = chronological(events)[-config.segmentation.recent_window:]
    recent_pct = strike_percentage(recent)

    signals = FatigueSignals.from_trends(trends, recent_pct)
    score, indicators = score_fatigue(signals, config.fatigue)
    level = warning_level(score, config.fatigue)

    logger.debug(
        f"Fatigue score {score} ({level}) from {len(indicators)} indicators: "
        + ", ".join(f"{i.signal}+{i.points}" for i in indicators)
    )

    return FatigueAssessment(
        has_data=True,
        total_pitches=total,
        score=score,
        indicators=indicators,
        warning_level=level,
        recommendation=FATIGUE_RECOMMENDATIONS[level],
        recent_strike_percentage=recent_pct,
        trends=trends,
    )


__all__ = [
    "FATIGUE_RECOMMENDATIONS",
    "WARNING_LEVELS",
    "FatigueSignals",
    "assess_fatigue",
    "score_fatigue",
    "warning_level",
]

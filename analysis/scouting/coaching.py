"""Threshold-driven coaching advice composed from an analysis result.

Every sub-report is a template filled from the aggregates; nothing here is
learned or stateful.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from configs.settings import DEFAULT_CONFIG, AdvisoryConfig, ScoutingConfig
from contracts import PitchEvent
from contracts.types import BATTER_SIDES, MAX_STRIKES
from log_config.logger import get_logger

from analysis.scouting.aggregation import Partition, merge_partitions, partition, partition_within
from analysis.scouting.schemas import (
    AdviceCard,
    AnalysisResult,
    BatterApproach,
    CoachingAdvice,
    DefensiveAdvice,
    GameStrategy,
    InGameAdjustments,
    KeyCountAdvice,
    PitcherManagement,
    PitchMixChange,
    SideApproach,
)
from analysis.scouting.utils import chronological, strike_percentage
from analysis.scouting.workload import summarize_workload

logger = get_logger(__name__)

TWO_STRIKE_COUNTS = ("0-2", "1-2", "2-2")
NO_KEY_COUNT_ADVICE = "No strong count tendencies - look for your pitch"

# Counts scanned for the per-side key count card, in priority order
SIDE_KEY_COUNTS = ("1-0", "0-1", "2-0", "0-2", "1-1", "2-1", "1-2", "3-1", "3-2")
SIDE_KEY_COUNT_MIN_SAMPLE = 3
SIDE_KEY_COUNT_SHARE_ABOVE = 65


def _general_framing(pitch_mix: Partition, config: AdvisoryConfig) -> str:
    dominant = pitch_mix.dominant()
    if dominant is None:
        return "Mixed approach - focus on good pitch selection"
    pitch_type, share = dominant
    if share > config.heavy_favor_above:
        return f"Pitcher heavily favors {pitch_type} ({share}% of pitches) - look for it"
    if share > config.expect_adjust_above:
        return f"Expect {pitch_type} but be ready to adjust"
    return "Mixed approach - focus on good pitch selection"


def _key_count(count_matrix: Dict[str, Partition], config: AdvisoryConfig) -> KeyCountAdvice:
    """Key count with the strongest single-pitch tendency.

    Ties on share go to the larger sample, then to the earlier key count.
    """
    best = None
    best_rank = None
    for order, count in enumerate(config.key_counts):
        part = count_matrix.get(count)
        if part is None or part.sample_size < config.key_count_min_sample:
            continue
        dominant = part.dominant()
        if dominant is None or dominant[1] <= config.key_count_share_above:
            continue
        rank = (dominant[1], part.sample_size, -order)
        if best_rank is None or rank > best_rank:
            best, best_rank = (count, dominant), rank

    if best is None:
        return KeyCountAdvice(count=None, advice=NO_KEY_COUNT_ADVICE)

    count, (pitch_type, share) = best
    return KeyCountAdvice(
        count=count,
        advice=f"On {count} count: Look for {pitch_type} ({share}%)",
        share=share,
    )


def batter_approach(analysis: AnalysisResult, config: ScoutingConfig = DEFAULT_CONFIG) -> BatterApproach:
    """Approach advice for hitters facing this pitcher."""
    advisory = config.advisory

    first_pitch = None
    prediction = analysis.predictions.get("first_pitch")
    if prediction is not None:
        if prediction.confidence > advisory.first_pitch_aggressive_above:
            first_pitch = f"Aggressive on first pitch - expect {prediction.pitch_type}"
        else:
            first_pitch = "Take first pitch - mixed approach"

    two_strike_mix = merge_partitions(
        [analysis.count_matrix[c] for c in TWO_STRIKE_COUNTS if c in analysis.count_matrix],
        "two_strike_counts",
    )
    dominant = two_strike_mix.dominant()
    if dominant is not None and two_strike_mix.sample_size >= config.samples.two_strike:
        two_strikes = f"Protect against {dominant[0]} with two strikes"
    else:
        two_strikes = "Shorten swing with two strikes"

    return BatterApproach(
        general=_general_framing(analysis.partition("pitch_type"), advisory),
        first_pitch=first_pitch,
        two_strikes=two_strikes,
        key_count=_key_count(analysis.count_matrix, advisory),
    )


def _side_general(pitch_mix: Partition, config: AdvisoryConfig) -> AdviceCard:
    dominant = pitch_mix.dominant()
    if dominant is not None and dominant[1] > config.heavy_favor_above:
        return AdviceCard(f"Look for {dominant[0]} - pitcher relies heavily on it", 90)
    if dominant is not None and dominant[1] > config.expect_adjust_above:
        return AdviceCard(f"Expect {dominant[0]} but be ready to adjust", 75)
    return AdviceCard("Pitcher mixes pitches well - look for patterns by count", 60)


def _side_first_pitch(first_pitches: Partition, minimum: int) -> AdviceCard:
    dominant = first_pitches.dominant()
    if dominant is None or first_pitches.sample_size < minimum:
        return AdviceCard("Limited data on first pitches - be ready for anything", 50)
    pitch_type, share = dominant
    if share > 70:
        return AdviceCard(f"Be aggressive - expect {pitch_type} first pitch", 85)
    if share > 55:
        return AdviceCard(f"Look for {pitch_type} but be selective", 70)
    return AdviceCard("Mixed first pitch approach - focus on middle of zone", 60)


def _side_two_strikes(two_strike_mix: Partition, minimum: int) -> AdviceCard:
    dominant = two_strike_mix.dominant()
    if dominant is None or two_strike_mix.sample_size < minimum:
        return AdviceCard("Protect with two strikes - not enough data for specifics", 50)
    if dominant[1] > 65:
        return AdviceCard(f"Protect against {dominant[0]} with two strikes", 80)
    return AdviceCard("Shortened swing, protect the plate with two strikes", 65)


def _side_key_count(events: Sequence[PitchEvent]) -> KeyCountAdvice:
    """Strongest tendency over SIDE_KEY_COUNTS; ties keep the earlier count."""
    by_count = partition_within(events, "count")
    best = None
    for count in SIDE_KEY_COUNTS:
        part = by_count.get(count)
        if part is None or part.sample_size < SIDE_KEY_COUNT_MIN_SAMPLE:
            continue
        pitch_type, share = part.dominant()
        if share > SIDE_KEY_COUNT_SHARE_ABOVE and (best is None or share > best[2]):
            best = (count, pitch_type, share)

    if best is None:
        return KeyCountAdvice(count=None, advice="No strong count-based tendencies detected")
    count, pitch_type, share = best
    return KeyCountAdvice(count=count, advice=f"On {count} count, look for {pitch_type}", share=share)


def batter_approach_by_side(
    events: Sequence[PitchEvent],
    batter_side: str,
    config: ScoutingConfig = DEFAULT_CONFIG,
) -> SideApproach:
    """Approach cards for hitters on one side of the plate.

    Built from the pitches thrown to that side. When none were recorded the
    cards fall back to every pitch and ``used_all_pitches`` is set.

    Args:
        events: Pitch events for one pitcher (optionally one game)
        batter_side: "L" or "R"
        config: Threshold configuration

    Raises:
        ValueError: If batter_side is not "L" or "R"
    """
    if batter_side not in BATTER_SIDES:
        raise ValueError(f"Unknown batter side: {batter_side!r}")

    ordered = chronological(events)
    facing = [e for e in ordered if e.valid_batter_side == batter_side]
    used_all = not facing
    pitches = ordered if used_all else facing

    first_pitches = partition(pitches, "pitch_type", where=lambda e: e.parsed_count == (0, 0))
    two_strike_mix = partition(pitches, "pitch_type", where=lambda e: e.strikes == MAX_STRIKES)

    if used_all:
        logger.debug(f"No pitches to {batter_side} batters, using all {len(pitches)}")
    return SideApproach(
        batter_side=batter_side,
        sample_size=len(pitches),
        used_all_pitches=used_all,
        general=_side_general(partition(pitches, "pitch_type"), config.advisory),
        first_pitch=_side_first_pitch(first_pitches, config.samples.first_pitch),
        two_strikes=_side_two_strikes(two_strike_mix, config.samples.two_strike),
        key_count=_side_key_count(pitches),
    )


def pitcher_management(
    events: Sequence[PitchEvent],
    config: ScoutingConfig = DEFAULT_CONFIG,
) -> PitcherManagement:
    """Fatigue risk from pitch count and recent control."""
    advisory = config.advisory
    total = len(events)
    recent = chronological(events)[-config.segmentation.recent_window:]
    recent_pct = strike_percentage(recent)

    risk = "low"
    recommendations: List[str] = []
    warnings: List[str] = []

    if total > advisory.high_pitch_count_above:
        risk = "high"
        warnings.append("Approaching pitch limit - prepare relief pitcher")
    elif total > advisory.medium_pitch_count_above:
        risk = "medium"
        recommendations.append("Begin considering relief options in next inning")

    if recent_pct < advisory.control_warning_below:
        if risk == "low":
            risk = "medium"
        warnings.append(f"Control issues: Only {recent_pct}% strikes in last {len(recent)} pitches")
    elif recent_pct < advisory.control_watch_below:
        recommendations.append("Monitor control - strike percentage dropping")

    return PitcherManagement(
        fatigue_risk=risk,
        pitch_count=total,
        recent_strike_percentage=recent_pct,
        recommendations=recommendations,
        warnings=warnings,
    )


def game_strategy(analysis: AnalysisResult, config: AdvisoryConfig = DEFAULT_CONFIG.advisory) -> GameStrategy:
    strike_pct = analysis.rates.strike_percentage if analysis.rates else 0
    strengths: List[str] = []
    weaknesses: List[str] = []

    if strike_pct > config.strength_strike_above:
        overall = "High-strike pitcher - emphasize strike zone discipline"
        strengths.append("Good control")
    elif strike_pct < config.weakness_strike_below:
        overall = "Control issues - take until you get a strike"
        weaknesses.append("Inconsistent control")
    else:
        overall = "Average control - normal approach"

    dominant = analysis.partition("pitch_type").dominant()
    if dominant is not None and dominant[1] > config.predictability_share_above:
        weaknesses.append(f"Heavy reliance on {dominant[0]}")

    return GameStrategy(
        overall=overall,
        strike_percentage=strike_pct,
        strengths=strengths,
        weaknesses=weaknesses,
    )


def in_game_adjustments(
    events: Sequence[PitchEvent],
    config: AdvisoryConfig = DEFAULT_CONFIG.advisory,
) -> InGameAdjustments:
    """Compare the pitch mix of the first and second half of the sequence.

    The chronologically sorted sequence is split at floor(n / 2). A pitch
    type is flagged when its share moved by at least the configured number
    of percentage points.
    """
    ordered = chronological(events)
    halfway = len(ordered) // 2
    first = partition(ordered[:halfway], "pitch_type")
    second = partition(ordered[halfway:], "pitch_type")

    changes: List[PitchMixChange] = []
    if first.has_data and second.has_data:
        pitch_types = list(first.categories)
        pitch_types += [t for t in second.categories if t not in first.counts]
        for pitch_type in pitch_types:
            before, after = first.share(pitch_type), second.share(pitch_type)
            if abs(after - before) >= config.adjustment_min_change:
                changes.append(PitchMixChange(
                    pitch_type=pitch_type,
                    first_half=before,
                    second_half=after,
                    change=after - before,
                ))

    made = bool(changes)
    return InGameAdjustments(
        adjustments_made=made,
        changes=changes,
        adjustments=[c.describe() for c in changes],
        recommendation=(
            "Pitcher makes adjustments during game - be ready to adapt your approach"
            if made
            else "Consistent approach throughout game - stick with initial strategy"
        ),
    )


def defensive_advice(analysis: AnalysisResult, config: AdvisoryConfig = DEFAULT_CONFIG.advisory) -> DefensiveAdvice:
    fastball_share = analysis.partition("pitch_type").share("fastball")
    if fastball_share > config.deep_outfield_fastball_above:
        outfield = "Outfielders slightly deeper - high fastball percentage increases likelihood of hard contact"
    else:
        outfield = "Outfielders at medium depth - mixed pitch selection"
    return DefensiveAdvice(recommendations=[
        "Position middle infielders straight up (not expecting advanced pull/oppo tendencies at this age)",
        outfield,
    ])


def compose_advice(
    analysis: AnalysisResult,
    events: Sequence[PitchEvent],
    config: ScoutingConfig = DEFAULT_CONFIG,
) -> CoachingAdvice:
    """Build every coaching sub-report for an analyzed event list.

    Args:
        analysis: Result of analyzing ``events``
        events: The same events the analysis was computed from
        config: Threshold configuration

    Returns:
        CoachingAdvice; the no-data sentinel when the analysis has no data
    """
    if not analysis.has_data or not events:
        return CoachingAdvice.no_data()

    advice = CoachingAdvice(
        has_data=True,
        batter_approach=batter_approach(analysis, config),
        pitcher_management=pitcher_management(events, config),
        game_strategy=game_strategy(analysis, config.advisory),
        in_game_adjustments=in_game_adjustments(events, config.advisory),
        defensive_advice=defensive_advice(analysis, config.advisory),
        workload=summarize_workload(events, config.workload),
        by_batter_side={side: batter_approach_by_side(events, side, config) for side in BATTER_SIDES},
    )
    logger.debug(
        f"Advice composed: risk {advice.pitcher_management.fatigue_risk}, "
        f"{len(advice.in_game_adjustments.changes)} mix changes"
    )
    return advice


__all__ = [
    "NO_KEY_COUNT_ADVICE",
    "SIDE_KEY_COUNTS",
    "TWO_STRIKE_COUNTS",
    "batter_approach",
    "batter_approach_by_side",
    "compose_advice",
    "defensive_advice",
    "game_strategy",
    "in_game_adjustments",
    "pitcher_management",
]

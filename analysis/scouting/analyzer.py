"""Main scouting analysis facade."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from configs.settings import DEFAULT_CONFIG, ScoutingConfig
from contracts import PitchEvent, PitchResult
from contracts.types import CONTACT_RESULTS, MAX_BALLS, MAX_OUTS, MAX_STRIKES
from log_config.logger import get_logger

from analysis.scouting.aggregation import Partition, partition, partition_within
from analysis.scouting.coaching import compose_advice
from analysis.scouting.event_store import EventSource
from analysis.scouting.fatigue import assess_fatigue
from analysis.scouting.predictions import build_predictions, situation_partitions
from analysis.scouting.schemas import (
    AnalysisResult,
    CoachingAdvice,
    CountLeverage,
    FatigueAssessment,
    GameAnalysis,
    OutcomeRates,
    PitchEffectiveness,
)
from analysis.scouting.trends import ProxyTrendModel
from analysis.scouting.utils import chronological, percentage, strike_percentage

logger = get_logger(__name__)

# Partition keys reported on every analysis, besides the situations.
PARTITION_KEYS = ("pitch_type", "result", "batter_side", "count", "outs", "inning", "half_inning")

# 0-0, 0-1, 0-2, 1-0, ... 3-2
COUNT_ORDER = tuple(
    f"{balls}-{strikes}"
    for balls in range(MAX_BALLS + 1)
    for strikes in range(MAX_STRIKES + 1)
)


def quality_tier(total: int, config: ScoutingConfig = DEFAULT_CONFIG) -> str:
    """Coarse reliability label for a sample of ``total`` pitches."""
    if total < config.samples.quality_low_below:
        return "low"
    if total < config.samples.quality_medium_below:
        return "medium"
    return "high"


def count_matrix(events: Sequence[PitchEvent]) -> Dict[str, Partition]:
    """Pitch mix per count, in count order, observed counts only."""
    by_count = partition_within(events, "count")
    return {c: by_count[c] for c in COUNT_ORDER if c in by_count}


def pitch_types_by_outs(events: Sequence[PitchEvent]) -> Dict[int, Partition]:
    by_outs = partition_within(events, "outs")
    return {outs: by_outs[outs] for outs in range(MAX_OUTS + 1) if outs in by_outs}


def count_leverage(events: Sequence[PitchEvent]) -> CountLeverage:
    """Pitch totals thrown ahead, behind and even in the count."""
    ahead = behind = even = 0
    for event in events:
        parsed = event.parsed_count
        if parsed is None:
            continue
        balls, strikes = parsed
        if strikes > balls:
            ahead += 1
        elif balls > strikes:
            behind += 1
        else:
            even += 1
    return CountLeverage(ahead=ahead, behind=behind, even=even)


def outcome_rates(events: Sequence[PitchEvent]) -> OutcomeRates:
    """Result rates over events with a recognized result.

    Hit and out rates are shares of contact (fouls included).
    """
    judged = [e for e in events if e.valid_result is not None]
    contact = [e for e in judged if e.valid_result in CONTACT_RESULTS]
    whiffs = sum(1 for e in judged if e.valid_result == PitchResult.SWINGING_STRIKE.value)
    hits = sum(1 for e in contact if e.valid_result == PitchResult.HIT.value)
    outs = sum(1 for e in contact if e.valid_result == PitchResult.OUT.value)

    return OutcomeRates(
        strike_percentage=strike_percentage(judged),
        contact_rate=percentage(len(contact), len(judged)),
        swing_and_miss_rate=percentage(whiffs, len(judged)),
        hit_rate=percentage(hits, len(contact)),
        out_rate=percentage(outs, len(contact)),
    )


def pitch_effectiveness(events: Sequence[PitchEvent]) -> Dict[str, PitchEffectiveness]:
    """Strike and swing-and-miss percentage per pitch type."""
    by_type: Dict[str, List[PitchEvent]] = {}
    for event in events:
        pitch_type = event.valid_pitch_type
        if pitch_type is not None:
            by_type.setdefault(pitch_type, []).append(event)

    effectiveness = {}
    for pitch_type, members in by_type.items():
        judged = [e for e in members if e.valid_result is not None]
        whiffs = sum(1 for e in judged if e.valid_result == PitchResult.SWINGING_STRIKE.value)
        effectiveness[pitch_type] = PitchEffectiveness(
            pitches=len(members),
            strike_percentage=strike_percentage(judged),
            swing_and_miss_percentage=percentage(whiffs, len(judged)),
        )
    return effectiveness


def _single_value(events: Sequence[PitchEvent], attr: str) -> Optional[str]:
    if not events:
        return None
    first = getattr(events[0], attr)
    if all(getattr(e, attr) == first for e in events[1:]):
        return first
    return None


class ScoutingAnalyzer:
    """Main facade for scouting analysis.

    Every method is a pure function of the events passed in; the analyzer
    itself only holds configuration.
    """

    def __init__(
        self,
        config: Optional[ScoutingConfig] = None,
        proxy_model: Optional[ProxyTrendModel] = None,
    ):
        """Initialize scouting analyzer.

        Args:
            config: Threshold configuration (default: built-in thresholds)
            proxy_model: Velocity/consistency proxy source for fatigue trends
        """
        self.config = config or DEFAULT_CONFIG
        self.proxy_model = proxy_model

    def analyze(self, events: Sequence[PitchEvent]) -> AnalysisResult:
        """Compute situational tendencies for a pitcher.

        Args:
            events: Pitch events for one pitcher, optionally one game

        Returns:
            AnalysisResult; the no-data sentinel for an empty list
        """
        if not events:
            return AnalysisResult.no_data()

        ordered = chronological(events)
        total = len(ordered)

        partitions = {key: partition(ordered, key) for key in PARTITION_KEYS}
        situations = situation_partitions(ordered)
        partitions.update(situations)
        predictions = build_predictions(situations, self.config.samples)

        result = AnalysisResult(
            has_data=True,
            pitcher_id=_single_value(ordered, "pitcher_id"),
            game_id=_single_value(ordered, "game_id"),
            total_pitches=total,
            quality=quality_tier(total, self.config),
            partitions=partitions,
            count_matrix=count_matrix(ordered),
            pitch_types_by_outs=pitch_types_by_outs(ordered),
            count_leverage=count_leverage(ordered),
            rates=outcome_rates(ordered),
            pitch_effectiveness=pitch_effectiveness(ordered),
            predictions=predictions,
        )

        logger.info(
            f"Analyzed {total} pitches (quality {result.quality}): "
            f"{len(predictions)} predictions, strike % {result.rates.strike_percentage}"
        )
        return result

    def assess_fatigue(self, events: Sequence[PitchEvent]) -> FatigueAssessment:
        assessment = assess_fatigue(events, self.config, self.proxy_model)
        if assessment.has_data:
            logger.info(
                f"Fatigue assessment: score {assessment.score}, level {assessment.warning_level}"
            )
        return assessment

    def build_advice(self, events: Sequence[PitchEvent]) -> CoachingAdvice:
        """Coaching advice for facing (and managing) a pitcher."""
        if not events:
            return CoachingAdvice.no_data()
        return compose_advice(self.analyze(events), events, self.config)

    def analyze_game(self, events: Sequence[PitchEvent]) -> GameAnalysis:
        """Analyze every pitcher who threw in a game.

        Args:
            events: Pitch events for one game

        Returns:
            GameAnalysis with one AnalysisResult per pitcher, in order of
            first appearance
        """
        if not events:
            return GameAnalysis(has_data=False, message=AnalysisResult.no_data().message)

        by_pitcher: Dict[str, List[PitchEvent]] = {}
        for event in chronological(events):
            by_pitcher.setdefault(str(event.pitcher_id), []).append(event)

        return GameAnalysis(
            has_data=True,
            total_pitches=len(events),
            pitcher_breakdown={pid: self.analyze(group) for pid, group in by_pitcher.items()},
        )

    # Scoped helpers over an event source

    def analyze_pitcher(
        self,
        source: EventSource,
        pitcher_id: str,
        game_id: Optional[str] = None,
    ) -> AnalysisResult:
        return self.analyze(self._scoped(source, pitcher_id, game_id))

    def assess_pitcher_fatigue(
        self,
        source: EventSource,
        pitcher_id: str,
        game_id: Optional[str] = None,
    ) -> FatigueAssessment:
        return self.assess_fatigue(self._scoped(source, pitcher_id, game_id))

    def advise_on_pitcher(
        self,
        source: EventSource,
        pitcher_id: str,
        game_id: Optional[str] = None,
    ) -> CoachingAdvice:
        return self.build_advice(self._scoped(source, pitcher_id, game_id))

    @staticmethod
    def _scoped(source: EventSource, pitcher_id: str, game_id: Optional[str]) -> List[PitchEvent]:
        if game_id is None:
            return source.events_by_pitcher(pitcher_id)
        return source.events_by_pitcher_and_game(pitcher_id, game_id)


__all__ = [
    "COUNT_ORDER",
    "PARTITION_KEYS",
    "ScoutingAnalyzer",
    "count_leverage",
    "count_matrix",
    "outcome_rates",
    "pitch_effectiveness",
    "pitch_types_by_outs",
    "quality_tier",
]

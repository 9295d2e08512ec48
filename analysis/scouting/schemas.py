"""Data schemas for scouting analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from analysis.scouting.aggregation import Partition

NO_DATA_MESSAGE = "No pitch data available"
INSUFFICIENT_DATA_MESSAGE = "Not enough pitches to analyze fatigue"


def to_serializable(value: Any) -> Any:
    """Convert result objects to plain JSON-compatible structures."""
    if isinstance(value, Partition):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_serializable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if isinstance(value, dict):
        return {str(k): to_serializable(v) for k, v in value.items()}
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return to_serializable(self)


# ---------------------------------------------------------------------------
# Tendency analysis
# ---------------------------------------------------------------------------


@dataclass
class Prediction:
    """Dominant pitch type for one tracked situation."""

    situation: str  # e.g. "first_pitch", "vs_left"
    pitch_type: str
    confidence: int  # Percentage share of the dominant pitch type
    sample_size: int


@dataclass
class DominantPitch:
    pitch_type: str
    percentage: int
    sample_size: int


@dataclass
class PitchEffectiveness:
    """Per pitch type outcome rates."""

    pitches: int
    strike_percentage: int
    swing_and_miss_percentage: int


@dataclass
class CountLeverage:
    """Pitch totals by count state."""

    ahead: int  # More strikes than balls
    behind: int  # More balls than strikes
    even: int


@dataclass
class OutcomeRates:
    strike_percentage: int
    contact_rate: int
    swing_and_miss_rate: int
    hit_rate: int  # Share of contact that became a hit
    out_rate: int  # Share of contact that became an out


@dataclass
class AnalysisResult(_Serializable):
    """Situational tendency snapshot for one pitcher (optionally one game)."""

    has_data: bool
    message: str = ""
    pitcher_id: Optional[str] = None
    game_id: Optional[str] = None
    total_pitches: int = 0
    quality: Optional[str] = None  # "low", "medium", "high"

    partitions: Dict[str, Partition] = field(default_factory=dict)
    count_matrix: Dict[str, Partition] = field(default_factory=dict)
    pitch_types_by_outs: Dict[int, Partition] = field(default_factory=dict)
    count_leverage: Optional[CountLeverage] = None
    rates: Optional[OutcomeRates] = None
    pitch_effectiveness: Dict[str, PitchEffectiveness] = field(default_factory=dict)
    predictions: Dict[str, Prediction] = field(default_factory=dict)

    @classmethod
    def no_data(cls, message: str = NO_DATA_MESSAGE) -> "AnalysisResult":
        return cls(has_data=False, message=message)

    def partition(self, key: str) -> Partition:
        return self.partitions.get(key, Partition.empty(key))

    @property
    def pitch_type_percentages(self) -> Dict[str, int]:
        return dict(self.partition("pitch_type").percentages)

    @property
    def result_percentages(self) -> Dict[str, int]:
        return dict(self.partition("result").percentages)


@dataclass
class GameAnalysis(_Serializable):
    """Per-pitcher analyses for every pitcher who threw in a game."""

    has_data: bool
    message: str = ""
    total_pitches: int = 0
    pitcher_breakdown: Dict[str, AnalysisResult] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Trends and fatigue
# ---------------------------------------------------------------------------


@dataclass
class TrendSegment:
    """One fixed-size window of chronologically ordered pitches.

    ``velocity_proxy`` and ``consistency_proxy`` are heuristic estimates, not
    measurements.
    """

    index: int
    start: int  # Position of the first pitch in the sorted sequence
    size: int
    strike_percentage: int
    dominant_pitch_type: Optional[str]
    dominant_share: int
    velocity_proxy: int
    consistency_proxy: int


@dataclass
class TrendAnalysis(_Serializable):
    segments: List[TrendSegment] = field(default_factory=list)
    segment_size: int = 15
    proxy_model: str = ""
    strike_percentage_slope: float = 0.0  # Points per segment, least squares

    @property
    def strike_percentages(self) -> List[int]:
        return [s.strike_percentage for s in self.segments]

    @property
    def velocity_proxies(self) -> List[int]:
        return [s.velocity_proxy for s in self.segments]

    @property
    def consistency_proxies(self) -> List[int]:
        return [s.consistency_proxy for s in self.segments]


@dataclass
class FatigueIndicator:
    signal: str  # e.g. "Strike Percentage", "Velocity"
    severity: str  # "medium" or "high"
    detail: str
    points: int
    heuristic: bool = False  # Derived from a proxy series


@dataclass
class FatigueAssessment(_Serializable):
    has_data: bool
    message: str = ""
    total_pitches: int = 0
    score: int = 0
    indicators: List[FatigueIndicator] = field(default_factory=list)
    warning_level: str = "none"  # "none", "low", "medium", "high"
    recommendation: str = ""
    recent_strike_percentage: Optional[int] = None
    trends: Optional[TrendAnalysis] = None

    @classmethod
    def no_data(cls, message: str = NO_DATA_MESSAGE) -> "FatigueAssessment":
        return cls(has_data=False, message=message, recommendation=message)

    @classmethod
    def insufficient(cls, total_pitches: int) -> "FatigueAssessment":
        return cls(
            has_data=False,
            message=INSUFFICIENT_DATA_MESSAGE,
            total_pitches=total_pitches,
            recommendation=INSUFFICIENT_DATA_MESSAGE,
        )


# ---------------------------------------------------------------------------
# Workload
# ---------------------------------------------------------------------------


@dataclass
class InningWorkload:
    half_inning: str  # e.g. "Top-3"
    pitches: int


@dataclass
class InningBreakdown:
    inning: int
    pitches: int
    strike_percentage: int
    dominant_pitch_type: Optional[str]
    dominant_share: int
    pitch_mix: Dict[str, int] = field(default_factory=dict)


@dataclass
class WorkloadSummary(_Serializable):
    total_pitches: int
    pitch_limit: int
    status: str  # "fresh", "caution", "limit"
    strike_percentage: int
    pitches_per_inning: List[InningWorkload] = field(default_factory=list)
    average_per_inning: float = 0.0
    projected_innings_remaining: Optional[int] = None
    pitches_per_batter: float = 0.0  # Estimate, batters are not tracked
    inning_breakdown: List[InningBreakdown] = field(default_factory=list)
    first_time_through: Optional[DominantPitch] = None
    second_time_through: Optional[DominantPitch] = None


# ---------------------------------------------------------------------------
# Coaching advice
# ---------------------------------------------------------------------------


@dataclass
class KeyCountAdvice:
    count: Optional[str]
    advice: str
    share: int = 0


@dataclass
class BatterApproach:
    general: str
    first_pitch: Optional[str]
    two_strikes: Optional[str]
    key_count: KeyCountAdvice


@dataclass
class AdviceCard:
    advice: str
    confidence: int


@dataclass
class SideApproach:
    """Approach cards for hitters on one side of the plate.

    ``used_all_pitches`` is set when no pitches to that side were recorded
    and the cards were built from every pitch instead.
    """

    batter_side: str
    sample_size: int
    used_all_pitches: bool
    general: AdviceCard
    first_pitch: AdviceCard
    two_strikes: AdviceCard
    key_count: KeyCountAdvice


@dataclass
class PitcherManagement:
    fatigue_risk: str  # "low", "medium", "high"
    pitch_count: int
    recent_strike_percentage: int
    recommendations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class GameStrategy:
    overall: str
    strike_percentage: int
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)


@dataclass
class PitchMixChange:
    pitch_type: str
    first_half: int
    second_half: int
    change: int  # Signed, in percentage points

    @property
    def direction(self) -> str:
        return "increase" if self.change > 0 else "decrease"

    def describe(self) -> str:
        verb = "Increased" if self.change > 0 else "Decreased"
        return f"{verb} {self.pitch_type} usage from {self.first_half}% to {self.second_half}%"


@dataclass
class InGameAdjustments:
    adjustments_made: bool
    changes: List[PitchMixChange] = field(default_factory=list)
    adjustments: List[str] = field(default_factory=list)  # Readable form of changes
    recommendation: str = ""


@dataclass
class DefensiveAdvice:
    recommendations: List[str] = field(default_factory=list)


@dataclass
class CoachingAdvice(_Serializable):
    has_data: bool
    message: str = ""
    batter_approach: Optional[BatterApproach] = None
    pitcher_management: Optional[PitcherManagement] = None
    game_strategy: Optional[GameStrategy] = None
    in_game_adjustments: Optional[InGameAdjustments] = None
    defensive_advice: Optional[DefensiveAdvice] = None
    workload: Optional[WorkloadSummary] = None
    by_batter_side: Dict[str, SideApproach] = field(default_factory=dict)

    @classmethod
    def no_data(cls, message: str = NO_DATA_MESSAGE) -> "CoachingAdvice":
        return cls(has_data=False, message=message)


__all__ = [
    "INSUFFICIENT_DATA_MESSAGE",
    "NO_DATA_MESSAGE",
    "AdviceCard",
    "AnalysisResult",
    "BatterApproach",
    "CoachingAdvice",
    "CountLeverage",
    "DefensiveAdvice",
    "DominantPitch",
    "FatigueAssessment",
    "FatigueIndicator",
    "GameAnalysis",
    "GameStrategy",
    "InGameAdjustments",
    "InningBreakdown",
    "InningWorkload",
    "KeyCountAdvice",
    "OutcomeRates",
    "PitchEffectiveness",
    "PitchMixChange",
    "PitcherManagement",
    "Prediction",
    "SideApproach",
    "TrendAnalysis",
    "TrendSegment",
    "WorkloadSummary",
    "to_serializable",
]

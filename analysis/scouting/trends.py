"""Segment pitch sequences into fixed windows and derive trend series.

Velocity and location consistency are not recorded by the capture app. The
proxy series here are qualitative stand-ins computed from the strike
percentage trend. They live behind ``ProxyTrendModel`` so a model fed by
real instrumentation can replace ``HeuristicProxyModel`` without touching
the fatigue rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from configs.settings import DEFAULT_CONFIG, ProxyConfig
from contracts import PitchEvent
from log_config.logger import get_logger

from analysis.scouting.aggregation import partition
from analysis.scouting.schemas import TrendAnalysis, TrendSegment
from analysis.scouting.utils import (
    chronological,
    linear_regression,
    round_half_up,
    strike_percentage,
)

logger = get_logger(__name__)


class ProxyTrendModel(ABC):
    """Source of per-segment velocity and consistency series."""

    name: str = "proxy"

    @abstractmethod
    def velocity_series(
        self,
        segments: Sequence[Sequence[PitchEvent]],
        strike_percentages: Sequence[int],
    ) -> List[int]:
        """One velocity value (mph) per segment."""

    @abstractmethod
    def consistency_series(
        self,
        segments: Sequence[Sequence[PitchEvent]],
        strike_percentages: Sequence[int],
    ) -> List[int]:
        """One location consistency value (0-100) per segment."""


class HeuristicProxyModel(ProxyTrendModel):
    """Synthetic proxies: a baseline that decays per segment and drops
    further when strike percentage falls from the previous segment.

    These values carry no ground truth.
    """

    name = "heuristic"

    def __init__(self, config: Optional[ProxyConfig] = None):
        self.config = config or DEFAULT_CONFIG.proxy

    def velocity_series(self, segments, strike_percentages):
        cfg = self.config
        series = []
        for i in range(len(strike_percentages)):
            delta = _delta(strike_percentages, i)
            impact = 0.0
            if delta < -cfg.velocity_strike_drop_trigger:
                impact = abs(delta) / cfg.velocity_strike_drop_divisor
            value = cfg.velocity_baseline - i * cfg.velocity_decline_per_segment - impact
            series.append(max(round_half_up(cfg.velocity_floor), round_half_up(value)))
        return series

    def consistency_series(self, segments, strike_percentages):
        cfg = self.config
        series = []
        for i in range(len(strike_percentages)):
            delta = _delta(strike_percentages, i)
            impact = abs(delta) if delta < 0 else 0
            value = cfg.consistency_baseline - i * cfg.consistency_decline_per_segment - impact
            series.append(max(round_half_up(cfg.consistency_floor), round_half_up(value)))
        return series


def _delta(values: Sequence[int], i: int) -> int:
    return values[i] - values[i - 1] if i > 0 else 0


def split_segments(
    events: Sequence[PitchEvent],
    segment_size: int,
) -> List[List[PitchEvent]]:
    """Consecutive windows of segment_size events; the last may be short."""
    if segment_size < 1:
        raise ValueError(f"segment_size must be positive, got {segment_size}")
    return [list(events[i:i + segment_size]) for i in range(0, len(events), segment_size)]


def analyze_trends(
    events: Sequence[PitchEvent],
    segment_size: int = DEFAULT_CONFIG.segmentation.segment_size,
    proxy_model: Optional[ProxyTrendModel] = None,
) -> TrendAnalysis:
    """Sort events chronologically and compute per-segment trend values.

    Args:
        events: Pitch events for one pitcher (usually one game)
        segment_size: Pitches per segment
        proxy_model: Source of the velocity/consistency series

    Returns:
        TrendAnalysis with one TrendSegment per window
    """
    model = proxy_model or HeuristicProxyModel()
    ordered = chronological(events)
    windows = split_segments(ordered, segment_size)

    strike_pcts = [strike_percentage(window) for window in windows]
    velocity = model.velocity_series(windows, strike_pcts)
    consistency = model.consistency_series(windows, strike_pcts)

    segments = []
    for i, window in enumerate(windows):
        dominant = partition(window, "pitch_type").dominant()
        segments.append(TrendSegment(
            index=i,
            start=i * segment_size,
            size=len(window),
            strike_percentage=strike_pcts[i],
            dominant_pitch_type=dominant[0] if dominant else None,
            dominant_share=dominant[1] if dominant else 0,
            velocity_proxy=velocity[i],
            consistency_proxy=consistency[i],
        ))

    slope, _ = linear_regression(
        [float(i) for i in range(len(strike_pcts))],
        [float(p) for p in strike_pcts],
    )

    logger.debug(f"Split {len(ordered)} pitches into {len(segments)} segments: strike % {strike_pcts}")

    return TrendAnalysis(
        segments=segments,
        segment_size=segment_size,
        proxy_model=model.name,
        strike_percentage_slope=round(slope, 2),
    )


__all__ = [
    "HeuristicProxyModel",
    "ProxyTrendModel",
    "analyze_trends",
    "split_segments",
]

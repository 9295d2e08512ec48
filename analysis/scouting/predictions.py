"""Confidence-gated pitch type predictions for tracked game situations."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from configs.settings import SampleSizeConfig
from contracts import PitchEvent
from log_config.logger import get_logger

from analysis.scouting.aggregation import Partition, partition
from analysis.scouting.schemas import Prediction

logger = get_logger(__name__)

# Situation name -> event filter. Order is the order predictions are reported.
SITUATIONS: Tuple[Tuple[str, Callable[[PitchEvent], bool]], ...] = (
    ("first_pitch", lambda e: e.parsed_count == (0, 0)),
    ("three_ball", lambda e: e.balls == 3),
    ("two_strike", lambda e: e.strikes == 2),
    ("two_outs", lambda e: e.valid_outs == 2),
    ("vs_left", lambda e: e.valid_batter_side == "L"),
    ("vs_right", lambda e: e.valid_batter_side == "R"),
)


def situation_partitions(events: Sequence[PitchEvent]) -> Dict[str, Partition]:
    """Pitch type partition for every tracked situation."""
    return {
        name: partition(events, "pitch_type", where=matches)
        for name, matches in SITUATIONS
    }


def minimum_sample(situation: str, samples: SampleSizeConfig) -> int:
    return getattr(samples, situation)


def predict(
    situation: str,
    part: Partition,
    samples: SampleSizeConfig,
) -> Optional[Prediction]:
    """Dominant pitch type for a situation, or None below the sample minimum.

    Ties between equally frequent pitch types go to the one thrown first in
    the situation. Confidence is that pitch type's percentage share.
    """
    required = minimum_sample(situation, samples)
    if part.sample_size < required:
        logger.debug(
            f"Suppressed {situation} prediction: {part.sample_size} pitches, need {required}"
        )
        return None

    dominant = part.dominant()
    if dominant is None:
        return None

    pitch_type, share = dominant
    return Prediction(
        situation=situation,
        pitch_type=pitch_type,
        confidence=share,
        sample_size=part.sample_size,
    )


def build_predictions(
    partitions: Dict[str, Partition],
    samples: SampleSizeConfig,
) -> Dict[str, Prediction]:
    """Predictions for every situation that meets its sample minimum."""
    predictions = {}
    for name, _ in SITUATIONS:
        part = partitions.get(name)
        if part is None:
            continue
        prediction = predict(name, part, samples)
        if prediction is not None:
            predictions[name] = prediction
    return predictions


def situation_names() -> List[str]:
    return [name for name, _ in SITUATIONS]


__all__ = [
    "SITUATIONS",
    "build_predictions",
    "minimum_sample",
    "predict",
    "situation_names",
    "situation_partitions",
]

"""Threshold configuration for the scouting analytics."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from configs.validator import validate_config
from exceptions import ConfigError, ConfigValidationError, InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")


@dataclass(frozen=True)
class SampleSizeConfig:
    first_pitch: int = 3
    three_ball: int = 2
    two_strike: int = 3
    two_outs: int = 3
    vs_left: int = 3
    vs_right: int = 3
    # Quality tier: low below the first cutoff, medium below the second
    quality_low_below: int = 10
    quality_medium_below: int = 20


@dataclass(frozen=True)
class SegmentationConfig:
    segment_size: int = 15
    recent_window: int = 10
    min_fatigue_events: int = 10


@dataclass(frozen=True)
class ProxyConfig:
    """Constants of the heuristic velocity/consistency proxy series."""

    velocity_baseline: float = 65.0
    velocity_decline_per_segment: float = 0.5
    velocity_strike_drop_trigger: float = 5.0
    velocity_strike_drop_divisor: float = 10.0
    velocity_floor: float = 40.0
    consistency_baseline: float = 80.0
    consistency_decline_per_segment: float = 2.0
    consistency_floor: float = 40.0


@dataclass(frozen=True)
class FatigueRuleConfig:
    high_threshold: float
    medium_threshold: float
    high_points: int = 3
    medium_points: int = 2


@dataclass(frozen=True)
class FatigueConfig:
    strike_drop: FatigueRuleConfig = field(default_factory=lambda: FatigueRuleConfig(10, 5))
    velocity_drop: FatigueRuleConfig = field(default_factory=lambda: FatigueRuleConfig(3, 2))
    consistency_drop: FatigueRuleConfig = field(default_factory=lambda: FatigueRuleConfig(20, 10))
    pitch_type_change_points: int = 2
    dominant_share_drop: int = 15
    dominant_share_drop_points: int = 1
    # Recent control: below high_threshold scores high_points, etc.
    recent_strike: FatigueRuleConfig = field(default_factory=lambda: FatigueRuleConfig(50, 60))
    warning_high_at: int = 8
    warning_medium_at: int = 5
    warning_low_at: int = 3


@dataclass(frozen=True)
class AdvisoryConfig:
    heavy_favor_above: int = 75
    expect_adjust_above: int = 60
    first_pitch_aggressive_above: int = 65
    key_count_share_above: int = 65
    key_count_min_sample: int = 1
    key_counts: Tuple[str, ...] = ("1-0", "2-0", "3-1", "0-1", "0-2")
    high_pitch_count_above: int = 70
    medium_pitch_count_above: int = 50
    control_warning_below: int = 50
    control_watch_below: int = 60
    strength_strike_above: int = 65
    weakness_strike_below: int = 55
    predictability_share_above: int = 70
    adjustment_min_change: int = 15
    deep_outfield_fastball_above: int = 60


@dataclass(frozen=True)
class WorkloadConfig:
    pitch_limit: int = 95
    pitches_per_batter: float = 3.8
    first_time_through_pitches: int = 25
    caution_at: int = 60
    limit_at: int = 80


@dataclass(frozen=True)
class ScoutingConfig:
    samples: SampleSizeConfig = field(default_factory=SampleSizeConfig)
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    fatigue: FatigueConfig = field(default_factory=FatigueConfig)
    advisory: AdvisoryConfig = field(default_factory=AdvisoryConfig)
    workload: WorkloadConfig = field(default_factory=WorkloadConfig)


DEFAULT_CONFIG = ScoutingConfig()

# (section, lower, upper): thresholds of one tier ladder, lower must not exceed upper
_ORDERED_THRESHOLDS = (
    ("samples", "quality_low_below", "quality_medium_below"),
    ("fatigue", "warning_low_at", "warning_medium_at"),
    ("fatigue", "warning_medium_at", "warning_high_at"),
    ("fatigue.strike_drop", "medium_threshold", "high_threshold"),
    ("fatigue.velocity_drop", "medium_threshold", "high_threshold"),
    ("fatigue.consistency_drop", "medium_threshold", "high_threshold"),
    ("fatigue.recent_strike", "high_threshold", "medium_threshold"),
    ("advisory", "expect_adjust_above", "heavy_favor_above"),
    ("advisory", "medium_pitch_count_above", "high_pitch_count_above"),
    ("advisory", "control_warning_below", "control_watch_below"),
    ("workload", "caution_at", "limit_at"),
)


def _overlay(base: Any, overrides: Dict[str, Any]) -> Any:
    """Return a copy of a config dataclass with overrides applied recursively."""
    changes = {}
    for f in fields(base):
        if f.name not in overrides:
            continue
        current = getattr(base, f.name)
        value = overrides[f.name]
        if is_dataclass(current):
            changes[f.name] = _overlay(current, value)
        elif isinstance(current, tuple):
            changes[f.name] = tuple(value)
        else:
            changes[f.name] = value
    return replace(base, **changes)


def config_from_dict(data: Dict[str, Any]) -> ScoutingConfig:
    """Validate a config mapping and overlay it onto the defaults.

    Raises:
        ConfigError: If the mapping fails validation
    """
    validate_config(data)
    try:
        config = _overlay(DEFAULT_CONFIG, data)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    check_threshold_order(config)
    return config


def check_threshold_order(config: ScoutingConfig) -> None:
    """Reject tier thresholds that are out of order after overrides.

    Raises:
        ConfigValidationError: Listing every out-of-order pair
    """
    errors = []
    for section, lower, upper in _ORDERED_THRESHOLDS:
        target: Any = config
        for name in section.split("."):
            target = getattr(target, name)
        low, high = getattr(target, lower), getattr(target, upper)
        if low > high:
            path = section.replace(".", " -> ")
            errors.append(f"{path}: {lower} ({low}) must not exceed {upper} ({high})")

    if errors:
        logger.error(f"Configuration has {len(errors)} out-of-order thresholds")
        for msg in errors:
            logger.error(f"  - {msg}")
        raise ConfigValidationError(
            f"Configuration has {len(errors)} out-of-order threshold(s). See logs for details.",
            validation_errors=errors,
        )


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ScoutingConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated ScoutingConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    path = Path(path)
    logger.info(f"Loading configuration from {path}")
    if not path.exists():
        raise InvalidConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    if data is None:
        logger.warning(f"Configuration file {path} is empty, using defaults")
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise InvalidConfigError(f"Configuration root must be a mapping: {path}")

    config = config_from_dict(data)
    logger.info(
        f"Configuration loaded: segment size {config.segmentation.segment_size}, "
        f"pitch limit {config.workload.pitch_limit}"
    )
    return config


__all__ = [
    "AdvisoryConfig",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "FatigueConfig",
    "FatigueRuleConfig",
    "ProxyConfig",
    "SampleSizeConfig",
    "ScoutingConfig",
    "SegmentationConfig",
    "WorkloadConfig",
    "check_threshold_order",
    "config_from_dict",
    "load_config",
]

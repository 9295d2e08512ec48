"""Configuration validation using JSON Schema."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import jsonschema
import yaml
from jsonschema import Draft7Validator

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

_COUNT_PATTERN = "^[0-3]-[0-2]$"


def _section(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "object", "additionalProperties": False, "properties": properties}


def _int(minimum: int = 0, maximum: int = 1000) -> Dict[str, Any]:
    return {"type": "integer", "minimum": minimum, "maximum": maximum}


def _num(minimum: float = 0, maximum: float = 1000) -> Dict[str, Any]:
    return {"type": "number", "minimum": minimum, "maximum": maximum}


def _pct() -> Dict[str, Any]:
    return _int(0, 100)


_FATIGUE_RULE = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "high_threshold": _num(),
        "medium_threshold": _num(),
        "high_points": _int(0, 20),
        "medium_points": _int(0, 20),
    },
}

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "samples": _section({
            "first_pitch": _int(1, 100),
            "three_ball": _int(1, 100),
            "two_strike": _int(1, 100),
            "two_outs": _int(1, 100),
            "vs_left": _int(1, 100),
            "vs_right": _int(1, 100),
            "quality_low_below": _int(1, 1000),
            "quality_medium_below": _int(1, 1000),
        }),
        "segmentation": _section({
            "segment_size": _int(2, 200),
            "recent_window": _int(1, 200),
            "min_fatigue_events": _int(1, 1000),
        }),
        "proxy": _section({
            "velocity_baseline": _num(1, 120),
            "velocity_decline_per_segment": _num(0, 20),
            "velocity_strike_drop_trigger": _num(0, 100),
            "velocity_strike_drop_divisor": _num(0.1, 100),
            "velocity_floor": _num(0, 120),
            "consistency_baseline": _num(1, 100),
            "consistency_decline_per_segment": _num(0, 50),
            "consistency_floor": _num(0, 100),
        }),
        "fatigue": _section({
            "strike_drop": _FATIGUE_RULE,
            "velocity_drop": _FATIGUE_RULE,
            "consistency_drop": _FATIGUE_RULE,
            "pitch_type_change_points": _int(0, 20),
            "dominant_share_drop": _pct(),
            "dominant_share_drop_points": _int(0, 20),
            "recent_strike": _FATIGUE_RULE,
            "warning_high_at": _int(1, 100),
            "warning_medium_at": _int(1, 100),
            "warning_low_at": _int(1, 100),
        }),
        "advisory": _section({
            "heavy_favor_above": _pct(),
            "expect_adjust_above": _pct(),
            "first_pitch_aggressive_above": _pct(),
            "key_count_share_above": _pct(),
            "key_count_min_sample": _int(1, 100),
            "key_counts": {
                "type": "array",
                "items": {"type": "string", "pattern": _COUNT_PATTERN},
                "uniqueItems": True,
            },
            "high_pitch_count_above": _int(1, 300),
            "medium_pitch_count_above": _int(1, 300),
            "control_warning_below": _pct(),
            "control_watch_below": _pct(),
            "strength_strike_above": _pct(),
            "weakness_strike_below": _pct(),
            "predictability_share_above": _pct(),
            "adjustment_min_change": _pct(),
            "deep_outfield_fastball_above": _pct(),
        }),
        "workload": _section({
            "pitch_limit": _int(1, 300),
            "pitches_per_batter": _num(1, 20),
            "first_time_through_pitches": _int(1, 300),
            "caution_at": _int(1, 300),
            "limit_at": _int(1, 300),
        }),
    },
}


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema.

    Args:
        config: Configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        validator = Draft7Validator(CONFIG_SCHEMA)
        errors = sorted(validator.iter_errors(config), key=lambda e: [str(p) for p in e.path])

        if errors:
            error_messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")

            logger.error(f"Configuration validation failed with {len(errors)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.debug("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")


def validate_config_file(config_path: str) -> None:
    """Validate a YAML configuration file.

    Args:
        config_path: Path to configuration file

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigValidationError(f"Configuration file not found: {config_path}")

    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML: {e}")
        raise ConfigValidationError(f"Failed to parse configuration file: {e}")

    validate_config(config or {})


__all__ = ["validate_config", "validate_config_file", "CONFIG_SCHEMA"]

from pathlib import Path

import pytest

from configs.settings import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, config_from_dict, load_config
from exceptions import ConfigValidationError, InvalidConfigError


def test_load_config() -> None:
    config = load_config(DEFAULT_CONFIG_PATH)

    assert config == DEFAULT_CONFIG
    assert config.samples.first_pitch == 3
    assert config.fatigue.strike_drop.high_threshold == 10
    assert config.advisory.key_counts == ("1-0", "2-0", "3-1", "0-1", "0-2")
    assert config.workload.pitch_limit == 95


def test_partial_override_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "segmentation:\n"
        "  segment_size: 10\n"
        "fatigue:\n"
        "  recent_strike: {high_threshold: 40}\n"
    )

    config = load_config(path)

    assert config.segmentation.segment_size == 10
    assert config.segmentation.recent_window == 10
    assert config.fatigue.recent_strike.high_threshold == 40
    assert config.fatigue.recent_strike.medium_threshold == 60
    assert config.advisory == DEFAULT_CONFIG.advisory


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config(path) == DEFAULT_CONFIG


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path / "missing.yaml")


def test_bad_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("samples: [unclosed\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_config_from_dict_validates() -> None:
    with pytest.raises(ConfigValidationError):
        config_from_dict({"workload": {"pitch_limit": "ninety"}})


@pytest.mark.parametrize("data", [
    {"fatigue": {"warning_low_at": 6}},
    {"samples": {"quality_low_below": 25}},
    {"workload": {"caution_at": 90}},
    {"fatigue": {"recent_strike": {"high_threshold": 70}}},
])
def test_out_of_order_thresholds_rejected(data) -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        config_from_dict(data)

    assert len(exc_info.value.validation_errors) == 1


def test_every_out_of_order_pair_reported() -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        config_from_dict({
            "samples": {"quality_low_below": 25},
            "fatigue": {"warning_low_at": 9},
            "workload": {"caution_at": 85, "limit_at": 70},
        })

    errors = exc_info.value.validation_errors
    assert len(errors) == 3
    assert "workload: caution_at (85) must not exceed limit_at (70)" in errors


def test_equal_thresholds_accepted() -> None:
    config = config_from_dict({"workload": {"caution_at": 80}})

    assert config.workload.caution_at == config.workload.limit_at == 80

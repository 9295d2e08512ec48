"""Unit tests for configuration schema validation."""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from configs.validator import validate_config, validate_config_file
from exceptions import ConfigValidationError

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


class TestConfigValidator(unittest.TestCase):
    """Test configuration validator."""

    def test_empty_config_passes(self):
        """Test that an empty mapping is valid (all keys optional)."""
        validate_config({})

    def test_default_file_passes(self):
        """Test that the shipped default.yaml validates."""
        validate_config_file(str(DEFAULT_CONFIG))

    def test_unknown_section_rejected(self):
        """Test that unknown top-level sections are caught."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"camera": {"width": 1920}})

        self.assertTrue(any("camera" in e for e in ctx.exception.validation_errors))

    def test_unknown_key_rejected(self):
        """Test that typos inside a section are caught."""
        with self.assertRaises(ConfigValidationError):
            validate_config({"samples": {"first_pitches": 3}})

    def test_out_of_range_value(self):
        """Test that percentages above 100 are caught."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"advisory": {"heavy_favor_above": 120}})

        self.assertEqual(len(ctx.exception.validation_errors), 1)
        self.assertIn("advisory -> heavy_favor_above", ctx.exception.validation_errors[0])

    def test_invalid_key_count(self):
        """Test that key counts must be balls-strikes strings."""
        with self.assertRaises(ConfigValidationError):
            validate_config({"advisory": {"key_counts": ["1-0", "4-0"]}})

    def test_multiple_errors_collected(self):
        """Test that every violation is reported."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({
                "samples": {"first_pitch": 0},
                "workload": {"pitch_limit": -5},
            })

        self.assertEqual(len(ctx.exception.validation_errors), 2)

    def test_missing_file(self):
        """Test that a missing file is reported as a validation error."""
        with TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigValidationError):
                validate_config_file(str(Path(tmp) / "missing.yaml"))


if __name__ == "__main__":
    unittest.main()

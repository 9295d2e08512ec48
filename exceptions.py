"""Custom exception classes for PitchScout."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PitchScoutError(Exception):
    """Base exception for all PitchScout errors."""

    pass


class ConfigError(PitchScoutError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)


class EventStoreError(PitchScoutError):
    """Base exception for pitch event source errors."""

    pass


class EventLoadError(EventStoreError):
    """Raised when a pitch event file cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = path
        super().__init__(message)

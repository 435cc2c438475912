"""
Application-level exceptions.

Domain errors raised by the evaluator and the calibration store, with the
offending value, path or source attached for logging and CLI exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class InvasionFactorError(Exception):
    """Base class for all engine errors."""


class ValidationError(InvasionFactorError, ValueError):
    """Raised when a time request is not an integer in the accepted range."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class CalibrationLoadError(InvasionFactorError):
    """Raised when the calibration artifact is missing or malformed."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class SourceError(InvasionFactorError):
    """Raised when a required external source (parameters, explainability) fails."""

    def __init__(self, message: str, source: str):
        super().__init__(message)
        self.source = source

"""
Application settings.

Typed view over the environment (see config.env) for use across the
calibration store, the evaluator, batch runs and the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from invasion_factor.config.env import (
    get_batch_concurrency,
    get_calibration_path,
    load_invasion_env,
)


@dataclass(frozen=True)
class Settings:
    """
    Resolved settings.

    calibration_path: Calibration artifact loaded once at startup; None disables calibration.
    batch_concurrency: Number of samples evaluated in parallel by run_batch.
    log_level: Level name for structured logs.
    log_format: "json" or "console".
    """

    calibration_path: Path | None
    batch_concurrency: int
    log_level: str = "INFO"
    log_format: str = "json"


def get_settings() -> Settings:
    """
    Return the current application settings.

    Re-reads the environment on every call so tests and batch drivers can
    change variables between runs.
    """
    load_invasion_env()
    return Settings(
        calibration_path=get_calibration_path(),
        batch_concurrency=get_batch_concurrency(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_format=(os.getenv("LOG_FORMAT") or "json").strip().lower(),
    )

"""
Environment variable loading for Invasion Factor.

- INVASION_CALIBRATION_PATH: calibration artifact (JSON); unset means no calibration (pass-through)
- INVASION_BATCH_CONCURRENCY: parallel samples in batch runs (default: 4)
- LOG_LEVEL / LOG_FORMAT: read by invasion_logging at import
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is invasion_factor/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

# Format reference only; never loaded unless configured explicitly
EXAMPLE_CALIBRATION_PATH = _PACKAGE_DIR / "calibration" / "data" / "calibration_model.example.json"
DEFAULT_BATCH_CONCURRENCY = 4


def load_invasion_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH)


def get_calibration_path() -> Path | None:
    """Return INVASION_CALIBRATION_PATH, or None when no artifact is configured."""
    load_invasion_env()
    raw = (os.getenv("INVASION_CALIBRATION_PATH") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return None


def get_batch_concurrency() -> int:
    """Return INVASION_BATCH_CONCURRENCY (>= 1); unparseable values use the default."""
    load_invasion_env()
    raw = (os.getenv("INVASION_BATCH_CONCURRENCY") or "").strip()
    if not raw:
        return DEFAULT_BATCH_CONCURRENCY
    try:
        return max(1, int(raw))
    except ValueError:
        return DEFAULT_BATCH_CONCURRENCY

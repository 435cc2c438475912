"""
Pytest fixtures for Invasion Factor tests. Calibration artifacts are written to tmp_path.
"""

from __future__ import annotations

import json

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset engine env vars so settings use defaults unless a test sets them."""
    for name in ("INVASION_CALIBRATION_PATH", "INVASION_BATCH_CONCURRENCY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def calibration_doc():
    """Small artifact: grid [0, 24, 48], zero IQR at 48."""
    return {
        "version": "test-1",
        "params": [0.1, 1.0, 2.0, 0.5],
        "med_A": [1.0, 2.0, 3.0],
        "iqr_A": [0.5, 1.0, 0.0],
        "time_grid": [0, 24, 48],
        "delta": [
            [0.0, 0.0, 0.0],
            [-0.1, -0.2, -0.3],
            [0.1, 0.2, 0.3],
        ],
    }


@pytest.fixture
def calibration_path(tmp_path, calibration_doc):
    """calibration_doc written as JSON."""
    path = tmp_path / "calibration_model.json"
    path.write_text(json.dumps(calibration_doc), encoding="utf-8")
    return path


@pytest.fixture
def calibration_model(calibration_path):
    from invasion_factor.calibration.store import load_calibration_model

    return load_calibration_model(calibration_path)


@pytest.fixture
def empty_model():
    from invasion_factor.calibration.store import CalibrationModel

    return CalibrationModel.empty()


@pytest.fixture
def sample_parameters():
    """Measured [10, 20, 5, 2] under free-form names."""
    return {
        "Cell Radius": 10.0,
        "total area": 20.0,
        "Invasion Radius": 5.0,
        "projections": 2.0,
        "circularity": 0.8,
    }


@pytest.fixture
def sample_explainability():
    """Weights [0.5, -0.2, 0.1, 0.05] for time 24."""
    return {
        24: {
            "spheroid_radius": 0.5,
            "total_area": -0.2,
            "migration_radius": 0.1,
            "projection_count": 0.05,
            "radius-Feature_1": 0.3,
        }
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """Point structlog back at the current stderr after tests that reconfigure it."""
    yield
    from invasion_factor.invasion_logging import configure_logging

    configure_logging()

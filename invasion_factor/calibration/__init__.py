"""
Calibration package — immutable sigmoid calibration model and the calibrator.

calibration/data/calibration_model.example.json shows the artifact format; it holds
illustrative numbers and is never loaded by default.
"""

from invasion_factor.calibration.calibrator import calibrate, select_grid_time
from invasion_factor.calibration.store import (
    CalibrationEntry,
    CalibrationModel,
    build_calibration_model,
    load_calibration_model,
    load_calibration_model_or_empty,
)

__all__ = [
    "calibrate",
    "select_grid_time",
    "CalibrationEntry",
    "CalibrationModel",
    "build_calibration_model",
    "load_calibration_model",
    "load_calibration_model_or_empty",
]

"""
Sigmoid calibration of raw invasion factors.

The raw score is standardized against the reference median and IQR of the
nearest grid time, then mapped through the group's sigmoid:

    z = (raw - median) / iqr
    calibrated = b0' + b1 / (1 + exp(clip(-k * (z - x0), -700, 700)))

No entry for the (group, grid time), or a zero IQR, returns raw unchanged.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from invasion_factor.calibration.store import CalibrationModel
from invasion_factor.scoring.models import TrendGroup

# exp(710) overflows float64
EXP_ARG_LIMIT = 700.0


def select_grid_time(grid: Sequence[int], time: int) -> int | None:
    """Nearest grid time to time; ties go to the first (smallest) grid value. None for an empty grid."""
    best: int | None = None
    best_distance = 0
    for grid_time in grid:
        distance = abs(grid_time - time)
        if best is None or distance < best_distance:
            best, best_distance = grid_time, distance
    return best


def sigmoid_argument(z: float, k: float, x0: float) -> float:
    """Return -k * (z - x0) clamped to [-EXP_ARG_LIMIT, EXP_ARG_LIMIT]."""
    arg = -k * (z - x0)
    return float(np.clip(arg, -EXP_ARG_LIMIT, EXP_ARG_LIMIT))


def calibrate(model: CalibrationModel, raw: float, time: int, group: TrendGroup) -> float:
    """
    Calibrate raw against the model entry for group at the grid time nearest to time.

    Pass-through (returns raw) when the model has no entry or the entry's IQR is zero.
    """
    grid_time = select_grid_time(model.time_grid, time)
    if grid_time is None:
        return float(raw)
    entry = model.entry(group, grid_time)
    if entry is None or entry.iqr == 0:
        return float(raw)

    z = (raw - entry.median) / entry.iqr
    arg = sigmoid_argument(z, entry.k, entry.x0)
    return float(entry.b0 + entry.b1 / (1.0 + np.exp(arg)))

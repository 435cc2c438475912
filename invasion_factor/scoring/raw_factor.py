"""
Raw invasion factor.

Weighted-norm score over the measured parameters. Each parameter's weight is
normalized by the largest absolute weight and squared into an amplitude; the
score is the signed amplitude-weighted sum of measurements divided by the
norm of (measurements, amplitudes):

    raw = sum(sign_i * amp_i * m_i) / sqrt(sum(m_i^2 + amp_i^2))

The interaction matrix and feature vector are accepted so callers can pass
everything they ingested, but the current formula does not use them.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

MIN_MAX_ABS = 1e-3
MIN_NORM = 1e-3
MIN_DENOMINATOR = 1e-9


def compute_raw(
    weights: Sequence[float],
    measured: Sequence[float],
    interactions: np.ndarray | None = None,
    features: Sequence[float] | None = None,
    time: int | None = None,
) -> float:
    """
    Compute the raw invasion factor for one sample at one time point.

    Args:
        weights: Signed attribution weights, same ordering as measured.
        measured: Measured parameter values.
        interactions: Interaction matrix (not used by the formula).
        features: Deep-feature values (not used by the formula).
        time: Queried time point (not used by the formula).

    Returns:
        Raw score as a float. Pure function of its inputs.

    Raises:
        ValueError: weights and measured differ in length.
    """
    w = np.asarray(weights, dtype=np.float64)
    m = np.asarray(measured, dtype=np.float64)
    if w.shape != m.shape:
        raise ValueError(f"weights and measured differ in length: {w.size} != {m.size}")

    abs_w = np.abs(w)
    if w.size == 0 or not abs_w.any():
        max_abs = 1.0
    else:
        max_abs = max(float(abs_w.max()), MIN_MAX_ABS)

    norm = np.maximum(abs_w / max_abs, MIN_NORM)
    amp = 2.0 * norm**2
    sign = np.where(w >= 0, 1.0, -1.0)

    numerator = float(np.sum(sign * amp * m))
    denominator = max(float(np.sum(m**2 + amp**2)), MIN_DENOMINATOR)
    return numerator / float(np.sqrt(denominator))

"""
Calibration model store.

The calibration model is an immutable artifact produced offline: base sigmoid
parameters (b0, b1, k, x0), a time grid, per-grid-time reference median and
inter-quartile spread of raw scores, and one b0 offset row per trend group.

load_calibration_model() parses and validates the JSON artifact, expanding it
into one CalibrationEntry per (group, grid time) where only b0 is shifted.
Build the model once at startup and pass it to every evaluator; nothing
mutates it afterwards.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from invasion_factor.core.exceptions import CalibrationLoadError
from invasion_factor.invasion_logging import get_logger
from invasion_factor.scoring.models import TrendGroup

logger = get_logger(__name__)

# Delta rows in the artifact, in order
GROUP_ORDER: tuple[TrendGroup, ...] = (
    TrendGroup.BASELINE,
    TrendGroup.DECLINING,
    TrendGroup.RISING,
)
DELTA_KEYS = ("delta", "Δ")


@dataclass(frozen=True)
class CalibrationEntry:
    """Sigmoid parameters and reference statistics for one (group, grid time)."""

    b0: float
    b1: float
    k: float
    x0: float
    median: float
    iqr: float


@dataclass(frozen=True)
class CalibrationModel:
    """
    Immutable calibration table.

    base_params: (b0, b1, k, x0) before group shifts.
    time_grid: Ascending grid times.
    entries: (group, grid_time) -> CalibrationEntry, read-only.
    version: Artifact version string.
    source: Path the artifact was read from, if any.
    """

    base_params: tuple[float, ...] = ()
    time_grid: tuple[int, ...] = ()
    entries: Mapping[tuple[TrendGroup, int], CalibrationEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: str = "empty"
    source: str | None = None

    @classmethod
    def empty(cls) -> CalibrationModel:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def entry(self, group: TrendGroup, grid_time: int) -> CalibrationEntry | None:
        return self.entries.get((group, grid_time))


def _real_list(doc: dict[str, Any], key: str, path: Path) -> list[float]:
    raw = doc.get(key)
    if not isinstance(raw, list) or not raw:
        raise CalibrationLoadError(f"'{key}' must be a non-empty list", path)
    values: list[float] = []
    for v in raw:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise CalibrationLoadError(f"'{key}' contains a non-numeric value: {v!r}", path)
        values.append(float(v))
    return values


def _time_grid(doc: dict[str, Any], path: Path) -> list[int]:
    raw = doc.get("time_grid")
    if not isinstance(raw, list) or not raw:
        raise CalibrationLoadError("'time_grid' must be a non-empty list", path)
    grid: list[int] = []
    for v in raw:
        if isinstance(v, bool) or not isinstance(v, int):
            raise CalibrationLoadError(f"'time_grid' contains a non-integer: {v!r}", path)
        grid.append(v)
    if any(b <= a for a, b in zip(grid, grid[1:])):
        raise CalibrationLoadError("'time_grid' must be strictly ascending", path)
    return grid


def build_calibration_model(
    doc: dict[str, Any],
    path: str | Path | None = None,
) -> CalibrationModel:
    """
    Validate a parsed artifact and expand it into a CalibrationModel.

    Raises:
        CalibrationLoadError: Missing fields, wrong types or mismatched lengths.
    """
    src = Path(path) if path is not None else Path("<memory>")
    if not isinstance(doc, dict):
        raise CalibrationLoadError("calibration artifact must be a JSON object", src)

    params = _real_list(doc, "params", src)
    if len(params) != 4:
        raise CalibrationLoadError(f"'params' must hold 4 values (b0, b1, k, x0), got {len(params)}", src)
    medians = _real_list(doc, "med_A", src)
    iqrs = _real_list(doc, "iqr_A", src)
    grid = _time_grid(doc, src)
    if not len(medians) == len(iqrs) == len(grid):
        raise CalibrationLoadError(
            f"'med_A', 'iqr_A' and 'time_grid' lengths differ: {len(medians)}, {len(iqrs)}, {len(grid)}",
            src,
        )

    delta_key = next((k for k in DELTA_KEYS if k in doc), None)
    rows = doc.get(delta_key) if delta_key else None
    if not isinstance(rows, list) or len(rows) != len(GROUP_ORDER):
        raise CalibrationLoadError(f"'delta' must hold {len(GROUP_ORDER)} rows (A, D, E)", src)
    deltas = [_real_list({"delta": row}, "delta", src) for row in rows]
    if any(len(row) != len(grid) for row in deltas):
        raise CalibrationLoadError("each 'delta' row must match the 'time_grid' length", src)

    b0, b1, k, x0 = params
    entries: dict[tuple[TrendGroup, int], CalibrationEntry] = {}
    for group, row in zip(GROUP_ORDER, deltas):
        for t, grid_time in enumerate(grid):
            entries[(group, grid_time)] = CalibrationEntry(
                b0=b0 + row[t],
                b1=b1,
                k=k,
                x0=x0,
                median=medians[t],
                iqr=iqrs[t],
            )

    return CalibrationModel(
        base_params=(b0, b1, k, x0),
        time_grid=tuple(grid),
        entries=MappingProxyType(entries),
        version=str(doc.get("version") or "unversioned"),
        source=str(path) if path is not None else None,
    )


def load_calibration_model(path: str | Path) -> CalibrationModel:
    """
    Read and build the calibration model from a JSON artifact.

    Raises:
        CalibrationLoadError: File missing, unreadable, not JSON, or malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise CalibrationLoadError(f"calibration artifact not found: {path}", path)
    try:
        with open(path, encoding="utf-8") as f:
            doc = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CalibrationLoadError(f"calibration artifact unreadable: {e}", path) from e

    model = build_calibration_model(doc, path)
    logger.info(
        "calibration_model_loaded",
        path=str(path),
        version=model.version,
        grid_points=len(model.time_grid),
        entries=len(model.entries),
    )
    return model


def load_calibration_model_or_empty(path: str | Path | None) -> CalibrationModel:
    """
    Load the model; on CalibrationLoadError log once and return the empty model.

    path None means no artifact is configured: the empty model is returned.
    With the empty model every calibration is a pass-through of the raw score.
    """
    if path is None:
        logger.warning("calibration_not_configured")
        return CalibrationModel.empty()
    try:
        return load_calibration_model(path)
    except CalibrationLoadError as e:
        logger.error("calibration_load_failed", path=e.path, error=str(e))
        return CalibrationModel.empty()

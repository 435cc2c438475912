"""
Data models shared by scoring, calibration and the evaluator.

Canonical morphological parameters, trend groups and the terminal result record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CanonicalParameter(str, Enum):
    """Fixed vocabulary of morphological parameters used throughout scoring."""

    SPHEROID_RADIUS = "spheroid_radius"
    TOTAL_AREA = "total_area"
    MIGRATION_RADIUS = "migration_radius"
    MIGRATION_DISTRIBUTION = "migration_distribution"
    PROJECTION_COUNT = "projection_count"
    CIRCULARITY = "circularity"


class TrendGroup(str, Enum):
    """
    Coarse trend of a sample's raw invasion factor.

    Values are the group codes used by the calibration artifact; the artifact's
    delta rows follow the declaration order here.
    """

    BASELINE = "A"
    DECLINING = "D"
    RISING = "E"

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Parameter ordering of weight and measured vectors
WEIGHTED_PARAMETERS: tuple[CanonicalParameter, ...] = (
    CanonicalParameter.SPHEROID_RADIUS,
    CanonicalParameter.TOTAL_AREA,
    CanonicalParameter.MIGRATION_RADIUS,
    CanonicalParameter.PROJECTION_COUNT,
)


@dataclass(frozen=True)
class ResultRecord:
    """
    Result of one evaluation, handed to an external results sink.

    raw_if: Raw invasion factor from the weighted-norm formula.
    calibrated_if: Raw factor after sigmoid calibration (equals raw_if on pass-through).
    trend: Trend group derived from the sample's history after appending raw_if.
    """

    sample_id: str
    time: int
    raw_if: float
    calibrated_if: float
    trend: TrendGroup

    def to_dict(self) -> dict[str, Any]:
        return {
            "sample_id": self.sample_id,
            "time": self.time,
            "raw_if": self.raw_if,
            "calibrated_if": self.calibrated_if,
            "trend": self.trend.label,
        }

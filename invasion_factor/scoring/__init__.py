"""
Scoring package — parameter normalization, explainability ingestion,
raw invasion factor and trend classification.

All functions here are pure apart from InvasionHistory.append.
"""

from invasion_factor.scoring.explainability import (
    IngestedExplainability,
    ingest_explainability,
)
from invasion_factor.scoring.models import (
    WEIGHTED_PARAMETERS,
    CanonicalParameter,
    ResultRecord,
    TrendGroup,
)
from invasion_factor.scoring.parameters import measured_vector, normalize
from invasion_factor.scoring.raw_factor import compute_raw
from invasion_factor.scoring.trend import InvasionHistory, classify

__all__ = [
    "IngestedExplainability",
    "ingest_explainability",
    "WEIGHTED_PARAMETERS",
    "CanonicalParameter",
    "ResultRecord",
    "TrendGroup",
    "measured_vector",
    "normalize",
    "compute_raw",
    "InvasionHistory",
    "classify",
]

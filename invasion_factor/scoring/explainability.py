"""
Explainability ingestion.

An ExplainabilitySet holds signed attribution weights for one queried time
point. Keys are either a parameter name (direct attribution) or an
interaction code "<name>-Feature_<j>" with a 1-based feature index j.

ingest_explainability() produces the weight vector aligned with
WEIGHTED_PARAMETERS and a symmetric N x N interaction matrix, N being the
feature count (at least 1). Interaction keys that cannot be resolved are
dropped; the number dropped is returned and logged so regressions in the
upstream export are visible.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

import numpy as np

from invasion_factor.invasion_logging import get_logger
from invasion_factor.scoring.models import WEIGHTED_PARAMETERS, CanonicalParameter
from invasion_factor.scoring.parameters import normalize

logger = get_logger(__name__)

INTERACTION_PATTERN = re.compile(r"^(?P<name>.+)-Feature_(?P<index>.*)$")

# Row index of each parameter in the interaction matrix
INTERACTION_INDEX: dict[CanonicalParameter, int] = {
    CanonicalParameter.SPHEROID_RADIUS: 0,
    CanonicalParameter.TOTAL_AREA: 1,
    CanonicalParameter.MIGRATION_RADIUS: 2,
    CanonicalParameter.MIGRATION_DISTRIBUTION: 3,
    CanonicalParameter.PROJECTION_COUNT: 4,
}


@dataclass
class IngestedExplainability:
    """
    Parsed explainability for one time point.

    weights: Shape (4,), ordered as WEIGHTED_PARAMETERS; 0.0 where no attribution.
    interactions: Shape (N, N), symmetric.
    dropped: Interaction keys that could not be resolved.
    """

    weights: np.ndarray
    interactions: np.ndarray
    dropped: int = 0


def _resolve_interaction(name: str, index: str, size: int) -> tuple[int, int] | None:
    """Return (row, col) for an interaction code, or None if it cannot be resolved."""
    canonical = normalize(name)
    row = INTERACTION_INDEX.get(canonical) if isinstance(canonical, CanonicalParameter) else None
    if row is None:
        return None
    if not index.isdecimal():
        return None
    try:
        col = int(index) - 1
    except ValueError:
        # beyond the int() digit limit
        return None
    if col < 0 or col >= size or row >= size:
        return None
    return row, col


def ingest_explainability(
    explainability: Mapping[str, float],
    feature_count: int,
) -> IngestedExplainability:
    """
    Split an ExplainabilitySet into the weight vector and the interaction matrix.

    Args:
        explainability: key -> weight for one time point.
        feature_count: Size of the FeatureSet; the matrix is max(1, feature_count) square.

    Returns:
        IngestedExplainability with weights, interactions and the dropped count.
    """
    size = max(1, int(feature_count))
    weights = np.zeros(len(WEIGHTED_PARAMETERS), dtype=np.float64)
    interactions = np.zeros((size, size), dtype=np.float64)
    positions = {p: i for i, p in enumerate(WEIGHTED_PARAMETERS)}
    dropped_keys: list[str] = []

    for key, value in explainability.items():
        match = INTERACTION_PATTERN.match(key.strip())
        if match is not None:
            cell = _resolve_interaction(match.group("name"), match.group("index"), size)
            if cell is None:
                dropped_keys.append(key)
                continue
            i, j = cell
            interactions[i, j] = interactions[j, i] = float(value)
            continue
        pos = positions.get(normalize(key))
        if pos is not None:
            weights[pos] = float(value)

    if dropped_keys:
        logger.warning(
            "interaction_keys_dropped",
            dropped=len(dropped_keys),
            keys=dropped_keys[:10],
            matrix_size=size,
        )
    return IngestedExplainability(weights=weights, interactions=interactions, dropped=len(dropped_keys))

"""
Tests for explainability ingestion: weight vector, interaction matrix, dropped keys.
"""

from __future__ import annotations

import io
import json

import numpy as np

from invasion_factor.invasion_logging import configure_logging
from invasion_factor.scoring.explainability import ingest_explainability


def test_weights_aligned_to_parameter_order():
    """Direct keys (canonical or alias) fill the 4-parameter weight vector; others are ignored."""
    result = ingest_explainability(
        {
            "projection_count": 0.05,
            "Cell Radius": 0.5,
            "total_area": -0.2,
            "migration radius": 0.1,
            "circularity": 0.7,
            "unrelated": 9.0,
        },
        feature_count=3,
    )
    assert result.weights.tolist() == [0.5, -0.2, 0.1, 0.05]
    assert result.dropped == 0


def test_missing_weights_default_to_zero():
    """Parameters without attribution get 0.0."""
    result = ingest_explainability({"spheroid_radius": 1.0}, feature_count=0)
    assert result.weights.tolist() == [1.0, 0.0, 0.0, 0.0]


def test_matrix_size_is_feature_count_with_floor():
    """Matrix is N x N with N = max(1, feature count)."""
    assert ingest_explainability({}, feature_count=0).interactions.shape == (1, 1)
    assert ingest_explainability({}, feature_count=6).interactions.shape == (6, 6)


def test_interaction_written_symmetrically():
    """Name index row, 1-based feature column; mat[i][j] == mat[j][i]."""
    result = ingest_explainability(
        {
            "radius-Feature_3": 0.25,
            "Total Area-Feature_5": -0.4,
            "projection_count-Feature_1": 0.9,
        },
        feature_count=5,
    )
    mat = result.interactions
    assert mat[0, 2] == mat[2, 0] == 0.25
    assert mat[1, 4] == mat[4, 1] == -0.4
    assert mat[4, 0] == mat[0, 4] == 0.9
    assert np.array_equal(mat, mat.T)
    assert result.dropped == 0


def test_unresolvable_interactions_dropped_and_counted():
    """Unknown name, non-numeric index, zero index and out-of-range entries are dropped."""
    result = ingest_explainability(
        {
            "circularity-Feature_1": 1.0,
            "solidity-Feature_1": 1.0,
            "radius-Feature_x": 1.0,
            "radius-Feature_": 1.0,
            "radius-Feature_0": 1.0,
            "radius-Feature_4": 1.0,
            "projection_count-Feature_1": 1.0,
            "area-Feature_2": 0.5,
        },
        feature_count=3,
    )
    # projection_count row 4 does not fit a 3 x 3 matrix
    assert result.dropped == 7
    assert result.interactions[1, 1] == 0.5
    assert np.count_nonzero(result.interactions) == 1


def test_oversized_index_dropped():
    """An index too long for int() is dropped like any other unresolvable key."""
    result = ingest_explainability({"radius-Feature_" + "9" * 5000: 1.0}, feature_count=3)
    assert result.dropped == 1
    assert np.count_nonzero(result.interactions) == 0


def test_dropped_keys_logged_as_warning():
    """Dropping keys emits one interaction_keys_dropped warning with the count."""
    stream = io.StringIO()
    configure_logging(level="WARNING", fmt="json", stream=stream)
    ingest_explainability({"solidity-Feature_1": 1.0, "radius-Feature_9": 1.0}, feature_count=3)
    entry = json.loads(stream.getvalue().strip())
    assert entry["event_type"] == "interaction_keys_dropped"
    assert entry["level"] == "warning"
    assert entry["dropped"] == 2


def test_nothing_logged_when_all_keys_resolve():
    """No warning when every interaction key lands in the matrix."""
    stream = io.StringIO()
    configure_logging(level="WARNING", fmt="json", stream=stream)
    ingest_explainability({"radius-Feature_1": 1.0}, feature_count=3)
    assert stream.getvalue() == ""


def test_interaction_keys_do_not_touch_weights():
    """Interaction codes never feed the direct weight vector."""
    result = ingest_explainability({"radius-Feature_1": 0.8}, feature_count=1)
    assert result.weights.tolist() == [0.0, 0.0, 0.0, 0.0]
    assert result.interactions[0, 0] == 0.8

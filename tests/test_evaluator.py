"""
Tests for SampleEvaluator: time validation, source handling, history and end-to-end records.
"""

from __future__ import annotations

import math
from unittest.mock import MagicMock

import pytest

from invasion_factor.calibration.calibrator import calibrate
from invasion_factor.core.exceptions import SourceError, ValidationError
from invasion_factor.engine.evaluator import SampleEvaluator, validate_time
from invasion_factor.engine.sources import (
    StaticExplainabilitySource,
    StaticFeatureSource,
    StaticParameterSource,
)
from invasion_factor.scoring.models import TrendGroup
from invasion_factor.scoring.trend import InvasionHistory

EXPECTED_RAW = 14.04 / math.sqrt(533.1092)


@pytest.fixture
def sources(sample_parameters, sample_explainability):
    return (
        StaticParameterSource(sample_parameters),
        StaticFeatureSource({"f1": 0.2, "f2": 1.4}),
        StaticExplainabilitySource(sample_explainability),
    )


@pytest.mark.parametrize("value, expected", [(0, 0), (143, 143), (24, 24), ("24", 24), (" 7 ", 7)])
def test_validate_time_accepts(value, expected):
    """Integers and integer strings in [0, 143]."""
    assert validate_time(value) == expected


@pytest.mark.parametrize("value", [-1, 144, True, 24.0, "abc", "1.5", None, ""])
def test_validate_time_rejects(value):
    """Non-integers and out-of-range values raise ValidationError."""
    with pytest.raises(ValidationError):
        validate_time(value)


def test_end_to_end_empty_model(empty_model, sources):
    """Reference measurements and weights with no calibration: calibrated == raw."""
    evaluator = SampleEvaluator("S01", empty_model)
    record = evaluator.evaluate(24, *sources)
    assert record.sample_id == "S01"
    assert record.time == 24
    assert record.raw_if == pytest.approx(EXPECTED_RAW)
    assert record.calibrated_if == record.raw_if
    assert record.trend is TrendGroup.BASELINE
    assert evaluator.history.values() == (record.raw_if,)


def test_calibrated_with_model(calibration_model, sources):
    """With a model, calibrated value follows the trend group's entry."""
    evaluator = SampleEvaluator("S01", calibration_model)
    record = evaluator.evaluate("24", *sources)
    assert record.calibrated_if == pytest.approx(
        calibrate(calibration_model, record.raw_if, 24, TrendGroup.BASELINE)
    )
    assert record.calibrated_if != record.raw_if


def test_trend_uses_own_history(empty_model, sources):
    """Prior history drives the trend after the new raw score is appended."""
    rising = SampleEvaluator("up", empty_model, InvasionHistory([0.0, 0.0, 0.0]))
    declining = SampleEvaluator("down", empty_model, InvasionHistory([10.0, 10.0, 10.0]))
    assert rising.evaluate(24, *sources).trend is TrendGroup.RISING
    assert declining.evaluate(24, *sources).trend is TrendGroup.DECLINING
    assert len(rising.history) == 4
    assert len(declining.history) == 4


def test_invalid_time_records_nothing(empty_model):
    """ValidationError before any source call; history unchanged."""
    params, feats, explain = MagicMock(), MagicMock(), MagicMock()
    evaluator = SampleEvaluator("S01", empty_model)
    with pytest.raises(ValidationError):
        evaluator.evaluate(200, params, feats, explain)
    params.get_parameters.assert_not_called()
    explain.get_explainability.assert_not_called()
    assert len(evaluator.history) == 0


def test_parameter_source_failure_propagates(empty_model, sources):
    """Parameter source failure -> SourceError; history unchanged."""
    failing = MagicMock()
    failing.get_parameters.side_effect = IOError("regression model offline")
    evaluator = SampleEvaluator("S01", empty_model)
    with pytest.raises(SourceError) as exc_info:
        evaluator.evaluate(24, failing, sources[1], sources[2])
    assert exc_info.value.source == "parameters"
    assert isinstance(exc_info.value.__cause__, IOError)
    assert len(evaluator.history) == 0


def test_non_numeric_parameter_is_source_failure(empty_model, sources):
    """A parameter value that is not a number is reported as a parameter-source failure."""
    evaluator = SampleEvaluator("S01", empty_model)
    with pytest.raises(SourceError) as exc_info:
        evaluator.evaluate(24, StaticParameterSource({"radius": "wide"}), sources[1], sources[2])
    assert exc_info.value.source == "parameters"
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert len(evaluator.history) == 0


def test_non_numeric_explainability_is_source_failure(empty_model, sources):
    """A non-numeric attribution value is reported as an explainability-source failure."""
    evaluator = SampleEvaluator("S01", empty_model)
    bad = StaticExplainabilitySource({24: {"spheroid_radius": None}})
    with pytest.raises(SourceError) as exc_info:
        evaluator.evaluate(24, sources[0], sources[1], bad)
    assert exc_info.value.source == "explainability"
    assert len(evaluator.history) == 0


def test_explainability_source_failure_propagates(empty_model, sources):
    """Missing explainability for the time -> SourceError."""
    evaluator = SampleEvaluator("S01", empty_model)
    with pytest.raises(SourceError) as exc_info:
        evaluator.evaluate(48, *sources)
    assert exc_info.value.source == "explainability"
    assert len(evaluator.history) == 0


def test_feature_source_failure_substitutes_empty(empty_model, sources):
    """Feature source failure is logged; evaluation continues with no features."""
    failing = MagicMock()
    failing.get_features.side_effect = RuntimeError("feature extractor crashed")
    evaluator = SampleEvaluator("S01", empty_model)
    record = evaluator.evaluate(24, sources[0], failing, sources[2])
    assert record.raw_if == pytest.approx(EXPECTED_RAW)


def test_record_to_dict(empty_model, sources):
    """to_dict has stable keys and a readable trend label."""
    record = SampleEvaluator("S01", empty_model).evaluate(24, *sources)
    d = record.to_dict()
    assert list(d) == ["sample_id", "time", "raw_if", "calibrated_if", "trend"]
    assert d["trend"] == "Baseline"

"""
Per-sample invasion factor evaluation.

SampleEvaluator sequences one evaluation: validate the time request, fetch
parameters, features and explainability, ingest, compute the raw factor,
append it to the sample's history, classify the trend and calibrate.

One evaluator per sample. Its InvasionHistory lives exactly as long as the
evaluator; evaluate successive time points of the same sample on the same
instance to get a trend beyond Baseline. The CalibrationModel is shared
read-only between evaluators.
"""

from __future__ import annotations

from typing import Any, Mapping

from invasion_factor.calibration.calibrator import calibrate
from invasion_factor.calibration.store import CalibrationModel
from invasion_factor.core.exceptions import SourceError, ValidationError
from invasion_factor.engine.sources import (
    ExplainabilitySource,
    FeatureSource,
    ParameterSource,
)
from invasion_factor.invasion_logging import bind_sample
from invasion_factor.scoring.explainability import ingest_explainability
from invasion_factor.scoring.models import ResultRecord
from invasion_factor.scoring.parameters import measured_vector, missing_parameters
from invasion_factor.scoring.raw_factor import compute_raw
from invasion_factor.scoring.trend import InvasionHistory, classify

TIME_MIN = 0
TIME_MAX = 143


def _as_floats(values: Mapping[str, Any]) -> dict[str, float]:
    """Copy a source mapping, converting every value to float."""
    return {str(k): float(v) for k, v in values.items()}


def validate_time(time_request: Any) -> int:
    """
    Return time_request as an int in [TIME_MIN, TIME_MAX].

    Accepts an int (not bool) or a string holding a base-10 integer.

    Raises:
        ValidationError: Not an integer, or out of range.
    """
    if isinstance(time_request, bool):
        raise ValidationError(f"time must be an integer, got {time_request!r}", time_request)
    if isinstance(time_request, int):
        time = time_request
    elif isinstance(time_request, str):
        text = time_request.strip()
        try:
            time = int(text, 10)
        except ValueError:
            raise ValidationError(f"time must be an integer, got {time_request!r}", time_request) from None
    else:
        raise ValidationError(f"time must be an integer, got {time_request!r}", time_request)
    if not TIME_MIN <= time <= TIME_MAX:
        raise ValidationError(f"time must be in [{TIME_MIN}, {TIME_MAX}], got {time}", time_request)
    return time


class SampleEvaluator:
    """
    Computation context for one sample.

    sample_id: Identifier carried into logs and result records.
    model: Shared, immutable calibration model.
    history: This sample's raw score history (created empty unless given).
    """

    def __init__(
        self,
        sample_id: str,
        model: CalibrationModel,
        history: InvasionHistory | None = None,
    ) -> None:
        self.sample_id = sample_id
        self.model = model
        self.history = history if history is not None else InvasionHistory()
        self._log = bind_sample(sample_id)

    def _fetch_features(self, feature_source: FeatureSource) -> Mapping[str, float]:
        try:
            return _as_floats(feature_source.get_features())
        except Exception as e:
            self._log.warning("feature_source_failed", error=str(e))
            return {}

    def evaluate(
        self,
        time_request: Any,
        parameter_source: ParameterSource,
        feature_source: FeatureSource,
        explainability_source: ExplainabilitySource,
    ) -> ResultRecord:
        """
        Evaluate the sample at one time point.

        Raises:
            ValidationError: Invalid time request; nothing fetched or recorded.
            SourceError: Parameter or explainability source failed; history unchanged.
        """
        time = validate_time(time_request)

        try:
            parameters = _as_floats(parameter_source.get_parameters())
        except Exception as e:
            self._log.error("parameter_source_failed", time=time, error=str(e))
            raise SourceError(f"parameter source failed: {e}", "parameters") from e

        features = self._fetch_features(feature_source)

        try:
            explainability = _as_floats(explainability_source.get_explainability(time))
        except Exception as e:
            self._log.error("explainability_source_failed", time=time, error=str(e))
            raise SourceError(f"explainability source failed for time {time}: {e}", "explainability") from e

        missing = missing_parameters(parameters)
        if missing:
            self._log.debug("parameters_missing", time=time, missing=missing)

        ingested = ingest_explainability(explainability, len(features))
        raw_if = compute_raw(
            ingested.weights,
            measured_vector(parameters),
            ingested.interactions,
            list(features.values()),
            time,
        )

        self.history.append(raw_if)
        trend = classify(self.history)
        calibrated_if = calibrate(self.model, raw_if, time, trend)

        record = ResultRecord(
            sample_id=self.sample_id,
            time=time,
            raw_if=raw_if,
            calibrated_if=calibrated_if,
            trend=trend,
        )
        self._log.info(
            "invasion_evaluated",
            time=time,
            raw_if=round(raw_if, 6),
            calibrated_if=round(calibrated_if, 6),
            trend=trend.label,
            history_len=len(self.history),
            features=len(features),
            dropped_interactions=ingested.dropped,
            calibration_version=self.model.version,
        )
        return record

"""
Engine package — per-sample evaluation, external source protocols and batch runs.
"""

from invasion_factor.engine.batch import BatchResult, SampleJob, evaluate_sample, run_batch
from invasion_factor.engine.evaluator import TIME_MAX, TIME_MIN, SampleEvaluator, validate_time
from invasion_factor.engine.sources import (
    ExplainabilitySource,
    FeatureSource,
    JsonExplainabilitySource,
    JsonFeatureSource,
    JsonParameterSource,
    ParameterSource,
    StaticExplainabilitySource,
    StaticFeatureSource,
    StaticParameterSource,
)

__all__ = [
    "BatchResult",
    "SampleJob",
    "evaluate_sample",
    "run_batch",
    "TIME_MAX",
    "TIME_MIN",
    "SampleEvaluator",
    "validate_time",
    "ExplainabilitySource",
    "FeatureSource",
    "JsonExplainabilitySource",
    "JsonFeatureSource",
    "JsonParameterSource",
    "ParameterSource",
    "StaticExplainabilitySource",
    "StaticFeatureSource",
    "StaticParameterSource",
]

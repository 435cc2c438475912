"""
Batch evaluation across samples.

Each SampleJob gets its own SampleEvaluator (and so its own history); the
job's time points run in ascending order inside it. Samples run in parallel
on a thread pool. A failure aborts only that sample: it is logged and
reported in BatchResult.errors while the other samples complete.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Sequence

from invasion_factor.calibration.store import CalibrationModel
from invasion_factor.config import get_settings
from invasion_factor.engine.evaluator import SampleEvaluator, validate_time
from invasion_factor.engine.sources import (
    ExplainabilitySource,
    FeatureSource,
    ParameterSource,
)
from invasion_factor.invasion_logging import get_logger
from invasion_factor.scoring.models import ResultRecord

logger = get_logger(__name__)


@dataclass
class SampleJob:
    """One sample and the time points to evaluate for it."""

    sample_id: str
    times: Sequence[Any]
    parameter_source: ParameterSource
    feature_source: FeatureSource
    explainability_source: ExplainabilitySource


@dataclass
class BatchResult:
    """
    Outcome of run_batch.

    records: sample_id -> records in evaluation order (only fully evaluated samples).
    errors: sample_id -> error message for samples that failed.
    """

    records: dict[str, list[ResultRecord]] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    def all_records(self) -> list[ResultRecord]:
        return [r for sample_id in sorted(self.records) for r in self.records[sample_id]]


def evaluate_sample(job: SampleJob, model: CalibrationModel) -> list[ResultRecord]:
    """Evaluate all time points of one job in ascending order on a fresh evaluator."""
    times = sorted(validate_time(t) for t in job.times)
    evaluator = SampleEvaluator(job.sample_id, model)
    return [
        evaluator.evaluate(
            t,
            job.parameter_source,
            job.feature_source,
            job.explainability_source,
        )
        for t in times
    ]


def run_batch(
    jobs: Sequence[SampleJob],
    model: CalibrationModel,
    concurrency: int | None = None,
) -> BatchResult:
    """
    Evaluate many samples in parallel with per-sample isolation.

    Args:
        jobs: Samples to evaluate; sample_id must be unique.
        model: Calibration model shared by all samples.
        concurrency: Worker threads; None uses settings.batch_concurrency.
            Clamped to [1, len(jobs)].

    Raises:
        ValueError: Duplicate sample_id.
    """
    result = BatchResult()
    if not jobs:
        return result
    ids = [job.sample_id for job in jobs]
    if len(set(ids)) != len(ids):
        raise ValueError("sample_id must be unique within a batch")

    workers = concurrency if concurrency is not None else get_settings().batch_concurrency
    workers = max(1, min(int(workers), len(jobs)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(evaluate_sample, job, model): job for job in jobs}
        for fut in as_completed(futures):
            job = futures[fut]
            try:
                result.records[job.sample_id] = fut.result()
            except Exception as e:
                logger.warning(
                    "batch_sample_failed",
                    sample_id=job.sample_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.errors[job.sample_id] = str(e)

    logger.info(
        "batch_done",
        samples=len(jobs),
        succeeded=len(result.records),
        failed=len(result.errors),
        concurrency=workers,
    )
    return result

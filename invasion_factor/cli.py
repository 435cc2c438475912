"""
Command-line evaluation of one sample.

Reads parameters, features and per-time explainability from JSON files,
evaluates the requested time points in order within one sample context,
and prints one JSON result record per line.

Usage:
    python -m invasion_factor.cli --parameters params.json \
        --explainability shap.json --features features.json --time 0,24,48
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from invasion_factor.calibration.store import load_calibration_model_or_empty
from invasion_factor.config import get_settings
from invasion_factor.core.exceptions import SourceError, ValidationError
from invasion_factor.engine.evaluator import SampleEvaluator, validate_time
from invasion_factor.engine.sources import (
    JsonExplainabilitySource,
    JsonFeatureSource,
    JsonParameterSource,
    StaticFeatureSource,
)
from invasion_factor.invasion_logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_SOURCE_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _split_times(values: Sequence[str]) -> list[str]:
    return [part.strip() for v in values for part in v.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invasion-factor",
        description="Compute raw and calibrated invasion factors for one sample.",
    )
    parser.add_argument("--parameters", type=Path, required=True, help="JSON object: parameter name -> value")
    parser.add_argument("--explainability", type=Path, required=True, help="JSON object: time -> {key: weight}")
    parser.add_argument("--features", type=Path, default=None, help="JSON object: feature name -> value (optional)")
    parser.add_argument(
        "--time",
        action="append",
        required=True,
        help="Time point(s) in [0, 143]; repeat or comma-separate to evaluate a series",
    )
    parser.add_argument("--sample-id", default="sample", help="Identifier used in logs and output")
    parser.add_argument(
        "--calibration",
        type=Path,
        default=None,
        help="Calibration artifact (default: INVASION_CALIBRATION_PATH; unset disables calibration)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(level=args.log_level or settings.log_level, fmt=settings.log_format)
    model = load_calibration_model_or_empty(args.calibration or settings.calibration_path)
    try:
        times = [validate_time(t) for t in _split_times(args.time)]
    except ValidationError as e:
        print(f"invalid time: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    logger.info("cli_evaluation_started", sample_id=args.sample_id, times=times, calibration_version=model.version)

    evaluator = SampleEvaluator(args.sample_id, model)
    parameter_source = JsonParameterSource(args.parameters)
    feature_source = JsonFeatureSource(args.features) if args.features else StaticFeatureSource()
    explainability_source = JsonExplainabilitySource(args.explainability)

    for time in times:
        try:
            record = evaluator.evaluate(time, parameter_source, feature_source, explainability_source)
        except ValidationError as e:
            print(f"invalid time: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        except SourceError as e:
            print(f"evaluation failed ({e.source}): {e}", file=sys.stderr)
            return EXIT_SOURCE_ERROR
        print(json.dumps(record.to_dict()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

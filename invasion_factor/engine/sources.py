"""
External data sources consumed by the evaluator.

Parameter, feature and explainability values come from collaborators outside
this package (regression models, deep-feature extractors, SHAP exports). The
evaluator only depends on the small protocols below; calls are blocking.

Static* sources wrap in-memory mappings (tests, batch drivers). Json* sources
read the same shapes from JSON files (CLI).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Protocol


class ParameterSource(Protocol):
    def get_parameters(self) -> Mapping[str, float]:
        """Free-form parameter name -> measured value for the current sample."""
        ...


class FeatureSource(Protocol):
    def get_features(self) -> Mapping[str, float]:
        """Feature name -> value; may be empty."""
        ...


class ExplainabilitySource(Protocol):
    def get_explainability(self, time: int) -> Mapping[str, float]:
        """Key -> weight for the given time point."""
        ...


def _as_float_mapping(raw: Any, what: str) -> dict[str, float]:
    if not isinstance(raw, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(raw).__name__}")
    return {str(k): float(v) for k, v in raw.items()}


def _read_json(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class StaticParameterSource:
    def __init__(self, parameters: Mapping[str, float]) -> None:
        self._parameters = dict(parameters)

    def get_parameters(self) -> Mapping[str, float]:
        return dict(self._parameters)


class StaticFeatureSource:
    def __init__(self, features: Mapping[str, float] | None = None) -> None:
        self._features = dict(features or {})

    def get_features(self) -> Mapping[str, float]:
        return dict(self._features)


class StaticExplainabilitySource:
    """Per-time explainability sets; a time with no set raises KeyError."""

    def __init__(self, by_time: Mapping[int, Mapping[str, float]]) -> None:
        self._by_time = {int(t): dict(values) for t, values in by_time.items()}

    def get_explainability(self, time: int) -> Mapping[str, float]:
        if time not in self._by_time:
            raise KeyError(f"no explainability values for time {time}")
        return dict(self._by_time[time])


class JsonParameterSource:
    """Reads {"name": value, ...} from a JSON file on each call."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_parameters(self) -> Mapping[str, float]:
        return _as_float_mapping(_read_json(self.path), "parameters")


class JsonFeatureSource:
    """Reads {"feature": value, ...} from a JSON file on each call."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_features(self) -> Mapping[str, float]:
        return _as_float_mapping(_read_json(self.path), "features")


class JsonExplainabilitySource:
    """Reads {"<time>": {"key": weight, ...}, ...} from a JSON file on each call."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_explainability(self, time: int) -> Mapping[str, float]:
        doc = _read_json(self.path)
        if not isinstance(doc, dict):
            raise ValueError("explainability file must be a JSON object keyed by time")
        if str(time) not in doc:
            raise KeyError(f"no explainability values for time {time} in {self.path}")
        return _as_float_mapping(doc[str(time)], f"explainability[{time}]")

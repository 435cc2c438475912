"""
Trend classification over a sample's raw invasion history.

Only the last TREND_WINDOW observations are used: slope is the change from the
oldest to the newest of them divided by the number of steps. Shorter histories
are Baseline.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from invasion_factor.scoring.models import TrendGroup

TREND_WINDOW = 4


class InvasionHistory:
    """
    Append-only sequence of raw scores for one sample.

    Owned by a single sample's evaluator; never share an instance across samples.
    """

    def __init__(self, values: Sequence[float] = ()) -> None:
        self._values: list[float] = [float(v) for v in values]

    def append(self, raw: float) -> None:
        self._values.append(float(raw))

    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(tuple(self._values))

    def __repr__(self) -> str:
        return f"InvasionHistory({self._values!r})"


def trend_slope(history: Sequence[float]) -> float | None:
    """Slope over the last TREND_WINDOW values; None if history is shorter."""
    values = list(history)
    if len(values) < TREND_WINDOW:
        return None
    return (values[-1] - values[-TREND_WINDOW]) / (TREND_WINDOW - 1)


def classify(history: Sequence[float] | InvasionHistory) -> TrendGroup:
    """Baseline below TREND_WINDOW values; else Declining for negative slope, Rising otherwise."""
    slope = trend_slope(list(history))
    if slope is None:
        return TrendGroup.BASELINE
    if slope < 0:
        return TrendGroup.DECLINING
    return TrendGroup.RISING

"""Descriptive statistics over per-iteration timing samples.

Every adapter's raw timings go through the same functions so that metrics
are comparable across runtimes. All functions require at least one sample;
``iterations >= 1`` guarantees that upstream.
"""

import statistics
from collections.abc import Sequence

from leb.models.result_models import PhaseMetrics, TimingMetrics


class StatisticsError(ValueError):
    """Base exception for statistics errors."""

    pass


class EmptyInputError(StatisticsError):
    """Raised when a statistic is requested for an empty sample."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot calculate {operation} of empty array")


class LengthMismatchError(StatisticsError):
    """Raised when element-wise operations get arrays of different lengths."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Arrays must have the same length (got {left} and {right})"
        )


def _require_values(values: Sequence[float], operation: str) -> None:
    if len(values) == 0:
        raise EmptyInputError(operation)


def mean(values: Sequence[float]) -> float:
    """Calculate the arithmetic mean."""
    _require_values(values, "mean")
    return float(statistics.mean(values))


def stddev(values: Sequence[float]) -> float:
    """Calculate the population standard deviation.

    Divides by N rather than N-1: the measured iterations are the complete
    set of observations for a run.
    """
    _require_values(values, "stddev")
    if len(values) == 1:
        return 0.0
    return float(statistics.pstdev(values))


def minimum(values: Sequence[float]) -> float:
    """Find the minimum value."""
    _require_values(values, "min")
    return float(min(values))


def maximum(values: Sequence[float]) -> float:
    """Find the maximum value."""
    _require_values(values, "max")
    return float(max(values))


def median(values: Sequence[float]) -> float:
    """Calculate the median (mean of the two central values for even counts)."""
    _require_values(values, "median")
    return float(statistics.median(values))


def add_arrays(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Add two arrays element-wise.

    Used to derive ``total_ms[i] = parse_ms[i] + render_ms[i]``.

    Raises:
        LengthMismatchError: If the arrays differ in length.
    """
    if len(a) != len(b):
        raise LengthMismatchError(len(a), len(b))
    return [x + y for x, y in zip(a, b, strict=True)]


def calculate_metrics(values: Sequence[float]) -> PhaseMetrics:
    """Calculate all phase metrics from one timing array."""
    return PhaseMetrics(
        mean_ms=mean(values),
        stddev_ms=stddev(values),
        min_ms=minimum(values),
        max_ms=maximum(values),
        median_ms=median(values),
    )


def calculate_timing_metrics(
    parse_ms: Sequence[float], render_ms: Sequence[float]
) -> TimingMetrics:
    """Calculate parse, render and total metrics from raw adapter timings."""
    total_ms = add_arrays(parse_ms, render_ms)
    return TimingMetrics(
        parse=calculate_metrics(parse_ms),
        render=calculate_metrics(render_ms),
        total=calculate_metrics(total_ms),
    )

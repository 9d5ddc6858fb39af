"""Statistics engine for benchmark timings."""

from leb.stats.statistics import (
    EmptyInputError,
    LengthMismatchError,
    StatisticsError,
    add_arrays,
    calculate_metrics,
    calculate_timing_metrics,
    maximum,
    mean,
    median,
    minimum,
    stddev,
)

__all__ = [
    "EmptyInputError",
    "LengthMismatchError",
    "StatisticsError",
    "add_arrays",
    "calculate_metrics",
    "calculate_timing_metrics",
    "maximum",
    "mean",
    "median",
    "minimum",
    "stddev",
]

"""Tests for the statistics engine."""

import random

import pytest

from leb.stats import (
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

SAMPLES = [
    [0.0],
    [1.5],
    [3.0, 1.0, 2.0],
    [0.12, 0.11, 0.10, 0.25],
    [5.0, 5.0, 5.0, 5.0, 5.0],
    [0.001, 1000.0, 42.0, 7.5, 0.3, 19.9],
]


class TestBasicStatistics:
    """Tests for the individual reductions."""

    def test_mean(self):
        assert mean([1.0, 2.0, 3.0, 4.0]) == 2.5

    def test_min_max(self):
        values = [3.2, 0.5, 9.1, 4.4]
        assert minimum(values) == 0.5
        assert maximum(values) == 9.1

    def test_median_odd_length(self):
        """Odd length returns the middle element."""
        assert median([9.0, 1.0, 5.0]) == 5.0

    def test_median_even_length(self):
        """Even length returns the mean of the two central elements."""
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5

    def test_median_is_order_independent(self):
        values = [0.3, 7.1, 2.2, 9.9, 4.0, 1.1, 5.5]
        shuffled = values[:]
        random.Random(1234).shuffle(shuffled)
        assert median(values) == median(sorted(values)) == median(shuffled)

    def test_stddev_is_population(self):
        """Divides by N, not N-1."""
        # Squared deviations from mean 5: 9, 1, 1, 1, 0, 0, 4, 16 -> 32 / 8 = 4
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        assert stddev(values) == pytest.approx(2.0)

    def test_stddev_single_value_is_zero(self):
        assert stddev([42.0]) == 0.0

    def test_stddev_constant_values_is_zero(self):
        assert stddev([3.3, 3.3, 3.3, 3.3]) == pytest.approx(0.0)

    def test_results_are_floats(self):
        """Integer input still yields float output."""
        assert isinstance(mean([1, 2]), float)
        assert isinstance(median([1, 2, 3]), float)
        assert isinstance(minimum([1, 2]), float)


class TestEmptyInput:
    """Every reduction rejects an empty sample."""

    @pytest.mark.parametrize(
        "func, name",
        [
            (mean, "mean"),
            (stddev, "stddev"),
            (minimum, "min"),
            (maximum, "max"),
            (median, "median"),
        ],
    )
    def test_empty_raises(self, func, name):
        with pytest.raises(EmptyInputError, match=name):
            func([])

    def test_empty_input_is_statistics_error(self):
        with pytest.raises(StatisticsError):
            calculate_metrics([])

    def test_statistics_error_is_value_error(self):
        with pytest.raises(ValueError):
            mean([])


class TestAddArrays:
    """Tests for element-wise addition."""

    def test_adds_element_wise(self):
        assert add_arrays([1.0, 2.0, 3.0], [0.5, 0.5, 1.0]) == [1.5, 2.5, 4.0]

    def test_commutative_and_length_preserving(self):
        a = [0.1, 0.2, 0.3]
        b = [1.0, 2.0, 3.0]
        assert add_arrays(a, b) == add_arrays(b, a)
        assert len(add_arrays(a, b)) == 3

    def test_empty_arrays(self):
        assert add_arrays([], []) == []

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError) as exc_info:
            add_arrays([1.0, 2.0], [1.0])
        assert exc_info.value.left == 2
        assert exc_info.value.right == 1


class TestCalculateMetrics:
    """Tests for composed metrics."""

    @pytest.mark.parametrize("values", SAMPLES)
    def test_ordering_invariants(self, values):
        """min <= median <= max and min <= mean <= max."""
        metrics = calculate_metrics(values)
        assert metrics.min_ms <= metrics.median_ms <= metrics.max_ms
        assert metrics.min_ms <= metrics.mean_ms + 1e-12
        assert metrics.mean_ms <= metrics.max_ms + 1e-12
        assert metrics.stddev_ms >= 0

    def test_metric_values(self):
        metrics = calculate_metrics([1.0, 2.0, 3.0])
        assert metrics.mean_ms == 2.0
        assert metrics.median_ms == 2.0
        assert metrics.min_ms == 1.0
        assert metrics.max_ms == 3.0
        assert metrics.stddev_ms == pytest.approx((2 / 3) ** 0.5)

    def test_timing_metrics_total_is_sum(self):
        """total[i] = parse[i] + render[i]."""
        timing = calculate_timing_metrics([1.0, 2.0, 3.0], [10.0, 20.0, 30.0])
        assert timing.parse.mean_ms == 2.0
        assert timing.render.mean_ms == 20.0
        assert timing.total.min_ms == 11.0
        assert timing.total.max_ms == 33.0
        assert timing.total.mean_ms == pytest.approx(22.0)

    def test_timing_metrics_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            calculate_timing_metrics([1.0, 2.0], [1.0])

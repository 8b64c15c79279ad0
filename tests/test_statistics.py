"""
Tests for weekly statistics and weather code occurrence counters.
"""

import itertools
import pytest
import math

from dengue_watch.exceptions import InvalidAggregationInput
from dengue_watch.utils.statistics import (
    calculate,
    calculate_paired,
    count_code_occurrences,
    count_description_occurrences,
    resolve_weather_code_mode,
)


class TestCalculate:
    """Test weekly mean and max."""

    def test_full_week(self):
        stats = calculate([27, 28, 27, 29, 26, 27, 28], "temperature")
        assert stats.mean == pytest.approx(27.428571, rel=1e-6)
        assert stats.max == 29.0

    def test_partial_week(self):
        stats = calculate([10.0, 20.0, 30.0])
        assert stats.mean == 20.0
        assert stats.max == 30.0

    def test_order_does_not_matter(self):
        values = [3.5, 1.0, 7.25, 0.0, 2.0]
        assert calculate(values) == calculate(list(reversed(values)))
        assert calculate(values) == calculate(sorted(values))

    def test_mean_is_identical_for_every_ordering(self):
        values = [0.1, 0.2, 0.3]
        means = {calculate(list(p)).mean for p in itertools.permutations(values)}
        assert len(means) == 1
        assert calculate([0.1, 0.2, 0.3]).mean == calculate([0.3, 0.2, 0.1]).mean

    def test_accepts_generators(self):
        stats = calculate(v for v in [1, 2, 3])
        assert stats.mean == 2.0

    @pytest.mark.parametrize("values,message", [
        (None, "must be provided"),
        ([], "cannot be empty"),
        ([1, 2, 3, 4, 5, 6, 7, 8], "7 or fewer"),
        ([1.0, math.nan], "NaN"),
        ([1.0, math.inf], "infinite"),
        ([1.0, -math.inf], "infinite"),
    ])
    def test_invalid_input(self, values, message):
        with pytest.raises(InvalidAggregationInput) as exc_info:
            calculate(values, "humidity")
        assert message in str(exc_info.value)
        assert exc_info.value.parameter == "humidity"

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            calculate([])


class TestCalculatePaired:
    """Test statistics over daily minimum/maximum pairs."""

    def test_mean_of_midpoints_and_max_of_maximums(self):
        stats = calculate_paired([20, 22], [30, 34], "temperature")
        assert stats.mean == 26.5
        assert stats.max == 34.0

    def test_same_series_twice_matches_calculate(self):
        values = [27, 28, 27, 29, 26, 27, 28]
        assert calculate_paired(values, values) == calculate(values)

    def test_mean_is_identical_for_reordered_pairs(self):
        minimums = [0.1, 0.7, 0.2, 0.9, 0.3, 0.4, 0.6]
        maximums = [1.1, 0.8, 1.3, 1.0, 1.2, 0.9, 1.4]
        reordered = sorted(zip(minimums, maximums))

        forward = calculate_paired(minimums, maximums, "temperature")
        shuffled = calculate_paired(
            [low for low, _ in reordered], [high for _, high in reordered], "temperature"
        )
        backward = calculate_paired(minimums[::-1], maximums[::-1], "temperature")

        assert forward == shuffled == backward
        assert forward.max == 1.4

    def test_parameter_names_identify_the_series(self):
        with pytest.raises(InvalidAggregationInput) as exc_info:
            calculate_paired([20.0], None, "temperature")
        assert exc_info.value.parameter == "maximum_temperature"

        with pytest.raises(InvalidAggregationInput) as exc_info:
            calculate_paired([], [30.0], "temperature")
        assert exc_info.value.parameter == "minimum_temperature"

    def test_length_mismatch(self):
        with pytest.raises(InvalidAggregationInput) as exc_info:
            calculate_paired([20, 21], [30], "humidity")
        assert exc_info.value.parameter == "humidity"


class TestWeatherCodeMode:
    """Test the most frequent weather code."""

    def test_clear_winner(self):
        assert resolve_weather_code_mode([61, 61, 61, 3, 3, 0, 0]) == (61, 3)

    def test_tie_goes_to_smallest_code(self):
        assert resolve_weather_code_mode([5, 5, 3, 3]) == (3, 2)
        assert resolve_weather_code_mode([3, 5, 3, 5]) == (3, 2)

    def test_empty_week(self):
        assert resolve_weather_code_mode([]) == (0, 0)


class TestOccurrenceCounters:
    """Test the exactly-seven occurrence counters."""

    def test_count_code_occurrences(self):
        assert count_code_occurrences([1, 2, 1, 1, 3, 4, 1], 1) == 4
        assert count_code_occurrences([1, 2, 1, 1, 3, 4, 1], 9) == 0

    def test_count_code_occurrences_requires_full_week(self):
        with pytest.raises(InvalidAggregationInput) as exc_info:
            count_code_occurrences([1, 2, 3], 1)
        assert "exactly 7" in str(exc_info.value)
        assert exc_info.value.parameter == "weather_code_ids"

        with pytest.raises(InvalidAggregationInput):
            count_code_occurrences(None, 1)

    def test_count_description_occurrences_ignores_case(self):
        descriptions = ["Clear", "clear", "CLEAR", "Rain", None, "clear ", "Cloudy"]
        assert count_description_occurrences(descriptions, "clear") == 3

    def test_count_description_occurrences_validation(self):
        with pytest.raises(InvalidAggregationInput) as exc_info:
            count_description_occurrences(["clear"] * 7, None)
        assert exc_info.value.parameter == "target_description"

        with pytest.raises(InvalidAggregationInput) as exc_info:
            count_description_occurrences(["clear"] * 8, "clear")
        assert exc_info.value.parameter == "descriptions"

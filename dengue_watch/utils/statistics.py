"""
Weekly statistics over daily weather samples.

A lag window contributes at most seven daily values per measurement. The
functions here reduce those samples to the weekly figures stored on a
snapshot:

- Temperature, humidity, precipitation: MEAN and MAX of the week
- Weather code: the most frequent code (lowest code wins a tie)

Inputs are validated strictly; a NaN or infinite reading, or more than
seven values for one week, means the upstream data is broken and raises
InvalidAggregationInput instead of producing a silently wrong feature.
"""

import math
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from dengue_watch.exceptions import InvalidAggregationInput
from dengue_watch.schemas.training_data import WeeklyStatistic

DAYS_PER_WEEK = 7


def validate_weekly_sample(values: Optional[Iterable[float]], parameter_name: str) -> List[float]:
    """
    Materialize and validate one week of daily values.

    Args:
        values: Daily readings for a single measurement
        parameter_name: Name reported in the error when validation fails

    Returns:
        The values as a list

    Raises:
        InvalidAggregationInput: if values is None, empty, longer than seven
            elements, or holds NaN/infinite numbers
    """
    if values is None:
        raise InvalidAggregationInput("Weekly data must be provided.", parameter_name)

    data = [float(v) for v in values]

    if not data:
        raise InvalidAggregationInput("Weekly data cannot be empty.", parameter_name)

    if len(data) > DAYS_PER_WEEK:
        raise InvalidAggregationInput(
            f"Weekly data must contain {DAYS_PER_WEEK} or fewer elements, got {len(data)}.",
            parameter_name
        )

    if any(math.isnan(v) for v in data):
        raise InvalidAggregationInput("Weekly data cannot contain NaN values.", parameter_name)

    if any(math.isinf(v) for v in data):
        raise InvalidAggregationInput("Weekly data cannot contain infinite values.", parameter_name)

    return data


def calculate(values: Iterable[float], parameter_name: str = "values") -> WeeklyStatistic:
    """
    Compute the weekly mean and maximum of a single daily series.

    Example:
        >>> calculate([27, 28, 27, 29, 26, 27, 28], "temperature")
        WeeklyStatistic(mean=27.428571428571427, max=29.0)
    """
    data = validate_weekly_sample(values, parameter_name)
    return WeeklyStatistic(mean=math.fsum(data) / len(data), max=max(data))


def calculate_paired(
    minimums: Iterable[float],
    maximums: Iterable[float],
    parameter_name: str = "values"
) -> WeeklyStatistic:
    """
    Compute weekly statistics from daily minimum/maximum pairs.

    The weekly mean is the mean of the daily midpoints ``(min + max) / 2``
    and the weekly maximum is the largest daily maximum. Sources with a
    single reading per day pass the same series twice, which reduces to
    ``calculate``.

    Args:
        minimums: Daily minimum readings
        maximums: Daily maximum readings
        parameter_name: Measurement name used in validation errors

    Returns:
        WeeklyStatistic with mean and max
    """
    min_values = validate_weekly_sample(minimums, f"minimum_{parameter_name}")
    max_values = validate_weekly_sample(maximums, f"maximum_{parameter_name}")

    if len(min_values) != len(max_values):
        raise InvalidAggregationInput(
            f"Daily minimum and maximum series differ in length "
            f"({len(min_values)} vs {len(max_values)}).",
            parameter_name
        )

    midpoints = [(low + high) / 2 for low, high in zip(min_values, max_values)]
    return WeeklyStatistic(mean=math.fsum(midpoints) / len(midpoints), max=max(max_values))


def resolve_weather_code_mode(codes: Iterable[int]) -> Tuple[int, int]:
    """
    Find the most frequent weather code of a week.

    Ties go to the smallest code so the result never depends on row order.
    An empty week yields ``(0, 0)``, meaning no dominant code is available.

    Example:
        >>> resolve_weather_code_mode([5, 5, 3, 3])
        (3, 2)
    """
    counts = Counter(codes)
    if not counts:
        return (0, 0)
    code, count = min(counts.items(), key=lambda item: (-item[1], item[0]))
    return (code, count)


def _require_full_week(values: Optional[Iterable], parameter_name: str) -> list:
    if values is None:
        raise InvalidAggregationInput("Weekly data must be provided.", parameter_name)
    data = list(values)
    if len(data) != DAYS_PER_WEEK:
        raise InvalidAggregationInput(
            f"Weekly data must contain exactly {DAYS_PER_WEEK} elements, got {len(data)}.",
            parameter_name
        )
    return data


def count_code_occurrences(weather_code_ids: Sequence[int], target_weather_code_id: int) -> int:
    """
    Count how often a weather code occurs in a complete week.

    Unlike the statistics above this requires exactly seven values.
    """
    data = _require_full_week(weather_code_ids, "weather_code_ids")
    return sum(1 for code in data if code == target_weather_code_id)


def count_description_occurrences(descriptions: Sequence[str], target_description: str) -> int:
    """Count case-insensitive matches of a description in a complete week."""
    if target_description is None:
        raise InvalidAggregationInput("Target description must be provided.", "target_description")
    data = _require_full_week(descriptions, "descriptions")
    target = target_description.casefold()
    return sum(1 for d in data if d is not None and d.casefold() == target)

"""
Tests for ISO week calendar utilities and lag-window alignment.
"""

import pytest
from datetime import date, timedelta

from dengue_watch.utils.iso_calendar import (
    LAG_DAYS,
    LagWindow,
    WeekFilter,
    extract_current_and_lagged,
    iso_week,
    lag_window,
    lag_window_for_week,
    week_filter_date_ranges,
    week_start,
    weeks_in_year,
)


class TestIsoWeek:
    """Test ISO week numbering."""

    def test_mid_year_date(self):
        assert iso_week(date(2023, 3, 6)) == (2023, 10)

    def test_late_december_belongs_to_next_iso_year(self):
        # Monday 2024-12-30 starts 2025-W01
        assert iso_week(date(2024, 12, 30)) == (2025, 1)

    def test_early_january_belongs_to_previous_iso_year(self):
        # Sunday 2021-01-03 is the last day of 2020-W53
        assert iso_week(date(2021, 1, 3)) == (2020, 53)

    def test_weeks_in_year(self):
        assert weeks_in_year(2020) == 53
        assert weeks_in_year(2023) == 52
        assert weeks_in_year(2026) == 53


class TestLagWindow:
    """Test the 14-day lag window."""

    def test_lag_window_across_year_boundary(self):
        assert lag_window(date(2021, 1, 3)) == LagWindow(2020, 51)

    def test_lag_window_for_dengue_week(self):
        # 2023-W10 starts Monday 2023-03-06; 14 days earlier is in 2023-W08
        assert lag_window_for_week(2023, 10) == LagWindow(2023, 8)

    def test_lag_window_for_first_week_of_year(self):
        assert lag_window_for_week(2021, 1) == LagWindow(2020, 52)

    def test_lag_window_matches_reference_calendar(self):
        """Every day of 2019-2025 agrees with date.isocalendar()."""
        day = date(2019, 1, 1)
        while day <= date(2025, 12, 31):
            expected = (day - timedelta(days=LAG_DAYS)).isocalendar()
            assert lag_window(day) == LagWindow(expected[0], expected[1])
            day += timedelta(days=1)

    def test_label_format(self):
        assert LagWindow(2023, 8).label() == "2023-W08"
        assert LagWindow(2020, 53).label() == "2020-W53"


class TestWeekStart:
    """Test ISO week start dates."""

    @pytest.mark.parametrize("year,week,expected", [
        (2023, 1, date(2023, 1, 2)),
        (2023, 8, date(2023, 2, 20)),
        (2020, 53, date(2020, 12, 28)),
        (2025, 1, date(2024, 12, 30)),
    ])
    def test_week_start(self, year, week, expected):
        assert week_start(year, week) == expected
        assert expected.weekday() == 0

    def test_week_53_of_short_year_rolls_into_next_year(self):
        assert week_start(2023, 53) == week_start(2024, 1)

    def test_week_start_round_trips_through_iso_week(self):
        for year in (2019, 2020, 2021, 2022):
            for week in range(1, weeks_in_year(year) + 1):
                assert iso_week(week_start(year, week)) == (year, week)


class TestExtractCurrentAndLagged:
    """Test extraction of the current and lagged ISO week of a date."""

    def test_extract_uses_iso_year(self):
        # 2021-01-03 is in 2020-W53, lagged into 2020-W51
        assert extract_current_and_lagged(date(2021, 1, 3)) == (53, 2020, 51, 2020)

    def test_extract_mid_year(self):
        assert extract_current_and_lagged(date(2023, 3, 8)) == (10, 2023, 8, 2023)


class TestWeekFilterDateRanges:
    """Test conversion of week filters into date ranges."""

    def test_single_week(self):
        ranges = week_filter_date_ranges([2023], WeekFilter(week_number=8))
        assert ranges == [(date(2023, 2, 20), date(2023, 2, 26))]

    def test_week_range_over_several_years(self):
        ranges = week_filter_date_ranges([2023, 2022], WeekFilter(week_range=(8, 9)))
        assert ranges == [
            (date(2022, 2, 21), date(2022, 3, 6)),
            (date(2023, 2, 20), date(2023, 3, 5)),
        ]

    def test_full_year_is_clamped_to_last_iso_week(self):
        ranges = week_filter_date_ranges([2023], WeekFilter())
        assert ranges == [(date(2023, 1, 2), date(2023, 12, 31))]

    def test_week_53_skipped_in_short_years(self):
        ranges = week_filter_date_ranges([2020, 2023], WeekFilter(week_number=53))
        assert ranges == [(date(2020, 12, 28), date(2021, 1, 3))]

    def test_bounds(self):
        assert WeekFilter().bounds() == (1, 53)
        assert WeekFilter.full_year().bounds() == (1, 53)
        assert WeekFilter(week_number=7).bounds() == (7, 7)
        assert WeekFilter(week_range=(3, 9)).bounds() == (3, 9)

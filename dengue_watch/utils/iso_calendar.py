"""
ISO 8601 week calendar utilities for lag-window alignment.

Dengue cases reported in a week are driven by the weather two weeks
earlier (incubation plus reporting delay). Every snapshot therefore pairs
a dengue reporting week with the ISO week that contains the date 14 days
before the reporting week's Monday: the *lag window*.

ISO 8601 week rules:
- Week starts on Monday
- Week 1 is the week containing January 4th (the year's first Thursday)
- Weeks may span across calendar years, so the ISO year can differ from
  the calendar year for dates in late December or early January
"""

from datetime import date, timedelta
from typing import Iterable, List, NamedTuple, Optional, Tuple

# Epidemiological lag between weather exposure and case reporting
LAG_DAYS = 14

MIN_ISO_WEEK = 1
MAX_ISO_WEEK = 53


class LagWindow(NamedTuple):
    """ISO year and week of the weather observation window."""

    iso_year: int
    iso_week: int

    def label(self) -> str:
        """Missing-week marker format, e.g. ``2023-W08``."""
        return f"{self.iso_year:04d}-W{self.iso_week:02d}"


class WeekFilter(NamedTuple):
    """
    Restricts a query to a single ISO week or an inclusive week range.

    At most one of the two may be set; an empty filter selects every week.
    Validation lives in ``dengue_watch.utils.snapshots.validate_week_filter``.
    """

    week_number: Optional[int] = None
    week_range: Optional[Tuple[int, int]] = None

    @classmethod
    def full_year(cls) -> "WeekFilter":
        return cls(week_range=(MIN_ISO_WEEK, MAX_ISO_WEEK))

    def bounds(self) -> Tuple[int, int]:
        """Inclusive (from, to) week bounds selected by the filter."""
        if self.week_number is not None:
            return (self.week_number, self.week_number)
        if self.week_range is not None:
            return (self.week_range[0], self.week_range[1])
        return (MIN_ISO_WEEK, MAX_ISO_WEEK)


def iso_week(date_obj: date) -> Tuple[int, int]:
    """
    Get ISO 8601 year and week number (1-53).

    Example:
        >>> iso_week(date(2024, 12, 30))  # Monday
        (2025, 1)
    """
    iso_calendar = date_obj.isocalendar()
    return (iso_calendar[0], iso_calendar[1])


def lag_window(date_obj: date) -> LagWindow:
    """
    Get the weather observation window for a date.

    Example:
        >>> lag_window(date(2021, 1, 3))
        LagWindow(iso_year=2020, iso_week=51)
    """
    iso_year, week = iso_week(date_obj - timedelta(days=LAG_DAYS))
    return LagWindow(iso_year, week)


def week_start(iso_year: int, week_number: int) -> date:
    """
    Get the Monday that starts an ISO week.

    Week 53 of a 52-week year resolves to the Monday of week 1 of the next
    year instead of failing, so stray week-53 case rows still align.

    Example:
        >>> week_start(2023, 8)
        datetime.date(2023, 2, 20)
    """
    jan_4 = date(iso_year, 1, 4)  # Week 1 is the week containing Jan 4
    first_monday = jan_4 - timedelta(days=jan_4.weekday())
    return first_monday + timedelta(weeks=week_number - 1)


def lag_window_for_week(iso_year: int, week_number: int) -> LagWindow:
    """Lag window of a dengue reporting week, measured from its Monday."""
    return lag_window(week_start(iso_year, week_number))


def weeks_in_year(iso_year: int) -> int:
    """Number of ISO weeks (52 or 53) in an ISO year."""
    # December 28th always falls in the last ISO week of its year
    return date(iso_year, 12, 28).isocalendar()[1]


def extract_current_and_lagged(date_obj: date) -> Tuple[int, int, int, int]:
    """
    Extract ISO week/year of a date together with its lag window.

    Used by the real-time prediction path to find which observation week
    feeds the week being predicted.

    Returns:
        Tuple of (iso_week, iso_year, lagged_week, lagged_year)
    """
    current_year, current_week = iso_week(date_obj)
    lagged = lag_window(date_obj)
    return (current_week, current_year, lagged.iso_week, lagged.iso_year)


def week_filter_date_ranges(
    years: Iterable[int],
    week_filter: WeekFilter
) -> List[Tuple[date, date]]:
    """
    Translate ISO years plus a week filter into inclusive date ranges.

    Week numbers beyond a year's last ISO week are dropped for that year
    (week 53 only exists in long years).

    Example:
        >>> week_filter_date_ranges([2023], WeekFilter(week_range=(8, 9)))
        [(datetime.date(2023, 2, 20), datetime.date(2023, 3, 5))]
    """
    from_week, to_week = week_filter.bounds()
    ranges = []
    for year in sorted(set(years)):
        last_week = min(to_week, weeks_in_year(year))
        if from_week > last_week:
            continue
        start = week_start(year, from_week)
        end = week_start(year, last_week) + timedelta(days=6)
        ranges.append((start, end))
    return ranges

"""
Weekly weather snapshot assembly.

Pairs each dengue reporting week of an area with its lag window (the ISO
week 14 days earlier) and reduces that window's daily weather into one
WeeklySnapshot:

- Temperature, humidity, precipitation: weekly MEAN and MAX
- Weather code: most frequent code and its day count
- Dominant weather category and wet-week flag

A snapshot needs all 7 days of its lag window. Weeks with fewer rows are
reported as missing lag weeks ("YYYY-Www") instead of failing, because
partial coverage is normal in a multi-year history. An area without any
dengue case rows is reported by its bare PSGC code.

The real-time prediction path (get_single_week_snapshot) is stricter and
raises NotFoundError when the week is incomplete.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dengue_watch.config import settings
from dengue_watch.crud.weather import daily_weather, weekly_dengue_case
from dengue_watch.exceptions import InvalidAggregationInput, NotFoundError, ValidationError
from dengue_watch.schemas.training_data import (
    AggregationResult,
    DailyWeatherObservation,
    WeeklyCaseRecord,
    WeeklySnapshot,
)
from dengue_watch.utils.iso_calendar import (
    LAG_DAYS,
    MAX_ISO_WEEK,
    MIN_ISO_WEEK,
    LagWindow,
    WeekFilter,
    iso_week,
    lag_window,
    lag_window_for_week,
    week_start,
)
from dengue_watch.utils.logging_config import get_logger
from dengue_watch.utils.statistics import DAYS_PER_WEEK, calculate_paired, resolve_weather_code_mode
from dengue_watch.utils.weather_classification import classify_dominant_weather, is_wet_week

logger = get_logger(__name__)

PSGC_CODE_LENGTHS = (9, 10)


# ============================================================================
# INPUT VALIDATION
# ============================================================================

def validate_area_code(area_code: Optional[str]) -> str:
    """
    Validate a PSGC area code.

    Accepts 9-digit (legacy) and 10-digit codes; surrounding whitespace is
    stripped.

    Raises:
        ValidationError: if the code is blank or not a 9/10 digit string
    """
    if area_code is None or not area_code.strip():
        logger.warning("PSGC code is required when requesting weekly weather snapshots.")
        raise ValidationError("PSGC code must be provided.")

    code = area_code.strip()
    if not code.isdigit() or len(code) not in PSGC_CODE_LENGTHS:
        logger.warning(f"Malformed PSGC code '{code}'.")
        raise ValidationError(f"PSGC code '{code}' must be a 9 or 10 digit code.")
    return code


def validate_years(years: Optional[Iterable[int]]) -> List[int]:
    """Validate and de-duplicate the requested ISO years (sorted)."""
    unique_years = sorted(set(years or []))
    if not unique_years:
        logger.warning("No dengue years provided.")
        raise ValidationError("At least one dengue year must be provided.")
    return unique_years


def validate_week_number(week_number: int, field: str = "ISO week") -> int:
    if week_number < MIN_ISO_WEEK or week_number > MAX_ISO_WEEK:
        logger.warning(f"Invalid {field} {week_number}.")
        raise ValidationError(f"{field} must be between {MIN_ISO_WEEK} and {MAX_ISO_WEEK}.")
    return week_number


def validate_week_filter(week_filter: Optional[WeekFilter]) -> WeekFilter:
    """
    Validate a week filter.

    Raises:
        ValidationError: if both a week number and a week range are given,
            a week lies outside 1-53, or the range is reversed
    """
    if week_filter is None:
        return WeekFilter()

    if week_filter.week_number is not None and week_filter.week_range is not None:
        logger.warning("Both a dengue week number and a dengue week range were provided.")
        raise ValidationError("Specify either a single week number or a week range, not both.")

    if week_filter.week_number is not None:
        validate_week_number(week_filter.week_number, "Dengue week number")

    if week_filter.week_range is not None:
        from_week, to_week = week_filter.week_range
        validate_week_number(from_week, "Dengue week range start")
        validate_week_number(to_week, "Dengue week range end")
        if from_week > to_week:
            logger.warning(f"Dengue week range start {from_week} is greater than end {to_week}.")
            raise ValidationError("Dengue week range start must be less than or equal to the end.")

    return week_filter


# ============================================================================
# WEEKLY AGGREGATION
# ============================================================================

def _require_one_row_per_day(rows: Sequence[DailyWeatherObservation], week_label: str) -> None:
    days = {r.date for r in rows}
    if len(days) != len(rows):
        raise InvalidAggregationInput(
            f"{week_label} has {len(rows)} daily rows for {len(days)} distinct days.",
            "weather_rows"
        )


def summarize_week(rows: Sequence[DailyWeatherObservation]) -> Dict:
    """
    Reduce one lag window of daily rows to the weather fields of a snapshot.

    Args:
        rows: Daily observations of a single ISO week, ordered by date

    Returns:
        Dictionary of WeeklySnapshot weather fields
    """
    temperatures = [r.temperature for r in rows]
    humidity = [r.humidity for r in rows]
    precipitation = [r.precipitation for r in rows]
    descriptions = [r.weather_description or "" for r in rows]

    # Daily tables hold one reading per day: min and max series coincide
    temperature_stats = calculate_paired(temperatures, temperatures, "temperature")
    humidity_stats = calculate_paired(humidity, humidity, "humidity")
    precipitation_stats = calculate_paired(precipitation, precipitation, "precipitation")

    code, occurrences = resolve_weather_code_mode(r.weather_code_id for r in rows)
    dominance = classify_dominant_weather(descriptions)

    return {
        'temperature_stats': temperature_stats,
        'humidity_stats': humidity_stats,
        'precipitation_stats': precipitation_stats,
        'most_common_weather_code_id': code,
        'most_common_weather_description': dominance.description,
        'occurrence_count': occurrences,
        'dominant_weather_category': dominance.category,
        'is_wet_week': is_wet_week(precipitation, descriptions),
    }


def assemble_snapshots(
    area_code: str,
    case_records: Iterable[WeeklyCaseRecord],
    weather_rows: Iterable[DailyWeatherObservation]
) -> AggregationResult:
    """
    Build snapshots for every dengue week of an area.

    Args:
        area_code: PSGC code of the area
        case_records: Weekly dengue case rows of the area
        weather_rows: Daily weather rows covering (at least) the lag windows

    Returns:
        AggregationResult with snapshots in (year, week) order and the lag
        weeks that had fewer than 7 observations

    Raises:
        InvalidAggregationInput: if a lag window holds more than one row for
            the same day (storage enforces one row per area and date)
    """
    records = sorted(case_records, key=lambda r: (r.iso_year, r.iso_week))
    if not records:
        return AggregationResult(missing_lag_weeks=(area_code,))

    rows_by_week: Dict[LagWindow, List[DailyWeatherObservation]] = defaultdict(list)
    for row in weather_rows:
        rows_by_week[LagWindow(*iso_week(row.date))].append(row)

    snapshots = []
    missing = []
    for record in records:
        lag = lag_window_for_week(record.iso_year, record.iso_week)
        lag_rows = rows_by_week.get(lag, [])

        if len(lag_rows) < DAYS_PER_WEEK:
            missing.append(lag.label())
            continue

        _require_one_row_per_day(lag_rows, lag.label())
        ordered = sorted(lag_rows, key=lambda r: r.date)
        snapshots.append(WeeklySnapshot(
            area_code=area_code,
            dengue_year=record.iso_year,
            dengue_week=record.iso_week,
            dengue_case_count=record.case_count,
            lag_year=lag.iso_year,
            lag_week=lag.iso_week,
            lag_week_start_date=week_start(lag.iso_year, lag.iso_week),
            **summarize_week(ordered)
        ))

    if missing:
        logger.debug(f"{area_code}: {len(missing)} lag weeks without a full week of weather")

    return AggregationResult(snapshots=tuple(snapshots), missing_lag_weeks=tuple(missing))


# ============================================================================
# STORAGE-BACKED OPERATIONS
# ============================================================================

async def _fetch_lagged_weather(
    db: AsyncSession,
    area_code: str,
    case_records: Sequence[WeeklyCaseRecord],
    weather_source
) -> List[DailyWeatherObservation]:
    """Fetch daily weather for exactly the lag windows the case records need."""
    weeks_by_year: Dict[int, set] = defaultdict(set)
    for record in case_records:
        lag = lag_window_for_week(record.iso_year, record.iso_week)
        weeks_by_year[lag.iso_year].add(lag.iso_week)

    rows = []
    for year in sorted(weeks_by_year):
        weeks = weeks_by_year[year]
        if len(weeks) == 1:
            week_filter = WeekFilter(week_number=next(iter(weeks)))
        else:
            week_filter = WeekFilter(week_range=(min(weeks), max(weeks)))
        rows.extend(await weather_source.get_daily_weather(
            db, area_code=area_code, years=[year], week_filter=week_filter
        ))
    return rows


async def load_weekly_snapshots(
    db: AsyncSession,
    area_code: str,
    years: Sequence[int],
    week_filter: WeekFilter,
    *,
    case_source=weekly_dengue_case,
    weather_source=daily_weather
) -> AggregationResult:
    """
    Fetch and assemble snapshots for inputs that are already validated.

    Used directly by bulk workers, which validate once per run.
    """
    try:
        case_records = await case_source.get_weekly_cases(
            db, area_code=area_code, years=years, week_filter=week_filter
        )
        if not case_records:
            logger.info(f"No dengue case data for {area_code} in {list(years)}")
            return AggregationResult(missing_lag_weeks=(area_code,))

        weather_rows = await _fetch_lagged_weather(db, area_code, case_records, weather_source)
    except SQLAlchemyError as e:
        logger.error(f"Database error while retrieving weekly weather snapshots for {area_code}: {e}")
        raise

    return assemble_snapshots(area_code, case_records, weather_rows)


async def get_weekly_snapshots(
    db: AsyncSession,
    area_code: str,
    years: Iterable[int],
    week_filter: Optional[WeekFilter] = None,
    *,
    case_source=weekly_dengue_case,
    weather_source=daily_weather
) -> AggregationResult:
    """
    Get weekly snapshots for one area.

    Args:
        db: Database session
        area_code: PSGC code
        years: Dengue ISO years
        week_filter: Optional dengue week number or week range
        case_source: Provider of get_weekly_cases (defaults to the database)
        weather_source: Provider of get_daily_weather (defaults to the database)

    Returns:
        AggregationResult for the area

    Raises:
        ValidationError: for malformed area codes, years or week filters
    """
    code = validate_area_code(area_code)
    valid_years = validate_years(years)
    valid_filter = validate_week_filter(week_filter)

    return await load_weekly_snapshots(
        db, code, valid_years, valid_filter,
        case_source=case_source, weather_source=weather_source
    )


async def get_single_week_snapshot(
    db: AsyncSession,
    area_code: str,
    year: int,
    week_number: int,
    *,
    weather_source=daily_weather
) -> WeeklySnapshot:
    """
    Get the snapshot of a single observation week for real-time prediction.

    The week passed in is the observation (lag) week; the snapshot's dengue
    week is the week its weather feeds, 14 days later. No case count is
    attached.

    Raises:
        ValidationError: for malformed area codes, weeks, or years before
            MIN_SNAPSHOT_YEAR
        NotFoundError: if the week has fewer than 7 daily observations
    """
    code = validate_area_code(area_code)
    validate_week_number(week_number)
    if year < settings.MIN_SNAPSHOT_YEAR:
        logger.warning(f"Single-week snapshot requested for unsupported year {year}.")
        raise ValidationError(f"Years before {settings.MIN_SNAPSHOT_YEAR} cannot be processed.")

    try:
        rows = await weather_source.get_daily_weather(
            db, area_code=code, years=[year], week_filter=WeekFilter(week_number=week_number)
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error while retrieving weather for {code} {year}-W{week_number:02d}: {e}")
        raise

    if len(rows) < DAYS_PER_WEEK:
        raise NotFoundError(
            f"Only {len(rows)} of {DAYS_PER_WEEK} daily observations available "
            f"for {code} in {year}-W{week_number:02d}."
        )
    _require_one_row_per_day(rows, f"{year}-W{week_number:02d}")

    monday = week_start(year, week_number)
    dengue_year, dengue_week = iso_week(monday + timedelta(days=LAG_DAYS))

    return WeeklySnapshot(
        area_code=code,
        dengue_year=dengue_year,
        dengue_week=dengue_week,
        dengue_case_count=None,
        lag_year=year,
        lag_week=week_number,
        lag_week_start_date=monday,
        **summarize_week(sorted(rows, key=lambda r: r.date))
    )


async def get_lagged_week_snapshot(
    db: AsyncSession,
    area_code: str,
    selected_date: date,
    *,
    weather_source=daily_weather
) -> WeeklySnapshot:
    """Snapshot of the observation week that feeds the week of selected_date."""
    lag = lag_window(selected_date)
    return await get_single_week_snapshot(
        db, area_code, lag.iso_year, lag.iso_week, weather_source=weather_source
    )

"""
Weather and dengue case read operations.

This module contains the storage queries the aggregation engine depends on:
weekly dengue cases, daily weather joined with weather code descriptions,
and the list of areas included in bulk runs.
"""

from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func

from dengue_watch.crud.base import CRUDBase
from dengue_watch.models.administrative_area import AdministrativeArea
from dengue_watch.models.daily_weather import DailyWeather
from dengue_watch.models.weather_code import WeatherCode
from dengue_watch.models.weekly_dengue_case import WeeklyDengueCase
from dengue_watch.schemas.training_data import DailyWeatherObservation, WeeklyCaseRecord
from dengue_watch.utils.iso_calendar import WeekFilter, week_filter_date_ranges
from dengue_watch.utils.logging_config import get_logger

logger = get_logger(__name__)


class CRUDAdministrativeArea(CRUDBase[AdministrativeArea]):
    """
    Read operations for AdministrativeArea model.
    """

    async def get_codes_by_level(self, db: AsyncSession, *, level: str) -> List[str]:
        """
        Get the PSGC codes of every area at a geographic level.

        Args:
            db: Database session
            level: Geographic level, compared case-insensitively (e.g. "bgy")

        Returns:
            Sorted list of PSGC codes
        """
        result = await db.execute(
            select(AdministrativeArea.psgc_code)
            .where(func.lower(AdministrativeArea.geographic_level) == level.lower())
            .order_by(AdministrativeArea.psgc_code)
        )
        return list(result.scalars().all())


class CRUDWeeklyDengueCase(CRUDBase[WeeklyDengueCase]):
    """
    Read operations for WeeklyDengueCase model.
    """

    async def get_weekly_cases(
        self,
        db: AsyncSession,
        *,
        area_code: str,
        years: Iterable[int],
        week_filter: Optional[WeekFilter] = None
    ) -> List[WeeklyCaseRecord]:
        """
        Get weekly dengue case counts for an area.

        Args:
            db: Database session
            area_code: PSGC code
            years: ISO years to include
            week_filter: Optional single week or week range

        Returns:
            List of WeeklyCaseRecord ordered by year and week
        """
        conditions = [
            WeeklyDengueCase.psgc_code == area_code,
            WeeklyDengueCase.year.in_(list(years)),
        ]
        if week_filter is not None:
            from_week, to_week = week_filter.bounds()
            conditions.append(WeeklyDengueCase.week_number.between(from_week, to_week))

        result = await db.execute(
            select(
                WeeklyDengueCase.psgc_code,
                WeeklyDengueCase.year,
                WeeklyDengueCase.week_number,
                WeeklyDengueCase.case_count,
            )
            .where(and_(*conditions))
            .order_by(WeeklyDengueCase.year, WeeklyDengueCase.week_number)
        )
        rows = result.all()
        logger.debug(f"Retrieved {len(rows)} weekly dengue case rows for {area_code}")

        return [
            WeeklyCaseRecord(
                area_code=row.psgc_code,
                iso_year=row.year,
                iso_week=row.week_number,
                case_count=row.case_count,
            )
            for row in rows
        ]


class CRUDDailyWeather(CRUDBase[DailyWeather]):
    """
    Read operations for DailyWeather model.

    Dates are selected through ISO week date ranges computed in Python so
    the same query runs on PostgreSQL and SQLite.
    """

    async def get_daily_weather(
        self,
        db: AsyncSession,
        *,
        area_code: str,
        years: Iterable[int],
        week_filter: Optional[WeekFilter] = None
    ) -> List[DailyWeatherObservation]:
        """
        Get daily weather observations within ISO weeks of the given years.

        Args:
            db: Database session
            area_code: PSGC code
            years: ISO years to include
            week_filter: Optional single week or week range

        Returns:
            List of DailyWeatherObservation ordered by date
        """
        date_ranges = week_filter_date_ranges(years, week_filter or WeekFilter())
        if not date_ranges:
            return []

        result = await db.execute(
            select(
                DailyWeather.date,
                DailyWeather.psgc_code,
                DailyWeather.temperature,
                DailyWeather.humidity,
                DailyWeather.precipitation,
                DailyWeather.weather_code_id,
                WeatherCode.main_description,
            )
            .outerjoin(WeatherCode, WeatherCode.id == DailyWeather.weather_code_id)
            .where(
                and_(
                    DailyWeather.psgc_code == area_code,
                    or_(*[
                        DailyWeather.date.between(start, end)
                        for start, end in date_ranges
                    ])
                )
            )
            .order_by(DailyWeather.date)
        )
        rows = result.all()
        logger.debug(f"Retrieved {len(rows)} daily weather rows for {area_code}")

        return [
            DailyWeatherObservation(
                date=row.date,
                area_code=row.psgc_code,
                temperature=row.temperature,
                humidity=row.humidity,
                precipitation=row.precipitation,
                weather_code_id=row.weather_code_id,
                weather_description=row.main_description,
            )
            for row in rows
        ]


administrative_area = CRUDAdministrativeArea(AdministrativeArea)
weekly_dengue_case = CRUDWeeklyDengueCase(WeeklyDengueCase)
daily_weather = CRUDDailyWeather(DailyWeather)

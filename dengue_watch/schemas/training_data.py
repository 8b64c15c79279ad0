"""
Training data schemas.

One canonical set of types shared by the aggregation engine, the HTTP
endpoints and downstream consumers (CSV export, ML feature builders):
daily inputs, weekly statistics, snapshots and aggregation results, plus
the request bodies of the training data endpoints.
"""

from datetime import date as DateType
from typing import List, Optional, Tuple

from pydantic import Field, model_validator

from dengue_watch.schemas.base import BaseSchema, ValueSchema
from dengue_watch.utils.iso_calendar import WeekFilter


# ============================================================================
# ENGINE INPUTS
# ============================================================================

class DailyWeatherObservation(ValueSchema):
    """One day of weather for an area, joined with its weather code text."""
    date: DateType
    area_code: str
    temperature: float = Field(..., description="Mean temperature in °C")
    humidity: float = Field(..., description="Mean relative humidity in %")
    precipitation: float = Field(..., description="Precipitation sum in mm")
    weather_code_id: int = Field(..., description="WMO weather code")
    weather_description: Optional[str] = Field(
        None,
        description="Main description of the weather code (e.g. 'Slight rain')"
    )


class WeeklyCaseRecord(ValueSchema):
    """Dengue cases reported for an area in one ISO week."""
    area_code: str
    iso_year: int
    iso_week: int = Field(..., ge=1, le=53)
    case_count: int = Field(..., ge=0)


# ============================================================================
# ENGINE OUTPUTS
# ============================================================================

class WeeklyStatistic(ValueSchema):
    """Weekly mean and maximum of one measurement."""
    mean: float
    max: float


class WeeklySnapshot(ValueSchema):
    """
    Aggregated features for one (area, dengue week) pair.

    Weather fields describe the lag window: the ISO week containing the
    date 14 days before the dengue week's Monday.
    """
    area_code: str = Field(..., description="PSGC code of the area")
    dengue_year: int = Field(..., description="ISO year of the dengue reporting week")
    dengue_week: int = Field(..., ge=1, le=53, description="ISO week of the dengue reporting week")
    dengue_case_count: Optional[int] = Field(
        None,
        description="Reported cases; None for real-time prediction snapshots"
    )
    lag_year: int = Field(..., description="ISO year of the weather observation week")
    lag_week: int = Field(..., ge=1, le=53, description="ISO week of the weather observation week")
    lag_week_start_date: DateType = Field(..., description="Monday of the observation week")

    temperature_stats: WeeklyStatistic
    humidity_stats: WeeklyStatistic
    precipitation_stats: WeeklyStatistic

    most_common_weather_code_id: int = Field(..., description="Modal WMO code, 0 when unknown")
    most_common_weather_description: Optional[str] = None
    occurrence_count: int = Field(..., ge=0, description="Days the modal code occurred")
    dominant_weather_category: str
    is_wet_week: bool


class AggregationResult(ValueSchema):
    """
    Snapshots plus the lag weeks that could not be aggregated.

    ``missing_lag_weeks`` holds ``YYYY-Www`` markers, or the bare area code
    when the area had no case data at all.
    """
    snapshots: Tuple[WeeklySnapshot, ...] = ()
    missing_lag_weeks: Tuple[str, ...] = ()


# ============================================================================
# REQUESTS
# ============================================================================

class WeekRange(BaseSchema):
    """Inclusive ISO week range."""
    week_from: int = Field(..., ge=1, le=53)
    week_to: int = Field(..., ge=1, le=53)

    @model_validator(mode="after")
    def check_order(self):
        if self.week_from > self.week_to:
            raise ValueError("week_from must be less than or equal to week_to")
        return self


class WeekFilterRequest(BaseSchema):
    """Years plus an optional single week or week range (not both)."""
    years: List[int] = Field(..., min_length=1, description="Dengue ISO years to include")
    week_number: Optional[int] = Field(None, ge=1, le=53)
    week_range: Optional[WeekRange] = None

    @model_validator(mode="after")
    def check_single_filter(self):
        if self.week_number is not None and self.week_range is not None:
            raise ValueError("Specify either week_number or week_range, not both")
        return self

    def to_week_filter(self) -> WeekFilter:
        if self.week_range is not None:
            return WeekFilter(week_range=(self.week_range.week_from, self.week_range.week_to))
        return WeekFilter(week_number=self.week_number)


class WeeklyTrainingWeatherRequest(WeekFilterRequest):
    """Request body for single-area weekly snapshots."""
    area_code: str = Field(..., description="PSGC code", examples=["097332001"])


class BulkTrainingWeatherRequest(WeekFilterRequest):
    """Request body for snapshots across every area of a geographic level."""
    geographic_level: Optional[str] = Field(
        None,
        description="Administrative level to include; defaults to BULK_GEOGRAPHIC_LEVEL"
    )

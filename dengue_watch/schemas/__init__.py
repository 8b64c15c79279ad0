# Pydantic schemas package

from dengue_watch.schemas.base import BaseSchema, ValueSchema
from dengue_watch.schemas.training_data import (
    DailyWeatherObservation, WeeklyCaseRecord,
    WeeklyStatistic, WeeklySnapshot, AggregationResult,
    WeekRange, WeekFilterRequest,
    WeeklyTrainingWeatherRequest, BulkTrainingWeatherRequest,
)

__all__ = [
    # Base schemas
    "BaseSchema", "ValueSchema",

    # Engine values
    "DailyWeatherObservation", "WeeklyCaseRecord",
    "WeeklyStatistic", "WeeklySnapshot", "AggregationResult",

    # Requests
    "WeekRange", "WeekFilterRequest",
    "WeeklyTrainingWeatherRequest", "BulkTrainingWeatherRequest",
]

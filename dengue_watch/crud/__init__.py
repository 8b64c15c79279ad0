# Read operations package

from dengue_watch.crud.base import CRUDBase
from dengue_watch.crud.weather import (
    CRUDAdministrativeArea, CRUDWeeklyDengueCase, CRUDDailyWeather,
    administrative_area, weekly_dengue_case, daily_weather,
)

__all__ = [
    "CRUDBase",
    "CRUDAdministrativeArea", "CRUDWeeklyDengueCase", "CRUDDailyWeather",
    "administrative_area", "weekly_dengue_case", "daily_weather",
]

# Database models package

from dengue_watch.models.base import BaseModel
from dengue_watch.models.administrative_area import AdministrativeArea
from dengue_watch.models.weather_code import WeatherCode
from dengue_watch.models.daily_weather import DailyWeather
from dengue_watch.models.weekly_dengue_case import WeeklyDengueCase

__all__ = [
    "BaseModel",
    "AdministrativeArea",
    "WeatherCode",
    "DailyWeather",
    "WeeklyDengueCase",
]

# Configure all mappers after all models are imported
# This resolves bidirectional relationships defined with string references
from sqlalchemy.orm import configure_mappers
configure_mappers()

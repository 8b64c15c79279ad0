"""
WMO weather code lookup model.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from dengue_watch.database import Base


class WeatherCode(Base):
    """
    WMO weather interpretation code with its human readable description.

    ``main_description`` is the text the dominant-weather and wet-week
    classifiers read (e.g. "Slight rain", "Thunderstorm", "Clear sky").
    """

    __tablename__ = "weather_codes"

    id = Column(Integer, primary_key=True, autoincrement=False, comment="WMO weather code")
    main_description = Column(String(200), nullable=False, comment="Primary description")
    sub_description = Column(String(400), nullable=True, comment="Optional detail")

    daily_weather = relationship("DailyWeather", back_populates="weather_code")

    def __repr__(self):
        return f"<WeatherCode(id={self.id}, main_description='{self.main_description}')>"

"""
Daily weather database model.

One row per (area, date) written by the external weather ingestion job.
The aggregation engine only reads these rows.
"""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from dengue_watch.models.base import BaseModel


class DailyWeather(BaseModel):
    """
    Daily weather observation for an administrative area.

    Carries a single reading per measurement and day, so weekly statistics
    treat the same series as both daily minimum and daily maximum.
    """

    __tablename__ = "daily_weather"

    date = Column(Date, nullable=False, index=True, comment="Observation date")
    psgc_code = Column(
        String(10),
        ForeignKey("administrative_areas.psgc_code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Reference to the administrative area"
    )
    weather_code_id = Column(
        Integer,
        ForeignKey("weather_codes.id", ondelete="RESTRICT"),
        nullable=False,
        comment="WMO weather code of the day"
    )
    temperature = Column(Float, nullable=False, comment="Mean temperature in °C")
    precipitation = Column(Float, nullable=False, comment="Precipitation sum in mm")
    humidity = Column(Float, nullable=False, comment="Mean relative humidity in %")

    administrative_area = relationship("AdministrativeArea", back_populates="daily_weather")
    weather_code = relationship("WeatherCode", back_populates="daily_weather")

    __table_args__ = (
        UniqueConstraint('date', 'psgc_code', name='uq_daily_weather_date_psgc'),
        Index('idx_daily_weather_psgc_date', 'psgc_code', 'date'),
    )

    def __repr__(self):
        return f"<DailyWeather(id={self.id}, psgc_code='{self.psgc_code}', date={self.date})>"

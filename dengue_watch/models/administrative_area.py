"""
Administrative area database model.

Master data for PSGC (Philippine Standard Geographic Code) areas. The PSGC
code is the join key across case counts, daily weather and snapshots.
"""

from sqlalchemy import Column, Numeric, String, Index
from sqlalchemy.orm import relationship

from dengue_watch.database import Base


class AdministrativeArea(Base):
    """
    Administrative area (region, province, city/municipality or barangay).

    Bulk snapshot runs iterate over the areas of a single geographic level,
    barangays ("bgy") by default.
    """

    __tablename__ = "administrative_areas"

    psgc_code = Column(String(10), primary_key=True, comment="PSGC code of the area")
    name = Column(String(200), nullable=False, comment="Area name")
    geographic_level = Column(
        String(50),
        nullable=False,
        comment="Geographic level (Reg, Prov, City, Mun, Bgy)"
    )
    old_names = Column(String(500), nullable=True, comment="Former names, comma separated")
    latitude = Column(Numeric(9, 6), nullable=True, comment="Centroid latitude in degrees")
    longitude = Column(Numeric(9, 6), nullable=True, comment="Centroid longitude in degrees")

    # Relationships
    daily_weather = relationship("DailyWeather", back_populates="administrative_area")
    weekly_dengue_cases = relationship("WeeklyDengueCase", back_populates="administrative_area")

    __table_args__ = (
        Index('idx_administrative_area_level', 'geographic_level'),
    )

    def __repr__(self):
        return f"<AdministrativeArea(psgc_code='{self.psgc_code}', name='{self.name}')>"

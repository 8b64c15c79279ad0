"""
Weekly dengue case database model.

Reported dengue cases per area and ISO week, loaded by the external
surveillance import.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from dengue_watch.models.base import BaseModel


class WeeklyDengueCase(BaseModel):
    """
    Dengue case count reported for one area in one ISO week.

    ``year`` and ``week_number`` follow ISO 8601 week numbering (1-53).
    """

    __tablename__ = "weekly_dengue_cases"

    psgc_code = Column(
        String(10),
        ForeignKey("administrative_areas.psgc_code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Reference to the administrative area"
    )
    year = Column(Integer, nullable=False, comment="ISO 8601 year of the reporting week")
    week_number = Column(Integer, nullable=False, comment="ISO 8601 week number (1-53)")
    case_count = Column(Integer, nullable=False, comment="Reported dengue cases")

    administrative_area = relationship("AdministrativeArea", back_populates="weekly_dengue_cases")

    __table_args__ = (
        UniqueConstraint('year', 'week_number', 'psgc_code', name='uq_weekly_dengue_year_week_psgc'),
        CheckConstraint('week_number BETWEEN 1 AND 53', name='ck_weekly_dengue_week_range'),
        Index('idx_weekly_dengue_psgc_year', 'psgc_code', 'year'),
    )

    def __repr__(self):
        return (
            f"<WeeklyDengueCase(id={self.id}, psgc_code='{self.psgc_code}', "
            f"year={self.year}, week={self.week_number})>"
        )

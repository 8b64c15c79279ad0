"""
Shared test fixtures.

Tests run against a throwaway SQLite database. The environment is set
before any dengue_watch import so the application engine points at SQLite
as well.
"""

import os

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_dengue_watch.db"

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", TEST_DATABASE_URL)
os.environ.setdefault("LOG_DIR", "logs")

from datetime import date, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from dengue_watch.database import Base
from dengue_watch.models import AdministrativeArea, DailyWeather, WeatherCode, WeeklyDengueCase

engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Barangay with a complete lag window for dengue week 2023-W10
AREA_CLEAR = "097332001"
# Barangay with a rainy lag window for dengue week 2023-W10
AREA_RAINY = "097332002"
# Barangay without any dengue case rows
AREA_NO_CASES = "097332003"
# City, excluded from barangay bulk runs
AREA_CITY = "0973300000"

LAG_MONDAY = date(2023, 2, 20)  # Monday of 2023-W08
TEMPERATURES = [27, 28, 27, 29, 26, 27, 28]
PRECIPITATION = [0, 0, 5, 40, 10, 0, 0]
HUMIDITY = [80, 82, 85, 90, 88, 81, 79]


@pytest.fixture
async def db_session():
    """Create test database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestingSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory():
    """Session factory bound to the test database."""
    return TestingSessionLocal


def _week_of_weather(area_code, monday, temperatures, precipitation, humidity, weather_code_id):
    return [
        DailyWeather(
            date=monday + timedelta(days=i),
            psgc_code=area_code,
            weather_code_id=weather_code_id,
            temperature=temperatures[i],
            precipitation=precipitation[i],
            humidity=humidity[i],
        )
        for i in range(len(temperatures))
    ]


@pytest.fixture
async def seeded_db(db_session: AsyncSession):
    """
    Database with four areas, two weather codes, weekly cases and one full
    lag window (2023-W08) for each barangay that has cases.

    Dengue week 2023-W11 of AREA_CLEAR has no weather in its lag window
    (2023-W09).
    """
    db_session.add_all([
        WeatherCode(id=0, main_description="clear", sub_description="Clear sky"),
        WeatherCode(id=61, main_description="Slight rain"),
        AdministrativeArea(psgc_code=AREA_CLEAR, name="Barangay Uno", geographic_level="Bgy"),
        AdministrativeArea(psgc_code=AREA_RAINY, name="Barangay Dos", geographic_level="bgy"),
        AdministrativeArea(psgc_code=AREA_NO_CASES, name="Barangay Tres", geographic_level="Bgy"),
        AdministrativeArea(psgc_code=AREA_CITY, name="Zamboanga City", geographic_level="City"),
    ])
    await db_session.flush()

    db_session.add_all([
        WeeklyDengueCase(psgc_code=AREA_CLEAR, year=2023, week_number=10, case_count=12),
        WeeklyDengueCase(psgc_code=AREA_CLEAR, year=2023, week_number=11, case_count=3),
        WeeklyDengueCase(psgc_code=AREA_RAINY, year=2023, week_number=10, case_count=4),
        WeeklyDengueCase(psgc_code=AREA_CITY, year=2023, week_number=10, case_count=40),
    ])
    db_session.add_all(_week_of_weather(
        AREA_CLEAR, LAG_MONDAY, TEMPERATURES, PRECIPITATION, HUMIDITY, weather_code_id=0
    ))
    db_session.add_all(_week_of_weather(
        AREA_RAINY, LAG_MONDAY, [25.0] * 7, [2.0] * 7, [95.0] * 7, weather_code_id=61
    ))
    db_session.add_all(_week_of_weather(
        AREA_CITY, LAG_MONDAY, TEMPERATURES, PRECIPITATION, HUMIDITY, weather_code_id=0
    ))
    await db_session.commit()

    yield db_session

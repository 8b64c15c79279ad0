"""
Training data router.

This module contains the endpoints that produce weekly weather snapshots
for model training, for one area or for every area of a geographic level.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from dengue_watch.config import settings
from dengue_watch.crud.weather import administrative_area as area_crud
from dengue_watch.database import async_session, get_db
from dengue_watch.schemas.training_data import (
    AggregationResult,
    BulkTrainingWeatherRequest,
    WeeklyTrainingWeatherRequest,
)
from dengue_watch.utils.bulk import BulkSnapshotCoordinator
from dengue_watch.utils.logging_config import get_logger
from dengue_watch.utils.snapshots import get_weekly_snapshots

logger = get_logger(__name__)

router = APIRouter(
    prefix="/training-data",
    tags=["Training Data"],
    responses={
        400: {"description": "Invalid area code, years or week filter"},
        422: {"description": "Weather data cannot be aggregated"},
    },
)

limiter = Limiter(key_func=get_remote_address)


def get_bulk_coordinator() -> BulkSnapshotCoordinator:
    """Dependency returning a coordinator bound to the application session factory."""
    return BulkSnapshotCoordinator(async_session, settings.BULK_WORKER_COUNT)


@router.post("/weekly-weather", response_model=AggregationResult)
@limiter.limit("30/minute")
async def get_weekly_training_weather(
    request: Request,
    body: WeeklyTrainingWeatherRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Get weekly weather snapshots for one area.

    Each dengue week is paired with the weather of the ISO week 14 days
    earlier. Lag weeks without 7 daily observations are listed in
    `missing_lag_weeks`.

    Rate limit: 30 requests per minute
    """
    return await get_weekly_snapshots(
        db, body.area_code, body.years, body.to_week_filter()
    )


@router.post("/weekly-weather/bulk", response_model=AggregationResult)
@limiter.limit("10/minute")
async def get_weekly_training_weather_bulk(
    request: Request,
    body: BulkTrainingWeatherRequest,
    db: AsyncSession = Depends(get_db),
    coordinator: BulkSnapshotCoordinator = Depends(get_bulk_coordinator),
):
    """
    Get weekly weather snapshots for every area of a geographic level.

    Defaults to barangays (`bgy`). Snapshots are ordered by area code,
    dengue year and week.

    Rate limit: 10 requests per minute
    """
    level = body.geographic_level or settings.BULK_GEOGRAPHIC_LEVEL
    area_codes = await area_crud.get_codes_by_level(db, level=level)
    logger.info(f"Bulk training data requested for {len(area_codes)} '{level}' areas")

    return await coordinator.run(area_codes, body.years, body.to_week_filter())

"""
Weather summary router.

Single-week snapshots for real-time prediction. The requested week is the
observation week; the returned snapshot names the dengue week it feeds.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from dengue_watch.database import get_db
from dengue_watch.schemas.training_data import WeeklySnapshot
from dengue_watch.utils.snapshots import get_lagged_week_snapshot, get_single_week_snapshot

router = APIRouter(
    prefix="/weather-summary",
    tags=["Weather Summary"],
    responses={
        400: {"description": "Invalid area code, year or week"},
        404: {"description": "Week does not have 7 daily observations"},
    },
)

limiter = Limiter(key_func=get_remote_address)


@router.get("/lagged-date", response_model=WeeklySnapshot)
@limiter.limit("100/minute")
async def get_lagged_date_summary(
    request: Request,
    area_code: str = Query(..., description="PSGC code", examples=["097332001"]),
    date_selected: date = Query(..., description="Date within the week being predicted"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the snapshot of the observation week 14 days before `date_selected`.

    Rate limit: 100 requests per minute
    """
    return await get_lagged_week_snapshot(db, area_code, date_selected)


@router.get("/{area_code}/{year}/{week}", response_model=WeeklySnapshot)
@limiter.limit("100/minute")
async def get_weekly_summary(
    request: Request,
    area_code: str,
    year: int,
    week: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get the snapshot of one observation week.

    Rate limit: 100 requests per minute
    """
    return await get_single_week_snapshot(db, area_code, year, week)

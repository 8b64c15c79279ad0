"""
Status router.

This module contains the service status endpoint.
"""

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from dengue_watch import __version__
from dengue_watch.config import settings

router = APIRouter(
    prefix="/status",
    tags=["status"],
)

limiter = Limiter(key_func=get_remote_address)


@router.get("", response_model=dict)
@limiter.limit("60/minute")
async def get_status(request: Request):
    """
    Get API status and the aggregation settings in effect.

    Rate limit: 60 requests per minute

    Returns:
        dict: Status information
    """
    return {
        "status": "ok",
        "service": settings.SERVER_NAME,
        "version": __version__,
        "bulk_worker_count": settings.BULK_WORKER_COUNT,
        "bulk_geographic_level": settings.BULK_GEOGRAPHIC_LEVEL,
        "min_snapshot_year": settings.MIN_SNAPSHOT_YEAR,
    }

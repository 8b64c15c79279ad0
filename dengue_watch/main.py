"""
Main FastAPI application for the Dengue Watch feature API.

This module contains the main FastAPI application instance and root endpoint.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from dengue_watch import __version__
from dengue_watch.config import settings
from dengue_watch.exceptions import DengueWatchError
from dengue_watch.routers.status import router as status_router
from dengue_watch.routers.training_data import router as training_data_router
from dengue_watch.routers.weather_summary import router as weather_summary_router
from dengue_watch.utils.logging_config import setup_logging, get_logger

# Import all models to ensure SQLAlchemy relationships are properly configured
import dengue_watch.models  # noqa: F401

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Note: Database tables are managed through Alembic migrations.
    Run `alembic upgrade head` to create/update database tables.
    """
    logger.info("=" * 60)
    logger.info(f"{settings.SERVER_NAME} - Application starting up")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"API Version: {settings.API_V1_STR}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    logger.info(f"Bulk workers: {settings.BULK_WORKER_COUNT}")
    logger.info("=" * 60)

    yield

    logger.info("=" * 60)
    logger.info(f"{settings.SERVER_NAME} - Application shutting down")
    logger.info("=" * 60)


app = FastAPI(
    title=settings.SERVER_NAME,
    description="Weekly weather features aligned with dengue case reports for model training and prediction",
    version=__version__,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DengueWatchError)
async def domain_exception_handler(request: Request, exc: DengueWatchError):
    """Translate domain errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "status_code": exc.status_code
        }
    )

# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/")
@limiter.limit(f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_WINDOW}seconds")
async def root(request: Request):
    """
    Root endpoint returning API information.
    """
    return {
        "message": f"Welcome to {settings.SERVER_NAME}",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
@limiter.limit("60/minute")
async def health_check(request: Request):
    """
    Health check endpoint.

    Rate limit: 60 requests per minute
    """
    return {"status": "healthy"}


# Include routers
app.include_router(status_router, prefix=settings.API_V1_STR)
app.include_router(training_data_router, prefix=settings.API_V1_STR)
app.include_router(weather_summary_router, prefix=settings.API_V1_STR)

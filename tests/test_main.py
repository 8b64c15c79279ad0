"""
Basic tests for the Dengue Watch feature API.

This module contains tests for the application-level endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from dengue_watch.main import app
from dengue_watch.config import settings


@pytest.fixture
def client():
    """Test client fixture."""
    return TestClient(app)


def test_root_endpoint(client):
    """Test the root endpoint returns correct response."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert "docs" in data


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_endpoint(client):
    """Test the status endpoint reports the aggregation settings."""
    response = client.get(f"{settings.API_V1_STR}/status")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["bulk_worker_count"] == settings.BULK_WORKER_COUNT
    assert data["bulk_geographic_level"] == "bgy"
    assert data["min_snapshot_year"] == 2012


def test_openapi_docs_available(client):
    """Test that OpenAPI documentation is available."""
    response = client.get("/docs")
    assert response.status_code == 200

    response = client.get(f"{settings.API_V1_STR}/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert f"{settings.API_V1_STR}/training-data/weekly-weather" in paths
    assert f"{settings.API_V1_STR}/training-data/weekly-weather/bulk" in paths
    assert f"{settings.API_V1_STR}/weather-summary/lagged-date" in paths
    assert f"{settings.API_V1_STR}/weather-summary/{{area_code}}/{{year}}/{{week}}" in paths

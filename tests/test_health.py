"""
Tests for health check endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint(test_client: AsyncClient):
    """Test health endpoint returns 200."""
    response = await test_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert "status" in data
    assert "uptime" in data
    assert "checks" in data
    assert data["status"] in ["ok", "degraded"]


@pytest.mark.asyncio
async def test_health_endpoint_api_v1(test_client: AsyncClient):
    """Test health endpoint via API v1 prefix."""
    response = await test_client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["uptime"].startswith("PT")
    assert "database" in data["checks"]


"""
Health check API integration tests.
Confirms the server answers and reports its export configuration.
"""

from httpx import AsyncClient


async def test_health_check(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_health_check_detail(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/detail")
    assert response.status_code == 200

    config = response.json()["config"]
    assert config["font_family"] == "Helvetica"
    assert config["custom_fonts_configured"] is False
    assert "output_dir" in config


async def test_root(async_client: AsyncClient):
    response = await async_client.get("/")
    assert response.status_code == 200
    assert response.json()["api"] == "/api/v1"

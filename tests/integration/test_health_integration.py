import pytest


@pytest.mark.asyncio
async def test_health_check_endpoint(client):
    """Test standard health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["service"] == "Hospeda"


@pytest.mark.asyncio
async def test_liveness_check_endpoint(client):
    """Test liveness probe endpoint."""
    response = await client.get("/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_readiness_check_endpoint(client):
    """Test readiness probe endpoint when the database is reachable."""
    response = await client.get("/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["database"] == "connected"


@pytest.mark.asyncio
async def test_readiness_without_database(settings):
    """Readiness reports 503 when no database is attached."""
    from httpx import ASGITransport, AsyncClient

    from hospeda.infrastructure.api.app import create_app

    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


@pytest.mark.asyncio
async def test_api_root(client):
    response = await client.get("/api/v1")

    assert response.status_code == 200
    assert response.json()["api_version"] == "v1"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"

"""
Health check endpoint tests.
"""

import pytest


@pytest.mark.asyncio
async def test_health_endpoint(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "comissao"}


@pytest.mark.asyncio
async def test_readiness_endpoint(client):
    resp = await client.get("/api/health/ready")
    assert resp.json() == {"status": "ready", "database": "connected"}


@pytest.mark.asyncio
async def test_liveness_endpoint(client):
    resp = await client.get("/api/health/live")
    assert resp.json() == {"status": "alive"}

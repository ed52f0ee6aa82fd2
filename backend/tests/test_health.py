"""
Archivist Backend - Health Endpoint Tests
===========================================
"""

import pytest

from archivist import __version__


class TestHealthEndpoints:

    @pytest.mark.asyncio
    async def test_root_liveness_text(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "API is running!"

    @pytest.mark.asyncio
    async def test_healthy_when_store_reachable(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_unhealthy_when_store_down(self, test_client, fake_store):
        fake_store.healthy = False

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_reports_cache_counters(self, test_client, fake_store, sample_record):
        fake_store.records[7] = sample_record
        await test_client.get("/assets/7/raw")
        await test_client.get("/assets/7/raw")

        cache = (await test_client.get("/health")).json()["cache"]

        assert cache["misses"] == 1
        assert cache["hits"] == 1
        assert cache["read_errors"] == 0

"""
Tests for the liveness and readiness probes.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from unittest.mock import patch

import pytest


class TestHealthEndpoints:
    @pytest.mark.anyio
    async def test_liveness(self, anon_client):
        response = await anon_client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.anyio
    async def test_ready_when_all_dependencies_up(self, anon_client):
        response = await anon_client.get("/api/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["db"]["healthy"] is True
        assert body["checks"]["session_store"]["healthy"] is True

    @pytest.mark.anyio
    async def test_not_ready_when_session_store_down(self, anon_client, redis_client):
        """
        Test readiness reports 503 with the failing check.

        Arrange: Redis ping fails
        Act: GET /api/health/ready
        Assert: 503, session_store unhealthy with an error, db healthy
        """
        # Arrange
        redis_client.ping.return_value = False

        # Act
        response = await anon_client.get("/api/health/ready")

        # Assert
        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "not_ready"
        assert body["checks"]["session_store"]["error"] == "Session store unreachable"
        assert body["checks"]["db"]["healthy"] is True

    @pytest.mark.anyio
    async def test_not_ready_when_database_down(self, anon_client):
        with patch("aloha.api.v1.health.check_database", return_value=False):
            response = await anon_client.get("/api/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["db"]["healthy"] is False

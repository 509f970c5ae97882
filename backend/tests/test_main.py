"""
Tests for app/main.py - FastAPI application, exception mapping and health checks.
"""
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import status
from fastapi.responses import JSONResponse

from app.core.exceptions import BusinessRuleError, EmployeeNotFoundError


class TestHealthEndpoint:
    """Test application health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check_healthy(self):
        """Health check should return healthy when DB is connected."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = True

            response = await health_check()

        assert response.status == "healthy"
        assert response.checks["database"] is True

    @pytest.mark.asyncio
    async def test_health_check_unavailable_when_db_down(self):
        """Health check should return 503 when DB is down."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = False

            response = await health_check()

        assert isinstance(response, JSONResponse)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert json.loads(response.body)["status"] == "unhealthy"


class TestBusinessRuleHandler:
    """Test mapping of business rule violations to JSON errors."""

    @pytest.mark.asyncio
    async def test_business_rule_maps_to_400(self, mock_request):
        from app.main import business_rule_exception_handler

        mock_request.url.path = "/api/v1/employees/"
        response = await business_rule_exception_handler(
            mock_request, BusinessRuleError("Email already exists.")
        )

        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["error"] == "Email already exists."
        assert body["detail"] is None
        assert body["path"] == "/api/v1/employees/"
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_not_found_maps_to_404(self, mock_request):
        from app.main import business_rule_exception_handler

        response = await business_rule_exception_handler(mock_request, EmployeeNotFoundError())

        assert response.status_code == 404
        assert json.loads(response.body)["error"] == "Employee not found."


class TestGlobalExceptionHandler:
    """Test global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_in_dev_includes_details(self, mock_request):
        """In development, exception details should be included."""
        from app.main import global_exception_handler

        response = await global_exception_handler(mock_request, ValueError("Test error message"))

        body = json.loads(response.body)
        assert response.status_code == 500
        assert body["error"] == "ValueError"
        assert body["detail"] == "Test error message"

    @pytest.mark.asyncio
    async def test_exception_handler_in_production_hides_details(self, mock_request):
        """In production, only a reference id is returned."""
        from app import main

        production_settings = MagicMock(IS_PRODUCTION=True)
        with patch.object(main, "settings", production_settings):
            response = await main.global_exception_handler(
                mock_request, RuntimeError("password=hunter2")
            )

        body = json.loads(response.body)
        assert response.status_code == 500
        assert body["error"] == "An unexpected error occurred."
        assert body["detail"].startswith("Reference ID: ")
        assert "hunter2" not in response.body.decode()

    @pytest.mark.asyncio
    async def test_exception_handler_echoes_allowed_origin(self, mock_request):
        from app import main

        mock_request.headers = {"origin": "http://localhost:5173"}
        with patch.object(main, "cors_origins", ["http://localhost:5173"]):
            response = await main.global_exception_handler(mock_request, Exception("boom"))

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


class TestRootEndpoint:
    """Test root endpoint."""

    @pytest.mark.asyncio
    async def test_root_returns_welcome(self):
        from app.main import root

        response = await root()

        assert "Employee Directory" in response["message"]


class TestDatabaseConnection:
    """Test database connection check."""

    @pytest.mark.asyncio
    async def test_check_db_connection_success(self):
        """DB check should return True on successful connection."""
        from app.db.session import check_db_connection

        mock_conn = AsyncMock()
        connect_ctx = MagicMock()
        connect_ctx.__aenter__ = AsyncMock(return_value=mock_conn)
        connect_ctx.__aexit__ = AsyncMock(return_value=None)

        with patch("app.db.session.engine") as mock_engine:
            mock_engine.connect = MagicMock(return_value=connect_ctx)

            result = await check_db_connection()

        assert result is True
        mock_conn.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_check_db_connection_failure(self):
        """DB check should return False on connection failure."""
        from app.db.session import check_db_connection

        with patch("app.db.session.engine") as mock_engine:
            mock_engine.connect = MagicMock(side_effect=Exception("Connection failed"))

            result = await check_db_connection()

        assert result is False


class TestHttpSurface:
    """Test middleware behaviour through the ASGI app."""

    @pytest.mark.asyncio
    async def test_security_headers_and_request_id(self, client):
        with patch("app.main.check_db_connection", new_callable=AsyncMock, return_value=True):
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_metrics_exposed(self, client):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "# HELP" in response.text

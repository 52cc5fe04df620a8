"""
Floreria Backend — Application-Level Tests
============================================

What:  Health probe, preflight/CORS handling, the /api prefix, request ids
       and the envelope returned for unknown routes.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession


class TestHealth:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/health", "/api", "/api/health"])
    async def test_health_paths(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"]["status"] == "API funcionando"
        assert len(body["data"]["timestamp"]) == len("2025-01-15 12:00:00")

    @pytest.mark.asyncio
    async def test_health_answers_any_method(self, test_client):
        response = await test_client.post("/health")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_database_down(self, test_client):
        failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch.object(AsyncSession, "execute", AsyncMock(side_effect=failure)):
            response = await test_client.get("/health")

        assert response.status_code == 500
        assert response.json() == {"ok": False, "data": None, "error": "Error de base de datos"}


class TestPreflight:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/ramos", "/pedidos/3", "/does/not/exist"])
    async def test_options_any_path(self, test_client, path):
        response = await test_client.options(path)
        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_cors_preflight(self, test_client):
        response = await test_client.options(
            "/api/ramos",
            headers={
                "Origin": "http://localhost:8081",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_cors_header_on_simple_request(self, test_client):
        response = await test_client.get("/ramos", headers={"Origin": "http://localhost:8081"})
        assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:8081")


class TestRoutingAndHeaders:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/flores")
        assert response.status_code == 404
        assert response.json() == {"ok": False, "data": None, "error": "Ruta no encontrada: /flores"}

    @pytest.mark.asyncio
    async def test_unknown_route_under_prefix(self, test_client):
        response = await test_client.delete("/api/flores/1")
        assert response.status_code == 404
        assert response.json()["error"] == "Ruta no encontrada: /flores/1"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/ramos")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_propagated(self, test_client):
        response = await test_client.get("/ramos", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_invalid_upload_name(self, test_client):
        response = await test_client.get("/uploads/notes.txt")
        assert response.status_code == 400
        assert response.json()["error"] == "Nombre de archivo inválido"


class TestPreflightOutsideCors:

    @pytest.mark.asyncio
    async def test_unlisted_method_still_200(self, test_client):
        response = await test_client.options(
            "/ramos",
            headers={"Origin": "http://x", "Access-Control-Request-Method": "PATCH"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://x"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_custom_request_header_still_200(self, test_client):
        response = await test_client.options(
            "/api/pedidos/7",
            headers={
                "Origin": "http://x",
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "x-client-version",
            },
        )
        assert response.status_code == 200
        assert "PUT" in response.headers["access-control-allow-methods"]
        assert "Content-Type" in response.headers["access-control-allow-headers"]

    @pytest.mark.asyncio
    async def test_options_without_origin_allows_any(self, test_client):
        response = await test_client.options("/ramos")
        assert response.headers["access-control-allow-origin"] == "*"


class TestExactPaths:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, normalized",
        [
            ("/ramos/", "/ramos/"),
            ("/api/ramos/", "/ramos/"),
            ("/pedidos/", "/pedidos/"),
            ("/api/pedidos/", "/pedidos/"),
        ],
    )
    async def test_trailing_slash_is_unknown_route(self, test_client, path, normalized):
        response = await test_client.get(path)

        assert response.status_code == 404
        assert "location" not in response.headers
        assert response.json() == {
            "ok": False,
            "data": None,
            "error": f"Ruta no encontrada: {normalized}",
        }

    @pytest.mark.asyncio
    async def test_head_only_on_health(self, test_client):
        assert (await test_client.head("/health")).status_code == 200
        assert (await test_client.head("/ramos")).status_code == 404


class TestRequestIdHeader:

    @pytest.mark.asyncio
    async def test_oversized_client_id_replaced(self, test_client):
        response = await test_client.get("/ramos", headers={"X-Request-ID": "a" * 65})
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_with_spaces_replaced(self, test_client):
        response = await test_client.get("/ramos", headers={"X-Request-ID": "retry 2"})
        assert response.headers["x-request-id"] != "retry 2"

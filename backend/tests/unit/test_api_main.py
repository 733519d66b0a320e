"""Tests for application-level wiring: health check, headers, error envelope."""

from httpx import AsyncClient


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSecurityHeaders:
    async def test_headers_on_every_response(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "Strict-Transport-Security" not in response.headers

    async def test_api_responses_are_not_cached(self, client: AsyncClient):
        response = await client.get("/api/v1/jobs")
        assert response.headers["Cache-Control"] == "no-store, max-age=0"


class TestErrorEnvelope:
    async def test_request_validation_is_400(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/login", json={"email": "x"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"] == "Request validation failed"
        assert error["details"]

    async def test_malformed_path_parameter_is_400(self, client: AsyncClient):
        response = await client.get("/api/v1/navigation/sessions/not-a-uuid")
        assert response.status_code == 400

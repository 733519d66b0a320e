"""Tests for the auth endpoints and the bearer-token dependencies.

Register/login return a token plus the user; protected endpoints reject
missing, invalid and expired tokens with 401 and wrong roles with 403.
"""

import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.core.auth import decode_jwt
from tests.conftest import (
    TEST_AUTH_SECRET,
    TEST_PASSWORD,
    bearer,
    create_test_jwt,
    register,
)

_REGISTER_URL = "/api/v1/auth/register"
_LOGIN_URL = "/api/v1/auth/login"


# =============================================================================
# POST /auth/register
# =============================================================================


class TestRegister:
    async def test_returns_token_and_user(self, client: AsyncClient):
        data = await register(client, "ana@example.com")

        assert data["user"]["email"] == "ana@example.com"
        assert data["user"]["role"] == "CANDIDATE"
        claims = decode_jwt(data["token"], TEST_AUTH_SECRET)
        assert claims["sub"] == data["user"]["id"]
        assert claims["role"] == "CANDIDATE"

    async def test_candidate_gets_stub_profile(self, client: AsyncClient):
        data = await register(client, "ana@example.com")

        response = await client.get(
            "/api/v1/candidates/me", headers=bearer(data["token"])
        )

        assert response.status_code == 200
        assert response.json()["data"]["full_name"] == "ana"

    async def test_employer_gets_stub_company(self, client: AsyncClient):
        data = await register(client, "hr@acme.com", "EMPLOYER")

        response = await client.get("/api/v1/company/me", headers=bearer(data["token"]))

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "hr"

    async def test_duplicate_email_is_409(self, client: AsyncClient):
        await register(client, "ana@example.com")

        response = await client.post(
            _REGISTER_URL,
            json={"email": "ana@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "ana@example.com", "password": "12345"},
            {"email": "not-an-email", "password": TEST_PASSWORD},
            {"email": "ana@example.com", "password": TEST_PASSWORD, "role": "ADMIN"},
            {"email": "ana@example.com"},
        ],
    )
    async def test_invalid_body_is_400(self, client: AsyncClient, body):
        response = await client.post(_REGISTER_URL, json=body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


# =============================================================================
# POST /auth/login
# =============================================================================


class TestLogin:
    async def test_valid_credentials(self, client: AsyncClient, employer: dict):
        response = await client.post(
            _LOGIN_URL,
            json={"email": "employer@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"] == employer["user"]
        assert decode_jwt(data["token"], TEST_AUTH_SECRET)["role"] == "EMPLOYER"

    async def test_wrong_password(self, client: AsyncClient, candidate: dict):  # noqa: ARG002
        response = await client.post(
            _LOGIN_URL,
            json={"email": "candidate@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    async def test_unknown_email_looks_the_same(self, client: AsyncClient):
        response = await client.post(
            _LOGIN_URL,
            json={"email": "ghost@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"


# =============================================================================
# Bearer dependencies
# =============================================================================


class TestBearerAuthentication:
    _ME_URL = "/api/v1/candidates/me"

    async def test_missing_token_is_401(self, client: AsyncClient):
        response = await client.get(self._ME_URL)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_garbage_token_is_401(self, client: AsyncClient):
        response = await client.get(self._ME_URL, headers=bearer("not.a.jwt"))
        assert response.status_code == 401

    async def test_expired_token_is_401(self, client: AsyncClient, candidate: dict):
        token = create_test_jwt(
            uuid.UUID(candidate["user"]["id"]), expires_delta=timedelta(hours=-1)
        )
        response = await client.get(self._ME_URL, headers=bearer(token))
        assert response.status_code == 401

    async def test_wrong_secret_is_401(self, client: AsyncClient, candidate: dict):
        token = create_test_jwt(
            uuid.UUID(candidate["user"]["id"]),
            secret="another-secret-that-is-long-enough-to-sign-with",
        )
        response = await client.get(self._ME_URL, headers=bearer(token))
        assert response.status_code == 401

    async def test_unknown_user_is_401(self, client: AsyncClient):
        token = create_test_jwt(uuid.uuid4())
        response = await client.get(self._ME_URL, headers=bearer(token))
        assert response.status_code == 401

    async def test_wrong_role_is_403(self, client: AsyncClient, employer: dict):
        response = await client.get(self._ME_URL, headers=bearer(employer["token"]))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

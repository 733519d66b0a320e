"""Tests for the employer company endpoints."""

from httpx import AsyncClient

from tests.conftest import bearer

_ME_URL = "/api/v1/company/me"


class TestCompany:
    async def test_get_returns_stub(self, client: AsyncClient, employer: dict):
        response = await client.get(_ME_URL, headers=bearer(employer["token"]))

        data = response.json()["data"]
        assert data["user_id"] == employer["user"]["id"]
        assert data["website"] is None

    async def test_put_updates_and_keeps_omitted(
        self, client: AsyncClient, employer: dict
    ):
        headers = bearer(employer["token"])
        await client.put(_ME_URL, json={"location": "Boulder, CO"}, headers=headers)

        response = await client.put(
            _ME_URL,
            json={"name": "RAVYZ Inc", "website": "https://ravyz.example"},
            headers=headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "RAVYZ Inc"
        assert data["website"].startswith("https://ravyz.example")
        assert data["location"] == "Boulder, CO"

    async def test_invalid_website_is_400(self, client: AsyncClient, employer: dict):
        response = await client.put(
            _ME_URL, json={"website": "not a url"}, headers=bearer(employer["token"])
        )
        assert response.status_code == 400

    async def test_candidate_is_forbidden(self, client: AsyncClient, candidate: dict):
        response = await client.get(_ME_URL, headers=bearer(candidate["token"]))
        assert response.status_code == 403

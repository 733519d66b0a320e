"""Tests for the job board, job creation and applications."""

import uuid

import pytest
from httpx import AsyncClient

from tests.conftest import bearer

_JOBS_URL = "/api/v1/jobs"

_JOB_BODY = {
    "title": "Front-end Dev",
    "description": "Build the candidate onboarding UI",
    "location": "Remoto",
    "employment": "Full-time",
    "requirements": ["React", "Tailwind"],
}


@pytest.fixture
async def job(client: AsyncClient, employer: dict) -> dict:
    response = await client.post(
        _JOBS_URL, json=_JOB_BODY, headers=bearer(employer["token"])
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateJob:
    async def test_requirements_are_hard_requirements(self, job: dict):
        assert job["title"] == "Front-end Dev"
        assert job["company"]["name"] == "employer"
        assert sorted(job["requirements"], key=lambda r: r["skill"]) == [
            {"skill": "React", "must": True},
            {"skill": "Tailwind", "must": True},
        ]

    async def test_candidate_cannot_create(self, client: AsyncClient, candidate: dict):
        response = await client.post(
            _JOBS_URL, json=_JOB_BODY, headers=bearer(candidate["token"])
        )
        assert response.status_code == 403

    async def test_short_title_is_400(self, client: AsyncClient, employer: dict):
        response = await client.post(
            _JOBS_URL,
            json={**_JOB_BODY, "title": "x"},
            headers=bearer(employer["token"]),
        )
        assert response.status_code == 400


class TestListJobs:
    async def test_public_board(self, client: AsyncClient, job: dict):
        response = await client.get(_JOBS_URL)

        assert response.status_code == 200
        jobs = response.json()["data"]
        assert [j["id"] for j in jobs] == [job["id"]]
        assert jobs[0]["company"]["id"] == job["company_id"]

    async def test_empty_board(self, client: AsyncClient):
        response = await client.get(_JOBS_URL)
        assert response.json()["data"] == []


class TestApply:
    async def test_apply(self, client: AsyncClient, candidate: dict, job: dict):
        response = await client.post(
            f"{_JOBS_URL}/{job['id']}/apply", headers=bearer(candidate["token"])
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["job_id"] == job["id"]
        assert data["status"] == "SUBMITTED"
        assert data["job"]["title"] == "Front-end Dev"

    async def test_second_application_is_409(
        self, client: AsyncClient, candidate: dict, job: dict
    ):
        url = f"{_JOBS_URL}/{job['id']}/apply"
        await client.post(url, headers=bearer(candidate["token"]))

        response = await client.post(url, headers=bearer(candidate["token"]))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALREADY_APPLIED"

    async def test_unknown_job_is_404(self, client: AsyncClient, candidate: dict):
        response = await client.post(
            f"{_JOBS_URL}/{uuid.uuid4()}/apply", headers=bearer(candidate["token"])
        )
        assert response.status_code == 404

    async def test_employer_cannot_apply(
        self, client: AsyncClient, employer: dict, job: dict
    ):
        response = await client.post(
            f"{_JOBS_URL}/{job['id']}/apply", headers=bearer(employer["token"])
        )
        assert response.status_code == 403

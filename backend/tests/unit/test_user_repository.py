"""Tests for the account repositories.

Tests cover user CRUD with email normalization, the shared skill vocabulary,
and the candidate/company upserts.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import User
from app.repositories.candidate_repository import (
    DEFAULT_FULL_NAME,
    CandidateRepository,
)
from app.repositories.company_repository import CompanyRepository
from app.repositories.skill_repository import SkillRepository
from app.repositories.user_repository import UserRepository

_MISSING_UUID = uuid.UUID("99999999-9999-9999-9999-999999999999")
_TEST_EMAIL = "test@example.com"
_HASH = "$2b$04$not-a-real-hash"  # nosec B105


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await UserRepository.create(
        db_session, email=_TEST_EMAIL, password_hash=_HASH
    )


@pytest.fixture
async def test_employer(db_session: AsyncSession) -> User:
    return await UserRepository.create(
        db_session, email="hr@acme.com", password_hash=_HASH, role="EMPLOYER"
    )


# =============================================================================
# UserRepository
# =============================================================================


class TestUserRepository:
    async def test_get_by_id(self, db_session: AsyncSession, test_user):
        user = await UserRepository.get_by_id(db_session, test_user.id)
        assert user is not None
        assert user.email == _TEST_EMAIL

    async def test_get_by_id_missing(self, db_session: AsyncSession):
        assert await UserRepository.get_by_id(db_session, _MISSING_UUID) is None

    async def test_email_lookup_is_case_insensitive(
        self, db_session: AsyncSession, test_user
    ):
        """Email lookup ignores case."""
        user = await UserRepository.get_by_email(db_session, "TEST@EXAMPLE.COM")
        assert user is not None
        assert user.id == test_user.id

    async def test_create_normalizes_email_and_defaults_role(
        self, db_session: AsyncSession
    ):
        user = await UserRepository.create(
            db_session, email="Mixed@Example.COM", password_hash=_HASH
        )
        assert user.email == "mixed@example.com"
        assert user.role == "CANDIDATE"

    async def test_duplicate_email_raises(self, db_session: AsyncSession, test_user):  # noqa: ARG002
        with pytest.raises(IntegrityError):
            await UserRepository.create(
                db_session, email=_TEST_EMAIL.upper(), password_hash=_HASH
            )


# =============================================================================
# SkillRepository
# =============================================================================


class TestSkillRepository:
    async def test_creates_missing_and_reuses_existing(self, db_session: AsyncSession):
        first = await SkillRepository.get_or_create_many(db_session, ["React", "SQL"])
        second = await SkillRepository.get_or_create_many(db_session, ["SQL", "Go"])

        assert [s.name for s in second] == ["SQL", "Go"]
        assert second[0].id == first[1].id

    async def test_drops_blanks_and_duplicates(self, db_session: AsyncSession):
        skills = await SkillRepository.get_or_create_many(
            db_session, [" React ", "", "React", "   "]
        )
        assert [s.name for s in skills] == ["React"]

    async def test_empty_input(self, db_session: AsyncSession):
        assert await SkillRepository.get_or_create_many(db_session, []) == []


# =============================================================================
# CandidateRepository / CompanyRepository
# =============================================================================


class TestCandidateRepository:
    async def test_upsert_creates_with_placeholder_name(
        self, db_session: AsyncSession, test_user
    ):
        profile = await CandidateRepository.upsert(
            db_session, test_user.id, headline="Dev"
        )
        assert profile.full_name == DEFAULT_FULL_NAME
        assert profile.headline == "Dev"

    async def test_upsert_ignores_none(self, db_session: AsyncSession, test_user):
        await CandidateRepository.upsert(db_session, test_user.id, location="Recife")
        profile = await CandidateRepository.upsert(
            db_session, test_user.id, location=None, bio="Hi"
        )
        assert profile.location == "Recife"
        assert profile.bio == "Hi"

    async def test_upsert_rejects_ownership_fields(
        self, db_session: AsyncSession, test_user
    ):
        with pytest.raises(ValueError, match="user_id"):
            await CandidateRepository.upsert(
                db_session, test_user.id, user_id=str(_MISSING_UUID)
            )

    async def test_replace_skills(self, db_session: AsyncSession, test_user):
        profile = await CandidateRepository.create(
            db_session, user_id=test_user.id, full_name="Ana"
        )
        skills = await SkillRepository.get_or_create_many(db_session, ["React", "SQL"])
        await CandidateRepository.replace_skills(db_session, profile.id, skills)
        await CandidateRepository.replace_skills(
            db_session, profile.id, skills[:1], level=5
        )

        loaded = await CandidateRepository.get_by_user_id(db_session, test_user.id)

        assert loaded is not None
        assert [(s.skill.name, s.level) for s in loaded.skills] == [("React", 5)]


class TestCompanyRepository:
    async def test_upsert_creates_then_updates(
        self, db_session: AsyncSession, test_employer
    ):
        created = await CompanyRepository.upsert(
            db_session, test_employer.id, location="Boulder, CO"
        )
        updated = await CompanyRepository.upsert(
            db_session, test_employer.id, name="Acme"
        )

        assert updated.id == created.id
        assert updated.name == "Acme"
        assert updated.location == "Boulder, CO"

    async def test_upsert_rejects_unknown_field(
        self, db_session: AsyncSession, test_employer
    ):
        with pytest.raises(ValueError, match="id"):
            await CompanyRepository.upsert(db_session, test_employer.id, id="x")

    async def test_upsert_rejects_owner_override(
        self, db_session: AsyncSession, test_employer
    ):
        with pytest.raises(ValueError, match="user_id"):
            await CompanyRepository.upsert(
                db_session, test_employer.id, user_id=str(_MISSING_UUID)
            )

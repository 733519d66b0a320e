"""Repository for candidate profiles, skills and applications.

A profile is created lazily: registration creates a stub, and the first
PUT /candidates/me fills or creates it (upsert).
"""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.application import Application
from app.models.candidate import DEFAULT_SKILL_LEVEL, CandidateProfile, CandidateSkill
from app.models.skill import Skill

DEFAULT_FULL_NAME = "Candidate"

# Fields that may be set via CandidateRepository.upsert().
# Security: Never add 'id' or 'user_id' (ownership).
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "full_name",
        "headline",
        "bio",
        "location",
        "cpf",
        "phone",
        "address",
    }
)


class CandidateRepository:
    """Stateless repository for CandidateProfile and related tables."""

    @staticmethod
    async def get_by_user_id(
        db: AsyncSession, user_id: uuid.UUID
    ) -> CandidateProfile | None:
        """Fetch a user's profile with its skills loaded.

        Args:
            db: Async database session.
            user_id: Owning user.

        Returns:
            CandidateProfile if the user has one, None otherwise.
        """
        stmt = (
            select(CandidateProfile)
            .where(CandidateProfile.user_id == user_id)
            .options(selectinload(CandidateProfile.skills))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        full_name: str,
    ) -> CandidateProfile:
        """Create a stub profile for a newly registered candidate."""
        profile = CandidateProfile(user_id=user_id, full_name=full_name)
        db.add(profile)
        await db.flush()
        return profile

    @staticmethod
    async def upsert(
        db: AsyncSession,
        user_id: uuid.UUID,
        /,
        **kwargs: str | None,
    ) -> CandidateProfile:
        """Update the user's profile, creating it if missing.

        None values leave the stored field untouched. A new profile without
        full_name gets a placeholder name.

        Args:
            db: Async database session.
            user_id: Owning user.
            **kwargs: Field values. Must be in _UPDATABLE_FIELDS.

        Returns:
            The created or updated profile.

        Raises:
            ValueError: If an unknown field name is passed.
            sqlalchemy.exc.IntegrityError: If the CPF belongs to another profile.
        """
        invalid = set(kwargs) - _UPDATABLE_FIELDS
        if invalid:
            msg = f"Cannot update fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        values = {key: value for key, value in kwargs.items() if value is not None}
        profile = await CandidateRepository.get_by_user_id(db, user_id)
        if profile is None:
            values.setdefault("full_name", DEFAULT_FULL_NAME)
            profile = CandidateProfile(user_id=user_id, **values)
            db.add(profile)
        else:
            for key, value in values.items():
                setattr(profile, key, value)

        await db.flush()
        return profile

    @staticmethod
    async def replace_skills(
        db: AsyncSession,
        candidate_id: uuid.UUID,
        skills: list[Skill],
        *,
        level: int = DEFAULT_SKILL_LEVEL,
    ) -> None:
        """Replace all of a candidate's skills with ``skills`` at one level."""
        await db.execute(
            delete(CandidateSkill).where(CandidateSkill.candidate_id == candidate_id)
        )
        db.add_all(
            CandidateSkill(candidate_id=candidate_id, skill_id=skill.id, level=level)
            for skill in skills
        )
        await db.flush()

    @staticmethod
    async def list_applications(
        db: AsyncSession, candidate_id: uuid.UUID
    ) -> list[Application]:
        """List a candidate's applications, newest first, with jobs loaded."""
        stmt = (
            select(Application)
            .where(Application.candidate_id == candidate_id)
            .options(selectinload(Application.job))
            .order_by(Application.created_at.desc(), Application.id)
        )
        result = await db.execute(stmt)
        return list(result.scalars())

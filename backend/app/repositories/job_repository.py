"""Repositories for job postings and applications."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.application import Application
from app.models.job import Job, JobSkill
from app.models.skill import Skill


class JobRepository:
    """Stateless repository for Job and JobSkill tables."""

    @staticmethod
    async def get_by_id(db: AsyncSession, job_id: uuid.UUID) -> Job | None:
        """Fetch a job with its company and requirements loaded."""
        stmt = (
            select(Job)
            .where(Job.id == job_id)
            .options(selectinload(Job.company), selectinload(Job.requirements))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Job]:
        """List every job, newest first, with company and requirements."""
        stmt = (
            select(Job)
            .options(selectinload(Job.company), selectinload(Job.requirements))
            .order_by(Job.created_at.desc(), Job.id)
        )
        result = await db.execute(stmt)
        return list(result.scalars())

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        company_id: uuid.UUID,
        title: str,
        description: str,
        location: str | None = None,
        employment: str | None = None,
        required_skills: list[Skill] | None = None,
    ) -> Job:
        """Create a job; every listed skill becomes a hard requirement.

        Returns:
            The new job, reloaded with company and requirements.
        """
        job = Job(
            company_id=company_id,
            title=title,
            description=description,
            location=location,
            employment=employment,
        )
        db.add(job)
        await db.flush()

        db.add_all(
            JobSkill(job_id=job.id, skill_id=skill.id, must=True)
            for skill in required_skills or []
        )
        await db.flush()

        loaded = await JobRepository.get_by_id(db, job.id)
        if loaded is None:  # pragma: no cover - row was just inserted
            msg = f"Job {job.id} vanished after insert"
            raise RuntimeError(msg)
        return loaded


class ApplicationRepository:
    """Stateless repository for Application table operations."""

    @staticmethod
    async def get(
        db: AsyncSession, *, job_id: uuid.UUID, candidate_id: uuid.UUID
    ) -> Application | None:
        stmt = select(Application).where(
            Application.job_id == job_id,
            Application.candidate_id == candidate_id,
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        job_id: uuid.UUID,
        candidate_id: uuid.UUID,
        status: str = "SUBMITTED",
    ) -> Application:
        """Create an application.

        Raises:
            sqlalchemy.exc.IntegrityError: If the candidate already applied.
        """
        application = Application(job_id=job_id, candidate_id=candidate_id, status=status)
        db.add(application)
        await db.flush()
        await db.refresh(application)
        return application

"""Seed the database with demo accounts, a job and an application.

Standalone script (not an Alembic migration). Run after `alembic upgrade head`.

Usage:
    cd backend && python -m scripts.seed

Creates, if missing:
    1. Skills: React, Node, SQL, Tailwind
    2. Employer employer@ravyz.com with company "RAVYZ Inc"
    3. Candidate candidate@ravyz.com with every seed skill at level 3
    4. Job "Front-end Developer" requiring React and Tailwind
    5. The candidate's application to that job

Safe to re-run: existing rows are reused, never duplicated.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import hash_password
from app.models.job import Job
from app.models.user import ROLE_CANDIDATE, ROLE_EMPLOYER, User
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.company_repository import CompanyRepository
from app.repositories.job_repository import ApplicationRepository, JobRepository
from app.repositories.skill_repository import SkillRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SEED_SKILLS: tuple[str, ...] = ("React", "Node", "SQL", "Tailwind")
SEED_PASSWORD = "123456"  # nosec B105 - demo accounts only

EMPLOYER_EMAIL = "employer@ravyz.com"
CANDIDATE_EMAIL = "candidate@ravyz.com"
JOB_TITLE = "Front-end Developer"


@dataclass
class SeedStats:
    """Rows created by a seed run."""

    users_created: int = 0
    jobs_created: int = 0
    applications_created: int = 0


async def _get_or_create_user(
    db: AsyncSession, email: str, role: str, stats: SeedStats
) -> User:
    user = await UserRepository.get_by_email(db, email)
    if user is None:
        user = await UserRepository.create(
            db, email=email, password_hash=hash_password(SEED_PASSWORD), role=role
        )
        stats.users_created += 1
        logger.info("Created %s user %s", role, email)
    return user


async def run_seed(db: AsyncSession) -> SeedStats:
    """Insert the demo data set into ``db``.

    The caller owns the transaction and must commit.

    Args:
        db: Async database session.

    Returns:
        SeedStats counting what was newly created.
    """
    stats = SeedStats()
    skills = await SkillRepository.get_or_create_many(db, SEED_SKILLS)
    by_name = {skill.name: skill for skill in skills}

    employer = await _get_or_create_user(db, EMPLOYER_EMAIL, ROLE_EMPLOYER, stats)
    company = await CompanyRepository.upsert(
        db,
        employer.id,
        name="RAVYZ Inc",
        website="https://ravyz.example",
        about="Contratando!",
        location="Boulder, CO",
    )

    candidate_user = await _get_or_create_user(
        db, CANDIDATE_EMAIL, ROLE_CANDIDATE, stats
    )
    candidate = await CandidateRepository.upsert(
        db,
        candidate_user.id,
        full_name="Candidate One",
        headline="Front-end Dev",
        location="Boulder, CO",
    )
    await CandidateRepository.replace_skills(db, candidate.id, skills)

    result = await db.execute(
        select(Job).where(Job.company_id == company.id, Job.title == JOB_TITLE)
    )
    job = result.scalars().first()
    if job is None:
        job = await JobRepository.create(
            db,
            company_id=company.id,
            title=JOB_TITLE,
            description="Trabalhar com React + Vite + Tailwind",
            location="Remoto",
            employment="Full-time",
            required_skills=[by_name["React"], by_name["Tailwind"]],
        )
        stats.jobs_created += 1
        logger.info("Created job %r", JOB_TITLE)

    existing = await ApplicationRepository.get(
        db, job_id=job.id, candidate_id=candidate.id
    )
    if existing is None:
        await ApplicationRepository.create(db, job_id=job.id, candidate_id=candidate.id)
        stats.applications_created += 1
        logger.info("Created application of %s to %r", CANDIDATE_EMAIL, JOB_TITLE)

    return stats


async def main() -> None:
    """CLI entry point: seed the configured database."""
    from app.core.database import dispose_engine, session_scope

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        async with session_scope() as session:
            result = await run_seed(session)
    finally:
        await dispose_engine()

    logger.info("Seed complete: %s", result)


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())

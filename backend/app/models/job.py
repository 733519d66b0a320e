"""Job models - postings and their required skills.

Job references Company. JobSkill joins a job to the shared Skill vocabulary;
``must`` marks hard requirements.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.application import Application
    from app.models.company import Company
    from app.models.skill import Skill


class Job(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Job posting published by a company."""

    __tablename__ = "jobs"

    company_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    employment: Mapped[str | None] = mapped_column(String(50), nullable=True)

    company: Mapped["Company"] = relationship(back_populates="jobs")
    requirements: Mapped[list["JobSkill"]] = relationship(
        back_populates="job",
        cascade="all, delete-orphan",
    )
    applications: Mapped[list["Application"]] = relationship(
        back_populates="job",
        cascade="all, delete-orphan",
    )


class JobSkill(Base, UUIDPrimaryKeyMixin):
    """Skill required (``must``) or desired by a job."""

    __tablename__ = "job_skills"

    job_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
    )
    must: Mapped[bool] = mapped_column(
        Boolean(),
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (UniqueConstraint("job_id", "skill_id", name="uq_job_skill"),)

    job: Mapped["Job"] = relationship(back_populates="requirements")
    skill: Mapped["Skill"] = relationship(lazy="joined")

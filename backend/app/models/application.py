"""Application model - a candidate applying to a job.

References Job and CandidateProfile. A candidate applies to a job at most once.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.candidate import CandidateProfile
    from app.models.job import Job

APPLICATION_STATUSES = ("SUBMITTED", "REVIEWING", "REJECTED", "HIRED")


class Application(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Job application record tracking status."""

    __tablename__ = "applications"

    job_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    )
    candidate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("candidate_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="SUBMITTED",
    )

    __table_args__ = (
        UniqueConstraint("job_id", "candidate_id", name="uq_application_job_candidate"),
        CheckConstraint(
            "status IN ('SUBMITTED', 'REVIEWING', 'REJECTED', 'HIRED')",
            name="ck_applications_status",
        ),
    )

    job: Mapped["Job"] = relationship(back_populates="applications")
    candidate: Mapped["CandidateProfile"] = relationship(back_populates="applications")

"""Job posting and application schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.job import Job

_MAX_REQUIREMENTS = 50


class CreateJobRequest(BaseModel):
    """Request body for POST /jobs.

    Every entry in ``requirements`` is a skill name; each becomes a hard
    requirement of the job.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=3, max_length=255)
    description: str = Field(min_length=10, max_length=5000)
    location: str | None = Field(None, max_length=255)
    employment: str | None = Field(None, max_length=50)
    requirements: list[str] = Field(default_factory=list, max_length=_MAX_REQUIREMENTS)


class JobRequirementResponse(BaseModel):
    skill: str
    must: bool


class JobCompanyResponse(BaseModel):
    """Public company fields shown alongside a job."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    website: str | None = None
    location: str | None = None


class JobSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    company_id: uuid.UUID
    title: str
    location: str | None = None
    employment: str | None = None


class JobResponse(BaseModel):
    """Job with its company and requirements.

    Attributes:
        id: Job UUID.
        company_id: Owning company.
        title: Job title.
        description: Job description.
        location: Where the job is based ("Remoto" for remote).
        employment: Employment type (e.g. "Full-time").
        created_at: When the job was posted.
        company: Public company fields.
        requirements: Required skills.
    """

    id: uuid.UUID
    company_id: uuid.UUID
    title: str
    description: str
    location: str | None = None
    employment: str | None = None
    created_at: datetime
    company: JobCompanyResponse
    requirements: list[JobRequirementResponse] = []

    @classmethod
    def from_model(cls, job: Job) -> "JobResponse":
        """Build from an ORM job whose company and requirements are loaded."""
        return cls(
            id=job.id,
            company_id=job.company_id,
            title=job.title,
            description=job.description,
            location=job.location,
            employment=job.employment,
            created_at=job.created_at,
            company=JobCompanyResponse.model_validate(job.company),
            requirements=[
                JobRequirementResponse(skill=r.skill.name, must=r.must)
                for r in job.requirements
            ],
        )


class ApplicationResponse(BaseModel):
    """A candidate's application, with the job summary when loaded."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    job_id: uuid.UUID
    candidate_id: uuid.UUID
    status: str
    created_at: datetime
    job: JobSummaryResponse | None = None

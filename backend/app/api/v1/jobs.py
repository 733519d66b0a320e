"""Job endpoints.

POST /jobs             - create a job for the employer's company (EMPLOYER)
GET  /jobs             - public job board
POST /jobs/{id}/apply  - apply to a job (CANDIDATE)
"""

import uuid

from fastapi import APIRouter
from sqlalchemy.exc import IntegrityError

from app.api.deps import CurrentCandidate, CurrentEmployer, DbSession
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.responses import DataResponse
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.company_repository import CompanyRepository
from app.repositories.job_repository import ApplicationRepository, JobRepository
from app.repositories.skill_repository import SkillRepository
from app.schemas.jobs import (
    ApplicationResponse,
    CreateJobRequest,
    JobResponse,
    JobSummaryResponse,
)

_ALREADY_APPLIED_MSG = "You have already applied to this job"

router = APIRouter()


@router.post("", status_code=201)
async def create_job(
    body: CreateJobRequest,
    user: CurrentEmployer,
    db: DbSession,
) -> DataResponse[JobResponse]:
    """Publish a job. Every listed requirement becomes a hard requirement.

    Raises:
        ValidationError: 400 if the employer has no company profile.
    """
    company = await CompanyRepository.get_by_user_id(db, user.id)
    if company is None:
        raise ValidationError("Company profile not found")

    skills = await SkillRepository.get_or_create_many(db, body.requirements)
    job = await JobRepository.create(
        db,
        company_id=company.id,
        title=body.title,
        description=body.description,
        location=body.location,
        employment=body.employment,
        required_skills=skills,
    )
    return DataResponse(data=JobResponse.from_model(job))


@router.get("")
async def list_jobs(db: DbSession) -> DataResponse[list[JobResponse]]:
    """List all jobs with company and requirements. No auth required."""
    jobs = await JobRepository.list_all(db)
    return DataResponse(data=[JobResponse.from_model(job) for job in jobs])


@router.post("/{job_id}/apply", status_code=201)
async def apply_to_job(
    job_id: uuid.UUID,
    user: CurrentCandidate,
    db: DbSession,
) -> DataResponse[ApplicationResponse]:
    """Submit an application for the caller.

    Raises:
        ValidationError: 400 if the candidate has no profile.
        NotFoundError: 404 if the job does not exist.
        ConflictError: 409 if the candidate already applied.
    """
    profile = await CandidateRepository.get_by_user_id(db, user.id)
    if profile is None:
        raise ValidationError("Candidate profile not found")

    job = await JobRepository.get_by_id(db, job_id)
    if job is None:
        raise NotFoundError("Job", str(job_id))

    if await ApplicationRepository.get(db, job_id=job.id, candidate_id=profile.id):
        raise ConflictError(code="ALREADY_APPLIED", message=_ALREADY_APPLIED_MSG)

    try:
        application = await ApplicationRepository.create(
            db, job_id=job.id, candidate_id=profile.id
        )
    except IntegrityError as exc:
        raise ConflictError(code="ALREADY_APPLIED", message=_ALREADY_APPLIED_MSG) from exc

    return DataResponse(
        data=ApplicationResponse(
            id=application.id,
            job_id=application.job_id,
            candidate_id=application.candidate_id,
            status=application.status,
            created_at=application.created_at,
            job=JobSummaryResponse.model_validate(job),
        )
    )

"""Candidate profile endpoints (CANDIDATE role only).

GET  /candidates/me               - own profile with skills
PUT  /candidates/me               - upsert profile; optional full skill replacement
GET  /candidates/me/applications  - own applications, newest first
"""

from fastapi import APIRouter
from sqlalchemy.exc import IntegrityError

from app.api.deps import CurrentCandidate, DbSession
from app.core.errors import ConflictError, NotFoundError
from app.core.responses import DataResponse
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.skill_repository import SkillRepository
from app.schemas.accounts import CandidateProfileResponse, UpdateCandidateProfileRequest
from app.schemas.jobs import ApplicationResponse

router = APIRouter()


@router.get("/me")
async def get_my_profile(
    user: CurrentCandidate,
    db: DbSession,
) -> DataResponse[CandidateProfileResponse]:
    """Return the caller's candidate profile.

    Raises:
        NotFoundError: 404 if the candidate has no profile yet.
    """
    profile = await CandidateRepository.get_by_user_id(db, user.id)
    if profile is None:
        raise NotFoundError("Candidate profile")
    return DataResponse(data=CandidateProfileResponse.from_model(profile))


@router.put("/me")
async def update_my_profile(
    body: UpdateCandidateProfileRequest,
    user: CurrentCandidate,
    db: DbSession,
) -> DataResponse[CandidateProfileResponse]:
    """Create or update the caller's profile.

    When ``skills`` is sent, the candidate's skills are replaced by exactly
    that list (unknown skill names are added to the vocabulary) at the
    default level.

    Raises:
        ConflictError: 409 if the CPF is already used by another candidate.
    """
    fields = body.model_dump(exclude={"skills"}, exclude_unset=True)
    try:
        profile = await CandidateRepository.upsert(db, user.id, **fields)
        if body.skills is not None:
            skills = await SkillRepository.get_or_create_many(db, body.skills)
            await CandidateRepository.replace_skills(db, profile.id, skills)
    except IntegrityError as exc:
        raise ConflictError(code="CPF_ALREADY_EXISTS", message="CPF already registered") from exc

    refreshed = await CandidateRepository.get_by_user_id(db, user.id)
    if refreshed is None:  # pragma: no cover - upserted above
        raise NotFoundError("Candidate profile")
    return DataResponse(data=CandidateProfileResponse.from_model(refreshed))


@router.get("/me/applications")
async def list_my_applications(
    user: CurrentCandidate,
    db: DbSession,
) -> DataResponse[list[ApplicationResponse]]:
    """List the caller's applications with job summaries, newest first."""
    profile = await CandidateRepository.get_by_user_id(db, user.id)
    if profile is None:
        return DataResponse(data=[])
    applications = await CandidateRepository.list_applications(db, profile.id)
    return DataResponse(data=[ApplicationResponse.model_validate(a) for a in applications])

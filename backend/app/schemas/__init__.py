"""Pydantic request/response schemas for API endpoints."""

from app.schemas.accounts import (
    AuthTokenResponse,
    CandidateProfileResponse,
    CandidateSkillResponse,
    CompanyResponse,
    LoginRequest,
    RegisterRequest,
    UpdateCandidateProfileRequest,
    UpdateCompanyRequest,
    UserResponse,
)
from app.schemas.jobs import (
    ApplicationResponse,
    CreateJobRequest,
    JobCompanyResponse,
    JobRequirementResponse,
    JobResponse,
    JobSummaryResponse,
)

__all__ = [
    # Accounts
    "AuthTokenResponse",
    "CandidateProfileResponse",
    "CandidateSkillResponse",
    "CompanyResponse",
    "LoginRequest",
    "RegisterRequest",
    "UpdateCandidateProfileRequest",
    "UpdateCompanyRequest",
    "UserResponse",
    # Jobs
    "ApplicationResponse",
    "CreateJobRequest",
    "JobCompanyResponse",
    "JobRequirementResponse",
    "JobResponse",
    "JobSummaryResponse",
]

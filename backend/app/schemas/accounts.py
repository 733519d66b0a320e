"""Account schemas: auth, candidate profiles and companies.

Request models use extra="forbid" to reject unexpected fields. Response
models read from ORM objects (from_attributes=True).
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl

from app.models.candidate import CandidateProfile

UserRole = Literal["CANDIDATE", "EMPLOYER"]

_MAX_SKILLS = 50


# =============================================================================
# Auth
# =============================================================================


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    role: UserRole = "CANDIDATE"


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: UserRole


class AuthTokenResponse(BaseModel):
    """Bearer token plus the authenticated user.

    Attributes:
        token: JWT to send as ``Authorization: Bearer <token>``.
        user: The account the token belongs to.
    """

    token: str
    user: UserResponse


# =============================================================================
# Candidates
# =============================================================================


class UpdateCandidateProfileRequest(BaseModel):
    """Request body for PUT /candidates/me.

    Omitted fields are left unchanged. When ``skills`` is present it
    replaces the candidate's whole skill list.
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(None, min_length=2, max_length=255)
    headline: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, max_length=255)
    cpf: str | None = Field(None, min_length=5, max_length=14)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=500)
    skills: list[str] | None = Field(None, max_length=_MAX_SKILLS)


class CandidateSkillResponse(BaseModel):
    name: str
    level: int


class CandidateProfileResponse(BaseModel):
    """Candidate profile with flattened skill names."""

    id: uuid.UUID
    user_id: uuid.UUID
    full_name: str
    headline: str | None = None
    bio: str | None = None
    location: str | None = None
    cpf: str | None = None
    phone: str | None = None
    address: str | None = None
    skills: list[CandidateSkillResponse] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, profile: CandidateProfile) -> "CandidateProfileResponse":
        """Build from an ORM profile whose skills are loaded."""
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            full_name=profile.full_name,
            headline=profile.headline,
            bio=profile.bio,
            location=profile.location,
            cpf=profile.cpf,
            phone=profile.phone,
            address=profile.address,
            skills=sorted(
                (
                    CandidateSkillResponse(name=s.skill.name, level=s.level)
                    for s in profile.skills
                ),
                key=lambda s: s.name,
            ),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


# =============================================================================
# Companies
# =============================================================================


class UpdateCompanyRequest(BaseModel):
    """Request body for PUT /company/me. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=2, max_length=255)
    website: HttpUrl | None = None
    about: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, max_length=255)


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    website: str | None = None
    about: str | None = None
    location: str | None = None
    created_at: datetime
    updated_at: datetime

"""Completion payloads produced by each onboarding screen.

Every screen declares exactly one payload model. The model is the screen's
local validation: a completion is only accepted when the data validates, and
only the declared fields can reach ApplicationState (extra="forbid").

Payloads are dumped to plain JSON-compatible dicts before being merged. Only
fields the client actually sent are kept: omitted fields never overwrite data
collected earlier in the session, while an explicit null does.
"""

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

RoleChoice = Literal["candidate", "company"]
QuestionnaireMethod = Literal["manual", "ai-writing", "ai-conversation"]

_SHORT_TEXT = 255
_LONG_TEXT = 5000
_MAX_LIST_ITEMS = 50


class ScreenPayload(BaseModel):
    """Base for all completion payloads."""

    model_config = ConfigDict(extra="forbid")

    def to_state_fields(self) -> dict[str, Any]:
        """Return the ApplicationState fields this payload contributes."""
        return self.model_dump(mode="json", exclude_unset=True)


class EmptyPayload(ScreenPayload):
    """Display-only screens complete without data."""


# =============================================================================
# Nested value objects
# =============================================================================


class SalaryRange(BaseModel):
    """Monthly salary band."""

    model_config = ConfigDict(extra="forbid")

    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "SalaryRange":
        if self.min > self.max:
            msg = "Salary range minimum cannot exceed maximum"
            raise ValueError(msg)
        return self


class MentorChoice(BaseModel):
    """Mentor avatar picked during candidate registration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    avatar: str = Field(min_length=1, max_length=100)
    color: str = Field(min_length=1, max_length=50)
    category: str = "mentor"
    description: str | None = Field(None, max_length=1000)
    specialties: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    personality: str | None = Field(None, max_length=1000)


class DreamJob(BaseModel):
    """Criteria collected by the dream-job builder.

    Multi-select criteria accept either a single string or a list of strings
    and are always stored as lists.
    """

    model_config = ConfigDict(extra="forbid")

    position: str = Field(min_length=1, max_length=_SHORT_TEXT)
    position_level: str | None = Field(None, max_length=100)
    industry: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    work_model: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    location: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    salary_range: SalaryRange | None = None
    benefits: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    company_size: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)
    selected_companies: list[str] = Field(
        default_factory=list, max_length=_MAX_LIST_ITEMS
    )
    culture: str | None = Field(None, max_length=_LONG_TEXT)

    @field_validator(
        "industry",
        "work_model",
        "location",
        "benefits",
        "company_size",
        "selected_companies",
        mode="before",
    )
    @classmethod
    def wrap_single_value(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


class ProfessionalProfile(BaseModel):
    """Outcome of the professional assessment (manual or AI-assisted)."""

    model_config = ConfigDict(extra="forbid")

    primary_profile: str = Field(min_length=1, max_length=100)
    secondary_profile: str | None = Field(None, max_length=100)
    profile_type: str = Field(min_length=1, max_length=50)
    assessment_score: int | None = Field(None, ge=0, le=100)
    detailed_results: dict[str, Any] | None = None


class JobDraft(BaseModel):
    """Job posting drafted by an employer in the job builder."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=3, max_length=_SHORT_TEXT)
    description: str = Field(min_length=10, max_length=_LONG_TEXT)
    location: str | None = Field(None, max_length=_SHORT_TEXT)
    employment: str | None = Field(None, max_length=50)
    requirements: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ITEMS)


class SalaryData(BaseModel):
    """Current and expected salary captured by salary benchmarking."""

    model_config = ConfigDict(extra="forbid")

    current_salary: int | None = Field(None, ge=0)
    expected_min: int | None = Field(None, ge=0)
    expected_max: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_expected_order(self) -> "SalaryData":
        if (
            self.expected_min is not None
            and self.expected_max is not None
            and self.expected_min > self.expected_max
        ):
            msg = "Expected minimum cannot exceed expected maximum"
            raise ValueError(msg)
        return self


# =============================================================================
# Screen payloads
# =============================================================================


class RoleSelectionPayload(ScreenPayload):
    """Profile/purpose selection: which side of the board the user is on."""

    role: RoleChoice


class LoginPayload(ScreenPayload):
    """Successful login.

    The bearer token itself is opaque to navigation; the store only tracks
    that the session is authenticated and which profile type logged in.
    """

    email: EmailStr
    profile_type: RoleChoice
    is_authenticated: bool = True
    full_name: str | None = Field(None, max_length=_SHORT_TEXT)
    access_token: str | None = Field(None, max_length=4096)

    def to_state_fields(self) -> dict[str, Any]:
        # Completing the login screen always records the auth flag
        return {**super().to_state_fields(), "is_authenticated": self.is_authenticated}


class BasicRegistrationPayload(ScreenPayload):
    """Account basics. The password never enters ApplicationState."""

    email: EmailStr
    # CPF (11 digits) or CNPJ (14 digits), optionally formatted
    document: str = Field(min_length=11, max_length=18)
    user_type: RoleChoice


class CandidateRegistrationPayload(ScreenPayload):
    """Candidate basic info and mentor avatar choice."""

    full_name: str | None = Field(None, min_length=2, max_length=_SHORT_TEXT)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=30)
    cpf: str | None = Field(None, min_length=5, max_length=14)
    location: str | None = Field(None, max_length=_SHORT_TEXT)
    mentor: MentorChoice | None = None


class QuestionnaireMethodPayload(ScreenPayload):
    """How the candidate wants to answer the profile questionnaire."""

    questionnaire_method: QuestionnaireMethod


class AssessmentPayload(ScreenPayload):
    """Professional assessment result.

    AI-assisted methods cover dream-job questions in the conversation, so
    they may also carry dream_job directly.
    """

    professional_profile: ProfessionalProfile
    personality_profile: dict[str, Any] | None = None
    dream_job: DreamJob | None = None


class DreamJobPayload(ScreenPayload):
    dream_job: DreamJob


class JobBuilderPayload(ScreenPayload):
    job: JobDraft


class SalaryBenchmarkingPayload(ScreenPayload):
    salary_data: SalaryData

"""Authentication endpoints for password-based auth.

Security considerations:
- login: constant-time comparison (dummy bcrypt check) prevents user enumeration
- register: bcrypt hash, email uniqueness, role-specific stub profile
- both endpoints are rate limited per IP
"""

from fastapi import APIRouter, Request
from sqlalchemy.exc import IntegrityError

from app.api.deps import DbSession
from app.core.auth import create_jwt, hash_password, verify_password
from app.core.config import settings
from app.core.errors import ConflictError, UnauthorizedError
from app.core.rate_limiting import limiter
from app.core.responses import DataResponse
from app.models import User
from app.models.user import ROLE_EMPLOYER
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.company_repository import CompanyRepository
from app.repositories.user_repository import UserRepository
from app.schemas.accounts import (
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

_EMAIL_TAKEN_MSG = "Email already registered"

router = APIRouter()


def _token_response(user: User) -> AuthTokenResponse:
    token = create_jwt(
        user_id=str(user.id),
        role=user.role,
        secret=settings.auth_secret.get_secret_value(),
    )
    return AuthTokenResponse(token=token, user=UserResponse.model_validate(user))


# ===================================================================
# POST /auth/register
# ===================================================================


@router.post("/register", status_code=201)
@limiter.limit(settings.rate_limit_register)
async def register(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: RegisterRequest,
    db: DbSession,
) -> DataResponse[AuthTokenResponse]:
    """Create an account and return a bearer token.

    Candidates get a stub profile and employers a stub company, both named
    after the local part of the email address.

    Raises:
        ConflictError: 409 if the email is already registered.
    """
    if await UserRepository.get_by_email(db, body.email):
        raise ConflictError(code="EMAIL_ALREADY_EXISTS", message=_EMAIL_TAKEN_MSG)

    try:
        user = await UserRepository.create(
            db,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role,
        )
    except IntegrityError as exc:
        # Concurrent registration with the same email
        raise ConflictError(
            code="EMAIL_ALREADY_EXISTS", message=_EMAIL_TAKEN_MSG
        ) from exc

    display_name = body.email.split("@", 1)[0]
    if user.role == ROLE_EMPLOYER:
        await CompanyRepository.create(db, user_id=user.id, name=display_name)
    else:
        await CandidateRepository.create(db, user_id=user.id, full_name=display_name)

    return DataResponse(data=_token_response(user))


# ===================================================================
# POST /auth/login
# ===================================================================


@router.post("/login")
@limiter.limit(settings.rate_limit_login)
async def login(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: LoginRequest,
    db: DbSession,
) -> DataResponse[AuthTokenResponse]:
    """Verify email + password and return a bearer token.

    Raises:
        UnauthorizedError: 401 for unknown email or wrong password (same
            message and timing for both).
    """
    user = await UserRepository.get_by_email(db, body.email)
    if not verify_password(body.password, user.password_hash if user else None):
        raise UnauthorizedError("Invalid credentials")

    return DataResponse(data=_token_response(user))

"""Authentication helpers for password hashing and JWT issuance.

Shared utilities used by the auth endpoints and the bearer-token dependency.

Pipeline:
- hash_password / verify_password: bcrypt, timing-safe on unknown users
- create_jwt / decode_jwt: HS256 bearer tokens carrying user id and role
"""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "ravyz"


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    """bcrypt hash at the configured cost, compared against on user-not-found.

    Security: prevents user enumeration via response time differences.
    Computed once, on first use.
    """
    return bcrypt.hashpw(b"ravyz-dummy-password", bcrypt.gensalt(rounds=settings.bcrypt_rounds))


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt."""
    hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode()


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored hash.

    Always performs one bcrypt comparison, even when ``password_hash`` is
    None (unknown user), so response time does not reveal whether an
    account exists.

    Args:
        password: Plain-text password from the request.
        password_hash: Stored bcrypt hash, or None if no such user.

    Returns:
        True only if the user exists and the password matches.
    """
    if password_hash is None:
        bcrypt.checkpw(password.encode(), _dummy_hash())
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def create_jwt(
    *,
    user_id: str,
    role: str,
    secret: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT with standard claims.

    Args:
        user_id: User UUID string for the sub claim.
        role: User role (CANDIDATE or EMPLOYER) for the role claim.
        secret: HMAC signing secret.
        expires_delta: Time until expiration. Defaults to
            settings.jwt_expiration_days.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "role": role,
        "aud": JWT_AUDIENCE,
        "iss": settings.auth_issuer,
        "exp": now + (expires_delta or timedelta(days=settings.jwt_expiration_days)),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str, secret: str) -> dict[str, Any]:
    """Decode and verify a JWT issued by create_jwt().

    Verifies signature, exp, aud and iss, and requires sub and role.

    Raises:
        jwt.InvalidTokenError: For any verification failure.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        audience=JWT_AUDIENCE,
        issuer=settings.auth_issuer,
        options={"require": ["sub", "role", "exp", "iat"]},
    )

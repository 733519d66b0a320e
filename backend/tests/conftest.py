import uuid
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.models.base import Base

# In-memory SQLite shared across connections via StaticPool
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Security: This is a test-only secret. Production uses a real secret from env.
TEST_AUTH_SECRET = "test-secret-key-that-is-at-least-32-characters-long"  # nosec B105  # gitleaks:allow

TEST_PASSWORD = "s3cret-pass"  # nosec B105

# Lowest cost bcrypt accepts; keeps registration fast in tests
_TEST_BCRYPT_ROUNDS = 4


def create_test_jwt(
    user_id: uuid.UUID,
    role: str = "CANDIDATE",
    *,
    secret: str = TEST_AUTH_SECRET,
    expires_delta: timedelta | None = None,
    iat: datetime | None = None,
) -> str:
    """Create a signed JWT for test authentication.

    Args:
        user_id: User UUID to encode in the sub claim.
        role: Role claim.
        secret: Signing secret (must match settings.auth_secret in tests).
        expires_delta: Time until expiration. Defaults to 1 hour.
        iat: Issued-at time. Defaults to now.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "role": role,
        "aud": "ravyz",
        "iss": settings.auth_issuer,
        "exp": now + (expires_delta or timedelta(hours=1)),
        "iat": iat or now,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with every table."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# =============================================================================
# API Test Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(db_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the app, backed by the test database.

    Sets up:
    - Test database connection via dependency override (commit on success,
      rollback on error, like the real get_db)
    - JWT signing with the test secret

    No Authorization header is sent by default; use ``bearer()`` or the
    ``candidate`` / ``employer`` fixtures for authenticated calls.

    Yields:
        AsyncClient for the FastAPI app.
    """
    from app.core.database import get_db
    from app.main import app

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    original_auth_secret = settings.auth_secret
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    settings.auth_secret = original_auth_secret
    app.dependency_overrides.clear()


async def register(
    client: AsyncClient,
    email: str,
    role: str = "CANDIDATE",
    password: str = TEST_PASSWORD,
) -> dict:
    """Register through the API and return the AuthTokenResponse payload."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "role": role},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def candidate(client: AsyncClient) -> dict:
    """A registered candidate: {"token": ..., "user": {...}}."""
    return await register(client, "candidate@example.com", "CANDIDATE")


@pytest_asyncio.fixture
async def employer(client: AsyncClient) -> dict:
    """A registered employer: {"token": ..., "user": {...}}."""
    return await register(client, "employer@example.com", "EMPLOYER")


# =============================================================================
# Autouse Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_navigation_sessions() -> Iterator[None]:
    """Tear down navigation sessions (and their timers) around each test."""
    from app.navigation.sessions import reset_session_store

    reset_session_store()
    yield
    reset_session_store()


@pytest.fixture(autouse=True)
def disable_rate_limiting() -> Iterator[None]:
    """Disable rate limiting during tests.

    Security: Rate limiting is tested separately; disable for other tests
    to avoid flaky failures from rate limit triggers.

    Yields:
        None (autouse fixture).
    """
    from app.core.rate_limiting import limiter

    original_enabled = limiter.enabled
    limiter.enabled = False

    yield

    limiter.enabled = original_enabled


@pytest.fixture(autouse=True)
def fast_password_hashing() -> Iterator[None]:
    """Hash passwords at the minimum bcrypt cost."""
    original_rounds = settings.bcrypt_rounds
    settings.bcrypt_rounds = _TEST_BCRYPT_ROUNDS
    yield
    settings.bcrypt_rounds = original_rounds

"""Tests for application configuration.

Settings for database, API, authentication and navigation. Tests cover
defaults, env var loading, and production security validation.
"""

import pytest
from pydantic import ValidationError

from app.core.config import (
    _INSECURE_DEFAULT_PASSWORD,
    _INSECURE_DEFAULT_SECRET,
    Settings,
)

# Reusable test constants
_SECURE_DB_PASSWORD = "my-secure-production-password-123!"
_TEST_AUTH_SECRET = "a" * 64
_PRODUCTION = "production"


class TestProductionSecurityValidation:
    """Tests for production security requirements."""

    def test_allows_default_password_in_development(self):
        """Default password is allowed in development environment."""
        s = Settings(
            environment="development",
            database_password=_INSECURE_DEFAULT_PASSWORD,
        )
        assert s.database_password == _INSECURE_DEFAULT_PASSWORD

    def test_rejects_default_password_in_production(self):
        """Default password is rejected in production environment."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                environment=_PRODUCTION,
                database_password=_INSECURE_DEFAULT_PASSWORD,
                auth_secret=_TEST_AUTH_SECRET,
            )

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert "Cannot use default database password in production" in str(
            errors[0]["msg"]
        )

    def test_allows_custom_password_and_secret_in_production(self):
        s = Settings(
            environment=_PRODUCTION,
            database_password=_SECURE_DB_PASSWORD,
            auth_secret=_TEST_AUTH_SECRET,
        )
        assert s.database_password == _SECURE_DB_PASSWORD

    def test_rejects_default_secret_in_production(self):
        with pytest.raises(ValidationError, match="AUTH_SECRET must be set"):
            Settings(
                environment=_PRODUCTION,
                database_password=_SECURE_DB_PASSWORD,
                auth_secret=_INSECURE_DEFAULT_SECRET,
            )

    def test_rejects_short_secret_in_production(self):
        with pytest.raises(ValidationError, match="at least 32"):
            Settings(
                environment=_PRODUCTION,
                database_password=_SECURE_DB_PASSWORD,
                auth_secret="short-secret",
            )

    def test_rejects_wildcard_cors_everywhere(self):
        with pytest.raises(ValidationError, match="wildcard"):
            Settings(allowed_origins=["*"])


class TestAuthConfigDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.auth_issuer == "ravyz"
        assert s.jwt_expiration_days == 7
        assert s.rate_limit_register == "5/minute"
        assert s.rate_limit_navigation_sessions == "30/minute"

    def test_jwt_secret_alias(self, monkeypatch):
        """JWT_SECRET is accepted as an alias for AUTH_SECRET."""
        monkeypatch.delenv("AUTH_SECRET", raising=False)
        monkeypatch.setenv("JWT_SECRET", _TEST_AUTH_SECRET)
        s = Settings()
        assert s.auth_secret.get_secret_value() == _TEST_AUTH_SECRET

    def test_rejects_zero_expiration(self):
        with pytest.raises(ValidationError, match="JWT_EXPIRATION_DAYS"):
            Settings(jwt_expiration_days=0)


class TestNavigationConfig:
    def test_defaults(self):
        s = Settings()
        assert s.navigation_entry_screen == "login-selection"
        assert s.navigation_session_ttl_minutes == 24 * 60
        assert s.navigation_change_log_size == 200
        assert s.splash_delay_seconds == pytest.approx(4.8)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SPLASH_DELAY_SECONDS", "1.5")
        monkeypatch.setenv("NAVIGATION_ENTRY_SCREEN", "splash")
        s = Settings()
        assert s.splash_delay_seconds == pytest.approx(1.5)
        assert s.navigation_entry_screen == "splash"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("navigation_session_ttl_minutes", 0),
            ("navigation_change_log_size", 0),
            ("splash_delay_seconds", -1.0),
        ],
    )
    def test_rejects_invalid_limits(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})


class TestDatabaseUrl:
    def test_builds_asyncpg_url(self):
        s = Settings(
            database_host="db",
            database_port=6543,
            database_name="ravyz",
            database_user="app",
            database_password="pw",
        )
        assert s.database_url == "postgresql+asyncpg://app:pw@db:6543/ravyz"

"""Application configuration loaded from environment variables.

Settings for database, API, authentication, rate limiting and the onboarding
navigation layer. Uses pydantic-settings for validation and .env file support.
"""

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure defaults that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "ravyz_dev_password"  # nosec B105
_INSECURE_DEFAULT_SECRET = "ravyz-dev-secret-not-for-production-use"  # nosec B105

# Minimum length for AUTH_SECRET in production (256 bits = 32 bytes)
_MIN_AUTH_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "ravyz"
    database_user: str = "ravyz_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD

    # API
    # 0.0.0.0 binds to all network interfaces (required for Docker containers)
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8000

    # CORS (Security)
    # Default allows the Vite dev server
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Authentication
    # JWT_SECRET is accepted for compatibility with existing deployments
    auth_secret: SecretStr = Field(
        default=SecretStr(_INSECURE_DEFAULT_SECRET),
        validation_alias=AliasChoices("auth_secret", "jwt_secret"),
    )
    auth_issuer: str = "ravyz"
    jwt_expiration_days: int = 7
    bcrypt_rounds: int = 10

    # Rate Limiting (Security)
    # Format: "count/period" (e.g., "10/minute", "100/hour")
    rate_limit_login: str = "10/minute"
    rate_limit_register: str = "5/minute"
    rate_limit_navigation_sessions: str = "30/minute"
    rate_limit_enabled: bool = True  # Disable for testing

    # Navigation
    navigation_entry_screen: str = "login-selection"
    navigation_session_ttl_minutes: int = 24 * 60
    navigation_change_log_size: int = 200
    # Splash auto-advance delay; None disables auto-advance
    splash_delay_seconds: float | None = 4.8

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate configuration invariants and production security.

        Checks:
        - JWT lifetime and navigation limits must be positive (all environments)
        - CORS must not use wildcard origin (incompatible with credentials)
        - Database password must not be the default in production
        - AUTH_SECRET must be set, non-default and >= 32 chars in production
        """
        if self.jwt_expiration_days < 1:
            msg = f"JWT_EXPIRATION_DAYS must be at least 1. Got: {self.jwt_expiration_days}"
            raise ValueError(msg)

        if self.navigation_session_ttl_minutes < 1:
            msg = (
                "NAVIGATION_SESSION_TTL_MINUTES must be at least 1. "
                f"Got: {self.navigation_session_ttl_minutes}"
            )
            raise ValueError(msg)

        if self.navigation_change_log_size < 1:
            msg = (
                "NAVIGATION_CHANGE_LOG_SIZE must be at least 1. "
                f"Got: {self.navigation_change_log_size}"
            )
            raise ValueError(msg)

        if self.splash_delay_seconds is not None and self.splash_delay_seconds < 0:
            msg = f"SPLASH_DELAY_SECONDS cannot be negative. Got: {self.splash_delay_seconds}"
            raise ValueError(msg)

        # CORS wildcard with credentials is invalid (all environments)
        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "This application uses credentials which are "
                "incompatible with wildcard CORS origins."
            )
            raise ValueError(msg)

        if self.environment == "production":
            if self.database_password == _INSECURE_DEFAULT_PASSWORD:
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            secret_value = self.auth_secret.get_secret_value()
            if not secret_value or secret_value == _INSECURE_DEFAULT_SECRET:
                msg = (
                    "AUTH_SECRET must be set in production. "
                    'Generate with: python -c "import secrets; '
                    'print(secrets.token_hex(32))"'
                )
                raise ValueError(msg)
            if len(secret_value) < _MIN_AUTH_SECRET_LENGTH:
                msg = (
                    f"AUTH_SECRET must be at least {_MIN_AUTH_SECRET_LENGTH} "
                    "characters for adequate security."
                )
                raise ValueError(msg)

        return self


settings = Settings()

"""Application settings and configuration.

This module defines all configuration options for the Care Kit service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Care Kit", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./care_kit.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 14,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Participant ID allocation
    participant_id_prefix: str = Field(default="P", alias="PARTICIPANT_ID_PREFIX")
    participant_id_start: int = Field(default=2025000, ge=0, alias="PARTICIPANT_ID_START")
    participant_counter_name: str = Field(
        default="participantId",
        alias="PARTICIPANT_COUNTER_NAME",
    )
    counter_max_attempts: int = Field(default=5, ge=1, alias="COUNTER_MAX_ATTEMPTS")

    # Study schedule
    evening_unlock_hour: int = Field(default=18, ge=0, le=23, alias="EVENING_UNLOCK_HOUR")
    study_timezone: str = Field(default="UTC", alias="STUDY_TIMEZONE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level so ``info`` and ``INFO`` both work."""
        return v.strip().upper()

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return the database URL Alembic should migrate."""
        return self.effective_database_url


settings = Settings()  # type: ignore[call-arg]

"""Pingboard configuration - environment-driven settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shared role secrets shorter than this produce a startup warning
MIN_SECRET_LENGTH = 12


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Pingboard"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    # One shared secret per role
    password_user: str = Field(..., min_length=1)
    password_admin: str = Field(..., min_length=1)

    # Blacklist persistence: database wins over file, neither means in-memory only
    database_url: str | None = None
    db_create_tables: bool = True
    blacklist_file: Path | None = None

    cors_origins: str = "*"
    login_rate_limit: str = "10/minute"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @field_validator("database_url", "blacklist_file", mode="before")
    @classmethod
    def _empty_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _validate_role_secrets(self) -> "Settings":
        # Identical secrets would make the login role ambiguous
        if self.password_user == self.password_admin:
            raise ValueError("PASSWORD_USER and PASSWORD_ADMIN must be different")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def blacklist_backend(self) -> str:
        """Name of the blacklist persistence backend in effect."""
        if self.database_url:
            return "database"
        if self.blacklist_file:
            return "file"
        return "memory"

    def check_security_configuration(self) -> list[str]:
        """Return human-readable warnings about risky configuration."""
        warnings: list[str] = []

        if len(self.password_user) < MIN_SECRET_LENGTH:
            warnings.append(
                f"PASSWORD_USER is shorter than {MIN_SECRET_LENGTH} characters"
            )
        if len(self.password_admin) < MIN_SECRET_LENGTH:
            warnings.append(
                f"PASSWORD_ADMIN is shorter than {MIN_SECRET_LENGTH} characters"
            )
        if "*" in self.cors_origins_list:
            warnings.append("CORS_ORIGINS allows any origin")
        if self.blacklist_backend == "memory":
            warnings.append(
                "Neither DATABASE_URL nor BLACKLIST_FILE is set. "
                "Blacklist will be in-memory only and lost on restart."
            )

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

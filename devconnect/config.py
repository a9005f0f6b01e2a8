"""
Service settings, read from the environment and an optional ``.env`` file.

    from devconnect.config import get_settings
    settings = get_settings()
"""

import os
import warnings
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_LENGTH = 32
PLACEHOLDER_SECRETS = {"change_me", "changeme", "secret", "test", "development", "jwt-secret"}


def is_production() -> bool:
    return os.getenv("ENV", "development").lower() in ("production", "prod")


def secret_problem(secret: str) -> str | None:
    """Describe why ``secret`` is unfit for signing tokens, or None."""
    if secret.lower() in PLACEHOLDER_SECRETS:
        return f"JWT_SECRET_KEY is a placeholder value ('{secret}')"
    if len(secret) < MIN_SECRET_LENGTH:
        return f"JWT_SECRET_KEY must be at least {MIN_SECRET_LENGTH} characters (got {len(secret)})"
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "DevConnect Profiles"
    api_prefix: str = "/api"
    debug: bool = False

    # Storage
    database_url: str = Field(default="sqlite:///devconnect.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    auto_create_tables: bool = Field(default=False, validation_alias="AUTO_CREATE_TABLES")

    # GitHub repos proxy; the OAuth app credentials only raise the rate limit
    github_client_id: str = Field(default="", validation_alias="GITHUB_CLIENT_ID")
    github_client_secret: str = Field(default="", validation_alias="GITHUB_CLIENT_SECRET")
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    github_timeout_seconds: float = Field(default=10.0, validation_alias="GITHUB_TIMEOUT_SECONDS")
    github_repos_per_page: int = 5
    github_repos_sort: str = "created:asc"

    # Token verification
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    @field_validator("jwt_secret_key")
    @classmethod
    def check_jwt_secret(cls, value: str) -> str:
        """Fatal in production, a warning anywhere else."""
        problem = secret_problem(value)
        if problem and is_production():
            raise ValueError(problem)
        if problem:
            warnings.warn(problem, UserWarning, stacklevel=2)
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[list[str], list[str]]:
        """Return ``(errors, warnings)``; startup aborts on errors in production."""
        errors: list[str] = []
        notes: list[str] = []

        problem = secret_problem(self.jwt_secret_key)
        if problem:
            errors.append(problem)
        if not (self.github_client_id and self.github_client_secret):
            notes.append("GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET unset; GitHub lookups use the anonymous rate limit")
        if self.database_url.startswith("sqlite"):
            notes.append("DATABASE_URL points at SQLite; use PostgreSQL in production")
        return errors, notes


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - ONE_API_KEY is required; missing or malformed values fail validation at startup
    - get_settings() is cached (lru_cache): one instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - CORS_ORIGINS accepts "*" or a comma-separated list (NoDecode skips JSON parsing)
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from lotr_api.core.domain_types import Environment

_ASYNC_DRIVERS = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: Environment = Environment.DEVELOPMENT
    port: int = Field(3000, ge=1, le=65535)

    # Database
    database_url: str = (
        "postgresql+asyncpg://lotr:lotr@db:5432/lotr"
    )
    database_pool_size: int = 10
    database_max_overflow: int = 5

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("database_url")
    @classmethod
    def require_async_driver(cls, v: str) -> str:
        if not v.startswith(_ASYNC_DRIVERS):
            raise ValueError(
                f"database_url must start with one of {', '.join(_ASYNC_DRIVERS)}",
            )
        return v

    # The One API
    one_api_key: str = Field(min_length=1)
    one_api_base_url: str = "https://the-one-api.dev/v2"
    one_api_timeout_seconds: float = Field(10.0, gt=0)

    @field_validator("one_api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("one_api_base_url must be an http(s) URL")
        return v.rstrip("/")

    # API
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: object) -> object:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    # Rate limiting (limits-library notation)
    rate_limit_general: str = "100 per 15 minutes"
    rate_limit_strict: str = "10 per 15 minutes"
    rate_limit_enabled: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str | None = None  # "json" | "text"; defaults by environment

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def effective_log_format(self) -> str:
        if self.log_format:
            return self.log_format
        return "json" if self.is_production else "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()

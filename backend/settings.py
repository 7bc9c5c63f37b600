"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.phase_total_weeks)
"""

from datetime import date
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.core.constants import DEFAULT_PHASE_TOTAL_WEEKS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Supabase Key-Value Store
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )
    kv_table: str = Field(
        default="kv_store",
        description="Table holding {key, value} snapshot rows",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    # -------------------------------------------------------------------------
    # Program / Schedule
    # -------------------------------------------------------------------------
    program_anchor_date: Optional[date] = Field(
        default=None,
        description="Overrides the start date of the configured program",
    )
    program_file: Optional[str] = Field(
        default=None,
        description="YAML program definition (defaults to the bundled program)",
    )
    phase_total_weeks: int = Field(
        default=DEFAULT_PHASE_TOTAL_WEEKS,
        ge=1,
        le=104,
        description="Phase plan length, independent of the schedule cycle",
    )
    secondary_session_template_id: Optional[str] = Field(
        default=None,
        description="Template added to today's workouts when one is scheduled",
    )
    reflection_merge_strict: bool = Field(
        default=True,
        description="Reject reflection merges that cannot pick a single record",
    )

    # -------------------------------------------------------------------------
    # Persistence retry
    # -------------------------------------------------------------------------
    persistence_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per store write before giving up",
    )
    persistence_min_wait_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Initial backoff between attempts",
    )
    persistence_max_wait_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Backoff ceiling between attempts",
    )
    persistence_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Overall deadline for one store write, and the HTTP timeout per call",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("secondary_session_template_id", "program_file", "sentry_dsn")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_backoff(self) -> "Settings":
        if self.persistence_min_wait_seconds > self.persistence_max_wait_seconds:
            raise ValueError(
                "persistence_min_wait_seconds cannot exceed persistence_max_wait_seconds"
            )
        return self

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()

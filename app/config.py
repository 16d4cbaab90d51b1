"""Application configuration with environment separation."""
from functools import lru_cache
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from app.core.tiers import UnrecognizedTierPolicy


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    # App
    app_name: str = "TierEvents"
    api_v1_prefix: str = "/api/v1"

    # Supabase
    supabase_url: str = Field(default="")
    supabase_service_key: str = Field(default="")  # Admin API profile lookups

    # Database - Supabase PostgreSQL
    # Pooler URL (port 6543) for app runtime
    database_url: str = Field(default="sqlite+aiosqlite:///./tierevents.db")

    # Auth - Supabase Auth JWTs
    supabase_jwt_secret: str = Field(default="dev-secret-change-in-production")
    supabase_jwt_audience: str = "authenticated"
    algorithm: str = "HS256"

    # Tier gating
    tier_claim: str = Field(default="app_metadata.tier")
    unrecognized_tier_policy: UnrecognizedTierPolicy = UnrecognizedTierPolicy.DENY

    # Security - stored as comma-separated string in .env
    allowed_origins: str = Field(default="http://localhost:3000,http://localhost:5173")
    rate_limit_per_minute: int = Field(default=60)
    rate_limit_enabled: bool = True

    @field_validator("debug", mode="before")
    @classmethod
    def set_debug(cls, v, info):
        """Disable debug in production."""
        if info.data.get("environment") == Environment.PRODUCTION:
            return False
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get allowed origins as list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def rate_limit(self) -> str:
        """slowapi limit string."""
        return f"{self.rate_limit_per_minute}/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Application configuration with validation."""
from typing import Optional, Literal, List, Dict
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# SCORING CATEGORIES
# =============================================================================
# Maximum value per rubric category. Four categories are scored 0-4 and the
# two weighted categories 0-8, for a maximum total of 32.
# =============================================================================

CATEGORY_MAX_SCORES: Dict[str, float] = {
    "kick": 4.0,
    "jump": 4.0,
    "turn": 4.0,
    "performance": 4.0,
    "execution": 8.0,
    "technique": 8.0,
}

MAX_TOTAL_SCORE: float = sum(CATEGORY_MAX_SCORES.values())


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Audition Judging Platform"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Document store
    STORE_BACKEND: Literal["snowflake", "memory"] = "snowflake"

    # Snowflake
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL_RESULTS: int = Field(default=300, ge=1, le=86400)  # 5 minutes

    # Deliberation
    TRANSFER_POLICY: Literal["best_effort", "fail_fast"] = "best_effort"
    RANKING_MODE: Literal["positional", "tie_aware"] = "positional"
    LEVEL_LABELS: List[str] = Field(
        default=["Level 1", "Level 2", "Level 3", "Level 4"], min_length=1
    )
    DEFAULT_LEVEL: str = "Level 4"

    @model_validator(mode="after")
    def validate_snowflake_credentials(self):
        """Snowflake backend needs a full credential set."""
        if self.STORE_BACKEND == "snowflake":
            missing = [
                name
                for name in ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"STORE_BACKEND=snowflake requires: {', '.join(missing)}"
                )
        return self

    @model_validator(mode="after")
    def validate_levels(self):
        """Ensure the default level is one of the configured labels."""
        if self.DEFAULT_LEVEL not in self.LEVEL_LABELS:
            raise ValueError(
                f"DEFAULT_LEVEL '{self.DEFAULT_LEVEL}' must be one of {self.LEVEL_LABELS}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production runs against a durable store."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.STORE_BACKEND == "memory":
                raise ValueError("The in-memory store cannot be used in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()

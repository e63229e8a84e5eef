"""
Configuration settings for the dispatch layer
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator


class Settings(BaseSettings):
    """Library settings"""

    # Project Info
    PROJECT_NAME: str = "cqrs-dispatch"

    # Cache
    CACHE_DRIVER: str = Field(default="memory")
    CACHE_DEFAULT_TTL: int = Field(default=60)  # seconds
    CACHE_PREFIX: str = Field(default="cqrs")

    @field_validator('CACHE_DRIVER')
    @classmethod
    def normalize_cache_driver(cls, v: str) -> str:
        """Driver names are matched case-insensitively"""
        return v.strip().lower()

    @field_validator('CACHE_DEFAULT_TTL')
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v < 1:
            raise ValueError("CACHE_DEFAULT_TTL must be a positive number of seconds")
        return v

    # Redis
    REDIS_URL: str = Field(default="redis://localhost:6379/0")

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)

    # Celery
    CELERY_BROKER_URL: str = Field(
        default="memory://",
        validation_alias=AliasChoices("CELERY_BROKER_URL", "REDIS_URL"),
    )
    CELERY_RESULT_BACKEND: str = Field(default="cache+memory://")
    QUEUE_DEFAULT: str = Field(default="default")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create settings instance
settings = Settings()

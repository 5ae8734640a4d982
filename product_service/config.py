# product_service/config.py

"""
Runtime configuration for the Product Service, read from environment variables
(and a `.env` file, when present) by pydantic-settings.
"""
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_database_url() -> str:
    # Compose the PostgreSQL URL from its parts when DATABASE_URL is not given
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    name = os.getenv("POSTGRES_DB", "postgres")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


class Settings(BaseSettings):
    """
    Each field is loaded from the upper-case environment variable of the same
    name (DATABASE_URL, FRONTEND_URL, DB_CONNECT_RETRIES, ...).
    """

    database_url: str = Field(
        default_factory=_default_database_url, description="SQLAlchemy database URL."
    )
    frontend_url: str = Field(
        "http://localhost:5173", description="The single origin allowed by CORS."
    )
    db_connect_retries: int = Field(1, ge=1)
    db_connect_retry_delay: float = Field(5.0, ge=0)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(4000, ge=1, le=65535)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # An empty DATABASE_URL falls back to the composed PostgreSQL URL
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


def load_settings() -> Settings:
    """
    Builds a `Settings` object from the current process environment.
    Raises `pydantic.ValidationError` naming the variable when a value is malformed.
    """
    return Settings()

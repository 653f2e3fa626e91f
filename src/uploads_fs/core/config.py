"""Application configuration management."""

import tempfile
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Remote files API
    files_api_base_url: str = Field(default="", alias="FILES_API_BASE_URL")
    files_site_id: int = Field(
        default=0,
        ge=0,
        alias="FILES_SITE_ID",
        description="Numeric site identifier sent as X-Client-Site-ID",
    )
    files_access_token: str = Field(default="", alias="FILES_ACCESS_TOKEN")
    files_request_timeout: int = Field(
        default=10,
        ge=1,
        alias="FILES_REQUEST_TIMEOUT",
        description="Timeout in seconds for metadata requests (exists, get, delete)",
    )

    # Namespaces
    uploads_root: str = Field(default="", alias="UPLOADS_ROOT")
    uploads_site_root: str = Field(
        default="",
        alias="UPLOADS_SITE_ROOT",
        description="Local prefix stripped from uploads paths before they are sent to the API",
    )
    temp_root: str = Field(default_factory=tempfile.gettempdir, alias="TEMP_ROOT")

    # Set FATAL_ERRORS=false to record unroutable paths and unsupported
    # operations without raising.
    fatal_errors: bool = Field(default=True, alias="FATAL_ERRORS")

    # Application
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

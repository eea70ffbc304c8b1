"""Application configuration management."""
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend API
    api_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the gallery REST API"
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the admin endpoints"
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    # Media picker
    picker_page_size: int = Field(
        default=500,
        ge=1,
        le=500,
        description="Media fetched when a picker opens (effectively the whole library)"
    )
    artist_page_size: int = Field(default=100, ge=1, description="Artists fetched for filter facets")
    media_page_size: int = Field(default=50, ge=1, description="Page size of the admin media list")
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone used for date buckets (system local time if unset)"
    )

    # Uploads
    upload_max_size_mb: int = Field(default=20, ge=1, description="Largest file accepted for upload")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined with a leading slash."""
        return v.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject unknown timezone names early."""
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {v}") from e
        return v or None

    @property
    def upload_max_size_bytes(self) -> int:
        return self.upload_max_size_mb * 1024 * 1024

    def tzinfo(self) -> Optional[ZoneInfo]:
        """Timezone for date buckets, or None for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


# Singleton instance - reads from the environment and .env when imported
try:
    settings = Settings()
except Exception as e:
    print(f"Error loading configuration: {e}")
    print("Check API_BASE_URL, PICKER_PAGE_SIZE and TIMEZONE in your environment or .env file.")
    raise

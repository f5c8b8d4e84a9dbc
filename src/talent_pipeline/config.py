"""Configuration management for Talent Pipeline."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Recruiter API
    api_base_url: str = Field("http://localhost:5000", description="Base URL of the recruiter backend")
    api_timeout: float = Field(15.0, description="HTTP timeout in seconds")
    api_token: Optional[str] = Field(None, description="Bearer token sent to the recruiter backend")

    # Matching Configuration
    suggestion_threshold: int = Field(50, description="Suggestions must score strictly above this")
    suggestion_limit: int = Field(5, description="Maximum number of dashboard suggestions")

    # Lifecycle Configuration
    refresh_after_write: bool = Field(True, description="Re-fetch applicants after every status change")

    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")


# Global settings instance
settings = Settings()

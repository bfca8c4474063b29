"""
Application settings and configuration management
Uses pydantic-settings for type-safe environment variable handling
"""

import os
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, computed_field, model_validator
from dotenv import load_dotenv

# Path resolution: app/config/settings.py -> app/config/ -> app/ -> project_root/
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

# Load .env file with explicit path
if ENV_PATH.exists():
    load_dotenv(dotenv_path=ENV_PATH, override=False)
else:
    load_dotenv(override=False)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    Time Complexity: O(1) - Settings initialization
    Space Complexity: O(1) - Constant space for settings
    """

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH) if ENV_PATH.exists() else str(Path.cwd() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend Configuration
    backend_port: int = Field(default=8000)
    environment: str = Field(default="development")
    frontend_url: Optional[str] = Field(default=None)

    # Logging Configuration
    log_level: str = Field(default="INFO")

    # Scoring Configuration (whole percentages on the canonical 0-100 scale)
    action_item_threshold: float = Field(default=70, ge=0, le=100)
    high_priority_cutoff: float = Field(default=50, ge=0, le=100)
    trend_tolerance: float = Field(default=2, ge=0)
    default_trend_period: str = Field(default="month")

    @model_validator(mode="after")
    def check_priority_bands(self) -> "Settings":
        if self.high_priority_cutoff > self.action_item_threshold:
            raise ValueError(
                "HIGH_PRIORITY_CUTOFF must not exceed ACTION_ITEM_THRESHOLD "
                f"({self.high_priority_cutoff} > {self.action_item_threshold})"
            )
        if self.default_trend_period not in ("day", "week", "month"):
            raise ValueError(f"DEFAULT_TREND_PERIOD must be day, week or month, got {self.default_trend_period!r}")
        return self

    # CORS Configuration - Use computed field to avoid pydantic-settings JSON parsing
    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list, parsing from environment variable"""
        cors_val = os.getenv('CORS_ORIGINS')

        if cors_val:
            parsed = [origin.strip() for origin in cors_val.split(",") if origin.strip()]
            if parsed:
                return parsed

        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Get application settings instance
    Time Complexity: O(1)
    Space Complexity: O(1)
    """
    return settings


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins
    Time Complexity: O(n) where n = number of origins
    Space Complexity: O(n)
    """
    origins = list(settings.cors_origins) if settings.cors_origins else []

    if settings.frontend_url:
        origins.append(settings.frontend_url)

    # Remove duplicates while preserving order
    seen = set()
    unique_origins = []
    for origin in origins:
        if origin not in seen:
            seen.add(origin)
            unique_origins.append(origin)

    if not unique_origins and settings.environment == "development":
        return ["*"]

    return unique_origins

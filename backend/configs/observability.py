"""
Observability configuration settings.

Settings for logging and cross-origin access of the HTTP API.

Dependencies: pydantic_settings
System role: Observability configuration for logging
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ObservabilitySettings(BaseSettings):
    """Logging and CORS configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OBSERVABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated CORS origins",
    )

    def get_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

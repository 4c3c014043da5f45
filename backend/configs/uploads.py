"""
Upload validation configuration.

Dependencies: pydantic_settings
System role: Upload limits
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UploadSettings(BaseSettings):
    """Limits applied to incoming documents."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted file size in bytes (10 MiB)",
    )
    allowed_mime_type: str = Field(
        default="application/pdf",
        description="The only MIME type accepted for uploads",
    )

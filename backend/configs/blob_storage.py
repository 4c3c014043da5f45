"""
Blob storage configuration.

Settings for the S3 bucket holding uploaded PDFs, public URL composition
and signed URL issuance.

Dependencies: pydantic_settings
System role: Blob store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStorageSettings(BaseSettings):
    """Settings for S3 blob operations."""

    model_config = SettingsConfigDict(
        env_prefix="BLOB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="pdfshare-dev-documents",
        description="S3 bucket for uploaded PDFs",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for S3 bucket",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3 endpoint (MinIO, LocalStack); None for AWS",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL for public objects; derived from bucket/region when unset",
    )
    signed_url_ttl: int = Field(
        default=3600,
        description="Signed URL expiry in seconds (default 1 hour)",
    )
    connect_timeout: float = Field(default=5.0, description="S3 connect timeout in seconds")
    read_timeout: float = Field(default=30.0, description="S3 read timeout in seconds")

    @property
    def resolved_public_base_url(self) -> str:
        """Public URL prefix under which object keys are appended."""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"

"""
Authentication configuration.

Settings for password hashing, bearer token issuance and the
post-signin session verification loop.

Dependencies: pydantic_settings
System role: Identity layer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Settings for the local identity layer."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_seconds: int = Field(
        default=7 * 24 * 3600,
        description="Bearer token lifetime in seconds",
    )
    password_hash_iterations: int = Field(
        default=260_000,
        description="PBKDF2-SHA256 iteration count",
    )
    session_verify_attempts: int = Field(
        default=5,
        description="Attempts made to confirm a freshly issued session",
    )
    session_verify_delay: float = Field(
        default=1.0,
        description="Delay between session verification attempts in seconds",
    )

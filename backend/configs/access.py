"""
Access policy configuration.

Dependencies: pydantic_settings
System role: Document visibility policy switches
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccessSettings(BaseSettings):
    """Document read policy."""

    model_config = SettingsConfigDict(
        env_prefix="ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    conceal_private_documents: bool = Field(
        default=True,
        description=(
            "Answer NotFound instead of Unauthorized when a non-owner reads "
            "a private document"
        ),
    )

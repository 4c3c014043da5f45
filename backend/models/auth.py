"""
Auth request/response schemas.

Dependencies: pydantic
System role: Identity API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    """Request schema for account creation."""

    email: str = Field(description="Login email")
    password: str = Field(description="Plain-text password (min 6 characters)")
    name: str = Field(description="Display name (2-50 characters)")


class SignInRequest(BaseModel):
    """Request schema for password signin."""

    email: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user profile."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str | None = None
    created_at: datetime


class SignUpResponse(BaseModel):
    """Response schema for signup."""

    message: str
    user: UserResponse


class AuthSession(BaseModel):
    """Issued bearer session."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class SignInResponse(BaseModel):
    """Response schema for signin."""

    message: str
    user: UserResponse
    session: AuthSession


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str

"""
Auth API endpoints.

Routes:
- POST /auth/signup - Create account
- POST /auth/signin - Exchange email/password for a bearer token
- POST /auth/signout - Revoke the current token
- GET /auth/me - Resolve the current token to an identity

Dependencies: backend.application.services, backend.models
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from backend.api.deps import get_auth_service, get_bearer_token, require_identity
from backend.api.error_handling import handle_service_errors
from backend.application.services.auth_service import AuthService
from backend.core.exceptions import Unauthenticated
from backend.models.auth import (
    MessageResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)
from backend.models.identity import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignUpResponse)
@handle_service_errors
async def signup(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """
    Create an account.

    Raises:
        HTTPException(400): Invalid fields or email already registered
    """
    user = await auth_service.signup(request.email, request.password, request.name)
    return SignUpResponse(message="User created successfully", user=user)


@router.post("/signin", response_model=SignInResponse)
@handle_service_errors
async def signin(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignInResponse:
    """
    Sign in with email and password.

    Raises:
        HTTPException(401): Bad credentials or session not established
    """
    return await auth_service.signin(request.email, request.password)


@router.post("/signout", response_model=MessageResponse)
@handle_service_errors
async def signout(
    token: str | None = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the bearer token of this request."""
    if token is None:
        raise Unauthenticated()
    await auth_service.signout(token)
    return MessageResponse(message="Signed out successfully")


@router.get("/me", response_model=Identity)
async def me(identity: Identity = Depends(require_identity)) -> Identity:
    """Return the authenticated caller."""
    return identity

"""
Auth service.

Local identity provider: account creation, password signin issuing bearer
tokens backed by revocable session rows, signout and token resolution.

After signin the freshly written session is read back through the bounded
retry primitive before the token is handed out, so a caller never receives a
token that does not resolve yet.

Dependencies: backend.boundary.db.CRUD, backend.core.security, backend.core.retry
System role: Identity orchestration
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.auth_session_crud import auth_session_crud
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.transaction import commit
from backend.configs.auth import AuthSettings
from backend.core.exceptions import Conflict, Unauthenticated, ValidationError
from backend.core.retry import BoundedRetry
from backend.core.security import TokenCodec, hash_password, verify_password
from backend.models.auth import AuthSession, SignInResponse, UserResponse
from backend.models.identity import Identity

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50


def validate_signup(email: str, password: str, name: str) -> tuple[str, str]:
    """
    Check signup fields.

    Returns:
        tuple[str, str]: Normalized (email, name)

    Raises:
        ValidationError: On the first invalid field
    """
    email = (email or "").strip().lower()
    name = (name or "").strip()
    if "@" not in email:
        raise ValidationError("Invalid email format", field="email")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters",
            field="name",
        )
    return email, name


class AuthService:
    """Signup, signin, signout and bearer token resolution."""

    def __init__(
        self,
        db: AsyncSession,
        token_codec: TokenCodec,
        settings: AuthSettings | None = None,
        retry: BoundedRetry | None = None,
    ) -> None:
        """
        Initialize auth service.

        Args:
            db: AsyncSession for users and sessions
            token_codec: Signs and verifies bearer tokens
            settings: Auth settings (hash iterations, verify loop)
            retry: Session verification policy (built from settings if None)
        """
        self.db = db
        self.token_codec = token_codec
        self.settings = settings or AuthSettings()
        self.retry = retry or BoundedRetry(
            max_attempts=self.settings.session_verify_attempts,
            delay_seconds=self.settings.session_verify_delay,
        )

    async def signup(self, email: str, password: str, name: str) -> UserResponse:
        """
        Create an account.

        Raises:
            ValidationError: Bad email, short password, or bad name length
            Conflict: Email already registered
            StoreUnavailable: Record store failure
        """
        email, name = validate_signup(email, password, name)

        if await user_crud.get_by_email(self.db, email) is not None:
            raise Conflict("Email already registered", details={"field": "email"})

        user = await user_crud.create(
            self.db,
            email=email,
            name=name,
            password_hash=hash_password(password, self.settings.password_hash_iterations),
        )
        await commit(self.db)

        logger.info("User signed up", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user)

    async def signin(self, email: str, password: str) -> SignInResponse:
        """
        Authenticate with email and password and issue a bearer token.

        Steps:
        1. Verify credentials (same error for unknown email and bad password)
        2. Insert an auth session row and commit
        3. Sign the token
        4. Poll until the session resolves as active

        Raises:
            Unauthenticated: Bad credentials, inactive account, or the
                session could not be confirmed
            StoreUnavailable: Record store failure
        """
        user = await user_crud.get_by_email(self.db, email or "")
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Signin rejected", extra={"reason": "bad_credentials"})
            raise Unauthenticated("Invalid email or password")
        if not user.is_active:
            raise Unauthenticated("Account is disabled")

        auth_session = await auth_session_crud.create(
            self.db,
            user_id=user.id,
            expires_at=self._expiry(),
        )
        await commit(self.db)
        session_id = auth_session.id

        token, expires_at = self.token_codec.issue(user.id, session_id)

        outcome = await self.retry.poll(
            lambda: auth_session_crud.get_active(self.db, session_id),
            is_success=lambda found: found is not None,
            label="session verification",
        )
        if not outcome.succeeded:
            logger.error(
                "Session not visible after signin",
                extra={"user_id": str(user.id), "attempts": outcome.attempts},
            )
            raise Unauthenticated(
                "Failed to establish session",
                details={"attempts": outcome.attempts},
            )

        logger.info(
            "User signed in",
            extra={"user_id": str(user.id), "session_id": str(session_id)},
        )
        return SignInResponse(
            message="Signed in successfully",
            user=UserResponse.model_validate(user),
            session=AuthSession(access_token=token, expires_at=expires_at),
        )

    def _expiry(self) -> datetime:
        return datetime.now(timezone.utc) + timedelta(seconds=self.token_codec.ttl_seconds)

    async def signout(self, token: str) -> None:
        """
        Revoke the session behind a token. Already revoked is not an error.

        Raises:
            Unauthenticated: Token is malformed or expired
        """
        claims = self.token_codec.decode(token)
        revoked = await auth_session_crud.revoke(self.db, claims.session_id)
        await commit(self.db)
        logger.info(
            "User signed out",
            extra={"user_id": str(claims.user_id), "revoked": revoked},
        )

    async def resolve(self, token: str) -> Identity:
        """
        Resolve a bearer token to the caller identity.

        Raises:
            Unauthenticated: Bad token, revoked or expired session, or
                unknown/inactive user
        """
        claims = self.token_codec.decode(token)

        auth_session = await auth_session_crud.get_active(self.db, claims.session_id)
        if auth_session is None or auth_session.user_id != claims.user_id:
            raise Unauthenticated("Session is no longer active")

        user = await self._active_user(claims.user_id)
        return Identity(id=user.id, email=user.email, name=user.name)

    async def _active_user(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None or not user.is_active:
            raise Unauthenticated("Session is no longer active")
        return user

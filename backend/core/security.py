"""
Password hashing and bearer token codec.

Passwords are stored as PBKDF2-SHA256 digests in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``. Bearer tokens are
HS256 JWTs carrying the user id (``sub``) and the auth session id (``jti``).

Dependencies: hashlib, PyJWT
System role: Credential primitives for the identity layer
"""

import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from backend.core.exceptions import Unauthenticated

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 260_000) -> str:
    """
    Hash a password with a random salt.

    Args:
        password: Plain-text password
        iterations: PBKDF2 iteration count

    Returns:
        str: Encoded hash string
    """
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a plain-text password against an encoded hash."""
    try:
        scheme, iterations, salt_hex, digest_hex = encoded.split("$")
        if scheme != _HASH_SCHEME:
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            bytes.fromhex(salt_hex),
            int(iterations),
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)


@dataclass(frozen=True)
class TokenClaims:
    """Decoded bearer token."""

    user_id: uuid.UUID
    session_id: uuid.UUID
    expires_at: datetime


class TokenCodec:
    """Issues and decodes signed bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600) -> None:
        """
        Initialize codec.

        Args:
            secret: HMAC signing secret
            algorithm: JWT algorithm
            ttl_seconds: Lifetime of issued tokens
        """
        self._secret = secret
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def issue(self, user_id: uuid.UUID, session_id: uuid.UUID) -> tuple[str, datetime]:
        """
        Sign a token for an auth session.

        Returns:
            tuple[str, datetime]: (token, expires_at)
        """
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        token = jwt.encode(
            {
                "sub": str(user_id),
                "jti": str(session_id),
                "iat": now,
                "exp": expires_at,
            },
            self._secret,
            algorithm=self._algorithm,
        )
        return token, expires_at

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry of a token.

        Raises:
            Unauthenticated: If the token is malformed, tampered with or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "jti", "exp"]},
            )
            return TokenClaims(
                user_id=uuid.UUID(payload["sub"]),
                session_id=uuid.UUID(payload["jti"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except jwt.ExpiredSignatureError as e:
            raise Unauthenticated("Session expired") from e
        except (jwt.InvalidTokenError, ValueError) as e:
            raise Unauthenticated("Invalid session token") from e

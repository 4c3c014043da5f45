"""
Test suite for password hashing and the bearer token codec.

System role: Verification of identity layer credential primitives
"""

import uuid

import jwt
import pytest

from backend.core.exceptions import Unauthenticated
from backend.core.security import TokenCodec, hash_password, verify_password


class TestPasswordHashing:
    """Test suite for hash_password() / verify_password()."""

    def test_correct_password_verifies(self) -> None:
        encoded = hash_password("s3cret!", iterations=1000)

        assert verify_password("s3cret!", encoded)

    def test_wrong_password_fails(self) -> None:
        encoded = hash_password("s3cret!", iterations=1000)

        assert not verify_password("s3cret?", encoded)

    def test_hashes_are_salted(self) -> None:
        """Same password hashes differently each time."""
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    def test_malformed_hash_fails_closed(self) -> None:
        assert not verify_password("anything", "not-a-hash")
        assert not verify_password("anything", "md5$1$00$00")

    @pytest.mark.parametrize(
        "encoded",
        [
            "pbkdf2_sha256$1000$not-hex$00",
            "pbkdf2_sha256$many$00ff$00",
            "pbkdf2_sha256$0$00ff$00",
        ],
    )
    def test_corrupted_stored_hash_fails_closed(self, encoded) -> None:
        """Unparseable salt or iteration count is a mismatch, not a crash."""
        assert verify_password("anything", encoded) is False


class TestTokenCodec:
    """Test suite for TokenCodec."""

    def test_issue_then_decode_returns_claims(self) -> None:
        codec = TokenCodec(secret="test-secret", ttl_seconds=60)
        user_id, session_id = uuid.uuid4(), uuid.uuid4()

        token, expires_at = codec.issue(user_id, session_id)
        claims = codec.decode(token)

        assert claims.user_id == user_id
        assert claims.session_id == session_id
        assert abs((claims.expires_at - expires_at).total_seconds()) < 1

    def test_token_signed_with_other_secret_is_rejected(self) -> None:
        token, _ = TokenCodec(secret="secret-a").issue(uuid.uuid4(), uuid.uuid4())

        with pytest.raises(Unauthenticated, match="Invalid session token"):
            TokenCodec(secret="secret-b").decode(token)

    def test_expired_token_is_rejected(self) -> None:
        codec = TokenCodec(secret="test-secret", ttl_seconds=-10)
        token, _ = codec.issue(uuid.uuid4(), uuid.uuid4())

        with pytest.raises(Unauthenticated, match="Session expired"):
            codec.decode(token)

    def test_token_without_session_id_is_rejected(self) -> None:
        token = jwt.encode({"sub": str(uuid.uuid4()), "exp": 9999999999}, "s", algorithm="HS256")

        with pytest.raises(Unauthenticated):
            TokenCodec(secret="s").decode(token)

    def test_garbage_is_rejected(self) -> None:
        with pytest.raises(Unauthenticated):
            TokenCodec(secret="s").decode("not.a.jwt")

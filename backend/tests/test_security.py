"""Tests for password hashing and bearer tokens."""
from datetime import timedelta

import jwt
import pytest

from surveydesk.core.config import settings
from surveydesk.core.errors import ForbiddenError
from surveydesk.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from surveydesk.schemas.user import Principal


PRINCIPAL = Principal(id="u1", email="user@surveydesk.io", role="user")


class TestPasswordHashing:
    def test_hash_verifies(self):
        hashed = get_password_hash("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_non_bcrypt_hash_never_verifies(self):
        assert not verify_password("anything", "plain-text")


class TestTokens:
    def test_round_trip(self):
        token = create_access_token(PRINCIPAL)
        assert decode_access_token(token) == PRINCIPAL

    def test_expired_token_is_invalid(self):
        token = create_access_token(PRINCIPAL, expires_delta=timedelta(seconds=-5))
        with pytest.raises(ForbiddenError, match="Invalid token"):
            decode_access_token(token)

    def test_wrong_signature_is_invalid(self):
        token = jwt.encode(
            {"sub": "u1", "email": "x@surveydesk.io", "role": "admin"},
            "another-secret",
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(ForbiddenError):
            decode_access_token(token)

    def test_garbage_is_invalid(self):
        with pytest.raises(ForbiddenError):
            decode_access_token("not-a-jwt")

    def test_missing_claims_are_invalid(self):
        token = jwt.encode({"sub": "u1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        with pytest.raises(ForbiddenError):
            decode_access_token(token)

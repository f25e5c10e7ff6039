"""JWT token tests."""

import jwt
import pytest

from ecopulse.auth.jwt import create_access_token, verify_token
from ecopulse.config import get_settings


class TestJWT:
    def test_roundtrip_subject(self):
        payload = verify_token(create_access_token("user-42"))
        assert payload["sub"] == "user-42"
        assert payload["type"] == "access"

    def test_expired_token(self):
        token = create_access_token("user-42", expires_minutes=-1)
        with pytest.raises(jwt.InvalidTokenError, match="expired"):
            verify_token(token)

    def test_wrong_secret(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "user-42", "iss": settings.jwt_issuer, "type": "access"},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)

    def test_refresh_token_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "user-42", "iss": settings.jwt_issuer, "type": "refresh"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(jwt.InvalidTokenError, match="access"):
            verify_token(token)

    def test_missing_subject(self):
        settings = get_settings()
        token = jwt.encode(
            {"iss": settings.jwt_issuer, "type": "access"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(jwt.InvalidTokenError, match="subject"):
            verify_token(token)

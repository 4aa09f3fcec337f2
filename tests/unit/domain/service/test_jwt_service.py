"""Unit tests for JWTService."""

from datetime import datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from townhall.config import AuthSettings
from townhall.domain.service import JWTService
from townhall.util.jwt import JWTError


@pytest.fixture
def auth_settings():
    return AuthSettings(jwt_secret="test-secret", jwt_expiry_days=1)


class TestJWTService:
    """Tests for token verification."""

    def test_round_trip_user_id(self, auth_settings):
        """A token created with the shared secret yields its user ID."""
        service = JWTService(auth_settings)
        user_id = str(uuid4())

        token = service.create_token(user_id)

        assert service.get_user_id_from_token(token) == user_id

    def test_missing_token_is_anonymous(self, auth_settings):
        """No cookie means no user."""
        assert JWTService(auth_settings).get_user_id_from_token(None) is None

    def test_token_signed_with_other_secret_is_rejected(self, auth_settings):
        """Tokens from a different issuer do not authenticate."""
        other = JWTService(AuthSettings(jwt_secret="someone-else"))
        token = other.create_token(str(uuid4()))

        service = JWTService(auth_settings)
        assert service.get_user_id_from_token(token) is None
        with pytest.raises(JWTError, match="Invalid token"):
            service.verify_token(token)

    def test_expired_token_is_rejected(self, auth_settings):
        """Expired tokens raise on verify and read as anonymous."""
        token = jwt.encode(
            {"user_id": str(uuid4()), "exp": datetime.now() - timedelta(days=2)},
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )
        service = JWTService(auth_settings)

        with pytest.raises(JWTError, match="expired"):
            service.verify_token(token)
        assert service.get_user_id_from_token(token) is None

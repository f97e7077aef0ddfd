"""Unit tests for IdentityService."""

from datetime import datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from forum.config import AuthSettings
from forum.domain.error import ForbiddenError, UnauthenticatedError
from forum.domain.service import IdentityService
from forum.domain.value import Identity, Role, UserId


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


@pytest.fixture
def identity_service(auth_settings) -> IdentityService:
    return IdentityService(auth_settings=auth_settings)


class TestVerify:
    """Tests for verify method."""

    def test_round_trips_issued_token(self, identity_service):
        """A token issued for an identity verifies back to it."""
        identity = Identity(user_id=UserId(uuid4()), role=Role.MODERATOR)

        assert identity_service.verify(identity_service.issue(identity)) == identity

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_raises(self, identity_service, token):
        with pytest.raises(UnauthenticatedError, match="Authentication required"):
            identity_service.verify(token)

    def test_garbage_token_raises(self, identity_service):
        with pytest.raises(UnauthenticatedError, match="Invalid token"):
            identity_service.verify("not-a-jwt")

    def test_wrong_secret_raises(self, identity_service):
        """Tokens signed by someone else are rejected."""
        other = IdentityService(auth_settings=AuthSettings(jwt_secret="other"))
        token = other.issue(Identity(user_id=UserId(uuid4()), role=Role.USER))

        with pytest.raises(UnauthenticatedError, match="Invalid token"):
            identity_service.verify(token)

    def test_expired_token_raises(self, identity_service, auth_settings):
        token = jwt.encode(
            {
                "user_id": str(uuid4()),
                "role": "user",
                "exp": datetime.now() - timedelta(days=1),
            },
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        with pytest.raises(UnauthenticatedError, match="expired"):
            identity_service.verify(token)

    @pytest.mark.parametrize(
        "claims",
        [
            {"user_id": "not-a-uuid", "role": "user"},
            {"user_id": str(uuid4()), "role": "admin"},
            {"role": "user"},
        ],
    )
    def test_bad_claims_raise(self, identity_service, auth_settings, claims):
        """The token must name a UUID user and a known role."""
        token = jwt.encode(
            {**claims, "exp": datetime.now() + timedelta(days=1)},
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        with pytest.raises(UnauthenticatedError):
            identity_service.verify(token)


class TestRequireRole:
    """Tests for require_role method."""

    def test_allowed_role_passes(self, identity_service, identity):
        identity_service.require_role(identity, {Role.USER})

    def test_other_role_forbidden(self, identity_service, identity):
        with pytest.raises(ForbiddenError, match="Role 'user'"):
            identity_service.require_role(identity, {Role.MODERATOR})


class TestRequirePrincipal:
    """Tests for require_principal method."""

    def test_self_passes(self, identity_service, identity):
        identity_service.require_principal(identity, str(identity.user_id))

    def test_uppercase_uuid_is_same_user(self, identity_service, identity):
        identity_service.require_principal(identity, str(identity.user_id).upper())

    @pytest.mark.parametrize("user_id", [str(uuid4()), "someone", ""])
    def test_other_user_forbidden(self, identity_service, identity, user_id):
        with pytest.raises(ForbiddenError):
            identity_service.require_principal(identity, user_id)

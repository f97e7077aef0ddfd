"""Identity domain service."""

from collections.abc import Collection
from uuid import UUID

import logfire

from forum.config import AuthSettings
from forum.domain.error import ForbiddenError, UnauthenticatedError
from forum.domain.value import Identity, Role, UserId
from forum.util.jwt import JWTError, create_token, verify_token

from .base import Service


class IdentityService(Service):
    """Resolves and checks the principal behind a request.

    Tokens are issued by the external auth service. This service verifies
    them and answers two questions: may this role act, and is the caller
    the user named in the request path.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify(self, token: str | None) -> Identity:
        """Verify a bearer token and return the caller's identity.

        Args:
            token: JWT token string (optional)

        Returns:
            Identity of the caller

        Raises:
            UnauthenticatedError: If the token is missing, invalid or expired
        """
        if not token:
            raise UnauthenticatedError("Authentication required")

        with logfire.span("identity_service.verify"):
            try:
                payload = verify_token(token, self.auth_settings)
                user_id = UserId(UUID(payload.user_id))
            except (JWTError, ValueError) as e:
                logfire.info("Token rejected", error=str(e))
                raise UnauthenticatedError(str(e))

            logfire.debug("Token verified", user_id=str(user_id), role=payload.role)
            return Identity(user_id=user_id, role=payload.role)

    def issue(self, identity: Identity) -> str:
        """Issue a token for an identity (development and tests only)."""
        return create_token(str(identity.user_id), identity.role, self.auth_settings)

    def require_role(self, identity: Identity, allowed: Collection[Role]) -> None:
        """Check the caller holds one of the allowed roles.

        Raises:
            ForbiddenError: If the caller's role is not allowed
        """
        if identity.role not in allowed:
            logfire.warn(
                "Role not allowed",
                user_id=str(identity.user_id),
                role=identity.role.value,
            )
            raise ForbiddenError(
                f"Role '{identity.role.value}' is not allowed to perform this action"
            )

    def require_principal(self, identity: Identity, user_id: str) -> None:
        """Check the caller is the user named in the request.

        Args:
            identity: The authenticated caller
            user_id: User ID taken from the request path

        Raises:
            ForbiddenError: If user_id is not the caller's own ID
        """
        try:
            matches = UUID(str(user_id)) == identity.user_id
        except ValueError:
            matches = False

        if not matches:
            logfire.warn(
                "Principal mismatch",
                user_id=str(identity.user_id),
                requested_user_id=user_id,
            )
            raise ForbiddenError("You are not authorized to act on behalf of this user")

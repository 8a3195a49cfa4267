"""Auth provider implementations."""

import logfire

from portal.domain.service.auth_provider import AuthProvider
from portal.domain.service.jwt_service import JWTService
from portal.domain.value import UserId


class TokenAuthProvider(AuthProvider):
    """Identity taken from the session cookie's JWT."""

    def __init__(self, jwt_service: JWTService, token: str | None) -> None:
        """Initialize with the raw token of the current request.

        Args:
            jwt_service: JWT service used to verify the token
            token: Cookie value, or None when absent
        """
        self.jwt_service = jwt_service
        self.token = token
        self._resolved = False
        self._user_id: UserId | None = None

    async def current_user(self) -> UserId | None:
        """Verify the token once per request and cache the result."""
        if not self._resolved:
            self._user_id = self.jwt_service.get_user_id_from_token(self.token)
            self._resolved = True
            logfire.debug(
                "Resolved current user",
                authenticated=self._user_id is not None,
            )
        return self._user_id


class StaticAuthProvider(AuthProvider):
    """Fixed identity for tests and scripts."""

    def __init__(self, user_id: UserId | None = None) -> None:
        self.user_id = user_id

    async def current_user(self) -> UserId | None:
        return self.user_id

    def sign_in(self, user_id: UserId) -> None:
        """Switch to ``user_id``."""
        self.user_id = user_id

    def sign_out(self) -> None:
        """Drop the current identity."""
        self.user_id = None

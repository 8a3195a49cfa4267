"""Current-user identity as seen by domain services."""

from portal.domain.value import UserId


class AuthProvider:
    """Resolves the signed-in member for the current request.

    Services receive one of these instead of reading ambient auth state,
    so tests can substitute a fixed identity.
    """

    async def current_user(self) -> UserId | None:
        """Return the current user's ID, or None when nobody is signed in."""
        raise NotImplementedError

"""Authentication infrastructure providers."""

from dishka import Scope, provide
from fastapi import Request

from portal.adapter.auth import TokenAuthProvider
from portal.config import AuthSettings
from portal.domain.service import AuthProvider, JWTService
from portal.util.di.base import ProviderBase


class AuthenticationProvider(ProviderBase):
    """Authentication component base."""

    __mock_component__ = "auth"


class ProdAuthenticationProvider(AuthenticationProvider):
    """Production authentication provider reading the session cookie."""

    __is_mock__ = False

    @provide(scope=Scope.REQUEST)
    def get_auth_provider(
        self,
        request: Request,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> AuthProvider:
        """Provide the current request's identity.

        Returns:
            Auth provider backed by the ``auth_token`` cookie
        """
        token = request.cookies.get(auth_settings.cookie_name)
        return TokenAuthProvider(jwt_service=jwt_service, token=token)

"""Domain layer DI providers."""

from dishka import Scope, provide

from portal.config import AuthSettings, PollSettings
from portal.domain.repository import DataStore
from portal.domain.service import (
    AuthProvider,
    FacilityService,
    JWTService,
    PendingToggles,
    PollService,
    ToggleService,
)
from portal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the store/session
    lifecycle. Each HTTP request gets fresh service instances with their
    own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_pending_toggles(self) -> PendingToggles:
        """Provide the process-wide registry of in-flight toggles."""
        return PendingToggles()

    @provide
    def get_toggle_service(
        self,
        store: DataStore,
        auth_provider: AuthProvider,
        pending: PendingToggles,
    ) -> ToggleService:
        """Provide toggle domain service."""
        return ToggleService(store=store, auth_provider=auth_provider, pending=pending)

    @provide
    def get_poll_service(
        self,
        store: DataStore,
        auth_provider: AuthProvider,
        poll_settings: PollSettings,
    ) -> PollService:
        """Provide poll domain service."""
        return PollService(
            store=store, auth_provider=auth_provider, poll_settings=poll_settings
        )

    @provide
    def get_facility_service(self, store: DataStore) -> FacilityService:
        """Provide facility domain service."""
        return FacilityService(store=store)

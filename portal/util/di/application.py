"""Application layer DI providers."""

from dishka import Scope, provide

from portal.application.usecase.facility import (
    ListFacilitiesUseCase,
    ResolveOpenStatusUseCase,
)
from portal.application.usecase.poll import (
    CreatePollUseCase,
    GetPollUseCase,
    ListPollsUseCase,
)
from portal.application.usecase.toggle import (
    GetMembershipsUseCase,
    ToggleMembershipUseCase,
)
from portal.config import HoursSettings
from portal.domain.service import FacilityService, PollService, ToggleService
from portal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Toggle use cases
    @provide
    def get_toggle_membership_use_case(
        self, toggle_service: ToggleService
    ) -> ToggleMembershipUseCase:
        """Provide toggle membership use case."""
        return ToggleMembershipUseCase(toggle_service=toggle_service)

    @provide
    def get_get_memberships_use_case(
        self, toggle_service: ToggleService
    ) -> GetMembershipsUseCase:
        """Provide get memberships use case."""
        return GetMembershipsUseCase(toggle_service=toggle_service)

    # Poll use cases
    @provide
    def get_create_poll_use_case(self, poll_service: PollService) -> CreatePollUseCase:
        """Provide create poll use case."""
        return CreatePollUseCase(poll_service=poll_service)

    @provide
    def get_get_poll_use_case(self, poll_service: PollService) -> GetPollUseCase:
        """Provide get poll use case."""
        return GetPollUseCase(poll_service=poll_service)

    @provide
    def get_list_polls_use_case(self, poll_service: PollService) -> ListPollsUseCase:
        """Provide list polls use case."""
        return ListPollsUseCase(poll_service=poll_service)

    # Facility use cases
    @provide
    def get_list_facilities_use_case(
        self, facility_service: FacilityService, hours_settings: HoursSettings
    ) -> ListFacilitiesUseCase:
        """Provide list facilities use case."""
        return ListFacilitiesUseCase(
            facility_service=facility_service, hours_settings=hours_settings
        )

    @provide
    def get_resolve_open_status_use_case(
        self, hours_settings: HoursSettings
    ) -> ResolveOpenStatusUseCase:
        """Provide resolve open status use case."""
        return ResolveOpenStatusUseCase(hours_settings=hours_settings)

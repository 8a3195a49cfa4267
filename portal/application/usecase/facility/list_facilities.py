"""List facilities use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from portal.config import HoursSettings
from portal.domain.model import CommunityKitchen
from portal.domain.service import FacilityService
from portal.domain.value import FacilityKind, OpenStatus

from .clock import local_time


class FacilityItem(BaseModel):
    """Directory entry in responses."""

    id: str
    kind: FacilityKind
    name: str
    address: str
    category: str | None
    contact: str | None
    description: str | None
    timings: str | None
    latitude: float | None
    longitude: float | None
    is_free: bool | None
    open_status: OpenStatus


class ListFacilitiesRequest(BaseModel):
    """List facilities request."""

    kind: FacilityKind
    search: str | None = None
    type: str | None = None  # Facility type or food type
    at: datetime | None = None  # Defaults to now


class ListFacilitiesResponse(BaseModel):
    """List facilities response."""

    facilities: list[FacilityItem]
    evaluated_at: datetime


class ListFacilitiesUseCase:
    """Use case for browsing a facility directory with open/closed badges."""

    def __init__(
        self, facility_service: FacilityService, hours_settings: HoursSettings
    ) -> None:
        """Initialize list facilities use case.

        Args:
            facility_service: Facility domain service
            hours_settings: Timezone the timings are written in
        """
        self.facility_service = facility_service
        self.hours_settings = hours_settings

    async def execute(self, request: ListFacilitiesRequest) -> ListFacilitiesResponse:
        """Execute list facilities flow.

        Args:
            request: Directory, filters and evaluation time

        Returns:
            Matching facilities, each with its open status

        Raises:
            ConfigurationError: If the hours timezone is misconfigured
        """
        now = local_time(request.at, self.hours_settings)

        with logfire.span(
            "list_facilities.execute", kind=request.kind.value, search=request.search
        ):
            listings = await self.facility_service.list_facilities(
                request.kind, now, search=request.search, category=request.type
            )

            items = []
            for listing in listings:
                facility = listing.facility
                if isinstance(facility, CommunityKitchen):
                    contact = facility.contact_phone or None
                    description = facility.description
                    is_free: bool | None = facility.is_free
                else:
                    contact = facility.contact
                    description = facility.specialization
                    is_free = None
                items.append(
                    FacilityItem(
                        id=str(facility.id),
                        kind=request.kind,
                        name=facility.name,
                        address=facility.address,
                        category=facility.category(),
                        contact=contact,
                        description=description,
                        timings=facility.timings,
                        latitude=facility.latitude,
                        longitude=facility.longitude,
                        is_free=is_free,
                        open_status=listing.open_status,
                    )
                )

            logfire.info("Facilities listed", kind=request.kind.value, count=len(items))
            return ListFacilitiesResponse(facilities=items, evaluated_at=now)

"""Facility directory routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from portal.application.usecase.facility import (
    ListFacilitiesRequest,
    ListFacilitiesResponse,
    ListFacilitiesUseCase,
    ResolveOpenStatusRequest,
    ResolveOpenStatusResponse,
    ResolveOpenStatusUseCase,
)
from portal.domain.value import FacilityKind

router = APIRouter(prefix="/facilities", tags=["facilities"], route_class=DishkaRoute)


@router.get("/medical-centers", response_model=ListFacilitiesResponse)
async def list_medical_centers(
    use_case: FromDishka[ListFacilitiesUseCase],
    search: str | None = Query(default=None, max_length=200),
    facility_type: str | None = Query(default=None, alias="type", max_length=100),
    at: datetime | None = None,
) -> ListFacilitiesResponse:
    """List hospitals, clinics and pharmacies with their open status.

    Args:
        use_case: List facilities use case from DI
        search: Text matched against name, address, type and specialization
        facility_type: Exact facility type, e.g. "pharmacy"
        at: Moment to evaluate opening hours at (defaults to now)

    Returns:
        Matching medical centers
    """
    request = ListFacilitiesRequest(
        kind=FacilityKind.MEDICAL_CENTER, search=search, type=facility_type, at=at
    )
    return await use_case.execute(request)


@router.get("/kitchens", response_model=ListFacilitiesResponse)
async def list_kitchens(
    use_case: FromDishka[ListFacilitiesUseCase],
    search: str | None = Query(default=None, max_length=200),
    food_type: str | None = Query(default=None, alias="type", max_length=100),
    at: datetime | None = None,
) -> ListFacilitiesResponse:
    """List community kitchens with their open status."""
    request = ListFacilitiesRequest(
        kind=FacilityKind.KITCHEN, search=search, type=food_type, at=at
    )
    return await use_case.execute(request)


@router.get("/status", response_model=ResolveOpenStatusResponse)
async def resolve_status(
    use_case: FromDishka[ResolveOpenStatusUseCase],
    timings: str | None = Query(default=None, max_length=500),
    at: datetime | None = None,
) -> ResolveOpenStatusResponse:
    """Show how a timings string resolves at a given moment.

    Args:
        use_case: Resolve open status use case from DI
        timings: Free-text timings, e.g. "Mon-Sat: 9 AM - 8 PM"
        at: Moment to evaluate (defaults to now)

    Returns:
        Open status and the parsed hour range, if any
    """
    return await use_case.execute(ResolveOpenStatusRequest(timings=timings, at=at))

"""Routes for upvotes, RSVPs, saved jobs and volunteer sign-ups.

All of these require authentication and answer with the member's state
after the write plus the subject's refreshed counters.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from portal.application.usecase.toggle import (
    GetMembershipsRequest,
    GetMembershipsResponse,
    GetMembershipsUseCase,
    ToggleMembershipRequest,
    ToggleMembershipResponse,
    ToggleMembershipUseCase,
)
from portal.domain.value import RsvpType, ToggleKind

router = APIRouter(tags=["toggles"], route_class=DishkaRoute)


class RsvpBody(BaseModel):
    """RSVP body."""

    rsvp_type: RsvpType


async def _toggle(
    use_case: ToggleMembershipUseCase,
    kind: ToggleKind,
    subject_id: str,
    value: int | str | bool | None = None,
) -> ToggleMembershipResponse:
    request = ToggleMembershipRequest(kind=kind, subject_id=subject_id, value=value)
    return await use_case.execute(request)


@router.post("/problems/{problem_id}/upvote", response_model=ToggleMembershipResponse)
async def toggle_upvote(
    problem_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Upvote a problem report, or withdraw the upvote."""
    return await _toggle(use_case, ToggleKind.UPVOTE, problem_id)


@router.put("/events/{event_id}/rsvp", response_model=ToggleMembershipResponse)
async def set_rsvp(
    event_id: str,
    body: RsvpBody,
    use_case: FromDishka[ToggleMembershipUseCase],
) -> ToggleMembershipResponse:
    """Answer an event.

    Sending the current answer again withdraws it; sending the other
    answer replaces it.
    """
    return await _toggle(use_case, ToggleKind.RSVP, event_id, body.rsvp_type.value)


@router.post("/jobs/{job_id}/save", response_model=ToggleMembershipResponse)
async def toggle_saved_job(
    job_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Bookmark a job listing, or remove the bookmark."""
    return await _toggle(use_case, ToggleKind.SAVE, job_id)


@router.post("/events/{event_id}/volunteer", response_model=ToggleMembershipResponse)
async def join_event(
    event_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Sign up to volunteer at an event."""
    return await _toggle(use_case, ToggleKind.EVENT_VOLUNTEER, event_id, True)


@router.delete(
    "/events/{event_id}/volunteer", response_model=ToggleMembershipResponse
)
async def leave_event(
    event_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Withdraw from volunteering at an event."""
    return await _toggle(use_case, ToggleKind.EVENT_VOLUNTEER, event_id, False)


@router.post(
    "/kitchens/{kitchen_id}/volunteer", response_model=ToggleMembershipResponse
)
async def join_kitchen(
    kitchen_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Sign up to volunteer at a community kitchen."""
    return await _toggle(use_case, ToggleKind.KITCHEN_VOLUNTEER, kitchen_id, True)


@router.delete(
    "/kitchens/{kitchen_id}/volunteer", response_model=ToggleMembershipResponse
)
async def leave_kitchen(
    kitchen_id: str, use_case: FromDishka[ToggleMembershipUseCase]
) -> ToggleMembershipResponse:
    """Withdraw from volunteering at a community kitchen."""
    return await _toggle(use_case, ToggleKind.KITCHEN_VOLUNTEER, kitchen_id, False)


@router.get("/me/memberships/{kind}", response_model=GetMembershipsResponse)
async def get_memberships(
    kind: ToggleKind,
    use_case: FromDishka[GetMembershipsUseCase],
    subject_id: list[str] = Query(default=[]),
) -> GetMembershipsResponse:
    """Current member's state for each listed subject.

    Anonymous visitors get every subject as absent.

    Args:
        kind: Relationship kind
        use_case: Get memberships use case from DI
        subject_id: Repeatable subject ID

    Returns:
        One entry per requested subject
    """
    request = GetMembershipsRequest(kind=kind, subject_ids=subject_id)
    return await use_case.execute(request)

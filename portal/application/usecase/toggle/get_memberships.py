"""Get memberships use case."""

from pydantic import BaseModel, Field

from portal.domain.service import ToggleService
from portal.domain.value import RsvpType, ToggleKind


class MembershipItem(BaseModel):
    """Membership state of one subject."""

    subject_id: str
    present: bool
    value: int | str | None


class GetMembershipsRequest(BaseModel):
    """Get memberships request."""

    kind: ToggleKind
    subject_ids: list[str] = Field(default_factory=list)


class GetMembershipsResponse(BaseModel):
    """Get memberships response."""

    kind: ToggleKind
    memberships: list[MembershipItem]


class GetMembershipsUseCase:
    """Use case for rendering toggle buttons for a page of subjects."""

    def __init__(self, toggle_service: ToggleService) -> None:
        self.toggle_service = toggle_service

    async def execute(self, request: GetMembershipsRequest) -> GetMembershipsResponse:
        states = await self.toggle_service.memberships(
            request.kind, request.subject_ids
        )
        items = [
            MembershipItem(
                subject_id=state.subject_id,
                present=state.present,
                value=(
                    state.value.value
                    if isinstance(state.value, RsvpType)
                    else state.value
                ),
            )
            for state in states.values()
        ]
        return GetMembershipsResponse(kind=request.kind, memberships=items)

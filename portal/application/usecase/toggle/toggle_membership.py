"""Toggle membership use case."""

from typing import Any

from pydantic import BaseModel

from portal.domain.service import ToggleService
from portal.domain.value import RsvpType, ToggleKind


class ToggleMembershipRequest(BaseModel):
    """Toggle membership request.

    ``value`` is the option index for a poll vote, the RSVP answer for an
    RSVP, and None/True/False (flip/join/leave) for the other kinds.
    """

    kind: ToggleKind
    subject_id: str
    value: int | str | bool | None = None


class ToggleMembershipResponse(BaseModel):
    """Toggle membership response."""

    kind: ToggleKind
    subject_id: str
    present: bool
    value: int | str | None
    written: bool
    aggregate: dict[str, Any] | None


class ToggleMembershipUseCase:
    """Use case for voting, upvoting, RSVPing, saving and volunteering."""

    def __init__(self, toggle_service: ToggleService) -> None:
        """Initialize toggle membership use case.

        Args:
            toggle_service: Toggle domain service
        """
        self.toggle_service = toggle_service

    async def execute(
        self, request: ToggleMembershipRequest
    ) -> ToggleMembershipResponse:
        """Execute toggle flow.

        Args:
            request: Toggle request

        Returns:
            Membership after the write and the subject's refreshed counters

        Raises:
            UnauthenticatedError: If nobody is signed in
            NotFoundError: If the subject does not exist
            AlreadyVotedError: On a second poll vote
            AlreadyRegisteredError: On a duplicate volunteer sign-up
            ValidationError: If the value is invalid for the kind
        """
        result = await self.toggle_service.toggle(
            request.kind, request.subject_id, request.value
        )
        state = result.state
        value = state.value.value if isinstance(state.value, RsvpType) else state.value

        return ToggleMembershipResponse(
            kind=state.kind,
            subject_id=state.subject_id,
            present=state.present,
            value=value,
            written=result.written,
            aggregate=(
                result.aggregate.model_dump(mode="json")
                if result.aggregate is not None
                else None
            ),
        )

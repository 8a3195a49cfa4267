"""Poll routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from portal.application.usecase.poll import (
    CreatePollRequest,
    CreatePollUseCase,
    GetPollRequest,
    GetPollUseCase,
    ListPollsRequest,
    ListPollsResponse,
    ListPollsUseCase,
    PollItem,
)
from portal.application.usecase.toggle import (
    ToggleMembershipRequest,
    ToggleMembershipResponse,
    ToggleMembershipUseCase,
)
from portal.domain.value import PollStatus, ToggleKind

router = APIRouter(prefix="/polls", tags=["polls"], route_class=DishkaRoute)


class VoteBody(BaseModel):
    """Poll vote body."""

    option_index: int = Field(ge=0)


@router.get("", response_model=ListPollsResponse)
async def list_polls(
    use_case: FromDishka[ListPollsUseCase],
    poll_status: PollStatus | None = Query(default=None, alias="status"),
    category: str | None = None,
    limit: int = Query(default=50, ge=1, le=100),
) -> ListPollsResponse:
    """List polls, newest first."""
    request = ListPollsRequest(status=poll_status, category=category, limit=limit)
    return await use_case.execute(request)


@router.post("", response_model=PollItem, status_code=status.HTTP_201_CREATED)
async def create_poll(
    request: CreatePollRequest,
    use_case: FromDishka[CreatePollUseCase],
) -> PollItem:
    """Create a poll.

    Requires authentication.

    Args:
        request: Title, options (2 to 6) and optional details
        use_case: Create poll use case from DI

    Returns:
        Created poll
    """
    return await use_case.execute(request)


@router.get("/{poll_id}", response_model=PollItem)
async def get_poll(poll_id: str, use_case: FromDishka[GetPollUseCase]) -> PollItem:
    """Get a poll with its current counts."""
    return await use_case.execute(GetPollRequest(poll_id=poll_id))


@router.post("/{poll_id}/vote", response_model=ToggleMembershipResponse)
async def vote(
    poll_id: str,
    body: VoteBody,
    use_case: FromDishka[ToggleMembershipUseCase],
) -> ToggleMembershipResponse:
    """Cast the current member's vote.

    Requires authentication. A vote cannot be changed once cast.

    Args:
        poll_id: Poll UUID
        body: Chosen option index
        use_case: Toggle membership use case from DI

    Returns:
        Recorded vote and the poll's refreshed counts
    """
    request = ToggleMembershipRequest(
        kind=ToggleKind.POLL_VOTE, subject_id=poll_id, value=body.option_index
    )
    return await use_case.execute(request)

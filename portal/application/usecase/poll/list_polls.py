"""List polls use case."""

import logfire
from pydantic import BaseModel, Field

from portal.domain.service import PollService
from portal.domain.value import PollStatus

from .get_poll import PollItem


class ListPollsRequest(BaseModel):
    """List polls request."""

    status: PollStatus | None = None
    category: str | None = None
    limit: int = Field(default=50, ge=1, le=100)


class ListPollsResponse(BaseModel):
    """List polls response."""

    polls: list[PollItem]


class ListPollsUseCase:
    """Use case for listing polls, newest first."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: ListPollsRequest) -> ListPollsResponse:
        filters = {}
        if request.status is not None:
            filters["status"] = request.status.value
        if request.category:
            filters["category"] = request.category

        polls = await self.poll_service.list_polls(limit=request.limit, **filters)
        logfire.info("Polls listed", count=len(polls))
        return ListPollsResponse(polls=[PollItem.from_poll(p) for p in polls])

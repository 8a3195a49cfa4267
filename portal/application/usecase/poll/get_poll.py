"""Get poll use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from portal.domain.error import ValidationError
from portal.domain.model import Poll
from portal.domain.service import PollService
from portal.domain.value import PollId, PollStatus


class PollOptionItem(BaseModel):
    """Poll option in responses."""

    id: int
    text: str
    votes: int


class PollItem(BaseModel):
    """Poll in responses."""

    poll_id: str
    title: str
    description: str | None
    category: str
    options: list[PollOptionItem]
    total_votes: int
    status: PollStatus
    expires_at: datetime | None
    created_by: str
    created_at: datetime

    @classmethod
    def from_poll(cls, poll: Poll) -> "PollItem":
        return cls(
            poll_id=str(poll.id),
            title=poll.title,
            description=poll.description,
            category=poll.category,
            options=[
                PollOptionItem(id=o.id, text=o.text, votes=o.votes)
                for o in poll.options
            ],
            total_votes=poll.total_votes,
            status=poll.status,
            expires_at=poll.expires_at,
            created_by=str(poll.created_by),
            created_at=poll.created_at,
        )


class GetPollRequest(BaseModel):
    """Get poll request."""

    poll_id: str  # UUID string


class GetPollUseCase:
    """Use case for retrieving a poll by ID."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize get poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: GetPollRequest) -> PollItem:
        """Execute get poll flow.

        Raises:
            ValidationError: If the poll ID is malformed
            NotFoundError: If the poll does not exist
        """
        try:
            poll_id = PollId(UUID(request.poll_id))
        except ValueError:
            raise ValidationError(f"Invalid poll id: {request.poll_id}")

        poll = await self.poll_service.get_poll(poll_id)
        return PollItem.from_poll(poll)

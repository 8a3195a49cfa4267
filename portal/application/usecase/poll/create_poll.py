"""Create poll use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from portal.application.usecase.base import BaseUseCase
from portal.domain.service import PollService

from .get_poll import PollItem


class CreatePollRequest(BaseModel):
    """Create poll request."""

    title: str = Field(min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=5000)
    category: str = Field(default="community", min_length=1, max_length=100)
    options: list[str]
    expires_at: datetime | None = None


class CreatePollUseCase(BaseUseCase):
    """Use case for creating a poll."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize create poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: CreatePollRequest) -> PollItem:
        """Execute poll creation flow.

        Args:
            request: Create poll request

        Returns:
            Created poll

        Raises:
            UnauthenticatedError: If nobody is signed in
            ValidationError: If the option list is invalid
        """
        with logfire.span("create_poll.execute", category=request.category):
            poll = await self.poll_service.create_poll(
                title=request.title,
                options=request.options,
                description=request.description,
                category=request.category,
                expires_at=request.expires_at,
            )
            return PollItem.from_poll(poll)

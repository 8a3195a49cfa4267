"""Poll domain service."""

from datetime import datetime
from typing import Any

import logfire
import pydantic

from portal.config import PollSettings
from portal.domain.error import NotFoundError, UnauthenticatedError, ValidationError
from portal.domain.model import Poll
from portal.domain.repository import DataStore
from portal.domain.value import PollId, PollOptions

from .auth_provider import AuthProvider
from .base import Service


class PollService(Service):
    """Domain service for creating and reading polls.

    Voting goes through ``ToggleService``; this service owns the poll
    records themselves.
    """

    def __init__(
        self,
        store: DataStore,
        auth_provider: AuthProvider,
        poll_settings: PollSettings,
    ) -> None:
        """Initialize poll service.

        Args:
            store: Data store
            auth_provider: Source of the current member's identity
            poll_settings: Option count limits
        """
        self.store = store
        self.auth_provider = auth_provider
        self.poll_settings = poll_settings

    async def create_poll(
        self,
        title: str,
        options: list[str],
        description: str | None = None,
        category: str = "community",
        expires_at: datetime | None = None,
    ) -> Poll:
        """Create a poll owned by the current member.

        Args:
            title: Poll question
            options: Answer texts, in display order
            description: Optional details
            category: Poll category
            expires_at: When voting closes, if ever

        Returns:
            Created poll with zeroed counts

        Raises:
            UnauthenticatedError: If nobody is signed in
            ValidationError: If the title or options are invalid
        """
        with logfire.span("create_poll", option_count=len(options)):
            user_id = await self.auth_provider.current_user()
            if user_id is None:
                raise UnauthenticatedError("create a poll")

            title = title.strip()
            if not title:
                raise ValidationError("Poll title must not be blank")

            low, high = self.poll_settings.min_options, self.poll_settings.max_options
            if not low <= len(options) <= high:
                raise ValidationError(f"A poll needs between {low} and {high} options")

            try:
                poll_options = PollOptions.from_texts(options)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid poll options: {e.errors()[0]['msg']}")

            row = await self.store.insert(
                "polls",
                {
                    "title": title,
                    "description": (description or "").strip() or None,
                    "category": category,
                    "options": poll_options.model_dump(),
                    "expires_at": expires_at,
                    "created_by": user_id,
                },
            )
            poll = Poll.model_validate(row)
            logfire.info("Poll created", poll_id=str(poll.id), user_id=str(user_id))
            return poll

    async def get_poll(self, poll_id: PollId) -> Poll:
        """Get a poll by ID.

        Raises:
            NotFoundError: If the poll does not exist
        """
        row = await self.store.select_one("polls", {"id": poll_id})
        if row is None:
            raise NotFoundError("Poll", str(poll_id))
        return Poll.model_validate(row)

    async def list_polls(self, limit: int = 50, **filters: Any) -> list[Poll]:
        """List polls, newest first."""
        rows = await self.store.select(
            "polls", filters or None, order=["-created_at"], limit=limit
        )
        return [Poll.model_validate(row) for row in rows]

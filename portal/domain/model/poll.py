"""Poll entity.

Polls are single-choice: each member casts at most one vote, and a cast
vote is never changed.
"""

from datetime import datetime, timezone

from pydantic import Field

from portal.domain.model.common import DomainModel
from portal.domain.value import PollId, PollOptions, PollStatus, UserId


class Poll(DomainModel):
    """Community poll.

    ``total_votes`` and the per-option ``votes`` counts are aggregates kept
    by the data store; they are re-read after every vote.
    """

    id: PollId
    title: str
    description: str | None = None
    category: str = "community"
    options: PollOptions
    total_votes: int = 0
    status: PollStatus = PollStatus.ACTIVE
    expires_at: datetime | None = None
    created_by: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def has_option(self, index: int) -> bool:
        """Whether ``index`` addresses one of this poll's options."""
        return 0 <= index < len(self.options)

    def accepts_votes(self, now: datetime) -> bool:
        """Whether the poll is still open for voting at ``now``."""
        if self.status != PollStatus.ACTIVE:
            return False
        if self.expires_at is None:
            return True
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now < expires_at

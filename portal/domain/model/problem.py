"""Problem report entity."""

from datetime import datetime

from portal.domain.model.common import DomainModel
from portal.domain.value import ProblemId, UserId


class ProblemReport(DomainModel):
    """A locally reported problem that neighbours can upvote."""

    id: ProblemId
    title: str
    description: str = ""
    category: str = "general"
    location: str = ""
    status: str = "open"
    upvotes: int = 0
    reported_by: UserId
    created_at: datetime | None = None

"""Community event entity."""

from datetime import datetime

from portal.domain.model.common import DomainModel
from portal.domain.value import EventId, UserId


class Event(DomainModel):
    """Event members can RSVP to or volunteer for.

    ``rsvp_count`` counts "going" RSVPs; it and ``volunteers_joined`` are
    maintained by the data store.
    """

    id: EventId
    title: str
    description: str = ""
    category: str = "community"
    location: str = ""
    event_date: datetime
    end_date: datetime | None = None
    rsvp_count: int = 0
    volunteer_spots: int | None = None
    volunteers_joined: int = 0
    created_by: UserId

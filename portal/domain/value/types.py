"""Domain value objects for the community portal.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import json
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from portal.domain.value.common import RootValueObject, ValueObject


class OpenStatus(str, Enum):
    """Opening status of a facility at a given moment.

    UNKNOWN means the timings text could not be interpreted; callers show
    no badge rather than treating it as closed.
    """

    OPEN = "open"
    CLOSED = "closed"
    UNKNOWN = "unknown"


class ToggleKind(str, Enum):
    """Kinds of per-user relationship a member can toggle."""

    POLL_VOTE = "poll_vote"
    UPVOTE = "upvote"
    RSVP = "rsvp"
    SAVE = "save"
    EVENT_VOLUNTEER = "event_volunteer"
    KITCHEN_VOLUNTEER = "kitchen_volunteer"


class RsvpType(str, Enum):
    """Mutually exclusive RSVP answers."""

    GOING = "going"
    INTERESTED = "interested"


class PollStatus(str, Enum):
    """Lifecycle of a poll."""

    ACTIVE = "active"
    CLOSED = "closed"


class FacilityKind(str, Enum):
    """Directories that carry free-text opening hours."""

    MEDICAL_CENTER = "medical_center"
    KITCHEN = "kitchen"


class PollOption(ValueObject):
    """A single answer on a poll.

    ``votes`` is maintained by the data store and only ever read here.
    """

    id: int = Field(ge=0)
    text: str = Field(min_length=1, max_length=200)
    votes: int = Field(default=0, ge=0)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Reject options that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Poll option text must not be blank")
        return v


class PollOptions(RootValueObject[list[PollOption]]):
    """Ordered poll options, indexed by position.

    Older rows store the list as an encoded JSON string, sometimes of bare
    strings; both are normalized here so no consumer re-parses them.
    """

    @field_validator("root", mode="before")
    @classmethod
    def decode_legacy(cls, v: Any) -> Any:
        """Accept encoded lists and bare option strings."""
        if isinstance(v, str):
            v = json.loads(v)
        if isinstance(v, list):
            return [
                {"id": i, "text": item} if isinstance(item, str) else item
                for i, item in enumerate(v)
            ]
        return v

    @field_validator("root")
    @classmethod
    def check_ids(cls, v: list[PollOption]) -> list[PollOption]:
        """Option ids must match their position."""
        for index, option in enumerate(v):
            if option.id != index:
                raise ValueError("Poll option ids must be 0..n-1 in order")
        return v

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> PollOption:
        return self.root[index]

    def __iter__(self):  # type: ignore[override]
        return iter(self.root)

    @classmethod
    def from_texts(cls, texts: list[str]) -> "PollOptions":
        """Build fresh options with zero votes."""
        return cls([PollOption(id=i, text=t) for i, t in enumerate(texts)])

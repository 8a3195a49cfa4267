"""Kind-indexed description of every toggleable relationship.

Each feature that lets a member vote, upvote, RSVP, save or volunteer is
one row in ``TOGGLE_SPECS``; ``ToggleService`` reads the row and never
special-cases a feature by name.
"""

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import ConfigDict

from portal.domain.error import ValidationError
from portal.domain.model import CommunityKitchen, Event, Poll, ProblemReport
from portal.domain.model.common import DomainModel
from portal.domain.value import ToggleKind
from portal.domain.value.common import ValueObject


class ToggleMode(str, Enum):
    """How a relationship row may change once it exists."""

    # Inserted once, never updated or removed (poll votes)
    SINGLE_CHOICE = "single_choice"
    # Present or absent; toggling flips between the two
    PRESENCE = "presence"
    # One of several values; same value removes, other value replaces
    REPLACE = "replace"


class ToggleSpec(ValueObject):
    """Storage layout and behaviour of one toggle kind."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ToggleKind
    mode: ToggleMode
    table: str
    subject_column: str
    subject_label: str
    subject_type: type = UUID
    value_column: str | None = None
    # Row holding the server-maintained counters for the subject
    aggregate_table: str | None = None
    aggregate_model: type[DomainModel] | None = None
    # A duplicate insert means the member already signed up
    registration: bool = False
    insert_defaults: dict[str, Any] = {}

    def parse_subject(self, raw: Any) -> Any:
        """Coerce an incoming subject identifier to its stored type.

        Raises:
            ValidationError: If the identifier is malformed
        """
        if isinstance(raw, self.subject_type):
            return raw
        try:
            return self.subject_type(str(raw))
        except ValueError:
            raise ValidationError(f"Invalid {self.subject_label} id: {raw}")


TOGGLE_SPECS: dict[ToggleKind, ToggleSpec] = {
    ToggleKind.POLL_VOTE: ToggleSpec(
        kind=ToggleKind.POLL_VOTE,
        mode=ToggleMode.SINGLE_CHOICE,
        table="poll_votes",
        subject_column="poll_id",
        subject_label="poll",
        value_column="option_index",
        aggregate_table="polls",
        aggregate_model=Poll,
    ),
    ToggleKind.UPVOTE: ToggleSpec(
        kind=ToggleKind.UPVOTE,
        mode=ToggleMode.PRESENCE,
        table="problem_upvotes",
        subject_column="problem_id",
        subject_label="problem report",
        aggregate_table="problem_reports",
        aggregate_model=ProblemReport,
    ),
    ToggleKind.RSVP: ToggleSpec(
        kind=ToggleKind.RSVP,
        mode=ToggleMode.REPLACE,
        table="event_rsvps",
        subject_column="event_id",
        subject_label="event",
        value_column="rsvp_type",
        aggregate_table="events",
        aggregate_model=Event,
    ),
    ToggleKind.SAVE: ToggleSpec(
        kind=ToggleKind.SAVE,
        mode=ToggleMode.PRESENCE,
        table="saved_jobs",
        subject_column="job_id",
        subject_label="job",
        subject_type=str,
    ),
    ToggleKind.EVENT_VOLUNTEER: ToggleSpec(
        kind=ToggleKind.EVENT_VOLUNTEER,
        mode=ToggleMode.PRESENCE,
        table="event_volunteers",
        subject_column="event_id",
        subject_label="event",
        aggregate_table="events",
        aggregate_model=Event,
        registration=True,
    ),
    ToggleKind.KITCHEN_VOLUNTEER: ToggleSpec(
        kind=ToggleKind.KITCHEN_VOLUNTEER,
        mode=ToggleMode.PRESENCE,
        table="kitchen_volunteers",
        subject_column="kitchen_id",
        subject_label="kitchen",
        aggregate_table="community_kitchens",
        aggregate_model=CommunityKitchen,
        registration=True,
        insert_defaults={"role": "volunteer"},
    ),
}

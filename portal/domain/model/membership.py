"""Membership: one member's relationship to one votable/joinable subject."""

from typing import Any

from pydantic import Field

from portal.domain.model.common import DomainModel
from portal.domain.value import RsvpType, ToggleKind


class MembershipState(DomainModel):
    """Current state of a (kind, subject, user) relationship.

    ``value`` carries the chosen option index for poll votes and the RSVP
    answer for RSVPs; present/absent kinds leave it empty.
    """

    kind: ToggleKind
    subject_id: str
    present: bool = False
    value: int | RsvpType | None = None


class ToggleResult(DomainModel):
    """Outcome of a successful toggle.

    ``aggregate`` is the subject re-read from the data store after the
    write (poll, event, problem report or kitchen), or None for kinds
    without one.
    """

    state: MembershipState
    aggregate: Any = None
    written: bool = Field(
        default=True, description="False when the request needed no write"
    )

"""Domain value objects for the community portal."""

from portal.domain.value.identifiers import (
    EventId,
    JobId,
    KitchenId,
    MedicalCenterId,
    PollId,
    ProblemId,
    UserId,
)
from portal.domain.value.types import (
    FacilityKind,
    OpenStatus,
    PollOption,
    PollOptions,
    PollStatus,
    RsvpType,
    ToggleKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "PollId",
    "ProblemId",
    "EventId",
    "KitchenId",
    "MedicalCenterId",
    "JobId",
    # Types
    "FacilityKind",
    "OpenStatus",
    "PollOption",
    "PollOptions",
    "PollStatus",
    "RsvpType",
    "ToggleKind",
]

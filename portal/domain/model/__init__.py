"""Domain model entities for the community portal."""

from portal.domain.model.event import Event
from portal.domain.model.facility import CommunityKitchen, Facility, MedicalCenter
from portal.domain.model.membership import MembershipState, ToggleResult
from portal.domain.model.poll import Poll
from portal.domain.model.problem import ProblemReport

__all__ = [
    "CommunityKitchen",
    "Event",
    "Facility",
    "MedicalCenter",
    "MembershipState",
    "Poll",
    "ProblemReport",
    "ToggleResult",
]

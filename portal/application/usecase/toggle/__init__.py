"""Toggle use cases."""

from .get_memberships import (
    GetMembershipsRequest,
    GetMembershipsResponse,
    GetMembershipsUseCase,
    MembershipItem,
)
from .toggle_membership import (
    ToggleMembershipRequest,
    ToggleMembershipResponse,
    ToggleMembershipUseCase,
)

__all__ = [
    "GetMembershipsRequest",
    "GetMembershipsResponse",
    "GetMembershipsUseCase",
    "MembershipItem",
    "ToggleMembershipRequest",
    "ToggleMembershipResponse",
    "ToggleMembershipUseCase",
]

"""Facility use cases."""

from .list_facilities import (
    FacilityItem,
    ListFacilitiesRequest,
    ListFacilitiesResponse,
    ListFacilitiesUseCase,
)
from .resolve_open_status import (
    ResolveOpenStatusRequest,
    ResolveOpenStatusResponse,
    ResolveOpenStatusUseCase,
)

__all__ = [
    "FacilityItem",
    "ListFacilitiesRequest",
    "ListFacilitiesResponse",
    "ListFacilitiesUseCase",
    "ResolveOpenStatusRequest",
    "ResolveOpenStatusResponse",
    "ResolveOpenStatusUseCase",
]

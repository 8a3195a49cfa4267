"""Domain services."""

from .auth_provider import AuthProvider
from .base import Service
from .facility_service import FacilityService, FacilityStatus
from .hours import parse_hour_range, resolve_open_status
from .jwt_service import JWTService
from .poll_service import PollService
from .toggle_service import PendingToggles, ToggleService
from .toggle_spec import TOGGLE_SPECS, ToggleMode, ToggleSpec

__all__ = [
    "AuthProvider",
    "FacilityService",
    "FacilityStatus",
    "JWTService",
    "PendingToggles",
    "PollService",
    "Service",
    "TOGGLE_SPECS",
    "ToggleMode",
    "ToggleService",
    "ToggleSpec",
    "parse_hour_range",
    "resolve_open_status",
]

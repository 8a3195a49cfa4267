"""Resolve open status use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from portal.config import HoursSettings
from portal.domain.service import parse_hour_range, resolve_open_status
from portal.domain.value import OpenStatus

from .clock import local_time


class ResolveOpenStatusRequest(BaseModel):
    """Resolve open status request."""

    timings: str | None = Field(default=None, max_length=500)
    at: datetime | None = None


class ResolveOpenStatusResponse(BaseModel):
    """Resolve open status response."""

    timings: str | None
    open_status: OpenStatus
    open_hour: int | None
    close_hour: int | None
    evaluated_at: datetime


class ResolveOpenStatusUseCase:
    """Use case for previewing how a timings string is interpreted."""

    def __init__(self, hours_settings: HoursSettings) -> None:
        self.hours_settings = hours_settings

    async def execute(
        self, request: ResolveOpenStatusRequest
    ) -> ResolveOpenStatusResponse:
        now = local_time(request.at, self.hours_settings)
        hours = parse_hour_range(request.timings) if request.timings else None

        return ResolveOpenStatusResponse(
            timings=request.timings,
            open_status=resolve_open_status(request.timings, now),
            open_hour=hours[0] if hours else None,
            close_hour=hours[1] if hours else None,
            evaluated_at=now,
        )

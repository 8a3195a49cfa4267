"""Facility directory domain service."""

from datetime import datetime

import logfire

from portal.domain.model import CommunityKitchen, MedicalCenter
from portal.domain.model.common import DomainModel
from portal.domain.repository import DataStore
from portal.domain.value import FacilityKind, OpenStatus

from .base import Service
from .hours import resolve_open_status


class FacilityStatus(DomainModel):
    """A directory entry together with its status at a given moment."""

    facility: MedicalCenter | CommunityKitchen
    open_status: OpenStatus


_DIRECTORIES: dict[FacilityKind, tuple[str, type[MedicalCenter | CommunityKitchen]]] = {
    FacilityKind.MEDICAL_CENTER: ("medical_centers", MedicalCenter),
    FacilityKind.KITCHEN: ("community_kitchens", CommunityKitchen),
}


class FacilityService(Service):
    """Domain service for browsing facility directories."""

    def __init__(self, store: DataStore) -> None:
        """Initialize facility service.

        Args:
            store: Data store
        """
        self.store = store

    async def list_facilities(
        self,
        kind: FacilityKind,
        now: datetime,
        search: str | None = None,
        category: str | None = None,
    ) -> list[FacilityStatus]:
        """List a directory with each entry's open status at ``now``.

        Args:
            kind: Which directory to list
            now: Moment to evaluate opening hours at, in local time
            search: Case-insensitive text matched against name, address
                and type
            category: Exact (case-insensitive) facility type

        Returns:
            Matching facilities ordered by name
        """
        table, model = _DIRECTORIES[kind]
        with logfire.span("list_facilities", kind=kind.value):
            rows = await self.store.select(table, order=["name"])
            facilities = [model.model_validate(row) for row in rows]

            needle = (search or "").strip().lower()
            wanted = (category or "").strip().lower()
            result = []
            for facility in facilities:
                if needle and needle not in facility.search_text():
                    continue
                if wanted and (facility.category() or "").lower() != wanted:
                    continue
                result.append(
                    FacilityStatus(
                        facility=facility,
                        open_status=resolve_open_status(facility.timings, now),
                    )
                )
            return result

"""Unit tests for facility use cases."""

from datetime import datetime, timezone

import pytest

from portal.application.usecase.facility import (
    ListFacilitiesRequest,
    ListFacilitiesUseCase,
    ResolveOpenStatusRequest,
    ResolveOpenStatusUseCase,
)
from portal.application.usecase.facility.clock import local_time
from portal.config import HoursSettings
from portal.domain.service import FacilityService
from portal.domain.value import FacilityKind, OpenStatus
from portal.persistence.store import InMemoryDataStore
from portal.util.error import ConfigurationError
from tests.conftest import seed_kitchen
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestLocalTime:
    """Tests for the hours timezone."""

    def test_aware_time_is_converted_to_configured_zone(self):
        at = datetime(2024, 6, 3, 4, 0, tzinfo=timezone.utc)

        local = local_time(at, HoursSettings(timezone="Asia/Kolkata"))

        assert (local.hour, local.minute) == (9, 30)

    def test_naive_time_is_taken_as_local(self):
        settings = HoursSettings(timezone="Asia/Kolkata")

        local = local_time(datetime(2024, 6, 3, 4), settings)

        assert local.hour == 4
        assert local.tzinfo is not None

    def test_unknown_zone_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Unknown timezone"):
            local_time(None, HoursSettings(timezone="Mars/Olympus_Mons"))


class TestResolveOpenStatusUseCase:
    """Tests for ResolveOpenStatusUseCase."""

    @pytest.mark.asyncio
    async def test_reports_parsed_hours(self):
        use_case = ResolveOpenStatusUseCase(hours_settings=HoursSettings())

        response = await use_case.execute(
            ResolveOpenStatusRequest(
                timings="9 AM - 9 PM", at=datetime(2024, 6, 3, 9, tzinfo=timezone.utc)
            )
        )

        assert response.open_status == OpenStatus.OPEN
        assert (response.open_hour, response.close_hour) == (9, 21)

    @pytest.mark.asyncio
    async def test_unparseable_timings(self):
        use_case = ResolveOpenStatusUseCase(hours_settings=HoursSettings())

        response = await use_case.execute(ResolveOpenStatusRequest(timings="ask us"))

        assert response.open_status == OpenStatus.UNKNOWN
        assert response.open_hour is None


class TestListFacilitiesUseCase:
    """Tests for ListFacilitiesUseCase."""

    @pytest.mark.asyncio
    async def test_status_uses_configured_timezone(self, unit_env):
        """12:00 UTC is 17:30 in Kolkata, after a 3 PM close."""
        # Arrange
        store = await unit_env.get(InMemoryDataStore)
        facility_service = await unit_env.get(FacilityService)
        await seed_kitchen(store, timings="11 AM - 3 PM", contact_phone="")
        at = datetime(2024, 6, 3, 12, tzinfo=timezone.utc)

        utc = ListFacilitiesUseCase(facility_service, HoursSettings(timezone="UTC"))
        kolkata = ListFacilitiesUseCase(
            facility_service, HoursSettings(timezone="Asia/Kolkata")
        )
        request = ListFacilitiesRequest(kind=FacilityKind.KITCHEN, at=at)

        # Act
        in_utc = await utc.execute(request)
        in_kolkata = await kolkata.execute(request)

        # Assert
        assert in_utc.facilities[0].open_status == OpenStatus.OPEN
        assert in_kolkata.facilities[0].open_status == OpenStatus.CLOSED
        assert in_kolkata.facilities[0].contact is None
        assert in_kolkata.facilities[0].is_free is True

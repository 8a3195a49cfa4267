"""Unit tests for toggle use cases."""

from uuid import uuid4

import pytest

from portal.adapter.auth import StaticAuthProvider
from portal.application.usecase.toggle import (
    GetMembershipsRequest,
    GetMembershipsUseCase,
    ToggleMembershipRequest,
    ToggleMembershipUseCase,
)
from portal.domain.error import UnauthenticatedError
from portal.domain.value import ToggleKind, UserId
from portal.persistence.store import InMemoryDataStore
from tests.conftest import seed_event, seed_poll
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestToggleMembershipUseCase:
    """Tests for ToggleMembershipUseCase."""

    @pytest.mark.asyncio
    async def test_poll_vote_response_carries_refreshed_poll(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ToggleMembershipUseCase)
        store = await unit_env.get(InMemoryDataStore)
        auth = await unit_env.get(StaticAuthProvider)
        auth.sign_in(UserId(uuid4()))
        poll = await seed_poll(store, options=["A", "B"])

        # Act
        response = await use_case.execute(
            ToggleMembershipRequest(
                kind=ToggleKind.POLL_VOTE, subject_id=str(poll["id"]), value=1
            )
        )

        # Assert
        assert response.present is True
        assert response.value == 1
        assert response.written is True
        assert response.aggregate["total_votes"] == 1
        assert [o["votes"] for o in response.aggregate["options"]] == [0, 1]

    @pytest.mark.asyncio
    async def test_rsvp_value_is_plain_string(self, unit_env):
        use_case = await unit_env.get(ToggleMembershipUseCase)
        store = await unit_env.get(InMemoryDataStore)
        auth = await unit_env.get(StaticAuthProvider)
        auth.sign_in(UserId(uuid4()))
        event = await seed_event(store)

        response = await use_case.execute(
            ToggleMembershipRequest(
                kind=ToggleKind.RSVP, subject_id=str(event["id"]), value="interested"
            )
        )

        assert response.value == "interested"
        assert response.aggregate["rsvp_count"] == 0

    @pytest.mark.asyncio
    async def test_signed_out_propagates_unauthenticated(self, unit_env):
        use_case = await unit_env.get(ToggleMembershipUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                ToggleMembershipRequest(kind=ToggleKind.SAVE, subject_id="job-9")
            )


class TestGetMembershipsUseCase:
    """Tests for GetMembershipsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_every_requested_subject(self, unit_env):
        # Arrange
        toggle = await unit_env.get(ToggleMembershipUseCase)
        use_case = await unit_env.get(GetMembershipsUseCase)
        auth = await unit_env.get(StaticAuthProvider)
        auth.sign_in(UserId(uuid4()))
        await toggle.execute(
            ToggleMembershipRequest(kind=ToggleKind.SAVE, subject_id="job-1")
        )

        # Act
        response = await use_case.execute(
            GetMembershipsRequest(kind=ToggleKind.SAVE, subject_ids=["job-1", "job-2"])
        )

        # Assert
        assert {(m.subject_id, m.present) for m in response.memberships} == {
            ("job-1", True),
            ("job-2", False),
        }

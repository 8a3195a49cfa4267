"""End-to-end tests for poll endpoints."""

from uuid import uuid4

import pytest

from portal.persistence.store import InMemoryDataStore
from tests.harness import sign_in


async def _create_poll(client, options=("A", "B")) -> dict:
    response = await client.post(
        "/polls", json={"title": "Which colour for the bus stop?", "options": options}
    )
    assert response.status_code == 201
    return response.json()


class TestPollApi:
    """Tests for /polls."""

    @pytest.mark.asyncio
    async def test_create_poll_requires_session(self, client):
        response = await client.post(
            "/polls", json={"title": "Q", "options": ["A", "B"]}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_vote_once_then_rejected(self, client, container):
        """One vote is recorded; a second attempt is a conflict and adds nothing."""
        # Arrange
        user_id = await sign_in(client, container)
        store = await container.get(InMemoryDataStore)
        poll = await _create_poll(client)

        # Act
        first = await client.post(
            f"/polls/{poll['poll_id']}/vote", json={"option_index": 0}
        )
        second = await client.post(
            f"/polls/{poll['poll_id']}/vote", json={"option_index": 1}
        )
        fetched = await client.get(f"/polls/{poll['poll_id']}")

        # Assert
        assert first.status_code == 200
        body = first.json()
        assert body["present"] is True
        assert body["value"] == 0
        assert [o["votes"] for o in body["aggregate"]["options"]] == [1, 0]

        assert second.status_code == 409
        assert second.json()["detail"] == "Already voted on this poll"

        votes = store.rows("poll_votes")
        assert len(votes) == 1
        assert (votes[0]["user_id"], votes[0]["option_index"]) == (user_id, 0)
        assert fetched.json()["total_votes"] == 1

    @pytest.mark.asyncio
    async def test_vote_errors(self, client, container):
        await sign_in(client, container)
        poll = await _create_poll(client)

        missing = await client.post(f"/polls/{uuid4()}/vote", json={"option_index": 0})
        bad_option = await client.post(
            f"/polls/{poll['poll_id']}/vote", json={"option_index": 5}
        )
        negative = await client.post(
            f"/polls/{poll['poll_id']}/vote", json={"option_index": -1}
        )

        assert missing.status_code == 404
        assert bad_option.status_code == 400
        assert negative.status_code == 422

    @pytest.mark.asyncio
    async def test_too_many_options_is_bad_request(self, client, container):
        await sign_in(client, container)

        response = await client.post(
            "/polls", json={"title": "Q", "options": [str(i) for i in range(7)]}
        )

        assert response.status_code == 400
        assert "between 2 and 6" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_list_polls_newest_first(self, client, container):
        await sign_in(client, container)
        await _create_poll(client)
        await _create_poll(client)

        response = await client.get("/polls", params={"status": "active"})

        assert response.status_code == 200
        polls = response.json()["polls"]
        assert len(polls) == 2
        assert polls[0]["created_at"] >= polls[1]["created_at"]

    @pytest.mark.asyncio
    async def test_invalid_session_cookie_is_unauthorized(self, client):
        client.cookies.set("auth_token", "not-a-jwt")

        response = await client.post(f"/polls/{uuid4()}/vote", json={"option_index": 0})

        assert response.status_code == 401

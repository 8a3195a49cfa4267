"""Unit tests for InMemoryDataStore."""

from datetime import datetime
from uuid import UUID, uuid4

import pytest

from portal.domain.error import ConflictError, StoreError
from portal.persistence.store import InMemoryDataStore
from tests.conftest import seed_event, seed_poll, seed_problem


@pytest.fixture
def store() -> InMemoryDataStore:
    return InMemoryDataStore()


class TestInsert:
    """Tests for insert."""

    @pytest.mark.asyncio
    async def test_insert_fills_server_defaults(self, store):
        row = await seed_problem(store)

        assert isinstance(row["id"], UUID)
        assert isinstance(row["created_at"], datetime)
        assert row["upvotes"] == 0
        assert row["status"] == "open"
        assert row["category"] == "general"

    @pytest.mark.asyncio
    async def test_duplicate_pair_raises_conflict(self, store):
        user_id = uuid4()
        await store.insert("saved_jobs", {"job_id": "j1", "user_id": user_id})

        with pytest.raises(ConflictError, match="saved_jobs"):
            await store.insert("saved_jobs", {"job_id": "j1", "user_id": user_id})
        assert len(store.rows("saved_jobs")) == 1

    @pytest.mark.asyncio
    async def test_missing_required_column_raises_store_error(self, store):
        with pytest.raises(StoreError, match="must not be null"):
            await store.insert("saved_jobs", {"job_id": "j1"})

    @pytest.mark.asyncio
    async def test_unknown_table_and_column_raise_store_error(self, store):
        with pytest.raises(StoreError, match="Unknown table"):
            await store.insert("nope", {})
        with pytest.raises(StoreError, match="Unknown columns"):
            await store.insert(
                "saved_jobs", {"job_id": "j1", "user_id": uuid4(), "x": 1}
            )

    @pytest.mark.asyncio
    async def test_returned_row_is_a_copy(self, store):
        row = await seed_problem(store)
        row["title"] = "changed"

        assert store.rows("problem_reports")[0]["title"] != "changed"


class TestSelect:
    """Tests for select, update and delete."""

    @pytest.mark.asyncio
    async def test_list_filter_order_and_limit(self, store):
        user_id = uuid4()
        for job_id in ["c", "a", "b"]:
            await store.insert("saved_jobs", {"job_id": job_id, "user_id": user_id})

        rows = await store.select(
            "saved_jobs", {"job_id": ["a", "c"], "user_id": user_id}, order=["-job_id"]
        )
        assert [r["job_id"] for r in rows] == ["c", "a"]

        first = await store.select("saved_jobs", order=["job_id"], limit=1)
        assert [r["job_id"] for r in first] == ["a"]

    @pytest.mark.asyncio
    async def test_update_returns_new_row_or_none(self, store):
        row = await seed_problem(store)

        updated = await store.update(
            "problem_reports", {"id": row["id"]}, {"status": "resolved"}
        )
        missing = await store.update(
            "problem_reports", {"id": uuid4()}, {"status": "resolved"}
        )

        assert updated["status"] == "resolved"
        assert missing is None

    @pytest.mark.asyncio
    async def test_delete_returns_count(self, store):
        user_id = uuid4()
        await store.insert("saved_jobs", {"job_id": "a", "user_id": user_id})
        await store.insert("saved_jobs", {"job_id": "b", "user_id": user_id})

        assert await store.delete("saved_jobs", {"user_id": user_id}) == 2
        assert await store.delete("saved_jobs", {"user_id": user_id}) == 0

    @pytest.mark.asyncio
    async def test_calls_are_recorded_in_order(self, store):
        await store.select_one("polls", {"id": uuid4()})
        await store.delete("polls", {"id": uuid4()})

        assert store.calls == [("select", "polls"), ("delete", "polls")]


class TestAggregates:
    """Tests for the emulated counter triggers."""

    @pytest.mark.asyncio
    async def test_poll_counts_follow_votes(self, store):
        poll = await seed_poll(store, options=["A", "B"])
        voters = [uuid4(), uuid4(), uuid4()]
        for user_id, index in zip(voters, [0, 1, 1]):
            await store.insert(
                "poll_votes",
                {"poll_id": poll["id"], "user_id": user_id, "option_index": index},
            )
        await store.delete("poll_votes", {"user_id": voters[1]})

        refreshed = await store.select_one("polls", {"id": poll["id"]})
        assert refreshed["total_votes"] == 2
        assert [o["votes"] for o in refreshed["options"]] == [1, 1]

    @pytest.mark.asyncio
    async def test_event_counts_only_going_rsvps(self, store):
        event = await seed_event(store)
        await store.insert(
            "event_rsvps",
            {"event_id": event["id"], "user_id": uuid4(), "rsvp_type": "going"},
        )
        await store.insert(
            "event_rsvps",
            {"event_id": event["id"], "user_id": uuid4(), "rsvp_type": "interested"},
        )
        await store.insert(
            "event_volunteers", {"event_id": event["id"], "user_id": uuid4()}
        )

        refreshed = await store.select_one("events", {"id": event["id"]})
        assert refreshed["rsvp_count"] == 1
        assert refreshed["volunteers_joined"] == 1

    @pytest.mark.asyncio
    async def test_failed_trigger_leaves_no_partial_write(self, store):
        """A write whose counter refresh fails is not applied at all."""
        poll = await seed_poll(store, options=["A", "B"])
        await store.update("polls", {"id": poll["id"]}, {"options": '["A", "B"]'})

        with pytest.raises(StoreError):
            await store.insert(
                "poll_votes",
                {"poll_id": poll["id"], "user_id": uuid4(), "option_index": 0},
            )

        assert store.rows("poll_votes") == []
        stored = await store.select_one("polls", {"id": poll["id"]})
        assert stored["total_votes"] == 0
        assert stored["options"] == '["A", "B"]'

    @pytest.mark.asyncio
    async def test_failed_delete_trigger_keeps_rows(self, store):
        poll = await seed_poll(store, options=["A", "B"])
        voter = uuid4()
        await store.insert(
            "poll_votes", {"poll_id": poll["id"], "user_id": voter, "option_index": 1}
        )
        await store.update("polls", {"id": poll["id"]}, {"options": "not a list"})

        with pytest.raises(StoreError):
            await store.delete("poll_votes", {"user_id": voter})

        assert len(store.rows("poll_votes")) == 1

"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import logfire

from portal.domain.repository import DataStore, Row
from portal.domain.value import PollOptions, UserId

# Spans and events go nowhere; the app module instruments FastAPI on import
logfire.configure(send_to_logfire=False, console=False)


async def seed_poll(
    store: DataStore, options: list[str] | None = None, **overrides: Any
) -> Row:
    """Insert a poll with zero votes."""
    row = {
        "title": "Where should the new bench go?",
        "options": PollOptions.from_texts(options or ["Park", "Library"]).model_dump(),
        "created_by": UserId(uuid4()),
        **overrides,
    }
    return await store.insert("polls", row)


async def seed_problem(store: DataStore, **overrides: Any) -> Row:
    """Insert a problem report with zero upvotes."""
    row = {
        "title": "Broken streetlight on 5th Avenue",
        "location": "5th Avenue",
        "reported_by": UserId(uuid4()),
        **overrides,
    }
    return await store.insert("problem_reports", row)


async def seed_event(store: DataStore, **overrides: Any) -> Row:
    """Insert an event a week from now."""
    row = {
        "title": "Community clean-up",
        "event_date": datetime.now(timezone.utc) + timedelta(days=7),
        "volunteer_spots": 10,
        "created_by": UserId(uuid4()),
        **overrides,
    }
    return await store.insert("events", row)


async def seed_kitchen(store: DataStore, **overrides: Any) -> Row:
    """Insert a community kitchen."""
    row = {
        "name": "Annapurna Kitchen",
        "address": "12 Market Road",
        "food_type": "vegetarian",
        "timings": "11 AM - 3 PM",
        **overrides,
    }
    return await store.insert("community_kitchens", row)


async def seed_medical_center(store: DataStore, **overrides: Any) -> Row:
    """Insert a medical center."""
    row = {
        "name": "City Clinic",
        "address": "4 Hospital Lane",
        "type": "clinic",
        "contact": "+91 98765 43210",
        "timings": "9 AM - 9 PM",
        **overrides,
    }
    return await store.insert("medical_centers", row)

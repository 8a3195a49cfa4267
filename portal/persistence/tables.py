"""SQLAlchemy table definitions for the community portal.

These definitions drive both data store implementations and match the
schema created by the Alembic migrations. Aggregate counters
(``total_votes``, ``upvotes``, ``rsvp_count``, ``volunteers_joined``) are
kept by database triggers, never written by the application.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()


def _id() -> Column:
    return Column(
        "id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")
    )


def _created_at() -> Column:
    return Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )


# ============================================================================
# DIRECTORIES (read-only to the core)
# ============================================================================
medical_centers_table = Table(
    "medical_centers",
    metadata,
    _id(),
    Column("name", String(255), nullable=False),
    Column("address", Text, nullable=False),
    Column("type", String(100), nullable=False),  # hospital, clinic, pharmacy
    Column("contact", String(50), nullable=False),
    Column("timings", Text, nullable=True),  # free text, e.g. "9 AM - 9 PM"
    Column("specialization", Text, nullable=True),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    _created_at(),
)

community_kitchens_table = Table(
    "community_kitchens",
    metadata,
    _id(),
    Column("name", String(255), nullable=False),
    Column("address", Text, nullable=False),
    Column("location", String(255), nullable=False, server_default=text("''")),
    Column("contact_phone", String(50), nullable=False, server_default=text("''")),
    Column("description", Text, nullable=True),
    Column("food_type", String(100), nullable=True),
    Column("is_free", Boolean, nullable=False, server_default=text("true")),
    Column("timings", Text, nullable=False),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    _created_at(),
)

# ============================================================================
# AGGREGATES
# ============================================================================
polls_table = Table(
    "polls",
    metadata,
    _id(),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "category", String(100), nullable=False, server_default=text("'community'")
    ),
    Column("options", JSONB, nullable=False),  # [{id, text, votes}, ...]
    Column("total_votes", Integer, nullable=False, server_default=text("0")),
    Column(
        "status",
        Enum("active", "closed", name="poll_status", create_type=False),
        nullable=False,
        server_default=text("'active'"),
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("created_by", UUID, nullable=False),
    _created_at(),
)

Index("idx_polls_created_at", polls_table.c.created_at)

problem_reports_table = Table(
    "problem_reports",
    metadata,
    _id(),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False, server_default=text("''")),
    Column(
        "category", String(100), nullable=False, server_default=text("'general'")
    ),
    Column("location", Text, nullable=False, server_default=text("''")),
    Column("status", String(50), nullable=False, server_default=text("'open'")),
    Column("upvotes", Integer, nullable=False, server_default=text("0")),
    Column("reported_by", UUID, nullable=False),
    _created_at(),
)

events_table = Table(
    "events",
    metadata,
    _id(),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False, server_default=text("''")),
    Column(
        "category", String(100), nullable=False, server_default=text("'community'")
    ),
    Column("location", Text, nullable=False, server_default=text("''")),
    Column("event_date", TIMESTAMP(timezone=True), nullable=False),
    Column("end_date", TIMESTAMP(timezone=True), nullable=True),
    Column("rsvp_count", Integer, nullable=False, server_default=text("0")),
    Column("volunteer_spots", Integer, nullable=True),
    Column("volunteers_joined", Integer, nullable=False, server_default=text("0")),
    Column("created_by", UUID, nullable=False),
    _created_at(),
)

Index("idx_events_event_date", events_table.c.event_date)

# ============================================================================
# MEMBERSHIPS (one row per member and subject)
# ============================================================================
poll_votes_table = Table(
    "poll_votes",
    metadata,
    _id(),
    Column(
        "poll_id", UUID, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column("option_index", Integer, nullable=False),
    _created_at(),
    UniqueConstraint("poll_id", "user_id", name="uq_poll_vote"),
    CheckConstraint("option_index >= 0", name="option_index_non_negative"),
)

problem_upvotes_table = Table(
    "problem_upvotes",
    metadata,
    _id(),
    Column(
        "problem_id",
        UUID,
        ForeignKey("problem_reports.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    _created_at(),
    UniqueConstraint("problem_id", "user_id", name="uq_problem_upvote"),
)

event_rsvps_table = Table(
    "event_rsvps",
    metadata,
    _id(),
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column(
        "rsvp_type",
        Enum("going", "interested", name="rsvp_type", create_type=False),
        nullable=False,
    ),
    _created_at(),
    UniqueConstraint("event_id", "user_id", name="uq_event_rsvp"),
)

event_volunteers_table = Table(
    "event_volunteers",
    metadata,
    _id(),
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column("volunteer_role", String(200), nullable=True),
    _created_at(),
    UniqueConstraint("event_id", "user_id", name="uq_event_volunteer"),
)

kitchen_volunteers_table = Table(
    "kitchen_volunteers",
    metadata,
    _id(),
    Column(
        "kitchen_id",
        UUID,
        ForeignKey("community_kitchens.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column("role", String(100), nullable=True),
    Column("availability", Text, nullable=True),
    _created_at(),
    UniqueConstraint("kitchen_id", "user_id", name="uq_kitchen_volunteer"),
)

saved_jobs_table = Table(
    "saved_jobs",
    metadata,
    _id(),
    Column("job_id", String(100), nullable=False),
    Column("user_id", UUID, nullable=False),
    _created_at(),
    UniqueConstraint("job_id", "user_id", name="uq_saved_job"),
)

Index("idx_saved_jobs_user_id", saved_jobs_table.c.user_id)

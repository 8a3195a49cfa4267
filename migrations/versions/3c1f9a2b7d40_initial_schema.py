"""initial_schema

Create the schema for the community portal core:
- Facility directories (medical centers, community kitchens)
- Aggregates (polls, problem reports, events)
- Memberships (poll votes, upvotes, RSVPs, volunteers, saved jobs)
- Triggers keeping aggregate counters in step with memberships

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-10-17 10:12:44.512093

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE poll_status AS ENUM ('active', 'closed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE rsvp_type AS ENUM ('going', 'interested');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # DIRECTORIES
    # ========================================================================
    op.create_table(
        "medical_centers",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("contact", sa.String(50), nullable=False),
        sa.Column("timings", sa.Text(), nullable=True),
        sa.Column("specialization", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "community_kitchens",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("contact_phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("food_type", sa.String(100), nullable=True),
        sa.Column(
            "is_free", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("timings", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # AGGREGATES
    # ========================================================================
    op.create_table(
        "polls",
        _id(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "category", sa.String(100), nullable=False, server_default="community"
        ),
        sa.Column("options", postgresql.JSONB(), nullable=False),
        sa.Column("total_votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "status",
            postgresql.ENUM("active", "closed", name="poll_status", create_type=False),
            nullable=False,
            server_default="active",
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("created_by", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "jsonb_typeof(options) = 'array'", name="options_is_array"
        ),
    )
    op.create_index("idx_polls_created_at", "polls", ["created_at"])

    op.create_table(
        "problem_reports",
        _id(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(100), nullable=False, server_default="general"),
        sa.Column("location", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(50), nullable=False, server_default="open"),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reported_by", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "events",
        _id(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "category", sa.String(100), nullable=False, server_default="community"
        ),
        sa.Column("location", sa.Text(), nullable=False, server_default=""),
        sa.Column("event_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("rsvp_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("volunteer_spots", sa.Integer(), nullable=True),
        sa.Column(
            "volunteers_joined", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("created_by", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_events_event_date", "events", ["event_date"])

    # ========================================================================
    # MEMBERSHIPS (one row per member and subject)
    # ========================================================================
    op.create_table(
        "poll_votes",
        _id(),
        sa.Column("poll_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("option_index", sa.Integer(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("poll_id", "user_id", name="uq_poll_vote"),
        sa.CheckConstraint("option_index >= 0", name="option_index_non_negative"),
    )

    op.create_table(
        "problem_upvotes",
        _id(),
        sa.Column("problem_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["problem_id"], ["problem_reports.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint("problem_id", "user_id", name="uq_problem_upvote"),
    )

    op.create_table(
        "event_rsvps",
        _id(),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "rsvp_type",
            postgresql.ENUM("going", "interested", name="rsvp_type", create_type=False),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_rsvp"),
    )

    op.create_table(
        "event_volunteers",
        _id(),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("volunteer_role", sa.String(200), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_volunteer"),
    )

    op.create_table(
        "kitchen_volunteers",
        _id(),
        sa.Column("kitchen_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(100), nullable=True),
        sa.Column("availability", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["kitchen_id"], ["community_kitchens.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint("kitchen_id", "user_id", name="uq_kitchen_volunteer"),
    )

    # Job listings live in an external board; job_id is its opaque key
    op.create_table(
        "saved_jobs",
        _id(),
        sa.Column("job_id", sa.String(100), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("job_id", "user_id", name="uq_saved_job"),
    )
    op.create_index("idx_saved_jobs_user_id", "saved_jobs", ["user_id"])

    # ========================================================================
    # TRIGGERS (aggregate counters are recounted, never incremented)
    # ========================================================================
    # Note: Split into separate execute statements for asyncpg compatibility
    op.execute("""
        CREATE OR REPLACE FUNCTION refresh_poll_counts()
        RETURNS TRIGGER AS $$
        DECLARE
            target UUID;
        BEGIN
            IF TG_OP = 'DELETE' THEN
                target := OLD.poll_id;
            ELSE
                target := NEW.poll_id;
            END IF;

            UPDATE polls p SET
                total_votes = (
                    SELECT COUNT(*) FROM poll_votes v WHERE v.poll_id = target
                ),
                options = COALESCE((
                    SELECT jsonb_agg(
                        jsonb_set(
                            opt.value,
                            '{votes}',
                            to_jsonb((
                                SELECT COUNT(*) FROM poll_votes v
                                WHERE v.poll_id = target
                                  AND v.option_index = opt.position - 1
                            ))
                        )
                        ORDER BY opt.position
                    )
                    FROM jsonb_array_elements(p.options)
                        WITH ORDINALITY AS opt(value, position)
                ), '[]'::jsonb)
            WHERE p.id = target;
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER poll_votes_refresh_counts
        AFTER INSERT OR UPDATE OR DELETE ON poll_votes
        FOR EACH ROW EXECUTE FUNCTION refresh_poll_counts()
    """)

    op.execute("""
        CREATE OR REPLACE FUNCTION refresh_problem_upvotes()
        RETURNS TRIGGER AS $$
        DECLARE
            target UUID;
        BEGIN
            IF TG_OP = 'DELETE' THEN
                target := OLD.problem_id;
            ELSE
                target := NEW.problem_id;
            END IF;

            UPDATE problem_reports SET upvotes = (
                SELECT COUNT(*) FROM problem_upvotes u WHERE u.problem_id = target
            )
            WHERE id = target;
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER problem_upvotes_refresh_counts
        AFTER INSERT OR DELETE ON problem_upvotes
        FOR EACH ROW EXECUTE FUNCTION refresh_problem_upvotes()
    """)

    # Shared by event_rsvps and event_volunteers
    op.execute("""
        CREATE OR REPLACE FUNCTION refresh_event_counts()
        RETURNS TRIGGER AS $$
        DECLARE
            target UUID;
        BEGIN
            IF TG_OP = 'DELETE' THEN
                target := OLD.event_id;
            ELSE
                target := NEW.event_id;
            END IF;

            UPDATE events SET
                rsvp_count = (
                    SELECT COUNT(*) FROM event_rsvps r
                    WHERE r.event_id = target AND r.rsvp_type = 'going'
                ),
                volunteers_joined = (
                    SELECT COUNT(*) FROM event_volunteers v WHERE v.event_id = target
                )
            WHERE id = target;
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER event_rsvps_refresh_counts
        AFTER INSERT OR UPDATE OR DELETE ON event_rsvps
        FOR EACH ROW EXECUTE FUNCTION refresh_event_counts()
    """)

    op.execute("""
        CREATE TRIGGER event_volunteers_refresh_counts
        AFTER INSERT OR DELETE ON event_volunteers
        FOR EACH ROW EXECUTE FUNCTION refresh_event_counts()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop triggers
    op.execute(
        "DROP TRIGGER IF EXISTS event_volunteers_refresh_counts ON event_volunteers"
    )
    op.execute("DROP TRIGGER IF EXISTS event_rsvps_refresh_counts ON event_rsvps")
    op.execute(
        "DROP TRIGGER IF EXISTS problem_upvotes_refresh_counts ON problem_upvotes"
    )
    op.execute("DROP TRIGGER IF EXISTS poll_votes_refresh_counts ON poll_votes")

    # Drop trigger functions
    op.execute("DROP FUNCTION IF EXISTS refresh_event_counts()")
    op.execute("DROP FUNCTION IF EXISTS refresh_problem_upvotes()")
    op.execute("DROP FUNCTION IF EXISTS refresh_poll_counts()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("saved_jobs")
    op.drop_table("kitchen_volunteers")
    op.drop_table("event_volunteers")
    op.drop_table("event_rsvps")
    op.drop_table("problem_upvotes")
    op.drop_table("poll_votes")
    op.drop_table("events")
    op.drop_table("problem_reports")
    op.drop_table("polls")
    op.drop_table("community_kitchens")
    op.drop_table("medical_centers")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS rsvp_type")
    op.execute("DROP TYPE IF EXISTS poll_status")

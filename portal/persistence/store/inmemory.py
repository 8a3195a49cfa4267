"""In-memory data store for testing.

Mirrors what the database guarantees: column defaults, primary key and
unique constraints (read from the SQLAlchemy table metadata), and the
aggregate counters the migration keeps up to date with triggers.
"""

import copy
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping, Sequence
from uuid import uuid4

from sqlalchemy import Boolean, Column, Integer, Table, UniqueConstraint

from portal.domain.error import ConflictError, StoreError
from portal.domain.repository import DataStore, Filter, Row
from portal.persistence.tables import metadata


def _python_default(column: Column) -> Any:
    """Evaluate a column's server default the way PostgreSQL would."""
    default = column.server_default
    if default is None:
        return None
    expression = str(getattr(default.arg, "text", default.arg)).strip()
    lowered = expression.lower()
    if lowered == "uuid_generate_v4()":
        return uuid4()
    if lowered == "now()":
        return datetime.now(timezone.utc)
    if expression.startswith("'") and expression.endswith("'"):
        return expression[1:-1]
    if isinstance(column.type, Boolean):
        return lowered == "true"
    if isinstance(column.type, Integer):
        return int(expression)
    return expression


def _matches(row: Row, filter: Filter | None) -> bool:
    if not filter:
        return True
    for column, expected in filter.items():
        if isinstance(expected, (list, tuple, set, frozenset)):
            if row.get(column) not in expected:
                return False
        elif row.get(column) != expected:
            return False
    return True


def _sort_key(value: Any) -> tuple[bool, Any]:
    # None sorts last, like PostgreSQL's default for ascending order
    return (value is None, value)


class InMemoryDataStore(DataStore):
    """In-memory implementation of DataStore for testing."""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = dict(metadata.tables)
        self._rows: dict[str, list[Row]] = {name: [] for name in self._tables}
        self._triggers: dict[str, Callable[[Row], None]] = {
            "poll_votes": self._refresh_poll,
            "problem_upvotes": self._refresh_problem,
            "event_rsvps": self._refresh_event,
            "event_volunteers": self._refresh_event,
        }
        # Every call, in order, for assertions on store traffic
        self.calls: list[tuple[str, str]] = []

    def _table(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise StoreError(f"Unknown table: {name}")

    def _unique_keys(self, table: Table) -> list[tuple[str, ...]]:
        keys = [tuple(c.name for c in table.primary_key.columns)]
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint):
                keys.append(tuple(c.name for c in constraint.columns))
        return keys

    def _check_unique(self, table: Table, row: Row, ignore: Row | None = None) -> None:
        for key in self._unique_keys(table):
            values = tuple(row.get(c) for c in key)
            for other in self._rows[table.name]:
                if other is ignore:
                    continue
                if tuple(other.get(c) for c in key) == values:
                    raise ConflictError(table.name, f"duplicate {', '.join(key)}")

    def _fire(self, table: str, rows: list[Row]) -> None:
        trigger = self._triggers.get(table)
        if trigger is not None:
            for row in rows:
                trigger(row)

    @contextmanager
    def _statement(self) -> Iterator[None]:
        """Apply a write and its triggers together, or not at all."""
        snapshot = copy.deepcopy(self._rows)
        try:
            yield
        except Exception:
            self._rows = snapshot
            raise

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert a row, filling defaults and enforcing unique keys."""
        self.calls.append(("insert", table))
        definition = self._table(table)

        unknown = set(row) - set(definition.columns.keys())
        if unknown:
            raise StoreError(f"Unknown columns for {table}: {sorted(unknown)}")

        stored: Row = {}
        for column in definition.columns:
            if column.name in row:
                stored[column.name] = copy.deepcopy(row[column.name])
            else:
                stored[column.name] = _python_default(column)
            if stored[column.name] is None and not column.nullable:
                raise StoreError(f"{table}.{column.name} must not be null")

        self._check_unique(definition, stored)
        with self._statement():
            self._rows[table].append(stored)
            self._fire(table, [stored])
        return copy.deepcopy(stored)

    async def update(
        self, table: str, match: Filter, patch: Mapping[str, Any]
    ) -> Row | None:
        """Update the first row matching ``match``."""
        self.calls.append(("update", table))
        definition = self._table(table)
        for row in self._rows[table]:
            if _matches(row, match):
                updated = {**row, **copy.deepcopy(dict(patch))}
                self._check_unique(definition, updated, ignore=row)
                with self._statement():
                    row.update(updated)
                    self._fire(table, [row])
                return copy.deepcopy(updated)
        return None

    async def delete(self, table: str, match: Filter) -> int:
        """Delete every row matching ``match``."""
        self.calls.append(("delete", table))
        self._table(table)
        removed = [r for r in self._rows[table] if _matches(r, match)]
        with self._statement():
            self._rows[table] = [
                r for r in self._rows[table] if not _matches(r, match)
            ]
            self._fire(table, removed)
        return len(removed)

    async def select(
        self,
        table: str,
        filter: Filter | None = None,
        order: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        """Select matching rows."""
        self.calls.append(("select", table))
        self._table(table)
        rows = [r for r in self._rows[table] if _matches(r, filter)]
        for column in reversed(order or []):
            descending = column.startswith("-")
            name = column.lstrip("-")
            rows.sort(key=lambda r: _sort_key(r.get(name)), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    def rows(self, table: str) -> list[Row]:
        """Snapshot of a table's rows, bypassing call tracking."""
        return copy.deepcopy(self._rows[self._table(table).name])

    # Aggregate maintenance, matching the migration's triggers

    def _find(self, table: str, row_id: Any) -> Row | None:
        for row in self._rows[table]:
            if row["id"] == row_id:
                return row
        return None

    def _refresh_poll(self, vote: Row) -> None:
        poll = self._find("polls", vote["poll_id"])
        if poll is None:
            return
        if not isinstance(poll["options"], list) or not all(
            isinstance(option, dict) for option in poll["options"]
        ):
            raise StoreError("Cannot count votes: poll options are not structured")
        votes = [v for v in self._rows["poll_votes"] if v["poll_id"] == poll["id"]]
        poll["total_votes"] = len(votes)
        poll["options"] = [
            {
                **option,
                "votes": sum(1 for v in votes if v["option_index"] == index),
            }
            for index, option in enumerate(poll["options"])
        ]

    def _refresh_problem(self, upvote: Row) -> None:
        problem = self._find("problem_reports", upvote["problem_id"])
        if problem is None:
            return
        problem["upvotes"] = sum(
            1
            for u in self._rows["problem_upvotes"]
            if u["problem_id"] == problem["id"]
        )

    def _refresh_event(self, membership: Row) -> None:
        event = self._find("events", membership["event_id"])
        if event is None:
            return
        event["rsvp_count"] = sum(
            1
            for r in self._rows["event_rsvps"]
            if r["event_id"] == event["id"] and r["rsvp_type"] == "going"
        )
        event["volunteers_joined"] = sum(
            1 for v in self._rows["event_volunteers"] if v["event_id"] == event["id"]
        )

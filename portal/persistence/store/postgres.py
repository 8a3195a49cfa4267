"""PostgreSQL implementation of the data store."""

from typing import Any, Mapping, Sequence

import logfire
from sqlalchemy import Table, and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from portal.domain.error import ConflictError, StoreError
from portal.domain.repository import DataStore, Filter, Row
from portal.persistence.tables import metadata

UNIQUE_VIOLATION = "23505"


class PostgresDataStore(DataStore):
    """PostgreSQL implementation of DataStore.

    Each write runs in a savepoint so a rejected insert leaves the
    request's transaction usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _table(self, name: str) -> Table:
        try:
            return metadata.tables[name]
        except KeyError:
            raise StoreError(f"Unknown table: {name}")

    def _where(self, table: Table, filter: Filter | None) -> Any:
        clauses = []
        for column, value in (filter or {}).items():
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(table.c[column].in_(list(value)))
            else:
                clauses.append(table.c[column] == value)
        return and_(True, *clauses)

    async def _write(self, table: str, stmt: Executable) -> Any:
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
            return result
        except IntegrityError as e:
            code = getattr(e.orig, "sqlstate", None) or getattr(e.orig, "pgcode", None)
            if code == UNIQUE_VIOLATION:
                logfire.info("Unique constraint violation", table=table)
                raise ConflictError(table)
            logfire.warn("Integrity error", table=table, error=str(e.orig))
            raise StoreError(f"Write to {table} rejected: {e.orig}") from e
        except SQLAlchemyError as e:
            logfire.error("Store write failed", table=table, error=str(e))
            raise StoreError(f"Write to {table} failed") from e

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert a row and return it with generated columns."""
        t = self._table(table)
        stmt = insert(t).values(**row).returning(*t.c)
        result = await self._write(table, stmt)
        return dict(result.mappings().one())

    async def update(
        self, table: str, match: Filter, patch: Mapping[str, Any]
    ) -> Row | None:
        """Update matching rows and return the first one."""
        t = self._table(table)
        stmt = update(t).where(self._where(t, match)).values(**patch).returning(*t.c)
        result = await self._write(table, stmt)
        row = result.mappings().first()
        return dict(row) if row else None

    async def delete(self, table: str, match: Filter) -> int:
        """Delete matching rows."""
        t = self._table(table)
        stmt = delete(t).where(self._where(t, match))
        result = await self._write(table, stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def select(
        self,
        table: str,
        filter: Filter | None = None,
        order: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        """Select matching rows."""
        t = self._table(table)
        stmt = select(t).where(self._where(t, filter))
        for column in order or []:
            if column.startswith("-"):
                stmt = stmt.order_by(t.c[column[1:]].desc())
            else:
                stmt = stmt.order_by(t.c[column].asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Store read failed", table=table, error=str(e))
            raise StoreError(f"Read from {table} failed") from e
        return [dict(row) for row in result.mappings().all()]

"""Data store interface.

The portal talks to a hosted relational store with row-level
authorization. The core only needs four table-level operations; every
implementation enforces the tables' unique constraints and keeps the
denormalized aggregate counters up to date.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

Row = dict[str, Any]

# Column -> value, or column -> list of values (IN)
Filter = Mapping[str, Any]


class DataStore(ABC):
    """Typed CRUD access to the portal tables.

    Implementations raise ``ConflictError`` on unique-constraint
    violations and ``StoreError`` on any other failure.
    """

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert a row.

        Args:
            table: Table name
            row: Column values; omitted columns take their defaults

        Returns:
            The stored row, including generated columns

        Raises:
            ConflictError: If the row duplicates a unique key
            StoreError: On any other failure
        """
        pass

    @abstractmethod
    async def update(
        self, table: str, match: Filter, patch: Mapping[str, Any]
    ) -> Row | None:
        """Update the row matching ``match``.

        Args:
            table: Table name
            match: Equality filter identifying the row
            patch: Columns to change

        Returns:
            The updated row, or None if nothing matched
        """
        pass

    @abstractmethod
    async def delete(self, table: str, match: Filter) -> int:
        """Delete rows matching ``match``.

        Returns:
            Number of rows deleted
        """
        pass

    @abstractmethod
    async def select(
        self,
        table: str,
        filter: Filter | None = None,
        order: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        """Select rows.

        Args:
            table: Table name
            filter: Equality filter; list values match any of the values
            order: Column names, prefixed with ``-`` for descending
            limit: Maximum number of rows

        Returns:
            Matching rows
        """
        pass

    async def select_one(self, table: str, filter: Filter) -> Row | None:
        """Select the first row matching ``filter``."""
        rows = await self.select(table, filter, limit=1)
        return rows[0] if rows else None

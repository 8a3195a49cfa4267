"""Data store implementations."""

from portal.persistence.store.inmemory import InMemoryDataStore
from portal.persistence.store.postgres import PostgresDataStore

__all__ = [
    "InMemoryDataStore",
    "PostgresDataStore",
]

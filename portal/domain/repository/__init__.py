"""Repository interfaces for the portal domain.

Interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from portal.domain.repository.store import DataStore, Filter, Row

__all__ = [
    "DataStore",
    "Filter",
    "Row",
]

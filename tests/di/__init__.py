"""Mock providers for testing."""

from .auth import MockAuthenticationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockAuthenticationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]

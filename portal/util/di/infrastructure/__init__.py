"""Infrastructure providers."""

# Import bases
from .auth import AuthenticationProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .auth import ProdAuthenticationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "AuthenticationProvider",
    "PersistenceProvider",
    "ProdAuthenticationProvider",
    "ProdPersistenceProvider",
]

"""Infrastructure providers."""

# Import bases
from .oauth import OAuthAggregatorProvider, OAuthProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .oauth import ProdOAuthProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "OAuthAggregatorProvider",
    "OAuthProvider",
    "PersistenceProvider",
    "ProdOAuthProvider",
    "ProdPersistenceProvider",
]

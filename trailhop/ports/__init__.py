"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the planner core and the external
systems it talks to: catalogue storage, the transit provider and
caching.
"""

from .cache import CachePort
from .catalogue import CatalogueRepositoryPort
from .transit import TransitProviderPort

__all__ = [
    "CachePort",
    "CatalogueRepositoryPort",
    "TransitProviderPort",
]

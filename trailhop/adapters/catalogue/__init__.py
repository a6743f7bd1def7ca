"""Catalogue adapters - Implementations of CatalogueRepositoryPort.

Available implementations:
- JSONCatalogueRepository: Reads and writes the JSON data files
"""

from .json_repository import JSONCatalogueRepository

__all__ = ["JSONCatalogueRepository"]

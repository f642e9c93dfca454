"""
Repository Pattern for catalog SQL operations
Centralized query construction, timing and error translation
"""

from .base_repository import SQLRepository
from .catalog_repository import CatalogRepository
from .tag_repository import TagRepository

__all__ = [
    "SQLRepository",
    "CatalogRepository",
    "TagRepository",
]

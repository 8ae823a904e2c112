"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import IRepository, BaseRepository
from .recipe_repository import RecipeRepository

__all__ = [
    "IRepository",
    "BaseRepository",
    "RecipeRepository",
]

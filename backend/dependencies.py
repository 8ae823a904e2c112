"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
so routes depend on interfaces and tests can override them.
"""

from fastapi import Depends
from database import ApiDbContext, get_db
from repositories.recipe_repository import RecipeRepository
from services.interfaces import IRecipeService
from services.recipe_service import RecipeService


def get_recipe_repository(db: ApiDbContext) -> RecipeRepository:
    """
    Factory function for creating RecipeRepository instances.

    Args:
        db: Database context

    Returns:
        RecipeRepository bound to the context's session
    """
    return RecipeRepository(db.session)


def get_recipe_service(db: ApiDbContext = Depends(get_db)) -> IRecipeService:
    """
    Factory function for creating RecipeService instances.

    Args:
        db: Database context (injected)

    Returns:
        IRecipeService: Recipe service implementation
    """
    return RecipeService(db, get_recipe_repository(db))

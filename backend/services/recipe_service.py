"""
Recipe Service

Business logic for recipes on top of RecipeRepository. Owns the commit of
each unit of work and turns missing records into RecordNotFoundError.
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from database import ApiDbContext
from exceptions import DatabaseError, RecordNotFoundError
from models import Recipe
from repositories.recipe_repository import RecipeRepository
from schemas import RecipeCreate, RecipeUpdate
from services.interfaces import IRecipeService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class RecipeService(IRecipeService):
    """Service for recipe use cases."""

    def __init__(self, context: ApiDbContext, repository: Optional[RecipeRepository] = None):
        """
        Initialize RecipeService.

        Args:
            context: Unit of work the repository's session belongs to
            repository: Recipe repository (built from the context if omitted)
        """
        self.context = context
        self.recipe_repo = repository or RecipeRepository(context.session)

    async def _persist(self, operation: str, staged):
        """Await the staging coroutine, then commit; roll back on any database error."""
        try:
            result = await staged
            await asyncio.to_thread(self.context.save_changes)
        except SQLAlchemyError as e:
            await asyncio.to_thread(self.context.rollback)
            raise DatabaseError(operation, str(e)) from e
        return result

    async def _get_or_raise(self, recipe_id: int) -> Recipe:
        recipe = await self.recipe_repo.get_record_by_id(recipe_id)
        if recipe is None:
            raise RecordNotFoundError("Recipe", recipe_id)
        return recipe

    @log_operation("list_recipes")
    async def list_recipes(self, limit: Optional[int] = None, offset: int = 0) -> List[Recipe]:
        return await self.recipe_repo.get_all(limit=limit, offset=offset)

    @log_operation("get_recipe")
    async def get_recipe(self, recipe_id: int) -> Recipe:
        return await self._get_or_raise(recipe_id)

    @log_operation("create_recipe")
    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        recipe = await self._persist(
            "create_recipe", self.recipe_repo.create(Recipe(**data.model_dump()))
        )
        logger.info(f"Created recipe {recipe.id}: {recipe.label}")
        return recipe

    @log_operation("update_recipe")
    async def update_recipe(self, recipe_id: int, data: RecipeUpdate) -> Recipe:
        recipe = await self._get_or_raise(recipe_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(recipe, field, value)
        await self._persist("update_recipe", self.recipe_repo.update(recipe))
        logger.info(f"Updated recipe {recipe_id}: {sorted(changes)}")
        return recipe

    @log_operation("delete_recipe")
    async def delete_recipe(self, recipe_id: int) -> None:
        recipe = await self._get_or_raise(recipe_id)
        await self._persist("delete_recipe", self.recipe_repo.delete(recipe))
        logger.info(f"Deleted recipe {recipe_id}")

    @log_operation("search_recipes")
    async def search_recipes(
        self, text: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        return await self.recipe_repo.search_by_label(text, limit=limit, offset=offset)

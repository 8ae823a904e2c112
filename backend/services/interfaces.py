"""
Service Interfaces

Abstract base classes for the service layer so routes depend on an interface
and tests can substitute mocks.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from models import Recipe
from schemas import RecipeCreate, RecipeUpdate


class IRecipeService(ABC):
    """
    Interface for recipe use cases.

    Every mutating method commits its unit of work before returning.
    """

    @abstractmethod
    async def list_recipes(self, limit: Optional[int] = None, offset: int = 0) -> List[Recipe]:
        """
        List persisted recipes.

        Args:
            limit: Maximum number of recipes
            offset: Number of recipes to skip

        Returns:
            List of recipes ordered by id
        """
        pass

    @abstractmethod
    async def get_recipe(self, recipe_id: int) -> Recipe:
        """
        Get a recipe by id.

        Raises:
            RecordNotFoundError: If no recipe has this id
        """
        pass

    @abstractmethod
    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        """
        Persist a new recipe.

        Returns:
            The stored recipe with its generated id

        Raises:
            DatabaseError: If the commit fails
        """
        pass

    @abstractmethod
    async def update_recipe(self, recipe_id: int, data: RecipeUpdate) -> Recipe:
        """
        Apply the fields set on data to an existing recipe.

        Raises:
            RecordNotFoundError: If no recipe has this id
            DatabaseError: If the commit fails
        """
        pass

    @abstractmethod
    async def delete_recipe(self, recipe_id: int) -> None:
        """
        Delete a recipe.

        Raises:
            RecordNotFoundError: If no recipe has this id
            DatabaseError: If the commit fails
        """
        pass

    @abstractmethod
    async def search_recipes(
        self, text: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        """Recipes whose label contains text, case-insensitive, paged like list_recipes."""
        pass

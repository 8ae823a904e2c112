"""
Recipe repository for recipe-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from models import Recipe
from .base_repository import BaseRepository


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for Recipe model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    async def search_by_label(
        self, text: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        """
        Find recipes whose label contains the text (case-insensitive).

        `%` and `_` in the text match literally.

        Args:
            text: Substring to look for
            limit: Maximum number of recipes to return
            offset: Number of matches to skip

        Returns:
            Matching recipes ordered by id
        """
        query = self.db.query(self.model).filter(
            func.lower(self.model.label).like(f"%{_escape_like(text.lower())}%", escape="\\")
        ).order_by(self.model.id)
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        return await self._run(query.all)

    async def get_by_max_calories(self, max_calories: int) -> List[Recipe]:
        """
        Get recipes at or below a calorie limit, lightest first.

        Args:
            max_calories: Inclusive upper bound

        Returns:
            List of recipes
        """
        query = self.db.query(self.model).filter(
            self.model.calories <= max_calories
        ).order_by(self.model.calories, self.model.id)
        return await self._run(query.all)

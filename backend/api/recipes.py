from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from constants import HTTPStatus, RecipeLimits
from dependencies import get_recipe_service
from schemas import RecipeCreate, RecipeRead, RecipeUpdate
from services.interfaces import IRecipeService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/recipes", response_model=List[RecipeRead])
@handle_api_errors("List recipes")
async def list_recipes(
    service: IRecipeService = Depends(get_recipe_service),
    limit: int = Query(RecipeLimits.DEFAULT_PAGE_SIZE, ge=1, le=RecipeLimits.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    search: Optional[str] = Query(None, description="Filter by label contains (case-insensitive)"),
):
    """Recipes ordered by id; `search` results are paged by limit/offset too."""
    if search:
        return await service.search_recipes(search, limit=limit, offset=offset)
    return await service.list_recipes(limit=limit, offset=offset)


@router.get("/recipes/{recipe_id}", response_model=RecipeRead)
@handle_api_errors("Get recipe")
async def get_recipe(recipe_id: int, service: IRecipeService = Depends(get_recipe_service)):
    return await service.get_recipe(recipe_id=recipe_id)


@router.post("/recipes", response_model=RecipeRead, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create recipe")
async def create_recipe(data: RecipeCreate, service: IRecipeService = Depends(get_recipe_service)):
    return await service.create_recipe(data)


@router.put("/recipes/{recipe_id}", response_model=RecipeRead)
@handle_api_errors("Update recipe")
async def update_recipe(
    recipe_id: int,
    data: RecipeUpdate,
    service: IRecipeService = Depends(get_recipe_service),
):
    """Partial update: fields omitted from the body are left unchanged."""
    return await service.update_recipe(recipe_id=recipe_id, data=data)


@router.delete("/recipes/{recipe_id}", status_code=HTTPStatus.NO_CONTENT, response_class=Response)
@handle_api_errors("Delete recipe")
async def delete_recipe(recipe_id: int, service: IRecipeService = Depends(get_recipe_service)):
    await service.delete_recipe(recipe_id=recipe_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)

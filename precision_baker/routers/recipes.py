"""Recipes CRUD API router.

Endpoints:
- GET /api/recipes - List recipes (optional ?userId= and ?featured=)
- POST /api/recipes - Create recipe
- GET /api/recipes/{id} - Get recipe
- PUT /api/recipes/{id} - Partial update
- DELETE /api/recipes/{id} - Delete recipe
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..core.text import clean_md
from ..deps import get_repository
from ..repository import Repository
from ..schemas import RecipeCreate, RecipeUpdate, RecipeOut

router = APIRouter()
logger = logging.getLogger("precision_baker.recipes")


@router.get("/recipes", response_model=list[RecipeOut])
def list_recipes(
    user_id: Optional[int] = Query(None, alias="userId"),
    featured: Optional[bool] = Query(None),
    repo: Repository = Depends(get_repository),
):
    return repo.get_recipes(user_id=user_id, featured=featured)


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: int,
    repo: Repository = Depends(get_repository),
):
    recipe = repo.get_recipe(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/recipes", response_model=RecipeOut, status_code=201)
def create_recipe(
    payload: RecipeCreate,
    repo: Repository = Depends(get_repository),
):
    data = payload.model_dump()
    data["title"] = clean_md(data["title"])
    recipe = repo.create_recipe(data)
    logger.info("Created recipe id=%s title=%r", recipe.id, recipe.title)
    return recipe


@router.put("/recipes/{recipe_id}", response_model=RecipeOut)
def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    repo: Repository = Depends(get_repository),
):
    """Apply only the fields present in the request body."""
    data = payload.model_dump(exclude_unset=True)
    if data.get("title"):
        data["title"] = clean_md(data["title"])
    recipe = repo.update_recipe(recipe_id, data)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.delete("/recipes/{recipe_id}", status_code=204)
def delete_recipe(
    recipe_id: int,
    repo: Repository = Depends(get_repository),
):
    if not repo.delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    logger.info("Deleted recipe id=%s", recipe_id)
    return Response(status_code=204)

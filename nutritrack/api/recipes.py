"""Recipe search endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from nutritrack.api.deps import get_catalog, get_profile_repo
from nutritrack.api.profiles import load_profile
from nutritrack.db.repositories import ProfileRepository
from nutritrack.models.recipe import Recipe, RecipeFilters
from nutritrack.services.catalog import RecipeCatalog


router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.get("/search", response_model=List[Recipe])
async def search_recipes(
    q: str = "",
    diet: Optional[str] = None,
    max_ready_time: Optional[int] = None,
    dish_type: Optional[str] = None,
    max_calories: Optional[float] = None,
    min_protein: Optional[float] = None,
    catalog: RecipeCatalog = Depends(get_catalog),
):
    filters = RecipeFilters(
        diet=diet,
        max_ready_time=max_ready_time,
        dish_type=dish_type,
        max_calories=max_calories,
        min_protein=min_protein,
    )
    return await catalog.search(q, filters)


@router.get("/recommendations/{user_id}", response_model=List[Recipe])
async def recommend_recipes(
    user_id: str,
    meal_type: str = "breakfast",
    profiles: ProfileRepository = Depends(get_profile_repo),
    catalog: RecipeCatalog = Depends(get_catalog),
):
    """Recipes of one meal type that fit the user's restrictions and allergies."""
    return catalog.recommendations(load_profile(profiles, user_id), meal_type)


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, catalog: RecipeCatalog = Depends(get_catalog)):
    recipe = catalog.get(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe

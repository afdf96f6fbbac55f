"""Meal plan and shopping list endpoints."""

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException

from nutritrack.api.deps import get_plan_repo, get_planner, get_profile_repo
from nutritrack.api.errors import http_error
from nutritrack.api.profiles import load_profile
from nutritrack.db.repositories import MealPlanRepository, ProfileRepository
from nutritrack.errors import NutriTrackError
from nutritrack.models.meal import GeneratePlanRequest, MealPlan, ShoppingListItem
from nutritrack.services.meal_planner import MealPlanGenerator
from nutritrack.services.shopping import group_by_aisle, toggle_item


router = APIRouter(prefix="/plans", tags=["Meal Plans"])


def load_plan(repo: MealPlanRepository, plan_id: str) -> MealPlan:
    plan = repo.get(plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return plan


@router.post("/generate", response_model=MealPlan)
async def generate_plan(
    request: GeneratePlanRequest,
    profiles: ProfileRepository = Depends(get_profile_repo),
    planner: MealPlanGenerator = Depends(get_planner),
):
    """Generate a plan for the user's profile. The plan is not saved until posted back."""
    profile = load_profile(profiles, request.user_id)
    try:
        return await planner.generate_plan(profile, request.days, request.preferences)
    except NutriTrackError as e:
        raise http_error(e)


@router.post("", response_model=MealPlan, status_code=201)
async def save_plan(plan: MealPlan, repo: MealPlanRepository = Depends(get_plan_repo)):
    return repo.save(plan)


@router.get("/user/{user_id}", response_model=List[MealPlan])
async def list_plans(user_id: str, repo: MealPlanRepository = Depends(get_plan_repo)):
    return repo.for_user(user_id)


@router.get("/{plan_id}", response_model=MealPlan)
async def get_plan(plan_id: str, repo: MealPlanRepository = Depends(get_plan_repo)):
    return load_plan(repo, plan_id)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(plan_id: str, repo: MealPlanRepository = Depends(get_plan_repo)):
    if not repo.delete(plan_id):
        raise HTTPException(status_code=404, detail="Meal plan not found")


@router.get("/{plan_id}/shopping-list", response_model=Dict[str, List[ShoppingListItem]])
async def get_shopping_list(plan_id: str, repo: MealPlanRepository = Depends(get_plan_repo)):
    """Shopping list grouped by aisle."""
    return group_by_aisle(load_plan(repo, plan_id).shopping_list)


@router.post("/{plan_id}/shopping-list/{item_id}/toggle", response_model=ShoppingListItem)
async def toggle_shopping_item(
    plan_id: str,
    item_id: str,
    repo: MealPlanRepository = Depends(get_plan_repo),
):
    plan = load_plan(repo, plan_id)
    try:
        item = toggle_item(plan, item_id)
    except NutriTrackError as e:
        raise http_error(e)
    repo.save(plan)
    return item

"""Nutrition profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from nutritrack.api.deps import get_profile_repo
from nutritrack.db.repositories import ProfileRepository
from nutritrack.models.profile import BMIResult, NutritionProfile, ProfileTargets, ProfileUpdate
from nutritrack.services.nutrition import NutritionCalculator


router = APIRouter(prefix="/profiles", tags=["Profiles"])


def load_profile(repo: ProfileRepository, user_id: str) -> NutritionProfile:
    profile = repo.get(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/{user_id}", response_model=NutritionProfile)
async def save_profile(
    user_id: str,
    data: ProfileUpdate,
    repo: ProfileRepository = Depends(get_profile_repo),
):
    """Create or overwrite a profile. Calorie goal and macros are recomputed on every save."""
    existing = repo.get(user_id)
    profile = NutritionProfile(id=user_id, **data.model_dump())
    if existing:
        profile.created_at = existing.created_at

    return repo.save(NutritionCalculator.apply_goals(profile))


@router.get("/{user_id}", response_model=NutritionProfile)
async def get_profile(user_id: str, repo: ProfileRepository = Depends(get_profile_repo)):
    return load_profile(repo, user_id)


@router.get("/{user_id}/targets", response_model=ProfileTargets)
async def get_targets(user_id: str, repo: ProfileRepository = Depends(get_profile_repo)):
    """Calorie, macro, water and weight targets for the dashboard."""
    return NutritionCalculator.targets_for(load_profile(repo, user_id))


@router.get("/tools/bmi", response_model=BMIResult)
async def bmi(weight_kg: float, height_cm: float):
    if weight_kg <= 0 or height_cm <= 0:
        raise HTTPException(status_code=400, detail="Weight and height must be positive")
    return NutritionCalculator.calculate_bmi(weight_kg, height_cm)

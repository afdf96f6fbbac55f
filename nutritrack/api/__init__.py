"""HTTP API for NutriTrack."""

from fastapi import APIRouter

from . import challenges, coach, fitness, meals, plans, profiles, recipes


router = APIRouter(prefix="/api/v1")
router.include_router(profiles.router)
router.include_router(meals.router)
router.include_router(plans.router)
router.include_router(recipes.router)
router.include_router(challenges.router)
router.include_router(coach.router)
router.include_router(fitness.router)

__all__ = ["router"]

"""Food analysis and meal log endpoints."""

from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends

from nutritrack.api.deps import get_food_analyzer, get_meal_log_repo
from nutritrack.db.repositories import MealLogRepository
from nutritrack.models.tracking import (
    DailyTotals,
    FoodAnalysis,
    FoodAnalysisRequest,
    FoodItem,
    MealLog,
    MealLogCreate,
    WeeklyStats,
)
from nutritrack.services.food_analysis import FoodAnalyzer, daily_totals, weekly_stats


router = APIRouter(prefix="/meals", tags=["Meals"])


@router.post("/analyze", response_model=FoodAnalysis)
async def analyze_food(
    request: FoodAnalysisRequest,
    analyzer: FoodAnalyzer = Depends(get_food_analyzer),
):
    """Estimate nutrition for a description like "2 eggs and toast", a meal photo, or both."""
    return await analyzer.analyze(request.description, request.image_bytes(), request.image_mime_type)


@router.get("/foods/search", response_model=List[FoodItem])
async def search_foods(q: str):
    return FoodAnalyzer.search_foods(q)


@router.post("", response_model=MealLog, status_code=201)
async def log_meal(data: MealLogCreate, repo: MealLogRepository = Depends(get_meal_log_repo)):
    fields = data.model_dump(exclude_none=True)
    return repo.save(MealLog(**fields))


@router.get("/{user_id}", response_model=List[MealLog])
async def list_meals(
    user_id: str,
    day: Optional[date] = None,
    repo: MealLogRepository = Depends(get_meal_log_repo),
):
    """Meal logs, newest first; only one day's logs when ``day`` is given."""
    if day is None:
        return repo.for_user(user_id)
    return repo.for_range(user_id, day, day)


@router.get("/{user_id}/daily", response_model=DailyTotals)
async def get_daily_totals(
    user_id: str,
    day: Optional[date] = None,
    repo: MealLogRepository = Depends(get_meal_log_repo),
):
    day = day or date.today()
    return daily_totals(repo.for_range(user_id, day, day))


@router.get("/{user_id}/weekly", response_model=WeeklyStats)
async def get_weekly_stats(
    user_id: str,
    end: Optional[date] = None,
    repo: MealLogRepository = Depends(get_meal_log_repo),
):
    """Stats for the seven days ending at ``end`` (default today)."""
    end = end or date.today()
    return weekly_stats(repo.for_range(user_id, end - timedelta(days=6), end))

"""FastAPI dependencies: store, repositories, AI provider and engines."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends

from nutritrack.config import get_settings
from nutritrack.db.repositories import (
    ChallengeRepository,
    ChatRepository,
    FitnessCredentialRepository,
    MealLogRepository,
    MealPlanRepository,
    ProfileRepository,
)
from nutritrack.db.store import DocumentStore, MemoryStore
from nutritrack.db.supabase import SupabaseStore
from nutritrack.services.ai_providers import AIProvider, build_provider
from nutritrack.services.catalog import RecipeCatalog
from nutritrack.services.challenges import ChallengeEngine
from nutritrack.services.coach import CoachResponder
from nutritrack.services.fitness import StepDataClient
from nutritrack.services.food_analysis import FoodAnalyzer
from nutritrack.services.meal_planner import MealPlanGenerator


@lru_cache()
def get_store() -> DocumentStore:
    """Process-wide document store for the configured backend."""
    if get_settings().store_backend == "supabase":
        return SupabaseStore()
    return MemoryStore()


@lru_cache()
def get_provider() -> Optional[AIProvider]:
    return build_provider(get_settings())


def get_profile_repo(store: DocumentStore = Depends(get_store)) -> ProfileRepository:
    return ProfileRepository(store)


def get_plan_repo(store: DocumentStore = Depends(get_store)) -> MealPlanRepository:
    return MealPlanRepository(store)


def get_meal_log_repo(store: DocumentStore = Depends(get_store)) -> MealLogRepository:
    return MealLogRepository(store)


def get_challenge_repo(store: DocumentStore = Depends(get_store)) -> ChallengeRepository:
    return ChallengeRepository(store)


def get_chat_repo(store: DocumentStore = Depends(get_store)) -> ChatRepository:
    return ChatRepository(store)


def get_fitness_repo(store: DocumentStore = Depends(get_store)) -> FitnessCredentialRepository:
    return FitnessCredentialRepository(store)


def get_catalog(provider: Optional[AIProvider] = Depends(get_provider)) -> RecipeCatalog:
    return RecipeCatalog(provider)


def get_planner(
    catalog: RecipeCatalog = Depends(get_catalog),
    provider: Optional[AIProvider] = Depends(get_provider),
) -> MealPlanGenerator:
    return MealPlanGenerator(catalog, provider)


def get_challenge_engine(repo: ChallengeRepository = Depends(get_challenge_repo)) -> ChallengeEngine:
    return ChallengeEngine(repo)


def get_coach(provider: Optional[AIProvider] = Depends(get_provider)) -> CoachResponder:
    return CoachResponder(provider)


def get_food_analyzer(provider: Optional[AIProvider] = Depends(get_provider)) -> FoodAnalyzer:
    return FoodAnalyzer(provider)


def get_step_client() -> StepDataClient:
    return StepDataClient()

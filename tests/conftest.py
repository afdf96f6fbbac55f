"""
Pytest configuration and shared fixtures.

Everything runs against the in-memory store with fixed dates and seeded
randomness, and no AI provider unless a test builds one.
"""

import random
from datetime import date
from typing import List, Tuple

import pytest

from nutritrack.db.repositories import ChallengeRepository
from nutritrack.db.store import MemoryStore
from nutritrack.models.challenge import ChallengeCreate, ChallengeGoal, ChallengeReward
from nutritrack.models.profile import NutritionProfile
from nutritrack.models.recipe import Ingredient, NutritionFacts, Recipe
from nutritrack.services.challenges import ChallengeEngine
from nutritrack.services.nutrition import NutritionCalculator


TODAY = date(2024, 1, 3)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def profile():
    """30 year old male, 180cm, 80kg, moderately active, losing 0.5kg/week (~2209 kcal)."""
    return NutritionCalculator.apply_goals(NutritionProfile(
        id="user-1",
        name="Sam",
        age=30,
        gender="male",
        height_cm=180,
        weight_kg=80,
        activity_level="moderate",
        goal="lose_weight",
        weekly_goal_kg=0.5,
    ))


def make_recipe(
    recipe_id: str,
    calories: float,
    dish_types: List[str],
    ingredients: List[Tuple[str, float, str]] = (),
    diets: List[str] = (),
    minutes: int = 15,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=f"Recipe {recipe_id}",
        ready_in_minutes=minutes,
        nutrition=NutritionFacts(calories=calories, protein=calories / 20, carbs=calories / 10, fat=calories / 40),
        ingredients=[Ingredient(name=n, amount=a, unit=u, aisle="Produce") for n, a, u in ingredients],
        diets=list(diets),
        dish_types=list(dish_types),
    )


@pytest.fixture
def challenge_repo(store):
    return ChallengeRepository(store)


@pytest.fixture
def engine(challenge_repo, rng):
    return ChallengeEngine(challenge_repo, today=lambda: TODAY, rng=rng)


@pytest.fixture
def challenge_data():
    return ChallengeCreate(
        title="Hydration Week",
        type="hydration",
        duration=7,
        start_date=date(2024, 1, 1),
        goals=[
            ChallengeGoal(id="water", type="water", target=2.5, unit="liters"),
            ChallengeGoal(id="steps", type="steps", target=8000, unit="steps", is_required=False),
        ],
        rewards=[ChallengeReward(id="badge", type="badge", name="Hydration Hero")],
        difficulty="intermediate",
    )


@pytest.fixture
def challenge(engine, challenge_data):
    return engine.create(challenge_data)


@pytest.fixture
def recipe_factory():
    """Build small recipes: ``recipe_factory("r1", 300, ["lunch"], [("eggs", 2, "large")])``."""
    return make_recipe

"""Services module."""

from .nutrition import NutritionCalculator
from .ai_providers import AIProvider, build_provider
from .catalog import RecipeCatalog
from .meal_planner import MealPlanGenerator
from .shopping import build_shopping_list, group_by_aisle
from .challenges import ChallengeEngine
from .coach import CoachResponder
from .food_analysis import FoodAnalyzer
from .fitness import StepDataClient

__all__ = [
    "NutritionCalculator",
    "AIProvider",
    "build_provider",
    "RecipeCatalog",
    "MealPlanGenerator",
    "build_shopping_list",
    "group_by_aisle",
    "ChallengeEngine",
    "CoachResponder",
    "FoodAnalyzer",
    "StepDataClient",
]
